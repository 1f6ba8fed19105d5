from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Set, Tuple

EPSILON = "ε"


@dataclass(frozen=True)
class Transition:
    """Una transición del AFN: desde `src` hacia todos los estados de `dests`
    leyendo `label` (un símbolo del alfabeto o EPSILON)."""

    src: int
    dests: Tuple[int, ...]
    label: str

    def shifted(self, offset: int) -> "Transition":
        return Transition(
            self.src + offset,
            tuple(d + offset for d in self.dests),
            self.label,
        )


@dataclass(frozen=True)
class Fragment:
    """Representa un fragmento de AFN (o el AFN final) de Thompson.

    - Los estados son enteros no negativos.
    - start: único estado de entrada.
    - accept: secuencia de estados de aceptación (en la práctica siempre uno).
    - transitions: lista ordenada de transiciones; el orden se respeta al exportar.

    Es inmutable: los combinadores construyen fragmentos nuevos en vez de
    modificar los de entrada.
    """

    states: FrozenSet[int]
    start: int
    accept: Tuple[int, ...]
    transitions: Tuple[Transition, ...] = ()

    def __post_init__(self) -> None:
        if not self.accept:
            raise ValueError("Fragmento sin estados de aceptación")
        if self.start not in self.states:
            raise ValueError(f"Estado inicial inexistente: {self.start}")
        for a in self.accept:
            if a not in self.states:
                raise ValueError(f"Estado de aceptación inexistente: {a}")
        for t in self.transitions:
            if t.src not in self.states or any(d not in self.states for d in t.dests):
                raise ValueError(f"Estado inexistente en la transición: {t.src} -> {t.dests}")

    # ---------------- Consultas -----------------
    @property
    def accept_state(self) -> int:
        """Único estado de aceptación; los combinadores dependen de que sea uno solo."""
        if len(self.accept) != 1:
            raise ValueError(
                f"Se esperaba un único estado de aceptación, hay {len(self.accept)}"
            )
        return self.accept[0]

    @property
    def max_state(self) -> int:
        return max(self.states)

    def shifted(self, offset: int) -> "Fragment":
        """Devuelve una copia con todos los identificadores desplazados por `offset`."""
        return Fragment(
            states=frozenset(s + offset for s in self.states),
            start=self.start + offset,
            accept=tuple(a + offset for a in self.accept),
            transitions=tuple(t.shifted(offset) for t in self.transitions),
        )

    def get_transitions(self, state: int, symbol: str) -> Set[int]:
        result: Set[int] = set()
        for t in self.transitions:
            if t.src == state and t.label == symbol:
                result.update(t.dests)
        return result

    def epsilon_closure(self, states: Iterable[int]) -> Set[int]:
        """Devuelve la ε-clausura de un conjunto de estados."""
        closure = set(states)
        stack = list(closure)
        while stack:
            current = stack.pop()
            for next_state in self.get_transitions(current, EPSILON):
                if next_state not in closure:
                    closure.add(next_state)
                    stack.append(next_state)
        return closure

    # ---------------- Simulación -----------------
    def simulate(self, input_str: str) -> bool:
        """Simula el AFN sobre `input_str` y devuelve si la cadena es aceptada."""
        current = self.epsilon_closure({self.start})
        for ch in input_str:
            next_states: Set[int] = set()
            for s in current:
                next_states.update(self.get_transitions(s, ch))
            current = self.epsilon_closure(next_states)
            if not current:
                break
        return any(s in self.accept for s in current)


__all__ = ["Fragment", "Transition", "EPSILON"]
