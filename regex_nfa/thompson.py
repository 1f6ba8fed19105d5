from __future__ import annotations
from typing import List
from .automaton import Fragment, Transition, EPSILON
from .parser import (
    CONCAT, UNION, STAR, is_symbol, to_postfix,
    InvalidPostfixError, InvalidSymbolError, StackUnderflowError,
)


def literal(symbol: str) -> Fragment:
    """Fragmento de dos estados: 0 --symbol--> 1."""
    return Fragment(
        states=frozenset({0, 1}),
        start=0,
        accept=(1,),
        transitions=(Transition(0, (1,), symbol),),
    )


def concat(left: Fragment, right: Fragment) -> Fragment:
    """
    Concatena dos fragmentos sin añadir transiciones ε.

    El fragmento derecho se desplaza por el mayor identificador del izquierdo,
    que es su estado de aceptación; así el inicio del derecho queda con el
    mismo número que la aceptación del izquierdo y ambos son el mismo estado.
    """
    if left.accept_state != left.max_state:
        raise ValueError("La aceptación del fragmento izquierdo debe ser su mayor estado")
    r = right.shifted(left.max_state)
    return Fragment(
        states=left.states | r.states,
        start=left.start,
        accept=(r.accept_state,),
        transitions=left.transitions + r.transitions,
    )


def union(left: Fragment, right: Fragment) -> Fragment:
    """
    Alternancia: nuevo inicio 0 con ε hacia ambos fragmentos y nueva
    aceptación al final con ε desde ambas aceptaciones.
    """
    lf = left.shifted(1)
    rf = right.shifted(left.max_state + 2)
    end = rf.max_state + 1
    return Fragment(
        states=frozenset({0, end}) | lf.states | rf.states,
        start=0,
        accept=(end,),
        transitions=(
            (Transition(0, (lf.start, rf.start), EPSILON),)
            + lf.transitions
            + rf.transitions
            + (
                Transition(lf.accept_state, (end,), EPSILON),
                Transition(rf.accept_state, (end,), EPSILON),
            )
        ),
    )


def star(frag: Fragment) -> Fragment:
    """
    Estrella de Kleene: desde el nuevo inicio se entra al fragmento o se salta
    al final; desde la aceptación anterior se repite o se sale.
    """
    f = frag.shifted(1)
    end = f.max_state + 1
    return Fragment(
        states=frozenset({0, end}) | f.states,
        start=0,
        accept=(end,),
        transitions=(
            (Transition(0, (f.start, end), EPSILON),)
            + f.transitions
            + (Transition(f.accept_state, (f.start, end), EPSILON),)
        ),
    )


def _pop(stack: List[Fragment], op: str) -> Fragment:
    if not stack:
        raise StackUnderflowError(f"Operador '{op}' sin operandos suficientes")
    return stack.pop()


def postfix_to_nfa(postfix: str) -> Fragment:
    """Construye un AFN usando Thompson a partir de una regex en postfix.
    Operadores: | alternancia, . concatenación, * estrella.
    """
    stack: List[Fragment] = []

    for ch in postfix:
        if ch == STAR:
            stack.append(star(_pop(stack, ch)))
        elif ch == CONCAT:
            right = _pop(stack, ch)
            left = _pop(stack, ch)
            stack.append(concat(left, right))
        elif ch == UNION:
            right = _pop(stack, ch)
            left = _pop(stack, ch)
            stack.append(union(left, right))
        elif is_symbol(ch):
            stack.append(literal(ch))
        else:
            raise InvalidSymbolError(f"Caracter no valido: '{ch}'")

    if len(stack) != 1:
        raise InvalidPostfixError(f"Regex postfix inválida (pila final = {len(stack)})")

    return stack.pop()


def compile_regex(regex: str) -> Fragment:
    """Compila una regex infija directamente a su AFN."""
    return postfix_to_nfa(to_postfix(regex))


__all__ = ["literal", "concat", "union", "star", "postfix_to_nfa", "compile_regex"]
