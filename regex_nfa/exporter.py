from __future__ import annotations
import json
from typing import Dict, Iterable, List
from .automaton import Fragment, EPSILON

EPSILON_KEY = "Epsilon"


def state_name(state: int) -> str:
    return f"S{state}"


def _state_names(states: Iterable[int]) -> List[str]:
    return [state_name(s) for s in states]


def nfa_to_document(nfa: Fragment) -> Dict[str, object]:
    """
    Convierte un AFN al documento que se guarda en nfa.json.

    Args:
        nfa: El AFN a convertir

    Returns:
        Diccionario ordenado con "startingState", una entrada por cada
        transición (con "isTerminatingState") y una entrada mínima
        {"isTerminating": true} por cada estado de aceptación sin transiciones
    """
    doc: Dict[str, object] = {"startingState": state_name(nfa.start)}
    terminating = nfa.accept[0]

    for t in nfa.transitions:
        label = EPSILON_KEY if t.label == EPSILON else t.label
        #si el estado se repite, la ultima transicion reemplaza el contenido
        doc[state_name(t.src)] = {
            "isTerminatingState": t.src == terminating,
            label: _state_names(t.dests),
        }

    for a in nfa.accept:
        key = state_name(a)
        if key not in doc:
            doc[key] = {"isTerminating": True}

    return doc


def document_to_text(doc: Dict[str, object]) -> str:
    """Representación legible del documento para mostrar en consola."""
    return json.dumps(doc, ensure_ascii=False, indent=2)


def export_json(nfa: Fragment, path: str = "nfa.json") -> Dict[str, object]:
    """
    Exporta un AFN a formato JSON.

    Args:
        nfa: El AFN a exportar
        path: Ruta del archivo de salida

    Returns:
        El documento escrito
    """
    data = nfa_to_document(nfa)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
    return data


__all__ = ["nfa_to_document", "document_to_text", "export_json", "state_name", "EPSILON_KEY"]
