from __future__ import annotations
from typing import List
import string

#operadores soportados: | (o +) alternancia, concatenacion implicita, * estrella, () agrupacion
#se convierte a postfix (notacion inversa polaca) usando shunting yard adaptado para concatenacion implicita.

ALPHABET = frozenset(string.ascii_letters + string.digits)

UNION = "|"
STAR = "*"
CONCAT = "."  #usamos "." como operador explicito de concatenacion interno
OPEN_GROUP = "("
CLOSE_GROUP = ")"

UNION_SYNONYMS = {"|", "+"}  #se normaliza a "|"
OPERATORS = {UNION, STAR, CONCAT}
PRECEDENCE = {STAR: 3, CONCAT: 2, UNION: 1}


class RegexValidationError(ValueError):
    """Excepción base para cualquier regex que no se puede compilar"""
    pass


class EmptyRegexError(RegexValidationError):
    """La regex no contiene ningún token"""
    pass


class UnbalancedGroupError(RegexValidationError):
    """Paréntesis sin su pareja correspondiente"""
    pass


class InvalidSymbolError(RegexValidationError):
    """Token que no es símbolo del alfabeto ni operador"""
    pass


class StackUnderflowError(RegexValidationError):
    """Operador sin suficientes operandos en la pila de fragmentos"""
    pass


class InvalidPostfixError(RegexValidationError):
    """Al terminar el postfix no queda exactamente un fragmento"""
    pass


def is_symbol(ch: str) -> bool:
    """True si `ch` es un símbolo literal del alfabeto (letra o dígito)."""
    return ch in ALPHABET


def tokenize(regex: str) -> List[str]:
    """
    Divide la regex en tokens de un carácter.

    Se ignoran los espacios y el operador "+" se normaliza a "|".

    Raises:
        EmptyRegexError: Si no queda ningún token
    """
    tokens: List[str] = []
    for c in regex:
        if c.isspace():
            continue
        tokens.append(UNION if c in UNION_SYNONYMS else c)
    if not tokens:
        raise EmptyRegexError("Regex vacía")
    return tokens


def insert_concatenation(tokens: List[str]) -> List[str]:
    """
    Inserta el operador explícito de concatenación entre tokens adyacentes.

    Después de "(" o "|" nunca se inserta; tampoco antes de ")", "*" o "|".
    En cualquier otro caso se añade "." entre el token y el siguiente.
    """
    augmented: List[str] = []
    for idx, t in enumerate(tokens):
        augmented.append(t)
        if t in {OPEN_GROUP, UNION}:
            continue
        if idx < len(tokens) - 1 and tokens[idx + 1] not in {CLOSE_GROUP, STAR, UNION}:
            augmented.append(CONCAT)
    return augmented


def bracket_alternations(tokens: List[str]) -> List[str]:
    """
    Agrupa entre paréntesis los operandos de un solo carácter de cada "|".

    a|b -> (a|b). Si ambos vecinos ya están rodeados por "(" y ")" no se toca,
    y tampoco si el operando derecho lleva "*" (a|b* queda igual, como a*|b).
    Solo es confiable con operandos de un carácter: "aa|bb" debe escribirse
    como "(aa|bb)".
    """
    result = list(tokens)
    i = 1
    while i < len(result) - 1:
        if result[i] == UNION:
            left, right = result[i - 1], result[i + 1]
            starred = i + 2 < len(result) and result[i + 2] == STAR
            if is_symbol(left) and is_symbol(right) and not starred:
                already = (
                    i >= 2 and result[i - 2] == OPEN_GROUP
                    and i + 2 < len(result) and result[i + 2] == CLOSE_GROUP
                )
                if not already:
                    result[i - 1:i + 2] = [OPEN_GROUP, left, UNION, right, CLOSE_GROUP]
                    i += 1  #el "|" se movio una posicion
        i += 1
    return result


def shunting_yard(tokens: List[str]) -> List[str]:
    """
    Algoritmo shunting yard sobre tokens con concatenación explícita.

    Raises:
        UnbalancedGroupError: Si los paréntesis no están balanceados
    """
    output: List[str] = []
    stack: List[str] = []

    for t in tokens:
        if t == OPEN_GROUP:
            stack.append(t)
        elif t == CLOSE_GROUP:
            while stack and stack[-1] != OPEN_GROUP:
                output.append(stack.pop())
            if not stack:
                raise UnbalancedGroupError("Paréntesis desbalanceados: ')' sin '(' correspondiente")
            stack.pop()
        elif t in PRECEDENCE:
            #empate: asociatividad izquierda
            while stack and stack[-1] != OPEN_GROUP and PRECEDENCE[stack[-1]] >= PRECEDENCE[t]:
                output.append(stack.pop())
            stack.append(t)
        else:
            output.append(t)

    while stack:
        op = stack.pop()
        if op == OPEN_GROUP:
            raise UnbalancedGroupError("Paréntesis desbalanceados: '(' sin ')' correspondiente")
        output.append(op)

    return output


def to_postfix(regex: str) -> str:
    """
    Convierte una expresion regular a notacion postfix.

    Operadores soportados:
    - | o + (alternancia)
    - * (cero o mas)
    - () (agrupación)
    - concatenación implícita

    Args:
        regex: Expresión regular en notación infija

    Returns:
        Expresión regular en notación postfix

    Raises:
        RegexValidationError: Si la regex es inválida
    """
    try:
        #paso 1: tokenizar
        tokens = tokenize(regex)

        #paso 2: insertar operadores de concatenacion explicitos
        tokens = insert_concatenation(tokens)

        #paso 3: agrupar alternancias de un caracter
        tokens = bracket_alternations(tokens)

        #paso 4: algoritmo shunting yard
        return "".join(shunting_yard(tokens))

    except RegexValidationError:
        raise
    except Exception as e:
        raise RegexValidationError(f"Error procesando regex: {str(e)}")


__all__ = [
    "to_postfix", "tokenize", "insert_concatenation", "bracket_alternations",
    "shunting_yard", "is_symbol", "ALPHABET", "PRECEDENCE",
    "RegexValidationError", "EmptyRegexError", "UnbalancedGroupError",
    "InvalidSymbolError", "StackUnderflowError", "InvalidPostfixError",
]
