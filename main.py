import argparse
import sys
from pathlib import Path
from typing import List, Optional
from regex_nfa.parser import to_postfix, RegexValidationError
from regex_nfa.thompson import postfix_to_nfa
from regex_nfa.exporter import export_json, document_to_text
from regex_nfa.automaton import Fragment

PROMPT = "Enter regular expression: "
INVALID_MESSAGE = "regular expression is not valid"


def create_parser() -> argparse.ArgumentParser:
    """Crear parser de argumentos de línea de comandos"""
    parser = argparse.ArgumentParser(
        description="Construcción de un AFN (Thompson) a partir de una regex",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Ejemplos de uso:
  python main.py                          # Modo interactivo
  python main.py -r "a(a|b)ab*"           # Procesar regex específica
  python main.py -r "(ab)*" -o out.json   # Archivo de salida personalizado
  python main.py -r "a*b" -s "ab,aab"     # Simular cadenas específicas

Operadores soportados:
  | o +  - Alternancia (or)
  *      - Cero o más repeticiones
  ()     - Agrupación
  La concatenación es implícita. Símbolos: letras y dígitos.
  Alternancias con operandos de varios caracteres deben ir entre
  paréntesis: (aa|bb)
        """
    )

    parser.add_argument(
        "-r", "--regex",
        type=str,
        help="Regex a procesar (si se omite se pide por consola)"
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default="nfa.json",
        help="Archivo JSON de salida (default: nfa.json)"
    )
    parser.add_argument(
        "-s", "--simulate",
        type=str,
        help="Cadenas a simular separadas por comas (ej: 'ab,aab,b')"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Salida detallada"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="No mostrar el documento generado"
    )

    return parser


def process_regex(regex: str, args) -> Optional[Fragment]:
    """
    Compilar una regex individual.

    Returns:
        El AFN generado o None si la regex no es válida
    """
    try:
        #paso 1: convertir a postfix
        postfix = to_postfix(regex)
        if args.verbose:
            print(f"  Postfix: {postfix}")

        #paso 2: construir AFN
        nfa = postfix_to_nfa(postfix)
        if args.verbose:
            print(f"  AFN: {len(nfa.states)} estados, {len(nfa.transitions)} transiciones")

    except (RegexValidationError, ValueError) as e:
        if args.verbose:
            print(f"  Error: {e}", file=sys.stderr)
        print(INVALID_MESSAGE)
        return None

    return nfa


def export_nfa(nfa: Fragment, args) -> bool:
    """
    Exportar el AFN a JSON y mostrar el documento.

    Returns:
        True si el archivo se pudo escribir
    """
    output = Path(args.output)
    try:
        doc = export_json(nfa, str(output))
    except OSError as e:
        print(f"Error exportando '{output}': {e}", file=sys.stderr)
        return False

    if not args.quiet:
        print(document_to_text(doc))
    print(f"File saved to {output.name}")
    return True


def simulate_strings(nfa: Fragment, strings: List[str]) -> None:
    """Simular cadenas en el AFN"""
    for string in strings:
        status = "ACCEPTED" if nfa.simulate(string) else "REJECTED"
        print(f"  '{string}': {status}")


def interactive_mode(args) -> Optional[Fragment]:
    """Pide una regex por consola y la procesa"""
    regex = input(PROMPT)
    return process_regex(regex.strip(), args)


def main(argv: Optional[List[str]] = None) -> int:
    """fun principal"""
    parser = create_parser()
    args = parser.parse_args(argv)

    #validar args
    if args.quiet and args.verbose:
        print("Error: --quiet y --verbose son mutuamente excluyentes", file=sys.stderr)
        return 1

    if args.regex is None:
        try:
            nfa = interactive_mode(args)
        except (KeyboardInterrupt, EOFError):
            print("\nPrograma interrumpido por el usuario")
            return 0
    else:
        nfa = process_regex(args.regex, args)

    if nfa is None:
        return 0

    if not export_nfa(nfa, args):
        return 1

    #sim de cadenas
    if args.simulate:
        strings = [s.strip() for s in args.simulate.split(',')]
        simulate_strings(nfa, strings)

    return 0


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nPrograma interrumpido por el usuario")
        sys.exit(0)
    except Exception as e:
        print(f"Error inesperado: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()
