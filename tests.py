#!/usr/bin/env python3
"""
Casos de prueba para el compilador de regex a AFN.

Incluye:
- Pruebas unitarias para cada componente
- Pruebas del lenguaje aceptado (simulación del AFN)
- Pruebas del formato nfa.json
- Pruebas de integración de la línea de comandos
"""

import unittest
import tempfile
import os
import io
import json
import shutil
from contextlib import redirect_stdout, redirect_stderr
from itertools import product
from unittest import mock

from regex_nfa.parser import (
    to_postfix, tokenize, insert_concatenation, bracket_alternations,
    shunting_yard, is_symbol, RegexValidationError, EmptyRegexError,
    UnbalancedGroupError, InvalidSymbolError, StackUnderflowError,
    InvalidPostfixError,
)
from regex_nfa.thompson import (
    literal, concat, union, star, postfix_to_nfa, compile_regex
)
from regex_nfa.exporter import nfa_to_document, export_json, document_to_text
from regex_nfa.automaton import Fragment, Transition, EPSILON
import main


def words(alphabet, max_len):
    """Todas las cadenas sobre `alphabet` de longitud 0..max_len"""
    for n in range(max_len + 1):
        for w in product(alphabet, repeat=n):
            yield "".join(w)


class TestRegexParser(unittest.TestCase):
    """Pruebas para el parser de expresiones regulares"""

    def test_alphabet(self):
        for ch in "azAZ09":
            with self.subTest(ch=ch):
                self.assertTrue(is_symbol(ch))
        for ch in "|*+.() #ε":
            with self.subTest(ch=ch):
                self.assertFalse(is_symbol(ch))

    def test_tokenize(self):
        self.assertEqual(tokenize("a b"), ["a", "b"])
        # "+" es sinónimo de alternancia
        self.assertEqual(tokenize("a+b"), ["a", "|", "b"])

    def test_tokenize_empty(self):
        for regex in ["", "   "]:
            with self.subTest(regex=regex):
                with self.assertRaises(EmptyRegexError):
                    tokenize(regex)

    def test_insert_concatenation(self):
        test_cases = [
            ("ab", "a.b"),
            ("a|b", "a|b"),
            ("a(b)", "a.(b)"),
            ("(a)*b", "(a)*.b"),
            ("a*b*", "a*.b*"),
            ("(a|b)c", "(a|b).c"),
        ]

        for regex, expected in test_cases:
            with self.subTest(regex=regex):
                result = insert_concatenation(list(regex))
                self.assertEqual("".join(result), expected)

    def test_bracket_alternations(self):
        test_cases = [
            ("a|b", "(a|b)"),
            ("(a|b)", "(a|b)"),
            ("a|b|c", "(a|b)|c"),
            ("a*|b", "a*|b"),
            # el operando derecho con estrella tampoco se agrupa
            ("a|b*", "a|b*"),
            # operandos de varios caracteres: solo se agrupan los vecinos inmediatos
            ("c.a|b.d", "c.(a|b).d"),
        ]

        for tokens, expected in test_cases:
            with self.subTest(tokens=tokens):
                result = bracket_alternations(list(tokens))
                self.assertEqual("".join(result), expected)

    def test_shunting_yard_left_associative(self):
        self.assertEqual("".join(shunting_yard(list("a.b.c"))), "ab.c.")
        self.assertEqual("".join(shunting_yard(list("a|b|c"))), "ab|c|")

    def test_basic_regex(self):
        """Pruebas para regex básicas"""
        test_cases = [
            ("a", "a"),
            ("ab", "ab."),
            ("a|b", "ab|"),
            ("a+b", "ab|"),
            ("a*", "a*"),
            ("(ab)*", "ab.*"),
            ("a(b|c)", "abc|."),
            ("(a|b)(c|d)", "ab|cd|."),
        ]

        for regex, expected in test_cases:
            with self.subTest(regex=regex):
                self.assertEqual(to_postfix(regex), expected)

    def test_complex_regex(self):
        """Pruebas para regex complejas"""
        test_cases = [
            ("a(a|b)ab*", "aab|.a.b*."),
            ("a*b*abb", "a*b*.a.b.b."),
            ("(a|b)*abb", "ab|*a.b.b."),
            ("ca|bd", "cab|.d."),
        ]

        for regex, expected in test_cases:
            with self.subTest(regex=regex):
                self.assertEqual(to_postfix(regex), expected)

    def test_non_string_input(self):
        """Errores inesperados se reportan como RegexValidationError"""
        with self.assertRaises(RegexValidationError):
            to_postfix(None)

    def test_starred_alternation_operand(self):
        self.assertEqual(to_postfix("a|b*"), "ab*|")
        self.assertEqual(to_postfix("a*|b"), "a*b|")

    def test_validation_errors(self):
        """Pruebas para errores de validación"""
        invalid_cases = [
            ("", EmptyRegexError),
            ("(a", UnbalancedGroupError),
            ("a)", UnbalancedGroupError),
            ("((ab)", UnbalancedGroupError),
        ]

        for invalid_regex, error in invalid_cases:
            with self.subTest(regex=invalid_regex):
                with self.assertRaises(error):
                    to_postfix(invalid_regex)
                with self.assertRaises(RegexValidationError):
                    to_postfix(invalid_regex)


class TestThompsonConstruction(unittest.TestCase):
    """Pruebas para la construcción de Thompson"""

    def test_literal(self):
        frag = literal("a")
        self.assertEqual(frag.states, frozenset({0, 1}))
        self.assertEqual(frag.start, 0)
        self.assertEqual(frag.accept, (1,))
        self.assertEqual(frag.transitions, (Transition(0, (1,), "a"),))

    def test_single_symbol_patterns(self):
        for c in "aZ7":
            with self.subTest(symbol=c):
                nfa = compile_regex(c)
                self.assertEqual(len(nfa.states), 2)
                self.assertEqual(len(nfa.transitions), 1)
                t = nfa.transitions[0]
                self.assertEqual((t.src, t.dests, t.label), (nfa.start, nfa.accept, c))

    def test_concat_aliases_without_epsilon(self):
        """La aceptación izquierda y el inicio derecho son el mismo estado"""
        frag = concat(literal("a"), literal("b"))
        self.assertEqual(frag.states, frozenset({0, 1, 2}))
        self.assertEqual(frag.start, 0)
        self.assertEqual(frag.accept, (2,))
        self.assertEqual(frag.transitions, (
            Transition(0, (1,), "a"),
            Transition(1, (2,), "b"),
        ))
        self.assertNotIn(EPSILON, {t.label for t in frag.transitions})

    def test_union(self):
        frag = union(literal("a"), literal("b"))
        self.assertEqual(frag.states, frozenset(range(6)))
        self.assertEqual(frag.start, 0)
        self.assertEqual(frag.accept, (5,))
        self.assertEqual(frag.transitions, (
            Transition(0, (1, 3), EPSILON),
            Transition(1, (2,), "a"),
            Transition(3, (4,), "b"),
            Transition(2, (5,), EPSILON),
            Transition(4, (5,), EPSILON),
        ))

    def test_star(self):
        frag = star(literal("a"))
        self.assertEqual(frag.states, frozenset(range(4)))
        self.assertEqual(frag.start, 0)
        self.assertEqual(frag.accept, (3,))
        self.assertEqual(frag.transitions, (
            Transition(0, (1, 3), EPSILON),
            Transition(1, (2,), "a"),
            Transition(2, (1, 3), EPSILON),
        ))

    def test_group_star_skip_branch(self):
        nfa = compile_regex("(ab)*")
        first = nfa.transitions[0]
        self.assertEqual(first.src, nfa.start)
        self.assertEqual(first.label, EPSILON)
        self.assertEqual(first.dests, (1, nfa.accept[0]))
        self.assertEqual(nfa.accept, (4,))

    def test_combinators_do_not_mutate_inputs(self):
        left = concat(literal("a"), literal("b"))
        right = star(literal("c"))
        left_before = Fragment(left.states, left.start, left.accept, left.transitions)
        right_before = Fragment(right.states, right.start, right.accept, right.transitions)

        concat(left, right)
        union(left, right)
        star(left)

        self.assertEqual(left, left_before)
        self.assertEqual(right, right_before)

    def test_single_accept_state(self):
        for regex in ["a", "ab", "a|b", "a*", "(a|b)*abb", "a(a|b)ab*"]:
            with self.subTest(regex=regex):
                nfa = compile_regex(regex)
                self.assertEqual(len(nfa.accept), 1)
                self.assertEqual(nfa.accept_state, nfa.max_state)

    def test_fragment_rejects_unknown_states(self):
        with self.assertRaises(ValueError):
            Fragment(frozenset({0, 1}), 0, (1,), (Transition(0, (2,), "a"),))
        with self.assertRaises(ValueError):
            Fragment(frozenset({0}), 0, ())

    def test_invalid_postfix(self):
        """Pruebas para postfix inválidos"""
        invalid_cases = [
            ("*", StackUnderflowError),
            (".", StackUnderflowError),
            ("|", StackUnderflowError),
            ("a|", StackUnderflowError),
            ("ab|.", StackUnderflowError),
            ("", InvalidPostfixError),
            ("ab", InvalidPostfixError),
            ("a#", InvalidSymbolError),
        ]

        for invalid_postfix, error in invalid_cases:
            with self.subTest(postfix=invalid_postfix):
                with self.assertRaises(error):
                    postfix_to_nfa(invalid_postfix)

    def test_invalid_operator_placement(self):
        for regex in ["|a", "a|", "*"]:
            with self.subTest(regex=regex):
                with self.assertRaises(RegexValidationError):
                    compile_regex(regex)


class TestSimulation(unittest.TestCase):
    """Pruebas del lenguaje aceptado por los AFN construidos"""

    def assertLanguage(self, nfa, accepted, rejected):
        for w in accepted:
            with self.subTest(word=w, expected=True):
                self.assertTrue(nfa.simulate(w))
        for w in rejected:
            with self.subTest(word=w, expected=False):
                self.assertFalse(nfa.simulate(w))

    def test_epsilon_closure(self):
        nfa = compile_regex("a*")
        self.assertEqual(nfa.epsilon_closure({0}), {0, 1, 3})

    def test_union(self):
        nfa = compile_regex("a|b")
        self.assertLanguage(nfa, ["a", "b"], ["", "ab", "aa", "ba", "c"])
        for w in words("ab", 3):
            with self.subTest(word=w):
                self.assertEqual(w in {"a", "b"}, nfa.simulate(w))

    def test_union_commutative(self):
        ab = compile_regex("a|b")
        ba = compile_regex("b|a")
        for w in words("ab", 3):
            with self.subTest(word=w):
                self.assertEqual(ab.simulate(w), ba.simulate(w))

    def test_union_idempotent(self):
        nfa = compile_regex("a|a")
        for w in words("ab", 3):
            with self.subTest(word=w):
                self.assertEqual(w == "a", nfa.simulate(w))

    def test_concat_associative(self):
        left = postfix_to_nfa("ab.c.")
        right = postfix_to_nfa("abc..")
        for w in words("abc", 4):
            with self.subTest(word=w):
                self.assertEqual(left.simulate(w), right.simulate(w))
                self.assertEqual(w == "abc", left.simulate(w))

    def test_star(self):
        nfa = compile_regex("a*")
        self.assertLanguage(nfa, ["", "a", "aa", "aaa"], ["b", "ab", "ba"])

    def test_star_of_group(self):
        nfa = compile_regex("(ab)*")
        self.assertLanguage(nfa, ["", "ab", "abab"], ["a", "aba", "b", "ba"])

    def test_end_to_end(self):
        nfa = compile_regex("a*b*abb")
        self.assertLanguage(
            nfa,
            ["abb", "aabb", "babb", "aaabbbabb"],
            ["", "ba", "ab", "abbb", "abba"],
        )

    def test_complete_pipeline(self):
        nfa = compile_regex("(a|b)*abb")
        self.assertLanguage(
            nfa,
            ["abb", "aabb", "babb", "ababb"],
            ["", "ab", "ba", "abba"],
        )

    def test_star_binds_to_right_alternation_operand(self):
        nfa = compile_regex("a|b*")
        self.assertLanguage(nfa, ["", "a", "b", "bb"], ["ab", "aa", "ba"])

    def test_multichar_alternation_limitation(self):
        """Sin paréntesis solo se agrupan los vecinos de un carácter"""
        nfa = compile_regex("ca|bd")
        self.assertLanguage(nfa, ["cad", "cbd"], ["ca", "bd"])
        grouped = compile_regex("(ca)|(bd)")
        self.assertLanguage(grouped, ["ca", "bd"], ["cad", "cbd"])


class TestExporter(unittest.TestCase):
    """Pruebas para el documento nfa.json"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_literal_document(self):
        doc = nfa_to_document(compile_regex("a"))
        self.assertEqual(doc, {
            "startingState": "S0",
            "S0": {"isTerminatingState": False, "a": ["S1"]},
            "S1": {"isTerminating": True},
        })
        self.assertEqual(list(doc), ["startingState", "S0", "S1"])

    def test_union_document(self):
        doc = nfa_to_document(compile_regex("a|b"))
        self.assertEqual(list(doc), ["startingState", "S0", "S1", "S3", "S2", "S4", "S5"])
        self.assertEqual(doc["S0"], {"isTerminatingState": False, "Epsilon": ["S1", "S3"]})
        self.assertEqual(doc["S3"], {"isTerminatingState": False, "b": ["S4"]})
        self.assertEqual(doc["S4"], {"isTerminatingState": False, "Epsilon": ["S5"]})
        self.assertEqual(doc["S5"], {"isTerminating": True})

    def test_star_document(self):
        doc = nfa_to_document(compile_regex("(ab)*"))
        self.assertEqual(doc, {
            "startingState": "S0",
            "S0": {"isTerminatingState": False, "Epsilon": ["S1", "S4"]},
            "S1": {"isTerminatingState": False, "a": ["S2"]},
            "S2": {"isTerminatingState": False, "b": ["S3"]},
            "S3": {"isTerminatingState": False, "Epsilon": ["S1", "S4"]},
            "S4": {"isTerminating": True},
        })

    def test_accept_state_with_transitions(self):
        nfa = Fragment(
            frozenset({0, 1}), 0, (1,),
            (Transition(0, (1,), "a"), Transition(1, (1,), "a")),
        )
        doc = nfa_to_document(nfa)
        self.assertEqual(doc["S1"], {"isTerminatingState": True, "a": ["S1"]})

    def test_repeated_source_keeps_last_record(self):
        nfa = Fragment(
            frozenset({0, 1}), 0, (1,),
            (Transition(0, (1,), "a"), Transition(0, (1,), "b")),
        )
        doc = nfa_to_document(nfa)
        self.assertEqual(doc["S0"], {"isTerminatingState": False, "b": ["S1"]})
        self.assertEqual(list(doc), ["startingState", "S0", "S1"])

    def test_json_export(self):
        """Pruebas para exportación JSON"""
        nfa = compile_regex("a(a|b)ab*")
        json_path = os.path.join(self.temp_dir, "nfa.json")
        doc = export_json(nfa, json_path)

        self.assertTrue(os.path.exists(json_path))
        with open(json_path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data, doc)
        self.assertEqual(data, nfa_to_document(nfa))
        self.assertEqual(json.loads(document_to_text(doc)), doc)


class TestCommandLine(unittest.TestCase):
    """Pruebas de integración de main.py"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.json_path = os.path.join(self.temp_dir, "nfa.json")

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def run_main(self, argv):
        out = io.StringIO()
        with redirect_stdout(out), redirect_stderr(io.StringIO()):
            code = main.main(argv)
        return code, out.getvalue()

    def test_valid_regex(self):
        code, out = self.run_main(["-r", "(ab)*", "-o", self.json_path])
        self.assertEqual(code, 0)
        self.assertIn('"startingState": "S0"', out)
        self.assertIn("File saved to nfa.json", out)
        with open(self.json_path, encoding="utf-8") as f:
            self.assertEqual(json.load(f), nfa_to_document(compile_regex("(ab)*")))

    def test_invalid_regex(self):
        code, out = self.run_main(["-r", "(a", "-o", self.json_path])
        self.assertEqual(code, 0)
        self.assertIn(main.INVALID_MESSAGE, out)
        self.assertFalse(os.path.exists(self.json_path))

    def test_interactive_prompt(self):
        with mock.patch("builtins.input", return_value="a|b") as prompt:
            code, out = self.run_main(["-o", self.json_path, "-q"])
        prompt.assert_called_once_with(main.PROMPT)
        self.assertEqual(code, 0)
        self.assertNotIn("startingState", out)
        self.assertTrue(os.path.exists(self.json_path))

    def test_simulate(self):
        code, out = self.run_main(["-r", "a*b", "-o", self.json_path, "-q", "-s", "ab,aab,ba"])
        self.assertEqual(code, 0)
        self.assertIn("'ab': ACCEPTED", out)
        self.assertIn("'aab': ACCEPTED", out)
        self.assertIn("'ba': REJECTED", out)

    def test_unwritable_output(self):
        bad_path = os.path.join(self.temp_dir, "missing_dir", "nfa.json")
        err = io.StringIO()
        out = io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main.main(["-r", "ab", "-o", bad_path])
        self.assertEqual(code, 1)
        self.assertIn("Error exportando", err.getvalue())
        self.assertNotIn("File saved", out.getvalue())
        self.assertFalse(os.path.exists(bad_path))

    def test_verbose(self):
        code, out = self.run_main(["-r", "ab", "-o", self.json_path, "-v"])
        self.assertEqual(code, 0)
        self.assertIn("Postfix: ab.", out)
        self.assertIn("AFN: 3 estados, 2 transiciones", out)

    def test_quiet_and_verbose(self):
        code, _ = self.run_main(["-r", "a", "-q", "-v", "-o", self.json_path])
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main(verbosity=2)
