"""
Test suite for the stunt semantic analyzer.

Tests cover:
- Symbol resolution and scoping
- Redeclaration, undefined names and const assignment
- Unused variable warnings
- The scope stack itself
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from stunt.config import CompilerOptions
from stunt.diagnostics import DiagnosticCode, Severity
from stunt.lexer.lexer import Lexer
from stunt.parser.parser import Parser, parse_source
from stunt.analyzer import SemanticAnalyzer, Environment, analyze


class TestSemanticAnalyzer(unittest.TestCase):
    """Test cases for the semantic analyzer."""

    def setUp(self):
        """Set up test fixtures."""
        self.analyzer = SemanticAnalyzer()

    def _analyze_code(self, code: str, analyzer=None):
        """Helper to analyze a code snippet."""
        tokens = Lexer(code).tokenize()
        parser = Parser(tokens)
        ast = parser.parse()
        self.assertEqual(parser.diagnostics, [], f"Unexpected parse errors: {parser.diagnostics}")
        return (analyzer or self.analyzer).analyze(ast)

    def _codes(self, diagnostics):
        return [d.code for d in diagnostics]

    def test_clean_program(self):
        result = self._analyze_code("let x = 1; const y = x + 2; x = y;")
        self.assertFalse(result.has_errors(), f"Unexpected errors: {result.errors}")
        self.assertFalse(result.has_warnings())

    def test_multiple_declarations(self):
        result = self._analyze_code("let x = 1; let x = 2;")

        self.assertEqual(self._codes(result.errors), [DiagnosticCode.MULTIPLE_DECLARATIONS])
        self.assertEqual(result.errors[0].position, 15)
        self.assertEqual(result.errors[0].length, 1)

    def test_undefined_variable(self):
        result = self._analyze_code("x;")

        self.assertEqual(self._codes(result.diagnostics), [DiagnosticCode.UNDEFINED_VARIABLE])
        self.assertEqual(result.errors[0].position, 0)
        self.assertIn("x", result.errors[0].message)

    def test_undefined_assignment_target(self):
        result = self._analyze_code("z = 1;")
        self.assertEqual(self._codes(result.errors), [DiagnosticCode.UNDEFINED_VARIABLE])

    def test_unused_variable(self):
        result = self._analyze_code("let y = 1;")

        self.assertFalse(result.has_errors())
        self.assertEqual(self._codes(result.warnings), [DiagnosticCode.UNUSED_VARIABLE])
        warning = result.warnings[0]
        self.assertEqual(warning.severity, Severity.WARNING)
        self.assertEqual((warning.position, warning.length), (4, 1))

    def test_assignment_counts_as_use(self):
        result = self._analyze_code("let y = 1; y = 2;")
        self.assertEqual(result.diagnostics, [])

    def test_scoping_rules(self):
        code = """
        let x = 1;
        {
            let x = 2;
            x;
        }
        x;
        """
        result = self._analyze_code(code)
        self.assertEqual(result.diagnostics, [])

    def test_block_scope_ends(self):
        result = self._analyze_code("{ let y = 1; y; } y;")
        self.assertEqual(self._codes(result.errors), [DiagnosticCode.UNDEFINED_VARIABLE])
        self.assertEqual(result.errors[0].position, 18)

    def test_outer_reference_from_block(self):
        result = self._analyze_code("let x = 1; { x; }")
        self.assertEqual(result.diagnostics, [])

    def test_branches_have_own_scopes(self):
        result = self._analyze_code("let c = true; if (c) { let a = 1; a; } else { a; }")
        self.assertEqual(self._codes(result.errors), [DiagnosticCode.UNDEFINED_VARIABLE])

    def test_same_name_in_sibling_blocks(self):
        result = self._analyze_code("{ let a = 1; a; } { let a = 2; a; }")
        self.assertEqual(result.diagnostics, [])

    def test_declaration_binds_after_initializer(self):
        result = self._analyze_code("let x = x;")
        self.assertEqual(self._codes(result.errors), [DiagnosticCode.UNDEFINED_VARIABLE])

        result = SemanticAnalyzer().analyze(parse_source("let x = 1; { let x = x; x; }")[0])
        self.assertEqual(result.diagnostics, [])

    def test_const_assignment(self):
        result = self._analyze_code("const k = 1; k = 2;")
        self.assertEqual(self._codes(result.diagnostics), [DiagnosticCode.INVALID_ASSIGNMENT])
        self.assertEqual(result.errors[0].position, 13)

    def test_nested_unused_not_reported_by_default(self):
        result = self._analyze_code("let x = 1; x; { let y = 2; }")
        self.assertEqual(result.diagnostics, [])

    def test_nested_unused_when_enabled(self):
        analyzer = SemanticAnalyzer(CompilerOptions(report_nested_unused=True))
        result = self._analyze_code("let x = 1; x; { let y = 2; }", analyzer)
        self.assertEqual(self._codes(result.warnings), [DiagnosticCode.UNUSED_VARIABLE])
        self.assertIn("y", result.warnings[0].message)

    def test_diagnostics_in_discovery_order(self):
        result = self._analyze_code("let unused = 1; a; let b = 1; let b = 2; b; c = 1;")
        self.assertEqual(self._codes(result.diagnostics), [
            DiagnosticCode.UNDEFINED_VARIABLE,
            DiagnosticCode.MULTIPLE_DECLARATIONS,
            DiagnosticCode.UNDEFINED_VARIABLE,
            DiagnosticCode.UNUSED_VARIABLE,
        ])

    def test_analysis_is_repeatable(self):
        program, _ = parse_source("let x = 1;")
        self.assertEqual(len(analyze(program)), 1)
        self.assertEqual(len(analyze(program)), 1)


class TestEnvironment(unittest.TestCase):
    """Test cases for the scope stack."""

    def _declarations(self, source: str):
        program, _ = parse_source(source)
        return program.statements

    def test_push_returns_new_environment(self):
        env = Environment()
        inner = env.push()
        self.assertEqual(env.depth, 1)
        self.assertEqual(inner.depth, 2)
        self.assertIs(inner.root, env.root)
        self.assertIs(inner.pop().innermost, env.innermost)

    def test_cannot_pop_root(self):
        with self.assertRaises(ValueError):
            Environment().pop()

    def test_declare_and_resolve(self):
        outer, inner, duplicate = self._declarations("let a = 1; const a = 2; let a = 3;")
        env = Environment()
        self.assertTrue(env.declare(outer))

        nested = env.push()
        self.assertTrue(nested.declare(inner))
        self.assertFalse(nested.declare(duplicate))

        self.assertIs(nested.resolve("a").declaration, inner)
        self.assertTrue(nested.resolve("a").is_const)
        self.assertIs(env.resolve("a").declaration, outer)
        self.assertIsNone(env.resolve("b"))

    def test_unused(self):
        first, second = self._declarations("let a = 1; let b = 2;")
        env = Environment()
        env.declare(first)
        env.declare(second)
        env.resolve("b").add_reference(second.name)
        self.assertEqual([v.name for v in env.root.unused()], ["a"])


if __name__ == '__main__':
    unittest.main()
