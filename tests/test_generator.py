"""
Test suite for the stunt JavaScript generator.
"""

import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from stunt.config import CompilerOptions
from stunt.codegen import CodeGenerator, generate, format_number, format_string
from stunt.parser import Program, parse_source


class TestCodeGenerator(unittest.TestCase):
    """Test cases for code generation."""

    def _generate(self, source: str, options: CompilerOptions = None) -> str:
        program, diagnostics = parse_source(source)
        self.assertEqual(diagnostics, [], f"Unexpected diagnostics: {diagnostics}")
        return CodeGenerator(options).generate(program)

    def test_equality_lowering(self):
        output = self._generate("let x = 1 != 2;")
        self.assertIn("x = 1!==2", output)
        self.assertEqual(output, "let x = 1!==2;\n")

        self.assertEqual(self._generate("const y = a == b;"), "const y = a===b;\n")

    def test_no_semantic_checks(self):
        # Undefined names and const reassignment are generated as written
        self.assertEqual(self._generate("const k = 1; k = 2; z;"), "const k = 1;\nk = 2;\nz;\n")

    def test_binary_operators(self):
        self.assertEqual(self._generate("a + b * c - d / e;"), "a+b*c-d/e;\n")
        self.assertEqual(self._generate("a < b; a <= b; a > b; a >= b;"), "a<b;\na<=b;\na>b;\na>=b;\n")

    def test_grouping(self):
        self.assertEqual(self._generate("(1 + 2) * 3;"), "(1+2)*3;\n")

    def test_unary(self):
        self.assertEqual(self._generate("!!x;"), "!!x;\n")
        self.assertEqual(self._generate("-x;"), "-x;\n")

    def test_sign_operators_do_not_fuse(self):
        self.assertEqual(self._generate("- -x;"), "- -x;\n")
        self.assertEqual(self._generate("1 - -2;"), "1- -2;\n")
        self.assertEqual(self._generate("1 - (-2);"), "1-(-2);\n")
        self.assertEqual(self._generate("1 + -2;"), "1+-2;\n")

    def test_numbers(self):
        self.assertEqual(self._generate("0xFF; 0b101; 0o17; 1_000;"), "255;\n5;\n15;\n1000;\n")
        self.assertEqual(self._generate("1.0; 2.5; 1e3; 1.5e-7;"), "1;\n2.5;\n1000;\n1.5e-07;\n")

    def test_format_number(self):
        self.assertEqual(format_number(7), "7")
        self.assertEqual(format_number(0.1), "0.1")
        self.assertEqual(format_number(float("inf")), "Infinity")
        self.assertEqual(format_number(float("-inf")), "-Infinity")

    def test_strings(self):
        self.assertEqual(self._generate(r'let s = "a\"b\n";'), 'let s = "a\\"b\\n";\n')
        self.assertEqual(format_string("tab\there"), '"tab\\there"')
        self.assertEqual(format_string("é"), '"é"')

    def test_booleans(self):
        self.assertEqual(self._generate("true; false;"), "true;\nfalse;\n")

    def test_block(self):
        self.assertEqual(self._generate("{ let a = 1; a; }"), "{\n    let a = 1;\n    a;\n}\n")

    def test_empty_block(self):
        self.assertEqual(self._generate("{ }"), "{\n}\n")

    def test_nested_indentation(self):
        output = self._generate("{ { x; } }", CompilerOptions(indent="\t"))
        self.assertEqual(output, "{\n\t{\n\t\tx;\n\t}\n}\n")

    def test_if_else(self):
        self.assertEqual(
            self._generate("if (a) { b; } else { c; }"),
            "if (a) {\n    b;\n} else {\n    c;\n}\n",
        )

    def test_else_if_chain(self):
        self.assertEqual(
            self._generate("if (a) { b; } else if (c) { d; } else { e; }"),
            "if (a) {\n    b;\n} else if (c) {\n    d;\n} else {\n    e;\n}\n",
        )

    def test_if_inside_block(self):
        self.assertEqual(
            self._generate("{ if (a > 1) { a = 1; } }"),
            "{\n    if (a>1) {\n        a = 1;\n    }\n}\n",
        )

    def test_empty_program(self):
        self.assertEqual(generate(Program(())), "")

    def test_generator_is_reusable(self):
        program, _ = parse_source("let a = 1;")
        generator = CodeGenerator()
        self.assertEqual(generator.generate(program), generator.generate(program))

    def test_unknown_node(self):
        with self.assertRaises(TypeError):
            generate(Program((object(),)))

    def test_invalid_indent(self):
        with self.assertRaises(ValueError):
            CompilerOptions(indent="")
        with self.assertRaises(ValueError):
            CompilerOptions(indent="--")


if __name__ == '__main__':
    unittest.main()
