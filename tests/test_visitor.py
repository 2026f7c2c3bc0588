"""
Test suite for AST traversal and the tree printer.
"""

import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from stunt.parser import Visitor, walk, iter_children, node_kind, format_tree, parse_source


def _program(source: str):
    program, diagnostics = parse_source(source)
    assert not diagnostics, diagnostics
    return program


class KindRecorder(Visitor):
    """Records the kind of every node in visiting order."""

    def __init__(self):
        self.kinds = []

    def generic_visit(self, node, ctx):
        self.kinds.append(node_kind(node))


class DepthRecorder(Visitor):
    """Counts block nesting through the context."""

    def __init__(self):
        self.depths = {}
        self.left = []

    def visit_block(self, node, ctx):
        return ctx + 1

    def visit_variable_expr(self, node, ctx):
        self.depths[node.name.lexeme] = ctx

    def leave_block(self, node, ctx):
        self.left.append(ctx)


class TestVisitor(unittest.TestCase):

    def test_syntactic_order(self):
        recorder = KindRecorder()
        recorder.walk(_program("let x = (1 + 2) * -y;"), None)
        self.assertEqual(recorder.kinds, [
            "program", "var_decl", "binary_expr", "grouping_expr", "binary_expr",
            "number_literal_expr", "number_literal_expr", "unary_expr", "variable_expr",
        ])

    def test_if_order(self):
        recorder = KindRecorder()
        recorder.walk(_program("if (c) { a; } else { b; }"), None)
        self.assertEqual(recorder.kinds, [
            "program", "if_stmt", "variable_expr",
            "block", "expr_stmt", "variable_expr",
            "block", "expr_stmt", "variable_expr",
        ])

    def test_context_threading(self):
        recorder = DepthRecorder()
        walk(_program("a; { b; { c; } } d;"), 0, recorder)
        self.assertEqual(recorder.depths, {"a": 0, "b": 1, "c": 2, "d": 0})

    def test_leave_sees_child_context(self):
        recorder = DepthRecorder()
        recorder.walk(_program("{ { } }"), 0)
        self.assertEqual(recorder.left, [2, 1])

    def test_unknown_node(self):
        with self.assertRaises(TypeError):
            walk("not a node", None, Visitor())
        with self.assertRaises(TypeError):
            node_kind(42)

    def test_iter_children(self):
        program = _program("let x = 1; x;")
        children = list(iter_children(program))
        self.assertEqual(len(children), 2)
        self.assertIs(children[0], program.statements[0])
        self.assertEqual(list(iter_children(children[0].initializer)), [])


class TestTreePrinter(unittest.TestCase):

    def test_format_tree(self):
        text = format_tree(_program("let x = 1 != 2;\nx;"))
        self.assertEqual(text, "\n".join([
            "Program",
            "├── VarDecl let x",
            "│   └── Binary !=",
            "│       ├── Number 1",
            "│       └── Number 2",
            "└── ExprStmt",
            "    └── Variable x",
        ]))

    def test_format_if(self):
        text = format_tree(_program('if (true) { s = "a"; } else { }'))
        self.assertEqual(text, "\n".join([
            "Program",
            "└── If/Else",
            "    ├── Boolean true",
            "    ├── Block",
            "    │   └── Assignment s",
            "    │       └── String \"a\"",
            "    └── Block",
        ]))

    def test_empty_program(self):
        self.assertEqual(format_tree(_program("")), "Program")


if __name__ == '__main__':
    unittest.main()
