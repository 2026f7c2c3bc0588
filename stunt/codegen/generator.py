"""
Code generator for stunt.

Serializes a program into JavaScript source text. This is a structural
pretty-printer: it performs no checks of its own and expects a program that
parsed cleanly and produced no analyzer errors.

Statements are written straight into an output buffer at the current
indentation depth; expressions are formatted to strings so that operators can
look at the text of their operands.
"""

import io
import json
import logging
import math
from typing import Optional, Union

from ..config import CompilerOptions
from ..lexer.tokens import TokenType
from ..parser.ast_nodes import (
    ASTNode, Program, VarDecl, ExprStmt, Assignment, Block, BlockStmt, IfStmt,
    BinaryExpr, UnaryExpr, GroupingExpr, VariableExpr,
    NumberLiteralExpr, StringLiteralExpr, BooleanLiteralExpr,
)
from ..parser.visitor import node_kind

logger = logging.getLogger(__name__)


# Operators whose target spelling differs from the source spelling
OPERATOR_MAP = {
    TokenType.BANG_EQUAL: "!==",
    TokenType.EQUAL_EQUAL: "===",
}

# Operators that would fuse with an operand starting with the same character
# (`- -x` must not become the decrement `--x`)
SIGN_OPERATORS = frozenset({"-", "+"})


def format_number(value: Union[int, float]) -> str:
    """Canonical decimal text for a number literal."""
    if isinstance(value, int):
        return str(value)
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if math.isnan(value):
        return "NaN"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_string(value: str) -> str:
    """Double-quoted, escaped string literal."""
    return json.dumps(value, ensure_ascii=False)


class CodeGenerator:
    """
    Generates target source text from a stunt AST.

    Each top-level statement ends with a newline; nested statements are
    indented by `options.indent` per block level.
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()
        self.output = io.StringIO()
        self.depth = 0

    def generate(self, program: Program) -> str:
        """Generate the text for a whole program."""
        self.output = io.StringIO()
        self.depth = 0

        for statement in program.statements:
            self._emit_statement(statement)

        text = self.output.getvalue()
        logger.debug("Generated %d characters for %d statements", len(text), len(program.statements))
        return text

    # Output helpers

    def _write(self, text: str):
        self.output.write(text)

    def _indentation(self) -> str:
        return self.options.indent * self.depth

    # Statements

    def _emit_statement(self, node: ASTNode):
        """Write one statement on its own line(s) at the current depth."""
        self._write(self._indentation())
        self._dispatch("_emit_", node)
        self._write("\n")

    def _emit_var_decl(self, node: VarDecl):
        keyword = "const" if node.is_const else "let"
        self._write(f"{keyword} {node.name.lexeme} = {self._expression(node.initializer)};")

    def _emit_assignment(self, node: Assignment):
        self._write(f"{node.name.lexeme} = {self._expression(node.expression)};")

    def _emit_expr_stmt(self, node: ExprStmt):
        self._write(f"{self._expression(node.expression)};")

    def _emit_block_stmt(self, node: BlockStmt):
        self._emit_block(node.block)

    def _emit_block(self, node: Block):
        self._write("{\n")
        self.depth += 1
        for statement in node.statements:
            self._emit_statement(statement)
        self.depth -= 1
        self._write(self._indentation() + "}")

    def _emit_if_stmt(self, node: IfStmt):
        self._write(f"if ({self._expression(node.condition)}) ")
        self._emit_block(node.then_branch)

        if node.else_branch is not None:
            self._write(" else ")
            # Either a block or a chained if; both continue on this line
            self._dispatch("_emit_", node.else_branch)

    # Expressions

    def _expression(self, node: ASTNode) -> str:
        return self._dispatch("_format_", node)

    def _format_binary_expr(self, node: BinaryExpr) -> str:
        operator = OPERATOR_MAP.get(node.op.type, node.op.lexeme)
        left = self._expression(node.left)
        right = self._expression(node.right)
        if operator in SIGN_OPERATORS and right.startswith(operator):
            return f"{left}{operator} {right}"
        return f"{left}{operator}{right}"

    def _format_unary_expr(self, node: UnaryExpr) -> str:
        operator = node.op.lexeme
        operand = self._expression(node.right)
        if operator in SIGN_OPERATORS and operand.startswith(operator):
            return f"{operator} {operand}"
        return f"{operator}{operand}"

    def _format_grouping_expr(self, node: GroupingExpr) -> str:
        return f"({self._expression(node.expression)})"

    def _format_variable_expr(self, node: VariableExpr) -> str:
        return node.name.lexeme

    def _format_number_literal_expr(self, node: NumberLiteralExpr) -> str:
        return format_number(node.value)

    def _format_string_literal_expr(self, node: StringLiteralExpr) -> str:
        return format_string(node.value)

    def _format_boolean_literal_expr(self, node: BooleanLiteralExpr) -> str:
        return "true" if node.value else "false"

    def _dispatch(self, prefix: str, node: ASTNode):
        method = getattr(self, prefix + node_kind(node), None)
        if method is None:
            raise TypeError(f"Cannot generate {type(node).__name__} here")
        return method(node)


def generate(program: Program, options: Optional[CompilerOptions] = None) -> str:
    """Generate target source text for a program."""
    return CodeGenerator(options).generate(program)
