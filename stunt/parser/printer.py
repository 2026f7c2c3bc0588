"""
Tree dump of a parsed program, one node per line:

    Program
    ├── VarDecl let x
    │   └── Binary !=
    │       ├── Number 1
    │       └── Number 2
    └── ExprStmt
        └── Variable x
"""

import json
from typing import Any, Callable, Dict, List, NamedTuple, Tuple

from .ast_nodes import (
    ASTNode, Program, VarDecl, ExprStmt, Assignment, Block, BlockStmt, IfStmt,
    BinaryExpr, UnaryExpr, GroupingExpr, VariableExpr,
    NumberLiteralExpr, StringLiteralExpr, BooleanLiteralExpr,
)
from .visitor import Visitor, children


BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "

_LABELS: Dict[type, Callable[[Any], str]] = {
    Program: lambda node: "Program",
    VarDecl: lambda node: f"VarDecl {'const' if node.is_const else 'let'} {node.name.lexeme}",
    ExprStmt: lambda node: "ExprStmt",
    Assignment: lambda node: f"Assignment {node.name.lexeme}",
    Block: lambda node: "Block",
    BlockStmt: lambda node: "BlockStmt",
    IfStmt: lambda node: "If" if node.else_branch is None else "If/Else",
    BinaryExpr: lambda node: f"Binary {node.op.lexeme}",
    UnaryExpr: lambda node: f"Unary {node.op.lexeme}",
    GroupingExpr: lambda node: "Grouping",
    VariableExpr: lambda node: f"Variable {node.name.lexeme}",
    NumberLiteralExpr: lambda node: f"Number {node.token.lexeme}",
    StringLiteralExpr: lambda node: f"String {json.dumps(node.value, ensure_ascii=False)}",
    BooleanLiteralExpr: lambda node: f"Boolean {'true' if node.value else 'false'}",
}


class _Frame(NamedTuple):
    prefix: str                      # Drawn before the connector of each child
    siblings: Tuple[ASTNode, ...]    # Children of the parent, to spot the last one
    lines: List[str]


def node_label(node: ASTNode) -> str:
    return _LABELS[type(node)](node)


class TreePrinter(Visitor):
    """Collects one line per node; every kind is handled by `generic_visit`."""

    def generic_visit(self, node: ASTNode, ctx: _Frame) -> _Frame:
        if not ctx.siblings:
            ctx.lines.append(node_label(node))
            child_prefix = ""
        else:
            is_last = node is ctx.siblings[-1]
            connector = LAST_BRANCH if is_last else BRANCH
            ctx.lines.append(ctx.prefix + connector + node_label(node))
            child_prefix = ctx.prefix + (SPACE if is_last else PIPE)

        return _Frame(child_prefix, children(node), ctx.lines)


def format_tree(node: ASTNode) -> str:
    """Render `node` and its subtree as box-drawing text."""
    lines: List[str] = []
    TreePrinter().walk(node, _Frame("", (), lines))
    return "\n".join(lines)
