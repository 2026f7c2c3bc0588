"""
stunt Parser Package

Implements the recursive descent parser for the stunt language and the
shared tree-walking infrastructure used by every later pass.

Key Features:
- Classic precedence ladder for expressions, all binary levels left-associative
- Explicit ParseFailure results instead of exceptions
- Panic-mode resynchronization: one diagnostic per malformed declaration
- Immutable tagged-union AST
- Context-threading visitor and a box-drawing tree printer
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, NODE_CLASSES, is_node,
    Program, VarDecl, ExprStmt, Assignment, Block, BlockStmt, IfStmt,
    BinaryExpr, UnaryExpr, GroupingExpr, VariableExpr,
    NumberLiteralExpr, StringLiteralExpr, BooleanLiteralExpr,
    Expr, Stmt, DeclOrStmt, LiteralExpr,
)
from .parser import Parser, parse, parse_source
from .errors import ParseFailure
from .visitor import Visitor, walk, iter_children, node_kind, tree_depth
from .printer import format_tree

__all__ = [
    # Core parser
    "Parser", "parse", "parse_source",

    # AST nodes
    "ASTNode", "ASTNodeType", "NODE_CLASSES", "is_node",
    "Program", "VarDecl", "ExprStmt", "Assignment", "Block", "BlockStmt", "IfStmt",
    "BinaryExpr", "UnaryExpr", "GroupingExpr", "VariableExpr",
    "NumberLiteralExpr", "StringLiteralExpr", "BooleanLiteralExpr",
    "Expr", "Stmt", "DeclOrStmt", "LiteralExpr",

    # Traversal
    "Visitor", "walk", "iter_children", "node_kind", "tree_depth", "format_tree",

    # Error handling
    "ParseFailure",
]
