"""
Abstract Syntax Tree node definitions for stunt.

The tree is a closed union of node kinds. Each kind is a frozen dataclass;
passes dispatch on the node's class (see `visitor.py`) instead of calling
methods on the nodes, so adding a pass never touches this module.

Nodes own their children exclusively and are never mutated after parsing.
Identity is the node's identity (`eq=False`), so nodes can key side tables.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from ..lexer.tokens import Token


class ASTNodeType(Enum):
    """Enumeration of all AST node kinds."""

    # Top-level
    PROGRAM = "program"

    # Declarations
    VAR_DECL = "varDecl"

    # Statements
    EXPR_STMT = "exprStmt"
    ASSIGNMENT = "assignment"
    BLOCK = "block"
    BLOCK_STMT = "blockStmt"
    IF_STMT = "ifStmt"

    # Expressions
    BINARY_EXPR = "binaryExpr"
    UNARY_EXPR = "unaryExpr"
    GROUPING_EXPR = "groupingExpr"
    VARIABLE_EXPR = "variableExpr"
    NUMBER_LITERAL = "numberLiteralExpr"
    STRING_LITERAL = "stringLiteralExpr"
    BOOLEAN_LITERAL = "booleanLiteralExpr"


# ============================================================================
# Expressions
# ============================================================================

@dataclass(frozen=True, eq=False)
class BinaryExpr:
    """Binary operation; `op` is the operator token."""
    op: Token
    left: "Expr"
    right: "Expr"

    node_type = ASTNodeType.BINARY_EXPR


@dataclass(frozen=True, eq=False)
class UnaryExpr:
    """Prefix operation (`!` or `-`)."""
    op: Token
    right: "Expr"

    node_type = ASTNodeType.UNARY_EXPR


@dataclass(frozen=True, eq=False)
class GroupingExpr:
    """Parenthesized expression."""
    expression: "Expr"

    node_type = ASTNodeType.GROUPING_EXPR


@dataclass(frozen=True, eq=False)
class VariableExpr:
    """Reference to a named binding."""
    name: Token

    node_type = ASTNodeType.VARIABLE_EXPR


@dataclass(frozen=True, eq=False)
class NumberLiteralExpr:
    token: Token
    value: Union[int, float]

    node_type = ASTNodeType.NUMBER_LITERAL


@dataclass(frozen=True, eq=False)
class StringLiteralExpr:
    token: Token
    value: str

    node_type = ASTNodeType.STRING_LITERAL


@dataclass(frozen=True, eq=False)
class BooleanLiteralExpr:
    token: Token
    value: bool

    node_type = ASTNodeType.BOOLEAN_LITERAL


LiteralExpr = Union[NumberLiteralExpr, StringLiteralExpr, BooleanLiteralExpr]

Expr = Union[BinaryExpr, UnaryExpr, GroupingExpr, VariableExpr, LiteralExpr]


# ============================================================================
# Declarations and statements
# ============================================================================

@dataclass(frozen=True, eq=False)
class VarDecl:
    """`let name = initializer;` or `const name = initializer;`"""
    is_const: bool
    name: Token
    initializer: Expr

    node_type = ASTNodeType.VAR_DECL


@dataclass(frozen=True, eq=False)
class ExprStmt:
    """Expression evaluated for its effect: `expr;`"""
    expression: Expr

    node_type = ASTNodeType.EXPR_STMT


@dataclass(frozen=True, eq=False)
class Assignment:
    """`name = expression;`"""
    name: Token
    expression: Expr

    node_type = ASTNodeType.ASSIGNMENT


@dataclass(frozen=True, eq=False)
class Block:
    """Braced sequence of declarations and statements; opens a scope."""
    statements: Tuple["DeclOrStmt", ...]

    node_type = ASTNodeType.BLOCK


@dataclass(frozen=True, eq=False)
class BlockStmt:
    """A bare block used as a statement."""
    block: Block

    node_type = ASTNodeType.BLOCK_STMT


@dataclass(frozen=True, eq=False)
class IfStmt:
    """`if (condition) { ... } [else { ... } | else if ...]`"""
    condition: Expr
    then_branch: Block
    else_branch: Optional[Union[Block, "IfStmt"]] = None

    node_type = ASTNodeType.IF_STMT


Stmt = Union[ExprStmt, Assignment, BlockStmt, IfStmt]

DeclOrStmt = Union[VarDecl, Stmt]


# ============================================================================
# Top-level
# ============================================================================

@dataclass(frozen=True, eq=False)
class Program:
    """Root node: the ordered declarations and statements of a source file."""
    statements: Tuple[DeclOrStmt, ...]

    node_type = ASTNodeType.PROGRAM


ASTNode = Union[Program, DeclOrStmt, Block, Expr]

# Every concrete node class, in declaration order of ASTNodeType
NODE_CLASSES = (
    Program, VarDecl, ExprStmt, Assignment, Block, BlockStmt, IfStmt,
    BinaryExpr, UnaryExpr, GroupingExpr, VariableExpr,
    NumberLiteralExpr, StringLiteralExpr, BooleanLiteralExpr,
)


def is_node(value: object) -> bool:
    """Check whether `value` is one of the AST node kinds."""
    return type(value) in NODE_CLASSES
