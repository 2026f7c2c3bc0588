"""
Generic depth-first traversal over the stunt AST.

A pass subclasses `Visitor` and defines `visit_<kind>(node, ctx)` methods for
the node kinds it cares about, where `<kind>` is the snake_case name from
`NODE_KINDS`. A callback may return a new context value for the node's
children; returning None keeps the parent's context. Kinds without a
callback fall through to `generic_visit`, which keeps the context.

`leave_<kind>(node, ctx)` methods, when present, run after the node's
children with the context those children saw.

Children are visited in syntactic order: left to right, and for an if
statement the condition, then the then-branch, then the else-branch.
"""

from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from .ast_nodes import (
    ASTNode, Program, VarDecl, ExprStmt, Assignment, Block, BlockStmt, IfStmt,
    BinaryExpr, UnaryExpr, GroupingExpr, VariableExpr,
    NumberLiteralExpr, StringLiteralExpr, BooleanLiteralExpr,
)


NODE_KINDS: Dict[type, str] = {
    Program: "program",
    VarDecl: "var_decl",
    ExprStmt: "expr_stmt",
    Assignment: "assignment",
    Block: "block",
    BlockStmt: "block_stmt",
    IfStmt: "if_stmt",
    BinaryExpr: "binary_expr",
    UnaryExpr: "unary_expr",
    GroupingExpr: "grouping_expr",
    VariableExpr: "variable_expr",
    NumberLiteralExpr: "number_literal_expr",
    StringLiteralExpr: "string_literal_expr",
    BooleanLiteralExpr: "boolean_literal_expr",
}

_NO_CHILDREN: Tuple[ASTNode, ...] = ()

_CHILDREN: Dict[type, Callable[[Any], Tuple[ASTNode, ...]]] = {
    Program: lambda node: node.statements,
    VarDecl: lambda node: (node.initializer,),
    ExprStmt: lambda node: (node.expression,),
    Assignment: lambda node: (node.expression,),
    Block: lambda node: node.statements,
    BlockStmt: lambda node: (node.block,),
    IfStmt: lambda node: (
        (node.condition, node.then_branch)
        if node.else_branch is None
        else (node.condition, node.then_branch, node.else_branch)
    ),
    BinaryExpr: lambda node: (node.left, node.right),
    UnaryExpr: lambda node: (node.right,),
    GroupingExpr: lambda node: (node.expression,),
    VariableExpr: lambda node: _NO_CHILDREN,
    NumberLiteralExpr: lambda node: _NO_CHILDREN,
    StringLiteralExpr: lambda node: _NO_CHILDREN,
    BooleanLiteralExpr: lambda node: _NO_CHILDREN,
}


def node_kind(node: ASTNode) -> str:
    """Return the snake_case kind name of an AST node."""
    try:
        return NODE_KINDS[type(node)]
    except KeyError:
        raise TypeError(f"Not an AST node: {type(node).__name__}") from None


def children(node: ASTNode) -> Tuple[ASTNode, ...]:
    """Direct children of a node in syntactic order."""
    node_kind(node)
    return _CHILDREN[type(node)](node)


def iter_children(node: ASTNode) -> Iterator[ASTNode]:
    return iter(children(node))


class Visitor:
    """Base class for context-threading passes over the AST."""

    def generic_visit(self, node: ASTNode, ctx: Any) -> Optional[Any]:
        """Called for node kinds without a `visit_<kind>` method."""
        return None

    def walk(self, node: ASTNode, ctx: Any) -> None:
        walk(node, ctx, self)


def walk(node: ASTNode, ctx: Any, visitor: Visitor) -> None:
    """
    Visit `node` and its subtree depth-first.

    Args:
        node: Root of the subtree to traverse
        ctx: Context value seen by `node`'s callback
        visitor: The pass whose callbacks are invoked

    Raises:
        TypeError: If an object that is not an AST node is reached
    """
    kind = node_kind(node)

    callback = getattr(visitor, "visit_" + kind, visitor.generic_visit)
    replacement = callback(node, ctx)
    child_ctx = ctx if replacement is None else replacement

    for child in children(node):
        walk(child, child_ctx, visitor)

    leave = getattr(visitor, "leave_" + kind, None)
    if leave is not None:
        leave(node, child_ctx)


def tree_depth(node: ASTNode) -> int:
    """Number of nodes on the longest root-to-leaf path, counted without recursion."""
    deepest = 0
    pending = [(node, 1)]
    while pending:
        current, depth = pending.pop()
        deepest = max(deepest, depth)
        pending.extend((child, depth + 1) for child in children(current))
    return deepest
