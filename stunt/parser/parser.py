"""
stunt Recursive Descent Parser

Grammar, lowest to highest binding:

    program      -> declaration* EOF
    declaration  -> ("let" | "const") IDENTIFIER "=" expression ";"
                  | statement
    statement    -> "if" "(" expression ")" block ("else" (block | if))?
                  | block
                  | IDENTIFIER "=" expression ";"
                  | expression ";"
    block        -> "{" declaration* "}"
    expression   -> equality
    equality     -> comparison (("!=" | "==") comparison)*
    comparison   -> term ((">" | ">=" | "<" | "<=") term)*
    term         -> factor (("-" | "+") factor)*
    factor       -> unary (("/" | "*") unary)*
    unary        -> ("!" | "-") unary | primary
    primary      -> NUMBER | STRING | "true" | "false" | IDENTIFIER
                  | "(" expression ")"

Every production returns its node or a ParseFailure. A failure aborts the
whole enclosing top-level declaration: the declaration loop records it and
discards tokens up to a safe restart point, so each malformed statement
yields one diagnostic.

Nesting is bounded: past MAX_NESTING_DEPTH levels, or when a declaration's
tree grows deeper than MAX_TREE_DEPTH, the declaration fails like any other
syntax error instead of exhausting the interpreter's stack.
"""

import logging
from enum import IntEnum
from typing import Callable, List, Optional, Tuple, Union

from ..diagnostics import Diagnostic, DiagnosticCode
from ..lexer.lexer import scan
from ..lexer.tokens import Token, TokenType
from .ast_nodes import (
    Program, VarDecl, ExprStmt, Assignment, Block, BlockStmt, IfStmt,
    BinaryExpr, UnaryExpr, GroupingExpr, VariableExpr,
    NumberLiteralExpr, StringLiteralExpr, BooleanLiteralExpr,
    DeclOrStmt, Expr,
)
from .errors import (
    ParseFailure, ParseResult, create_missing_semicolon, create_missing_identifier,
    create_missing_initializer, create_expected_expression,
    create_missing_closing_parenthesis, create_missing_closing_brace,
    create_missing_condition, create_expected_block, create_invalid_assignment,
    create_nesting_too_deep,
)
from .visitor import tree_depth

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Binding strength of the binary operator levels, lowest first."""
    EQUALITY = 0        # !=, ==
    COMPARISON = 1      # >, >=, <, <=
    TERM = 2            # -, +
    FACTOR = 3          # /, *
    UNARY = 4           # !, - (prefix)


BINARY_OPERATORS = {
    Precedence.EQUALITY: (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL),
    Precedence.COMPARISON: (
        TokenType.GREATER, TokenType.GREATER_EQUAL,
        TokenType.LESS, TokenType.LESS_EQUAL,
    ),
    Precedence.TERM: (TokenType.MINUS, TokenType.PLUS),
    Precedence.FACTOR: (TokenType.SLASH, TokenType.STAR),
}

UNARY_OPERATORS = (TokenType.BANG, TokenType.MINUS)

# Tokens that begin a new declaration; resynchronization stops before them
DECLARATION_STARTS = frozenset({
    TokenType.CONST,
    TokenType.LET,
    TokenType.RETURN,
})

# Parentheses, prefix operators, blocks and else-if links each take one
# level; the parser recurses several frames per level
MAX_NESTING_DEPTH = 64

# Longest root-to-leaf path accepted in a declaration's subtree, which keeps
# the recursive walker and generator inside the interpreter's stack
MAX_TREE_DEPTH = 200


class Parser:
    """
    stunt recursive descent parser.

    Consumes an EOF-terminated token list and produces a Program, collecting
    one diagnostic per malformed top-level declaration.
    """

    def __init__(self, tokens: List[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the lexer; the last one must be EOF
        """
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token list must be terminated by an EOF token")

        self.tokens = tokens
        self.current = 0
        self.depth = 0
        self.diagnostics: List[Diagnostic] = []

    def parse(self) -> Program:
        """
        Parse the token stream into an AST.

        Malformed declarations are left out of the returned program; their
        diagnostics are available in `self.diagnostics`.
        """
        self.current = 0
        self.depth = 0
        self.diagnostics = []
        statements: List[DeclOrStmt] = []

        while not self._is_at_end():
            start = self.current
            result = self._parse_declaration()
            if isinstance(result, ParseFailure):
                self.diagnostics.append(result.diagnostic)
                self._synchronize(start)
            elif tree_depth(result) > MAX_TREE_DEPTH:
                # Long operator chains nest on the left without recursing here
                failure = create_nesting_too_deep(
                    self.tokens[start], DiagnosticCode.EXPECTED_EXPRESSION, MAX_TREE_DEPTH
                )
                self.diagnostics.append(failure.diagnostic)
            else:
                statements.append(result)

        logger.debug("Parsed %d statements with %d diagnostics", len(statements), len(self.diagnostics))
        return Program(tuple(statements))

    def _synchronize(self, start: int):
        """
        Discard tokens until a `;` (consumed) or the start of a declaration.

        If the failed declaration consumed nothing, its first token is
        dropped first so the loop always advances.
        """
        if self.current == start:
            if self._advance().type == TokenType.SEMICOLON:
                return

        while not self._is_at_end():
            if self._match(TokenType.SEMICOLON):
                return
            if self._peek().type in DECLARATION_STARTS:
                return
            self._advance()

    # Declarations and statements

    def _parse_declaration(self) -> ParseResult[DeclOrStmt]:
        if self._check(TokenType.LET) or self._check(TokenType.CONST):
            return self._parse_variable_declaration()
        return self._parse_statement()

    def _parse_variable_declaration(self) -> ParseResult[VarDecl]:
        """Parse `let|const NAME = expr ;`."""
        keyword = self._advance()

        if not self._check(TokenType.IDENTIFIER):
            return create_missing_identifier(self._peek(), keyword)
        name = self._advance()

        if not self._match(TokenType.EQUAL):
            return create_missing_initializer(keyword, self._previous(), name)

        initializer = self._parse_expression()
        if isinstance(initializer, ParseFailure):
            return initializer

        if not self._match(TokenType.SEMICOLON):
            return create_missing_semicolon(self._previous(), self._peek(), "variable declaration")

        return VarDecl(keyword.type == TokenType.CONST, name, initializer)

    def _parse_statement(self) -> ParseResult[DeclOrStmt]:
        if self._check(TokenType.IF):
            return self._nested(self._parse_if_statement, DiagnosticCode.EXPECTED_BLOCK)

        if self._check(TokenType.LEFT_BRACE):
            block = self._nested(self._parse_block, DiagnosticCode.EXPECTED_BLOCK)
            if isinstance(block, ParseFailure):
                return block
            return BlockStmt(block)

        return self._parse_expression_statement()

    def _parse_if_statement(self) -> ParseResult[IfStmt]:
        """Parse an if statement with an optional else block or else-if chain."""
        keyword = self._advance()

        if not self._check(TokenType.LEFT_PAREN):
            return create_missing_condition(self._peek(), keyword)
        opening = self._advance()

        if self._check(TokenType.RIGHT_PAREN):
            return create_missing_condition(self._peek(), keyword)

        condition = self._parse_expression()
        if isinstance(condition, ParseFailure):
            return condition

        if not self._match(TokenType.RIGHT_PAREN):
            return create_missing_closing_parenthesis(opening, self._previous())

        if not self._check(TokenType.LEFT_BRACE):
            return create_expected_block(self._peek(), self._previous())
        then_branch = self._parse_block()
        if isinstance(then_branch, ParseFailure):
            return then_branch

        else_branch: Optional[Union[Block, IfStmt]] = None
        if self._match(TokenType.ELSE):
            else_keyword = self._previous()
            if self._check(TokenType.IF):
                else_branch = self._nested(self._parse_if_statement, DiagnosticCode.EXPECTED_BLOCK)
            elif self._check(TokenType.LEFT_BRACE):
                else_branch = self._parse_block()
            else:
                return create_expected_block(self._peek(), else_keyword)
            if isinstance(else_branch, ParseFailure):
                return else_branch

        return IfStmt(condition, then_branch, else_branch)

    def _parse_block(self) -> ParseResult[Block]:
        """Parse `{ declaration* }`; the caller has checked for `{`."""
        opening = self._advance()
        statements: List[DeclOrStmt] = []

        while not self._check(TokenType.RIGHT_BRACE) and not self._is_at_end():
            stmt = self._parse_declaration()
            if isinstance(stmt, ParseFailure):
                return stmt
            statements.append(stmt)

        if not self._match(TokenType.RIGHT_BRACE):
            return create_missing_closing_brace(opening, self._previous())

        return Block(tuple(statements))

    def _parse_expression_statement(self) -> ParseResult[Union[Assignment, ExprStmt]]:
        """Parse an assignment if the left side is a bare name, else an expression statement."""
        start = self._peek()

        expr = self._parse_expression()
        if isinstance(expr, ParseFailure):
            return expr

        if self._match(TokenType.EQUAL):
            if not isinstance(expr, VariableExpr):
                return create_invalid_assignment(start, self._peek(-2))

            value = self._parse_expression()
            if isinstance(value, ParseFailure):
                return value

            if not self._match(TokenType.SEMICOLON):
                return create_missing_semicolon(self._previous(), self._peek(), "assignment")
            return Assignment(expr.name, value)

        if not self._match(TokenType.SEMICOLON):
            return create_missing_semicolon(self._previous(), self._peek(), "expression")
        return ExprStmt(expr)

    # Expressions

    def _parse_expression(self) -> ParseResult[Expr]:
        return self._parse_precedence(Precedence.EQUALITY)

    def _parse_precedence(self, precedence: Precedence) -> ParseResult[Expr]:
        """Parse a left-associative binary level, or unary at the top of the ladder."""
        if precedence == Precedence.UNARY:
            return self._parse_unary()

        operand_level = Precedence(precedence + 1)
        expr = self._parse_precedence(operand_level)
        if isinstance(expr, ParseFailure):
            return expr

        while self._match(*BINARY_OPERATORS[precedence]):
            operator = self._previous()
            right = self._parse_precedence(operand_level)
            if isinstance(right, ParseFailure):
                return right
            expr = BinaryExpr(operator, expr, right)

        return expr

    def _parse_unary(self) -> ParseResult[Expr]:
        if self._peek().type in UNARY_OPERATORS:
            return self._nested(self._parse_prefix_operation, DiagnosticCode.EXPECTED_EXPRESSION)
        return self._parse_primary()

    def _parse_prefix_operation(self) -> ParseResult[UnaryExpr]:
        operator = self._advance()
        right = self._parse_unary()
        if isinstance(right, ParseFailure):
            return right
        return UnaryExpr(operator, right)

    def _parse_primary(self) -> ParseResult[Expr]:
        token = self._peek()

        if self._match(TokenType.NUMBER):
            return NumberLiteralExpr(token, token.literal)
        if self._match(TokenType.STRING):
            return StringLiteralExpr(token, token.literal)
        if self._match(TokenType.TRUE, TokenType.FALSE):
            return BooleanLiteralExpr(token, token.type == TokenType.TRUE)
        if self._match(TokenType.IDENTIFIER):
            return VariableExpr(token)

        if self._check(TokenType.LEFT_PAREN):
            return self._nested(self._parse_grouping, DiagnosticCode.EXPECTED_EXPRESSION)

        return create_expected_expression(token)

    def _parse_grouping(self) -> ParseResult[GroupingExpr]:
        opening = self._advance()
        expr = self._parse_expression()
        if isinstance(expr, ParseFailure):
            return expr
        if not self._match(TokenType.RIGHT_PAREN):
            return create_missing_closing_parenthesis(opening, self._previous())
        return GroupingExpr(expr)

    # Utility methods

    def _nested(self, production: Callable[[], ParseResult], code: DiagnosticCode) -> ParseResult:
        """Run `production` one nesting level deeper, failing at the current token past the limit."""
        if self.depth >= MAX_NESTING_DEPTH:
            return create_nesting_too_deep(self._peek(), code, MAX_NESTING_DEPTH)

        self.depth += 1
        try:
            return production()
        finally:
            self.depth -= 1

    def _match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it has one of the given types."""
        for token_type in token_types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self, offset: int = 0) -> Token:
        index = min(max(self.current + offset, 0), len(self.tokens) - 1)
        return self.tokens[index]

    def _previous(self) -> Token:
        return self._peek(-1)


def parse(tokens: List[Token]) -> Tuple[Program, List[Diagnostic]]:
    """
    Parse a token list.

    Returns:
        (program, diagnostics)
    """
    parser = Parser(tokens)
    program = parser.parse()
    return program, parser.diagnostics


def parse_source(source: str) -> Tuple[Program, List[Diagnostic]]:
    """
    Scan and parse a source string.

    Returns:
        (program, diagnostics) where diagnostics holds the lexer's followed
        by the parser's
    """
    tokens, scan_diagnostics = scan(source)
    program, parse_diagnostics = parse(tokens)
    return program, scan_diagnostics + parse_diagnostics
