"""
Error handling for the stunt parser.

Parsing functions do not raise on bad input. Each production returns either
the node it built or a `ParseFailure` carrying the diagnostic, and callers
hand a failure straight back up to the declaration loop, which records it
and resynchronizes.

Spans prefer a single precise token; where no single token describes the
problem they cover the production from its first token to the last one
consumed.
"""

from dataclasses import dataclass
from typing import Tuple, TypeVar, Union

from ..diagnostics import Diagnostic, DiagnosticCode, error
from ..lexer.tokens import Token, TokenType


@dataclass(frozen=True)
class ParseFailure:
    """The failed outcome of a production."""
    diagnostic: Diagnostic

    @property
    def code(self) -> DiagnosticCode:
        return self.diagnostic.code


T = TypeVar("T")

ParseResult = Union[T, ParseFailure]


def token_span(token: Token) -> Tuple[int, int]:
    """(position, length) covering one token; EOF gets a one-character span."""
    return token.position, max(1, len(token.lexeme))


def range_span(first: Token, last: Token) -> Tuple[int, int]:
    """(position, length) from the start of `first` to the end of `last`."""
    end = max(last.end, first.end)
    return first.position, max(1, end - first.position)


def describe(token: Token) -> str:
    """How a token is named in messages."""
    if token.type == TokenType.EOF:
        return "end of input"
    return f"'{token.lexeme}'"


# Helper functions for creating common parser failures

def create_missing_semicolon(last: Token, found: Token, context: str) -> ParseFailure:
    position, length = token_span(last)
    return ParseFailure(error(
        DiagnosticCode.MISSING_SEMICOLON,
        f"Expected ';' after {context}, found {describe(found)}",
        position, length,
    ))


def create_missing_identifier(found: Token, keyword: Token) -> ParseFailure:
    position, length = token_span(keyword if found.type == TokenType.EOF else found)
    return ParseFailure(error(
        DiagnosticCode.MISSING_IDENTIFIER,
        f"Expected a variable name after '{keyword.lexeme}', found {describe(found)}",
        position, length,
    ))


def create_missing_initializer(start: Token, last: Token, name: Token) -> ParseFailure:
    position, length = range_span(start, last)
    return ParseFailure(error(
        DiagnosticCode.MISSING_INITIALIZER,
        f"Variable \"{name.lexeme}\" must be initialized with '='",
        position, length,
    ))


def create_expected_expression(found: Token) -> ParseFailure:
    position, length = token_span(found)
    return ParseFailure(error(
        DiagnosticCode.EXPECTED_EXPRESSION,
        f"Expected an expression, found {describe(found)}",
        position, length,
    ))


def create_missing_closing_parenthesis(opening: Token, last: Token) -> ParseFailure:
    position, length = range_span(opening, last)
    return ParseFailure(error(
        DiagnosticCode.MISSING_CLOSING_PARENTHESIS,
        "Expected ')' to close this '('",
        position, length,
    ))


def create_missing_closing_brace(opening: Token, last: Token) -> ParseFailure:
    position, length = range_span(opening, last)
    return ParseFailure(error(
        DiagnosticCode.MISSING_CLOSING_BRACE,
        "Expected '}' to close this block",
        position, length,
    ))


def create_missing_condition(found: Token, keyword: Token) -> ParseFailure:
    position, length = token_span(keyword if found.type == TokenType.EOF else found)
    return ParseFailure(error(
        DiagnosticCode.MISSING_CONDITION,
        f"Expected a parenthesized condition after '{keyword.lexeme}'",
        position, length,
    ))


def create_expected_block(found: Token, after: Token) -> ParseFailure:
    position, length = token_span(after if found.type == TokenType.EOF else found)
    return ParseFailure(error(
        DiagnosticCode.EXPECTED_BLOCK,
        f"Expected '{{' after '{after.lexeme}', found {describe(found)}",
        position, length,
    ))


def create_invalid_assignment(start: Token, last: Token) -> ParseFailure:
    position, length = range_span(start, last)
    return ParseFailure(error(
        DiagnosticCode.INVALID_ASSIGNMENT,
        "Only a variable name can be assigned to",
        position, length,
    ))


def create_nesting_too_deep(found: Token, code: DiagnosticCode, limit: int) -> ParseFailure:
    position, length = token_span(found)
    return ParseFailure(error(
        code,
        f"Nesting is too deep here (the limit is {limit} levels)",
        position, length,
    ))
