"""
Token definitions for the stunt lexer.

This module defines every token type the language knows about:
- Punctuation and single-character operators
- One-or-two character operators (`!=`, `==`, `<=`, `>=`)
- Literals (numbers, strings) and identifiers
- Keywords
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Union


class TokenType(Enum):
    """
    Enumeration of all token types in stunt.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Single-character tokens
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    COMMA = auto()                  # ,
    DOT = auto()                    # .
    MINUS = auto()                  # -
    PLUS = auto()                   # +
    SEMICOLON = auto()              # ;
    SLASH = auto()                  # /
    STAR = auto()                   # *

    # ========================================================================
    # One or two character tokens
    # ========================================================================
    BANG = auto()                   # !
    BANG_EQUAL = auto()             # !=
    EQUAL = auto()                  # =
    EQUAL_EQUAL = auto()            # ==
    GREATER = auto()                # >
    GREATER_EQUAL = auto()          # >=
    LESS = auto()                   # <
    LESS_EQUAL = auto()             # <=

    # ========================================================================
    # Literals
    # ========================================================================
    IDENTIFIER = auto()             # variable_name
    STRING = auto()                 # "hello"
    NUMBER = auto()                 # 42, 1_000, 0b101, 0o17, 0xFF, 3.14, 1e-3

    # ========================================================================
    # Keywords
    # ========================================================================
    CONST = auto()
    ELSE = auto()
    FALSE = auto()
    FN = auto()
    FOR = auto()
    IF = auto()
    LET = auto()
    RETURN = auto()
    TRUE = auto()
    WHILE = auto()

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input, always the last token


LiteralValue = Union[int, float, str, bool]


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    `position` is the offset of the first character of the lexeme in the
    source string. Literal tokens carry their decoded value in `literal`.
    """
    type: TokenType
    lexeme: str
    literal: Optional[LiteralValue]
    position: int

    def __str__(self) -> str:
        if self.literal is not None and self.literal != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.literal!r})"
        return f"{self.type.name}({self.lexeme!r})"

    @property
    def end(self) -> int:
        """Offset one past the last character of the lexeme."""
        return self.position + len(self.lexeme)

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in LITERAL_TYPES

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORDS.values()


LITERAL_TYPES = frozenset({
    TokenType.NUMBER,
    TokenType.STRING,
    TokenType.TRUE,
    TokenType.FALSE,
})

# Reserved words; anything else matching the identifier shape is an IDENTIFIER
KEYWORDS = {
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "fn": TokenType.FN,
    "let": TokenType.LET,
    "const": TokenType.CONST,
    "return": TokenType.RETURN,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "for": TokenType.FOR,
}

SINGLE_CHAR_TOKENS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# Operators that become a different token when followed by '='
# (single form, form with trailing '=')
EQUAL_SUFFIX_TOKENS = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

WHITESPACE = frozenset({" ", "\t", "\r", "\n"})

# Escape sequences understood inside string literals
ESCAPE_SEQUENCES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "0": "\0",
}
