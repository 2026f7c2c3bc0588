"""
stunt Lexer Package

Implements the lexical analyzer (tokenizer) for the stunt language.

Key Features:
- Single pass, one character of lookahead for two-character operators
- Binary, octal, hexadecimal, decimal, float and exponent number literals
  with `_` digit separators
- String literals with escape sequences
- Line comments (`// ...`)
- Error recovery to the next line; scanning never halts
"""

from .tokens import Token, TokenType, KEYWORDS
from .lexer import Lexer, scan, scan_file
from .errors import LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "KEYWORDS",
    "LexerError",
    "scan",
    "scan_file",
]
