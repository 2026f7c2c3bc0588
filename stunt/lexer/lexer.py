"""
stunt Lexer - turns source text into a flat list of tokens

Single pass, left to right, no backtracking. Every character is classified
by its first code point; `!`, `=`, `<` and `>` peek one character ahead to
decide between the single and the `=`-suffixed operator, and `/` either
opens a line comment or is the division operator.

Errors never stop the scan: the offending line is skipped and scanning
resumes on the next one, so one pass reports as much as it can.
"""

import logging
import re
from typing import List, Optional, Tuple

from ..diagnostics import Diagnostic
from .tokens import (
    Token, TokenType, LiteralValue, KEYWORDS, SINGLE_CHAR_TOKENS,
    EQUAL_SUFFIX_TOKENS, WHITESPACE, ESCAPE_SEQUENCES
)
from .errors import (
    LexerError, create_unexpected_character_error, create_invalid_number_error,
    create_unterminated_string_error
)

logger = logging.getLogger(__name__)


# NOTE: The order matters! Prefixed forms must be tried before the plain
# decimal form, otherwise "0x1F" would lex as the number 0.
NUMBER_PATTERN = re.compile(
    "|".join([
        r"0b[01](?:[01_]*[01])?",                           # binary
        r"0o[0-7](?:[0-7_]*[0-7])?",                        # octal
        r"0x[0-9a-fA-F](?:[0-9a-fA-F_]*[0-9a-fA-F])?",      # hex
        r"[0-9](?:[0-9_]*[0-9])?"                           # integer,
        r"(?:\.[0-9](?:[0-9_]*[0-9])?)?"                    # fraction
        r"(?:[eE][-+]?[0-9](?:[0-9_]*[0-9])?)?",            # and exponent
    ])
)

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# UTF-16 surrogate ranges, inclusive
HIGH_SURROGATES = (0xD800, 0xDBFF)
LOW_SURROGATES = (0xDC00, 0xDFFF)


class Lexer:
    """
    stunt lexical analyzer.

    Converts source text into a list of tokens terminated by exactly one
    EOF token, collecting diagnostics for anything it cannot classify.
    """

    def __init__(self, source: str):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
        """
        self.source = source
        self.start = 0
        self.current = 0
        self.tokens: List[Token] = []
        self.diagnostics: List[Diagnostic] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens including the EOF token
        """
        self.start = 0
        self.current = 0
        self.tokens = []
        self.diagnostics = []

        while not self._is_at_end():
            self.start = self.current
            try:
                self._scan_token()
            except LexerError as e:
                self.diagnostics.append(e.diagnostic)
                self._skip_to_end_of_line()

        self.start = self.current
        self._add_token(TokenType.EOF)

        logger.debug("Scanned %d tokens with %d diagnostics", len(self.tokens), len(self.diagnostics))
        return self.tokens

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return any(d.is_error for d in self.diagnostics)

    def _scan_token(self):
        """Scan one token starting at self.start."""
        c = self._advance()

        if c in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[c])
        elif c in EQUAL_SUFFIX_TOKENS:
            single, with_equal = EQUAL_SUFFIX_TOKENS[c]
            self._add_token(with_equal if self._match("=") else single)
        elif c == "/":
            if self._match("/"):
                # A comment goes until the end of the line and is ignored
                self._skip_to_end_of_line()
            else:
                self._add_token(TokenType.SLASH)
        elif c in WHITESPACE:
            pass
        elif c == '"':
            self._scan_string()
        elif c.isdigit():
            self._scan_number()
        elif c.isalpha() or c == "_":
            self._scan_identifier()
        else:
            raise create_unexpected_character_error(c, self.start)

    def _scan_number(self):
        """Scan a numeric literal; the first digit is already consumed."""
        match = NUMBER_PATTERN.match(self.source, self.start)
        if match is None:
            raise create_invalid_number_error(self.start, self.current - self.start)

        self.current = match.end()
        self._add_token(TokenType.NUMBER, _decode_number(match.group(0)))

    def _scan_identifier(self):
        """Scan an identifier or keyword using maximal munch."""
        while not self._is_at_end() and _is_identifier_continue(self._peek()):
            self._advance()

        lexeme = self.source[self.start:self.current]
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)

        literal: Optional[LiteralValue] = None
        if token_type in (TokenType.TRUE, TokenType.FALSE):
            literal = token_type == TokenType.TRUE

        self._add_token(token_type, literal)

    def _scan_string(self):
        """Scan a string literal; the opening quote is already consumed."""
        value_parts = []

        while True:
            if self._is_at_end():
                raise create_unterminated_string_error(self.start, self.current - self.start, True)
            c = self._peek()
            if c == "\n":
                raise create_unterminated_string_error(self.start, self.current - self.start, False)

            self._advance()
            if c == '"':
                break
            if c == "\\":
                if self._is_at_end():
                    raise create_unterminated_string_error(self.start, self.current - self.start, True)
                value_parts.append(self._scan_escape())
            else:
                value_parts.append(c)

        self._add_token(TokenType.STRING, "".join(value_parts))

    def _scan_escape(self) -> str:
        """Decode the escape sequence following a backslash."""
        escape_char = self._advance()

        if escape_char == "\n":
            return ""  # Line continuation
        if escape_char == "\r" and self._peek() == "\n":
            self._advance()
            return ""
        if escape_char in ESCAPE_SEQUENCES:
            return ESCAPE_SEQUENCES[escape_char]
        if escape_char == "x":
            return self._scan_hex_escape()
        if escape_char == "u":
            return self._scan_unicode_escape()

        # Unknown escape - keep the character as written
        return escape_char

    def _scan_hex_escape(self) -> str:
        value = self._hex_value(self.current, 2)
        if value is None:
            return "x"
        self.current += 2
        return chr(value)

    def _scan_unicode_escape(self) -> str:
        """
        Decode `\\uHHHH`.

        A high surrogate followed by a `\\u` low surrogate is joined into one
        code point. A surrogate on its own cannot be encoded, so it is kept as
        the unknown escape `u` followed by its digits.
        """
        value = self._hex_value(self.current, 4)
        if value is None:
            return "u"

        if HIGH_SURROGATES[0] <= value <= HIGH_SURROGATES[1]:
            low = None
            if self.source.startswith("\\u", self.current + 4):
                low = self._hex_value(self.current + 6, 4)
            if low is not None and LOW_SURROGATES[0] <= low <= LOW_SURROGATES[1]:
                self.current += 10
                return chr(0x10000 + ((value - HIGH_SURROGATES[0]) << 10) + (low - LOW_SURROGATES[0]))

        if HIGH_SURROGATES[0] <= value <= LOW_SURROGATES[1]:
            return "u"

        self.current += 4
        return chr(value)

    def _hex_value(self, offset: int, width: int) -> Optional[int]:
        """Value of `width` hex digits at `offset`, without consuming them."""
        digits = self.source[offset:offset + width]
        if len(digits) == width and all(d in HEX_DIGITS for d in digits):
            return int(digits, 16)
        return None

    # Scanner helpers

    def _add_token(self, token_type: TokenType, literal: Optional[LiteralValue] = None):
        lexeme = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, lexeme, literal, self.start))

    def _skip_to_end_of_line(self):
        """Skip ahead to (not past) the next newline."""
        while not self._is_at_end() and self._peek() != "\n":
            self.current += 1

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def _advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def _match(self, expected: str) -> bool:
        """Consume the next character if it is `expected`."""
        if self._is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def _peek(self) -> str:
        if self._is_at_end():
            return ""
        return self.source[self.current]


def _is_identifier_continue(char: str) -> bool:
    return char.isalnum() or char == "_"


def _decode_number(lexeme: str) -> LiteralValue:
    """Convert a matched numeric lexeme to int or float, dropping separators."""
    clean = lexeme.replace("_", "")
    if clean[:2] in ("0b", "0o", "0x"):
        return int(clean, 0)
    if "." in clean or "e" in clean or "E" in clean:
        return float(clean)
    return int(clean, 10)


def scan(source: str) -> Tuple[List[Token], List[Diagnostic]]:
    """
    Tokenize a source string.

    Args:
        source: Source code string

    Returns:
        (tokens, diagnostics); tokens always end with an EOF token
    """
    lexer = Lexer(source)
    tokens = lexer.tokenize()
    return tokens, lexer.diagnostics


def scan_file(filepath: str) -> Tuple[str, List[Token], List[Diagnostic]]:
    """
    Tokenize a source file.

    Returns:
        (source, tokens, diagnostics)

    Raises:
        OSError: If the file cannot be read
    """
    with open(filepath, "r", encoding="utf-8") as f:
        source = f.read()

    tokens, diagnostics = scan(source)
    return source, tokens, diagnostics
