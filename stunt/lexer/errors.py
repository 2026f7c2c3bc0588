"""
Error handling for the stunt lexer.

The lexer never stops on bad input. Problems found while scanning a token
are raised as `LexerError` inside the scan loop, which records the carried
diagnostic and skips ahead to the next line before resuming.
"""

from ..diagnostics import Diagnostic, DiagnosticCode, error


class LexerError(Exception):
    """
    Raised while scanning a single token.

    Contains the diagnostic to record; the scan loop catches it and recovers.
    """

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic

    def __str__(self) -> str:
        return str(self.diagnostic)


# Helper functions for creating common errors

def create_unexpected_character_error(char: str, position: int) -> LexerError:
    """Create an error for a character that starts no token."""
    if char.isprintable():
        message = f'"{char}" is not a valid character'
    else:
        message = f"Non-printable character U+{ord(char):04X} is not a valid character"

    return LexerError(error(DiagnosticCode.UNEXPECTED_CHARACTER, message, position, 1))


def create_invalid_number_error(position: int, length: int) -> LexerError:
    """Create an error for a digit that starts no valid numeric literal."""
    return LexerError(error(
        DiagnosticCode.UNEXPECTED_CHARACTER,
        "The format of the number is invalid",
        position,
        length,
    ))


def create_unterminated_string_error(position: int, length: int, at_end: bool) -> LexerError:
    """Create an error for a string literal missing its closing quote."""
    where = "end of input" if at_end else "end of line"
    return LexerError(error(
        DiagnosticCode.UNTERMINATED_STRING,
        f"String reaches {where} without a closing '\"'",
        position,
        length,
    ))
