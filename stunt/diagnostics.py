"""
Diagnostics shared by every stunt compiler stage.

A diagnostic is a flat record describing one lexical, syntactic or semantic
problem: a severity, a code from a closed set, a human-readable message and
the exact source span (offset + length) to underline.

This module also holds the plain-text rendering used by the CLI, which
prints the offending source line with a caret underline below it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, NamedTuple, Tuple


class Severity(str, Enum):
    """Diagnostic severity. Only errors block code generation."""
    ERROR = "error"
    WARNING = "warning"


class DiagnosticCode(str, Enum):
    """Closed set of diagnostic codes emitted by the compiler."""

    # Lexer
    UNEXPECTED_CHARACTER = "UnexpectedCharacter"
    UNTERMINATED_STRING = "UnterminatedString"

    # Parser
    MISSING_SEMICOLON = "MissingSemicolon"
    MISSING_IDENTIFIER = "MissingIdentifier"
    MISSING_INITIALIZER = "MissingInitializer"
    EXPECTED_EXPRESSION = "ExpectedExpression"
    MISSING_CLOSING_PARENTHESIS = "MissingClosingParenthesis"
    MISSING_CLOSING_BRACE = "MissingClosingBrace"
    MISSING_CONDITION = "MissingCondition"
    EXPECTED_BLOCK = "ExpectedBlock"
    INVALID_ASSIGNMENT = "InvalidAssignment"

    # Analyzer
    MULTIPLE_DECLARATIONS = "MultipleDeclarations"
    UNDEFINED_VARIABLE = "UndefinedVariable"
    UNUSED_VARIABLE = "UnusedVariable"


# Short titles printed in the diagnostic header line
DIAGNOSTIC_TITLES = {
    DiagnosticCode.UNEXPECTED_CHARACTER: "Unexpected character",
    DiagnosticCode.UNTERMINATED_STRING: "Unterminated string",
    DiagnosticCode.MISSING_SEMICOLON: "Missing semicolon",
    DiagnosticCode.MISSING_IDENTIFIER: "Missing identifier",
    DiagnosticCode.MISSING_INITIALIZER: "Missing initializer",
    DiagnosticCode.EXPECTED_EXPRESSION: "Expected expression",
    DiagnosticCode.MISSING_CLOSING_PARENTHESIS: "Missing closing parenthesis",
    DiagnosticCode.MISSING_CLOSING_BRACE: "Missing closing brace",
    DiagnosticCode.MISSING_CONDITION: "Missing condition",
    DiagnosticCode.EXPECTED_BLOCK: "Expected block",
    DiagnosticCode.INVALID_ASSIGNMENT: "Invalid assignment",
    DiagnosticCode.MULTIPLE_DECLARATIONS: "Multiple declarations",
    DiagnosticCode.UNDEFINED_VARIABLE: "Undefined variable",
    DiagnosticCode.UNUSED_VARIABLE: "Unused variable",
}


@dataclass(frozen=True)
class Diagnostic:
    """
    A single compiler diagnostic.

    `position` is an offset into the source string and `length` is always
    at least one so there is something to underline, even at end of input.
    """
    severity: Severity
    code: DiagnosticCode
    message: str
    position: int
    length: int = 1

    def __post_init__(self):
        if self.length < 1:
            object.__setattr__(self, "length", 1)

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity == Severity.WARNING

    @property
    def title(self) -> str:
        return DIAGNOSTIC_TITLES[self.code]

    def to_dict(self) -> Dict[str, Any]:
        """Wire form consumed by editors and other tools."""
        return {
            "severity": self.severity.value,
            "code": self.code.value,
            "message": self.message,
            "position": self.position,
            "length": self.length,
        }

    def __str__(self) -> str:
        return f"{self.severity.value}[{self.code.value}] at {self.position}: {self.message}"


def error(code: DiagnosticCode, message: str, position: int, length: int = 1) -> Diagnostic:
    """Build an error-severity diagnostic."""
    return Diagnostic(Severity.ERROR, code, message, position, length)


def warning(code: DiagnosticCode, message: str, position: int, length: int = 1) -> Diagnostic:
    """Build a warning-severity diagnostic."""
    return Diagnostic(Severity.WARNING, code, message, position, length)


def partition(diagnostics: Iterable[Diagnostic]) -> Tuple[List[Diagnostic], List[Diagnostic]]:
    """Split diagnostics into (errors, warnings), keeping discovery order."""
    errors: List[Diagnostic] = []
    warnings: List[Diagnostic] = []
    for diagnostic in diagnostics:
        (errors if diagnostic.is_error else warnings).append(diagnostic)
    return errors, warnings


class SourceLine(NamedTuple):
    """Where a diagnostic lands: 1-based line and column plus the line text."""
    line_number: int
    column: int
    text: str


def locate(source: str, position: int, length: int = 1) -> SourceLine:
    """
    Find the line containing `position`.

    The returned text runs from the start of that line to the first newline
    after the end of the span, so spans touching end of input still render.
    """
    line_number = 1
    line_start = 0
    for index in range(min(position, len(source))):
        if source[index] == "\n":
            line_number += 1
            line_start = index + 1

    line_end = min(position + length, len(source))
    while line_end < len(source) and source[line_end] != "\n":
        line_end += 1

    return SourceLine(line_number, position - line_start + 1, source[line_start:line_end])


class RenderedDiagnostic(NamedTuple):
    """Pieces of a rendered diagnostic, kept apart so callers can style them."""
    header: str
    location: str
    gutter: str
    before: str
    highlighted: str
    after: str
    underline: str


def split_diagnostic(diagnostic: Diagnostic, source: str, filename: str) -> RenderedDiagnostic:
    """Break a diagnostic into styled-independent text fragments."""
    where = locate(source, diagnostic.position, diagnostic.length)
    pad = " " * len(str(where.line_number))
    start = where.column - 1
    end = start + diagnostic.length

    return RenderedDiagnostic(
        header=f"{diagnostic.severity.value.capitalize()}: {diagnostic.title}",
        location=f"{pad}┌─ {filename}:{where.line_number}:{where.column}",
        gutter=f"{where.line_number}| ",
        before=where.text[:start],
        highlighted=where.text[start:end],
        after=where.text[end:],
        underline=f"{pad}| {' ' * start}{'^' * diagnostic.length} {diagnostic.message}",
    )


def format_diagnostic(diagnostic: Diagnostic, source: str, filename: str = "<string>") -> str:
    """
    Render a diagnostic as plain text:

        Error: Missing semicolon
         ┌─ main.st:1:9
         |
        1| let x = 1
         |         ^ Expected ';' after declaration
    """
    parts = split_diagnostic(diagnostic, source, filename)
    pad = " " * (len(parts.gutter) - 2)
    return "\n".join([
        parts.header,
        parts.location,
        f"{pad}| ",
        f"{parts.gutter}{parts.before}{parts.highlighted}{parts.after}",
        parts.underline,
    ])
