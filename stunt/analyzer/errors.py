"""
Diagnostics reported by stunt semantic analysis.

Analysis never stops on a problem; each helper builds the diagnostic the
analyzer appends to its list before carrying on.
"""

from ..diagnostics import Diagnostic, DiagnosticCode, error, warning
from ..lexer.tokens import Token
from .environment import Variable


# Helper functions for creating semantic diagnostics

def create_multiple_declarations_error(name: Token, existing: Variable) -> Diagnostic:
    """Create an error for a name already bound in the same scope."""
    return error(
        DiagnosticCode.MULTIPLE_DECLARATIONS,
        f"Variable \"{name.lexeme}\" is already declared in this scope "
        f"(at offset {existing.name_token.position})",
        name.position,
        len(name.lexeme),
    )


def create_undefined_variable_error(name: Token) -> Diagnostic:
    """Create an error for a name with no visible declaration."""
    return error(
        DiagnosticCode.UNDEFINED_VARIABLE,
        f"Variable \"{name.lexeme}\" is not defined",
        name.position,
        len(name.lexeme),
    )


def create_const_assignment_error(name: Token) -> Diagnostic:
    """Create an error for assigning to a const binding."""
    return error(
        DiagnosticCode.INVALID_ASSIGNMENT,
        f"Cannot assign to constant \"{name.lexeme}\"",
        name.position,
        len(name.lexeme),
    )


def create_unused_variable_warning(variable: Variable) -> Diagnostic:
    """Create a warning for a binding that is never referenced."""
    name = variable.name_token
    kind = "Constant" if variable.is_const else "Variable"
    return warning(
        DiagnosticCode.UNUSED_VARIABLE,
        f"{kind} \"{name.lexeme}\" is declared but never used",
        name.position,
        len(name.lexeme),
    )
