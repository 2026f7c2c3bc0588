"""
stunt Code Generation Package

Turns a checked stunt AST into JavaScript source text.
"""

from .generator import CodeGenerator, generate, format_number, format_string

__all__ = [
    "CodeGenerator",
    "generate",
    "format_number",
    "format_string",
]
