"""
stunt Compiler Package

Front end for the stunt scripting language: declarations, assignment,
blocks and conditionals over numbers, strings and booleans, compiled to
JavaScript source.

Architecture:
    stunt/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis, AST and tree walking
    ├── analyzer/        # Scope checking
    ├── codegen/         # JavaScript generation
    ├── pipeline.py      # Stage sequencing
    └── cli.py           # `stunt` command
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import CompilerOptions
from .diagnostics import Diagnostic, DiagnosticCode, Severity, format_diagnostic
from .lexer import Lexer, scan
from .parser import Parser, parse
from .analyzer import SemanticAnalyzer, analyze
from .codegen import CodeGenerator, generate
from .pipeline import CompilationResult, compile_source, compile_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "SemanticAnalyzer",
    "CodeGenerator",

    # Stage functions
    "scan", "parse", "analyze", "generate",
    "compile_source", "compile_file", "CompilationResult",

    # Diagnostics and configuration
    "Diagnostic", "DiagnosticCode", "Severity", "format_diagnostic",
    "CompilerOptions",

    # Version info
    "__version__",
    "__license__",
]
