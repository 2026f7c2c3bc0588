"""
Compiler configuration.

A single options object is threaded into the analyzer, the generator and the
pipeline; the CLI maps its flags onto it.
"""

from dataclasses import dataclass


@dataclass
class CompilerOptions:
    """Configuration parameters for a compilation run"""

    # Analysis
    report_nested_unused: bool = False   # Also flag unused bindings in block scopes
    stop_on_warnings: bool = False       # Treat warnings as blocking code generation

    # Code generation
    indent: str = "    "

    def __post_init__(self):
        if not self.indent or self.indent.strip():
            raise ValueError("indent must be a non-empty run of whitespace")
