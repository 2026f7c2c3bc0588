"""
stunt Semantic Analyzer Package

Implements scope-based semantic analysis:
- Nested lexical scopes with shadowing across blocks
- Redeclaration, undefined-name and const-assignment checks
- Unused binding warnings
"""

from .semantic_analyzer import SemanticAnalyzer, AnalysisResult, analyze
from .environment import Environment, Scope, Variable

__all__ = [
    # Main analyzer
    "SemanticAnalyzer", "AnalysisResult", "analyze",

    # Scope management
    "Environment", "Scope", "Variable",
]
