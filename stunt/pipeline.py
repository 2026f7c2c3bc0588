"""
Full compilation pipeline for stunt: scan, parse, analyze, generate.

Scan and parse errors stop the pipeline at that stage, since later stages
need a complete tree. Analyzer errors only block code generation.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .config import CompilerOptions
from .diagnostics import Diagnostic, partition
from .lexer import Token, scan
from .parser import Program, parse
from .analyzer import SemanticAnalyzer
from .codegen import CodeGenerator

logger = logging.getLogger(__name__)


class CompilationStage(Enum):
    """Pipeline stages, in the order they run."""
    SCAN = "scan"
    PARSE = "parse"
    ANALYZE = "analyze"
    GENERATE = "generate"


@dataclass
class CompilationResult:
    """Everything produced by one run of the pipeline."""
    source: str
    filename: str = "<string>"
    tokens: List[Token] = field(default_factory=list)
    program: Optional[Program] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)
    output: Optional[str] = None
    stage: CompilationStage = CompilationStage.SCAN  # Last stage that ran

    @property
    def errors(self) -> List[Diagnostic]:
        return partition(self.diagnostics)[0]

    @property
    def warnings(self) -> List[Diagnostic]:
        return partition(self.diagnostics)[1]

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def succeeded(self) -> bool:
        """True when output text was generated."""
        return self.output is not None


def compile_source(
    source: str,
    options: Optional[CompilerOptions] = None,
    filename: str = "<string>",
) -> CompilationResult:
    """
    Run every stage over a source string.

    Args:
        source: Source code string
        options: Compiler configuration; defaults are used when omitted
        filename: Name used when rendering diagnostics

    Returns:
        CompilationResult; `output` is None unless generation ran
    """
    options = options or CompilerOptions()
    result = CompilationResult(source, filename)

    result.tokens, scan_diagnostics = scan(source)
    result.diagnostics.extend(scan_diagnostics)
    if result.has_errors():
        logger.debug("%s: stopped after scanning", filename)
        return result

    result.stage = CompilationStage.PARSE
    result.program, parse_diagnostics = parse(result.tokens)
    result.diagnostics.extend(parse_diagnostics)
    if result.has_errors():
        logger.debug("%s: stopped after parsing", filename)
        return result

    result.stage = CompilationStage.ANALYZE
    analysis = SemanticAnalyzer(options).analyze(result.program)
    result.diagnostics.extend(analysis.diagnostics)
    if analysis.has_errors() or (options.stop_on_warnings and analysis.has_warnings()):
        logger.debug("%s: code generation blocked by analysis", filename)
        return result

    result.stage = CompilationStage.GENERATE
    result.output = CodeGenerator(options).generate(result.program)
    logger.debug("%s: compiled with %d warnings", filename, len(result.warnings))
    return result


def compile_file(filepath: str, options: Optional[CompilerOptions] = None) -> CompilationResult:
    """
    Read and compile a source file.

    Raises:
        OSError: If the file cannot be read
    """
    with open(filepath, "r", encoding="utf-8") as f:
        source = f.read()
    return compile_source(source, options, filepath)
