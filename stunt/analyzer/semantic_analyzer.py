"""
Semantic analyzer for stunt.

A single pass over the AST that tracks lexical scopes and checks:
- Redeclaration of a name within one scope
- Use or assignment of a name with no visible declaration
- Assignment to a const binding
- Bindings that are never referenced

The scope stack travels down the tree as the walk context, so entering a
block only changes what that block's children see.
"""

import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from ..config import CompilerOptions
from ..diagnostics import Diagnostic, partition
from ..parser.ast_nodes import Program, VarDecl, Assignment, Block, VariableExpr
from ..parser.visitor import Visitor
from .environment import Environment, Scope
from .errors import (
    create_multiple_declarations_error, create_undefined_variable_error,
    create_const_assignment_error, create_unused_variable_warning,
)

logger = logging.getLogger(__name__)


class AnalysisContext(NamedTuple):
    """Walk context: the visible scopes and the shared diagnostic list."""
    env: Environment
    diagnostics: List[Diagnostic]


@dataclass
class AnalysisResult:
    """Results of semantic analysis."""
    diagnostics: List[Diagnostic]

    @property
    def errors(self) -> List[Diagnostic]:
        return partition(self.diagnostics)[0]

    @property
    def warnings(self) -> List[Diagnostic]:
        return partition(self.diagnostics)[1]

    def has_errors(self) -> bool:
        """Check if analysis found any errors."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        """Check if analysis found any warnings."""
        return len(self.warnings) > 0


class SemanticAnalyzer(Visitor):
    """
    Scope checker for stunt programs.

    Diagnostics never interrupt the walk; every problem in the tree is
    reported, in the order it is found.
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def analyze(self, program: Program) -> AnalysisResult:
        """
        Check a program.

        Unused bindings of the root scope are reported last, once every
        statement has had a chance to reference them.
        """
        ctx = AnalysisContext(Environment(), [])
        self.walk(program, ctx)
        self._report_unused(ctx.env.root, ctx.diagnostics)

        result = AnalysisResult(ctx.diagnostics)
        logger.debug(
            "Analysis finished with %d errors and %d warnings",
            len(result.errors), len(result.warnings),
        )
        return result

    # Scopes

    def visit_block(self, node: Block, ctx: AnalysisContext) -> AnalysisContext:
        return ctx._replace(env=ctx.env.push())

    def leave_block(self, node: Block, ctx: AnalysisContext):
        if self.options.report_nested_unused:
            self._report_unused(ctx.env.innermost, ctx.diagnostics)

    # Declarations

    def leave_var_decl(self, node: VarDecl, ctx: AnalysisContext):
        # Bound only after the initializer is checked: `let x = x;` sees the outer x
        if not ctx.env.declare(node):
            existing = ctx.env.innermost.lookup(node.name.lexeme)
            ctx.diagnostics.append(create_multiple_declarations_error(node.name, existing))

    # Uses

    def visit_assignment(self, node: Assignment, ctx: AnalysisContext):
        variable = ctx.env.resolve(node.name.lexeme)
        if variable is None:
            ctx.diagnostics.append(create_undefined_variable_error(node.name))
            return

        variable.add_reference(node.name)
        if variable.is_const:
            ctx.diagnostics.append(create_const_assignment_error(node.name))

    def visit_variable_expr(self, node: VariableExpr, ctx: AnalysisContext):
        variable = ctx.env.resolve(node.name.lexeme)
        if variable is None:
            ctx.diagnostics.append(create_undefined_variable_error(node.name))
            return

        variable.add_reference(node.name)

    def _report_unused(self, scope: Scope, diagnostics: List[Diagnostic]):
        for variable in scope.unused():
            diagnostics.append(create_unused_variable_warning(variable))


def analyze(program: Program, options: Optional[CompilerOptions] = None) -> List[Diagnostic]:
    """Analyze a program and return its diagnostics in discovery order."""
    return SemanticAnalyzer(options).analyze(program).diagnostics
