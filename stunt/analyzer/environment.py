"""
Scope management for stunt semantic analysis.

An Environment is an immutable stack of scopes, innermost first. Entering a
block pushes a fresh scope, which yields a new Environment and leaves the
enclosing one untouched; leaving the block simply drops back to the outer
value. The root scope exists for the whole analysis and is never popped.

Scopes themselves are mutable name tables: declarations and references are
recorded into them as the analyzer walks the tree.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from ..lexer.tokens import Token
from ..parser.ast_nodes import VarDecl


@dataclass
class Variable:
    """A declared binding and every place it is used."""
    is_const: bool
    declaration: VarDecl
    references: List[Token] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    @property
    def name_token(self) -> Token:
        return self.declaration.name

    @property
    def is_used(self) -> bool:
        return bool(self.references)

    def add_reference(self, token: Token):
        self.references.append(token)


class Scope:
    """One lexical region mapping each name to at most one Variable."""

    def __init__(self):
        self.variables: Dict[str, Variable] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def __iter__(self) -> Iterator[Variable]:
        return iter(self.variables.values())

    def __len__(self) -> int:
        return len(self.variables)

    def lookup(self, name: str) -> Optional[Variable]:
        return self.variables.get(name)

    def add(self, variable: Variable):
        self.variables[variable.name] = variable

    def unused(self) -> List[Variable]:
        """Variables never referenced, in declaration order."""
        return [variable for variable in self if not variable.is_used]


@dataclass(frozen=True)
class Environment:
    """Ordered stack of scopes; `scopes[0]` is the innermost."""
    scopes: Tuple[Scope, ...] = field(default_factory=lambda: (Scope(),))

    @property
    def innermost(self) -> Scope:
        return self.scopes[0]

    @property
    def root(self) -> Scope:
        return self.scopes[-1]

    @property
    def depth(self) -> int:
        return len(self.scopes)

    def push(self) -> "Environment":
        """Return an environment with a new empty scope on top."""
        return Environment((Scope(),) + self.scopes)

    def pop(self) -> "Environment":
        """Return the enclosing environment."""
        if len(self.scopes) == 1:
            raise ValueError("cannot pop the root scope")
        return Environment(self.scopes[1:])

    def declare(self, declaration: VarDecl) -> bool:
        """
        Bind a declaration in the innermost scope.

        Returns:
            False if the name is already bound in that same scope, in which
            case the existing binding is kept
        """
        scope = self.innermost
        if declaration.name.lexeme in scope:
            return False
        scope.add(Variable(declaration.is_const, declaration))
        return True

    def resolve(self, name: str) -> Optional[Variable]:
        """Find the nearest binding of `name`, searching innermost to outermost."""
        for scope in self.scopes:
            variable = scope.lookup(name)
            if variable is not None:
                return variable
        return None
