"""
Lexical scopes for the Sprig interpreter.

Environments form a chain via the ``parent`` field. Each function call gets
a fresh child of the function's declaration environment, so free variables
resolve where the function was written, not where it is called.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from .values import RuntimeValue, bool_val, null_val
from .builtins import NativeRegistry, Output
from ..errors import (
    error_duplicate_binding,
    error_unbound_name,
    error_constant_violation,
)
from ..tokens import SourceSpan


@dataclass(eq=False)
class Environment:
    """
    A single scope containing variable bindings.

    Names are unique within one scope; a child scope may shadow a parent.
    """
    parent: Optional["Environment"] = None
    name: str = "anonymous"  # For debugging
    variables: Dict[str, RuntimeValue] = field(default_factory=dict)
    constants: Set[str] = field(default_factory=set)

    def declare(self, name: str, value: RuntimeValue, constant: bool = False,
                span: Optional[SourceSpan] = None) -> RuntimeValue:
        """Bind a new name in this scope."""
        if name in self.variables:
            raise error_duplicate_binding(name, span)
        self.variables[name] = value
        if constant:
            self.constants.add(name)
        return value

    def assign(self, name: str, value: RuntimeValue,
               span: Optional[SourceSpan] = None) -> RuntimeValue:
        """
        Update an existing binding.

        The value is stored in the scope that defines ``name``, which may be
        an ancestor of this one.
        """
        env = self.resolve(name, span)
        if name in env.constants:
            raise error_constant_violation(name, span)
        env.variables[name] = value
        return value

    def lookup(self, name: str, span: Optional[SourceSpan] = None) -> RuntimeValue:
        """Look up a variable in this scope or parent scopes."""
        return self.resolve(name, span).variables[name]

    def resolve(self, name: str, span: Optional[SourceSpan] = None) -> "Environment":
        """Find the nearest scope that defines ``name``."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.variables:
                return env
            env = env.parent
        raise error_unbound_name(name, span)

    def child(self, name: str = "block") -> "Environment":
        """Create a nested scope whose parent is this one."""
        return Environment(parent=self, name=name)

    @property
    def depth(self) -> int:
        """Number of ancestors above this scope."""
        count = 0
        env = self.parent
        while env is not None:
            count += 1
            env = env.parent
        return count

    def __repr__(self) -> str:
        return f"Environment({self.name!r}, {sorted(self.variables)})"


def create_global_env(registry: Optional[NativeRegistry] = None,
                      output: Optional[Output] = None) -> Environment:
    """
    Create the root environment.

    Args:
        registry: Natives to install; defaults to ``print`` and ``time``
        output: Where the default ``print`` writes (ignored with a registry)

    Returns:
        A fresh environment holding ``true``, ``false``, ``null`` and the
        registered natives, all as constants
    """
    if registry is None:
        registry = NativeRegistry.with_defaults(output)

    env = Environment(name="global")
    env.declare("true", bool_val(True), constant=True)
    env.declare("false", bool_val(False), constant=True)
    env.declare("null", null_val(), constant=True)
    for name, fn in registry.items():
        env.declare(name, fn, constant=True)
    return env
