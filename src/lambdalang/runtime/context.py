"""
Lexical environment for the lambdalang runtime.

An environment exposes two namespaces: variables (name -> Value) and
operators (name -> operator definition). Scopes chain through `parent`
so inner bindings shadow outer ones. The evaluator owns and mutates the
environment; the value core only reads it.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

from .values import Value


class EnvironmentLike(Protocol):
    """The lookups the resolver needs from an environment."""

    def lookup_variable(self, name: str) -> Optional[Value]:
        ...

    def lookup_operator(self, name: str) -> Optional[Any]:
        ...


@dataclass
class Scope:
    """
    A single scope holding variable and operator bindings.

    Scopes form a chain via the `parent` field for lexical scoping.
    """
    variables: Dict[str, Value] = field(default_factory=dict)
    operators: Dict[str, Any] = field(default_factory=dict)
    parent: Optional["Scope"] = None
    name: str = "anonymous"  # For debugging

    def get_variable(self, name: str) -> Optional[Value]:
        """Look up a variable in this scope or parent scopes."""
        if name in self.variables:
            return self.variables[name]
        if self.parent:
            return self.parent.get_variable(name)
        return None

    def get_operator(self, name: str) -> Optional[Any]:
        """Look up an operator in this scope or parent scopes."""
        if name in self.operators:
            return self.operators[name]
        if self.parent:
            return self.parent.get_operator(name)
        return None

    def update(self, name: str, value: Value) -> bool:
        """
        Update an existing variable (mutable assignment).

        Searches up the scope chain to find where the variable is defined.
        Returns True if found and updated, False if not found.
        """
        if name in self.variables:
            self.variables[name] = value
            return True
        if self.parent:
            return self.parent.update(name, value)
        return False


@dataclass
class Environment:
    """Reference environment used by the CLI and the tests."""
    current_scope: Scope = field(default_factory=lambda: Scope(name="global"))

    def lookup_variable(self, name: str) -> Optional[Value]:
        return self.current_scope.get_variable(name)

    def lookup_operator(self, name: str) -> Optional[Any]:
        return self.current_scope.get_operator(name)

    def bind(self, name: str, value: Value) -> None:
        """Define a variable in the current scope (shadowing outer ones)."""
        self.current_scope.variables[name] = value

    def rebind(self, name: str, value: Value) -> bool:
        """Assign to an existing variable wherever it is defined."""
        return self.current_scope.update(name, value)

    def define_operator(self, name: str, definition: Any = True) -> None:
        """Define an operator in the current scope."""
        self.current_scope.operators[name] = definition

    def has_variable(self, name: str) -> bool:
        return self.lookup_variable(name) is not None

    def has_operator(self, name: str) -> bool:
        return self.lookup_operator(name) is not None

    @contextmanager
    def new_scope(self, name: str = "block"):
        """
        Context manager to create a new nested scope.

        Usage:
            with env.new_scope("let"):
                env.bind("x", int_val(1))
        """
        old_scope = self.current_scope
        self.current_scope = Scope(parent=old_scope, name=name)
        try:
            yield self.current_scope
        finally:
            self.current_scope = old_scope
