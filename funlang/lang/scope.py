"""Scopes for the Fun interpreter. A scope holds variables and functions in two separate namespaces and a link to its
parent; lookups that miss locally are delegated up the chain. Parents never reference their children, so the scopes of
a running program always form a tree that is discarded block by block as evaluation returns.
"""

import sys

from funlang.lang.builtins import format_line
from funlang.lang.error import DuplicateDeclaration, InternalError, UnboundVariable


class Scope:
    """A single level of bindings. Only the root scope is created directly; every other scope comes from child()."""

    def __init__(self, stream=None, parent=None):
        self.parent = parent
        self.variables = {}  # dict of name: int
        self.functions = {}  # dict of name: FunctionDecl

        if parent is not None:
            self.stream = parent.stream  # all scopes of a program write to the root scope's sink
        else:
            self.stream = stream if stream is not None else sys.stdout

        self._exit_value = None

    @property
    def depth(self):
        """Number of ancestors of this scope (0 for the root)."""
        return 0 if self.parent is None else self.parent.depth + 1

    def child(self):
        return Scope(parent=self)

    def resolve_variable(self, name):
        """Returns the value bound to name in the nearest scope that declares it, or None."""
        scope = self
        while scope is not None:
            if name in scope.variables:
                return scope.variables[name]
            scope = scope.parent
        return None

    def resolve_function(self, name):
        """Returns the FunctionDecl bound to name in the nearest scope that declares it, or None."""
        scope = self
        while scope is not None:
            if name in scope.functions:
                return scope.functions[name]
            scope = scope.parent
        return None

    def declare_variable(self, name, value=0, line=None):
        """Declares name in this scope. Only this scope is checked, so shadowing outer variables is fine."""
        if name in self.variables:
            raise DuplicateDeclaration(name, "variable", line=line)
        self.variables[name] = value

    def declare_function(self, name, function, line=None):
        if name in self.functions:
            raise DuplicateDeclaration(name, "function", line=line)
        self.functions[name] = function

    def assign(self, name, value, line=None):
        """Overwrites name in the nearest scope that declares it."""
        scope = self
        while scope is not None:
            if name in scope.variables:
                scope.variables[name] = value
                return
            scope = scope.parent
        raise UnboundVariable(name, line=line)

    @property
    def exit_value(self):
        """Value this scope's block returned with, or None if it has not returned."""
        return self._exit_value

    def set_exit_value(self, value):
        """Sets the exit value. It may only be set once: a second call means the evaluator kept running a finished
        block.
        """
        if self._exit_value is not None:
            raise InternalError("attempting to reset exit value {} of a completed scope", [self._exit_value])
        if value is None:
            raise InternalError("exit value cannot be empty")
        self._exit_value = value

    def print_line(self, values):
        """Writes values to the program's output sink as a single line."""
        self.stream.write(format_line(values))

    def __repr__(self):
        return f"Scope(depth={self.depth}, variables={self.variables}, functions={list(self.functions)})"
