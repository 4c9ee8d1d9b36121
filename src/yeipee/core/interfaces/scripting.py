from __future__ import annotations

"""
Protocol for the script evaluation engine consumed by the processor.

Scopes are opaque handles owned by the evaluator. A scope created with a
parent falls back to the parent on lookup while keeping every write local;
a scope created without one is a root (shared) scope.
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class ScopeHandleProtocol(Protocol):
    @property
    def parent(self) -> Optional['ScopeHandleProtocol']:
        ...


@runtime_checkable
class ScriptEvaluatorProtocol(Protocol):
    """Evaluate scripts inside (possibly linked) scopes.

    Implementations raise :class:`yeipee.errors.ScriptEvaluationError` when a
    script fails and must bound the run time of a single evaluation.
    """

    def create_scope(self, parent: Optional[ScopeHandleProtocol] = None) -> ScopeHandleProtocol:
        """Create a root scope, or a child scope delegating reads to `parent`."""
        ...

    def evaluate(self, scope: ScopeHandleProtocol, source: str, source_name: str) -> Any:
        """Evaluate `source` in `scope` and return the completion value."""
        ...

    def read_binding(self, scope: ScopeHandleProtocol, name: str) -> Any:
        """Return the value bound to `name`, looking through parent scopes."""
        ...

    def seal(self, scope: ScopeHandleProtocol) -> None:
        """Freeze the bindings of a root scope before it is shared."""
        ...

    def release_scope(self, scope: ScopeHandleProtocol) -> None:
        """Dispose `scope`; releasing a root scope releases the whole engine state."""
        ...
