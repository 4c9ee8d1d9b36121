from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class LibraryLoaderProtocol(Protocol):
    """Resolve library scripts by logical name."""

    def load(self, logical_name: str) -> str:
        """Return the library text or raise LibraryNotFoundError."""
        ...
