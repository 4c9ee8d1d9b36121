from __future__ import annotations

"""Exception hierarchy for yeipee.

All errors raised by the package derive from :class:`YeipeeError`:

    - MalformedTemplate:     the template cannot be split into fragments.
    - EngineInitError:       the shared scope of a processor cannot be built.
    - YeastRenderError:      a single render cannot proceed.
    - ScriptEvaluationError: raised by evaluator ports when a script fails.
    - LibraryNotFoundError:  a library script is missing everywhere.
"""

from typing import Optional


class YeipeeError(Exception):
    """Base class for every yeipee error."""


class MalformedTemplate(YeipeeError, ValueError):
    """The template text violates the script-tag structure.

    Attributes:
        position: Offset in the template where the problem was detected.
    """

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        if position is not None:
            message = f'{message} (at offset {position})'
        super().__init__(message)
        self.position = position


class EngineInitError(YeipeeError):
    """Loading a library or evaluating a setup script failed."""


class YeastRenderError(YeipeeError):
    """A render could not start: bad model envelope or no instance scope."""


class ScriptEvaluationError(YeipeeError):
    """A script raised while being evaluated by an evaluator port.

    Attributes:
        source_name: Name under which the script was evaluated.
    """

    def __init__(self, message: str, source_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.source_name = source_name


class LibraryNotFoundError(YeipeeError, FileNotFoundError):
    """A library script is absent from the package and from the filesystem."""
