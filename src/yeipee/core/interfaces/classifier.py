from __future__ import annotations
from typing import Protocol, Tuple, Union, runtime_checkable

from yeipee.core.models import Fragment


@runtime_checkable
class FragmentClassifierProtocol(Protocol):
    """Split a raw template into ordered, typed fragments."""

    def classify(self, template: Union[str, bytes], encoding: str = 'utf-8') -> Tuple[Fragment, ...]:
        """Return the fragments of `template` or raise MalformedTemplate."""
        ...
