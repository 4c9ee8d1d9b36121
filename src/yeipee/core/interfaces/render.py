from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from yeipee.core.interfaces.scripting import ScopeHandleProtocol
from yeipee.core.models import Fragment


@runtime_checkable
class RendererProtocol(Protocol):
    """Walk a fragment sequence and produce one rendered document."""

    def render(
        self,
        fragments: Sequence[Fragment],
        shared_scope: ScopeHandleProtocol,
        model_text: str,
        *,
        template_id: str = '',
    ) -> str:
        ...

    def substitute(self, fragments: Sequence[Fragment], model_text: str) -> str:
        """Replace the model section only, evaluating nothing."""
        ...
