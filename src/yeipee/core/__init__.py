from __future__ import annotations

"""Public surface for yeipee.core: data model and port protocols.

    from yeipee.core import Fragment, FragmentKind, ScriptEvaluatorProtocol
"""

from yeipee.core.models import ClientStatus, Fragment, FragmentKind
from yeipee.core.interfaces import (
    FragmentClassifierProtocol,
    LibraryLoaderProtocol,
    RendererProtocol,
    ScopeHandleProtocol,
    ScriptEvaluatorProtocol,
)

__all__ = [
    # Data model
    "ClientStatus",
    "Fragment",
    "FragmentKind",
    # Protocols
    "FragmentClassifierProtocol",
    "LibraryLoaderProtocol",
    "RendererProtocol",
    "ScopeHandleProtocol",
    "ScriptEvaluatorProtocol",
]
