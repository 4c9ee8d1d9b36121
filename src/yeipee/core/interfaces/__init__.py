from .classifier import FragmentClassifierProtocol
from .loader import LibraryLoaderProtocol
from .render import RendererProtocol
from .scripting import ScopeHandleProtocol, ScriptEvaluatorProtocol

__all__ = [
    'FragmentClassifierProtocol',
    'LibraryLoaderProtocol',
    'RendererProtocol',
    'ScopeHandleProtocol',
    'ScriptEvaluatorProtocol',
]
