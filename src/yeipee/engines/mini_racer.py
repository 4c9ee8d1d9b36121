from __future__ import annotations

"""
MiniRacerEvaluator – ScriptEvaluatorProtocol implementation backed by V8.

Each root scope owns one `py_mini_racer.MiniRacer` context. A small
bootstrap script (`resources/scope_harness.js`) turns the context's global
object into the shared scope and keeps instance scopes as binding tables
that are swapped in around each evaluation. Consequences:

  • Shared library functions see the bindings of the render that calls
    them (the YST runtime evaluates template expressions with `eval`).
  • Top-level writes made while evaluating in an instance scope never
    survive in the shared scope; only in-place mutation of shared objects
    does.
  • Evaluations against one context are serialized with a lock.
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from importlib import resources
from typing import Any, Dict, Optional

from py_mini_racer import JSEvalException, JSOOMException, JSTimeoutException, MiniRacer

from yeipee.core.interfaces.scripting import ScopeHandleProtocol, ScriptEvaluatorProtocol
from yeipee.errors import ScriptEvaluationError
from yeipee.logging.helpers import get_logger

_HARNESS_FILE = 'scope_harness.js'
_HARNESS_NAME = '__yeipee'


@dataclass(eq=False)
class _EngineContext:
    racer: MiniRacer
    lock: threading.RLock = field(default_factory=threading.RLock)
    sealed: bool = False
    closed: bool = False


@dataclass(frozen=True, eq=False)
class MiniRacerScope:
    """Opaque scope handle; `scope_id` is None for the shared (root) scope."""
    context: _EngineContext = field(repr=False)
    scope_id: Optional[str] = None
    parent: Optional['MiniRacerScope'] = None

    @property
    def is_root(self) -> bool:
        return self.scope_id is None


def _load_harness() -> str:
    return (resources.files('yeipee') / 'resources' / _HARNESS_FILE).read_text(encoding='utf-8')


class MiniRacerEvaluator(ScriptEvaluatorProtocol):
    """Evaluate YEAST/JavaScript sources in V8 contexts.

    Args:
        timeout: Wall-clock limit in seconds for a single evaluation
            (None or 0 disables the limit).
        max_memory: Optional V8 heap limit in bytes per evaluation.
        logger: Optional logger (defaults to 'yeipee.engines.v8').
    """

    def __init__(
        self,
        *,
        timeout: Optional[float] = 5.0,
        max_memory: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._timeout = timeout or None
        self._max_memory = max_memory
        self._log = logger or get_logger('engines.v8')
        self._harness: Optional[str] = None

    # ------------------------------------------------------------------ #
    # ScriptEvaluatorProtocol
    # ------------------------------------------------------------------ #
    def create_scope(self, parent: Optional[ScopeHandleProtocol] = None) -> MiniRacerScope:
        if parent is None:
            return self._create_root()
        root = self._root_of(parent)
        scope_id = self._call(root.context, f'{_HARNESS_NAME}.create()', 'createScope')
        return MiniRacerScope(root.context, str(scope_id), root)

    def evaluate(self, scope: ScopeHandleProtocol, source: str, source_name: str) -> Any:
        handle = self._handle(scope)
        if handle.is_root and handle.context.sealed:
            raise ScriptEvaluationError('shared scope is sealed; evaluate in a child scope', source_name)
        named = f'{source}\n//# sourceURL={source_name}'
        js = f'{_HARNESS_NAME}.evaluate({json.dumps(handle.scope_id)}, {json.dumps(named)})'
        return self._call(handle.context, js, source_name)

    def read_binding(self, scope: ScopeHandleProtocol, name: str) -> Any:
        handle = self._handle(scope)
        js = f'{_HARNESS_NAME}.read({json.dumps(handle.scope_id)}, {json.dumps(name)})'
        return self._call(handle.context, js, f'read:{name}')

    def seal(self, scope: ScopeHandleProtocol) -> None:
        handle = self._handle(scope)
        if not handle.is_root:
            raise ScriptEvaluationError('only a shared scope can be sealed', 'seal')
        self._call(handle.context, f'{_HARNESS_NAME}.seal()', 'seal')
        handle.context.sealed = True

    def release_scope(self, scope: ScopeHandleProtocol) -> None:
        handle = self._handle(scope)
        ctx = handle.context
        with ctx.lock:
            if ctx.closed:
                return
            if handle.is_root:
                ctx.closed = True
                ctx.racer.close()
                self._log.debug('V8 context released')
                return
        self._call(ctx, f'{_HARNESS_NAME}.release({json.dumps(handle.scope_id)})', 'releaseScope')

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #
    def _create_root(self) -> MiniRacerScope:
        if self._harness is None:
            self._harness = _load_harness()
        ctx = _EngineContext(MiniRacer())
        try:
            self._call(ctx, self._harness, 'scopeHarness')
        except ScriptEvaluationError:
            ctx.racer.close()
            raise
        return MiniRacerScope(ctx)

    @staticmethod
    def _handle(scope: ScopeHandleProtocol) -> MiniRacerScope:
        if not isinstance(scope, MiniRacerScope):
            raise TypeError(f'scope {scope!r} was not created by MiniRacerEvaluator')
        return scope

    def _root_of(self, scope: ScopeHandleProtocol) -> MiniRacerScope:
        handle = self._handle(scope)
        while handle.parent is not None:
            handle = handle.parent
        return handle

    def _eval_options(self) -> Dict[str, Any]:
        opts: Dict[str, Any] = {}
        if self._timeout:
            opts['timeout_sec'] = self._timeout
        if self._max_memory:
            opts['max_memory'] = self._max_memory
        return opts

    def _call(self, ctx: _EngineContext, js: str, source_name: str) -> Any:
        with ctx.lock:
            if ctx.closed:
                raise ScriptEvaluationError('V8 context already released', source_name)
            try:
                return ctx.racer.eval(js, **self._eval_options())
            except JSTimeoutException as exc:
                self._recover(ctx)
                raise ScriptEvaluationError(
                    f'{source_name}: evaluation exceeded {self._timeout}s', source_name
                ) from exc
            except (JSEvalException, JSOOMException) as exc:
                raise ScriptEvaluationError(f'{source_name}: {exc}', source_name) from exc

    def _recover(self, ctx: _EngineContext) -> None:
        # A terminated script skips the harness' finally blocks.
        try:
            ctx.racer.eval(f'{_HARNESS_NAME}.recover()')
        except (JSEvalException, JSTimeoutException) as exc:
            self._log.warning('⚠  could not restore shared scope after timeout: %s', exc)
