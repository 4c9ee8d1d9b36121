from __future__ import annotations

"""Build the shared scope of a template processor.

The shared scope receives, in this fixed order: the standard bindings of a
fresh evaluator root scope, the `sharedEnv` library, the `ystEngine`
library, and the body of every declare fragment in template order. It is
sealed before being handed out.
"""

import logging
from typing import Optional, Sequence

from yeipee.constants import COMMAND_SOURCE_PREFIX, SHARED_ENV_LIBRARY, YST_ENGINE_LIBRARY
from yeipee.core.interfaces.loader import LibraryLoaderProtocol
from yeipee.core.interfaces.scripting import ScopeHandleProtocol, ScriptEvaluatorProtocol
from yeipee.core.models import Fragment, FragmentKind
from yeipee.errors import EngineInitError
from yeipee.logging.helpers import get_logger, trace_fragment

LIBRARY_ORDER = (SHARED_ENV_LIBRARY, YST_ENGINE_LIBRARY)


class SharedScopeBuilder:
    def __init__(
        self,
        *,
        evaluator: ScriptEvaluatorProtocol,
        loader: LibraryLoaderProtocol,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._evaluator = evaluator
        self._loader = loader
        self._log = logger or get_logger('runtime.scope')

    def build(self, fragments: Sequence[Fragment], *, template_id: str = '') -> ScopeHandleProtocol:
        """Return a sealed shared scope for `fragments`.

        Raises:
            EngineInitError: a library is missing or any setup script fails.
                The partially built scope is released first.
        """
        try:
            scope = self._evaluator.create_scope()
        except Exception as exc:  # noqa: BLE001
            raise EngineInitError(f'[{template_id}] cannot create shared scope: {exc}') from exc

        try:
            for name in LIBRARY_ORDER:
                source = self._loader.load(name)
                self._evaluator.evaluate(scope, source, name)
                self._log.debug('[%s] library %s loaded into shared scope', template_id, name)

            declares = [f for f in fragments if f.kind is FragmentKind.DECLARE]
            for idx, frag in enumerate(declares):
                trace_fragment(self._log, 'evaluating declare fragment',
                               template=template_id, index=idx, source=frag.executable_source)
                self._evaluator.evaluate(scope, frag.executable_source, f'{COMMAND_SOURCE_PREFIX}{idx}')

            self._evaluator.seal(scope)
        except Exception as exc:  # noqa: BLE001
            self._discard(scope, template_id)
            raise EngineInitError(f'[{template_id}] shared scope initialization failed: {exc}') from exc

        self._log.debug('[%s] shared scope sealed (%d declare fragment(s))', template_id, len(declares))
        return scope

    def _discard(self, scope: ScopeHandleProtocol, template_id: str) -> None:
        try:
            self._evaluator.release_scope(scope)
        except Exception as exc:  # noqa: BLE001
            self._log.warning('⚠  [%s] could not release partial shared scope: %s', template_id, exc)
