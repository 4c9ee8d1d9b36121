from __future__ import annotations

"""
Renderer component for yeipee.

This module provides:
  • RendererProtocol  – DI-friendly interface (from core.interfaces.render).
  • FragmentRenderer  – one fragment walk per render call.

Notes
-----
• Every render gets its own instance scope, linked to the shared scope and
  released when the walk ends, whatever the outcome.
• Only two failures abort a render (YeastRenderError): an unreadable model
  envelope and an instance scope that cannot be created. Failing fragments
  are reported inline (model, macro output) or ignored (other scripts).
"""

import logging
from typing import Any, List, Optional, Sequence

from yeipee.constants import (
    COMMAND_SOURCE_PREFIX,
    CONTENT_ERROR_MARK,
    MODEL_CARRIER_CLOSE,
    MODEL_CARRIER_OPEN,
    MODEL_ERROR_MARK,
    MODEL_SOURCE_NAME,
    RESULT_BINDING,
    SCRIPT_OPEN,
)
from yeipee.core.interfaces.render import RendererProtocol
from yeipee.core.interfaces.scripting import ScopeHandleProtocol, ScriptEvaluatorProtocol
from yeipee.core.models import Fragment, FragmentKind
from yeipee.errors import YeastRenderError
from yeipee.logging.helpers import get_logger, trace_fragment
from yeipee.parsing.fragments import unwrap_script


def binding_text(value: Any) -> str:
    """Text form of a value read back from the evaluator."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def model_carrier(model: str) -> str:
    return f'{MODEL_CARRIER_OPEN}{model}{MODEL_CARRIER_CLOSE}'


class FragmentRenderer(RendererProtocol):
    """Produce the final document for one model, fragment by fragment."""

    def __init__(
        self,
        *,
        evaluator: ScriptEvaluatorProtocol,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._evaluator = evaluator
        self._log = logger or get_logger('render')

    @staticmethod
    def unwrap_model(model_text: str) -> str:
        """Return the bare model, stripping a leading script envelope if any."""
        if not model_text.startswith(SCRIPT_OPEN):
            return model_text
        try:
            return unwrap_script(model_text)
        except Exception as exc:  # noqa: BLE001
            raise YeastRenderError(f'cannot unwrap model section: {exc}') from exc

    def render(
        self,
        fragments: Sequence[Fragment],
        shared_scope: ScopeHandleProtocol,
        model_text: str,
        *,
        template_id: str = '',
    ) -> str:
        model = self.unwrap_model(model_text or '')
        try:
            scope = self._evaluator.create_scope(shared_scope)
        except Exception as exc:  # noqa: BLE001
            raise YeastRenderError(f'[{template_id}] cannot create instance scope: {exc}') from exc

        out: List[str] = []
        commands = 0
        try:
            for idx, frag in enumerate(fragments):
                trace_fragment(self._log, 'rendering fragment', template=template_id,
                               index=idx, kind=frag.kind.value)
                if frag.kind is FragmentKind.MODEL:
                    out.append(self._render_model(scope, model, template_id))
                elif frag.kind is FragmentKind.YEAST_EXECUTABLE:
                    out.append(self._render_macro(scope, frag, template_id))
                elif frag.kind is FragmentKind.OTHER_EXECUTABLE and frag.is_executable:
                    self._run_quietly(scope, frag, f'{COMMAND_SOURCE_PREFIX}{commands}', template_id)
                    commands += 1
                    out.append(frag.content)
                else:
                    out.append(frag.content)
        finally:
            self._release(scope, template_id)

        return ''.join(out)

    def substitute(self, fragments: Sequence[Fragment], model_text: str) -> str:
        model = self.unwrap_model(model_text or '')
        return ''.join(
            model_carrier(model) if frag.kind is FragmentKind.MODEL else frag.content
            for frag in fragments
        )

    def _render_model(self, scope: ScopeHandleProtocol, model: str, template_id: str) -> str:
        try:
            self._evaluator.evaluate(scope, model, MODEL_SOURCE_NAME)
        except Exception as exc:  # noqa: BLE001
            self._log.warning('⚠  [%s] model section failed to evaluate: %s', template_id, exc)
            return f'{MODEL_ERROR_MARK}{exc}'
        return model_carrier(model)

    def _render_macro(self, scope: ScopeHandleProtocol, frag: Fragment, template_id: str) -> str:
        source = f'var {RESULT_BINDING} = {frag.executable_source}'
        try:
            self._evaluator.evaluate(scope, source, 'ystFragment')
            return binding_text(self._evaluator.read_binding(scope, RESULT_BINDING))
        except Exception as exc:  # noqa: BLE001
            self._log.debug('[%s] macro fragment at offset %d failed: %s', template_id, frag.offset, exc)
            return f'{CONTENT_ERROR_MARK}{exc}'

    def _run_quietly(self, scope: ScopeHandleProtocol, frag: Fragment, name: str, template_id: str) -> None:
        try:
            self._evaluator.evaluate(scope, frag.executable_source, name)
        except Exception as exc:  # noqa: BLE001
            # Scripts touching browser-only objects are expected to fail here.
            self._log.debug('[%s] %s ignored: %s', template_id, name, exc)

    def _release(self, scope: ScopeHandleProtocol, template_id: str) -> None:
        try:
            self._evaluator.release_scope(scope)
        except Exception as exc:  # noqa: BLE001
            self._log.warning('⚠  [%s] could not release instance scope: %s', template_id, exc)
