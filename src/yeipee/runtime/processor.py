from __future__ import annotations

"""
TemplateProcessor – one YEAST template, classified and set up once.

Construction runs the expensive, per-template part of the pipeline:

    template text ──► FragmentClassifier ──► fragments (tuple)
                                   └──────► SharedScopeBuilder ──► shared scope

After construction both are read-only, so `render` can be called any
number of times, from any number of threads, each call walking the same
fragments against its own instance scope.
"""

import logging
from typing import Any, Optional, Tuple, Union

from yeipee.core.interfaces.classifier import FragmentClassifierProtocol
from yeipee.core.interfaces.loader import LibraryLoaderProtocol
from yeipee.core.interfaces.render import RendererProtocol
from yeipee.core.interfaces.scripting import ScopeHandleProtocol, ScriptEvaluatorProtocol
from yeipee.core.models import ClientStatus, Fragment
from yeipee.io.library_loader import LibraryLoader
from yeipee.logging.helpers import get_logger
from yeipee.parsing.fragments import FragmentClassifier
from yeipee.rendering.model_section import ModelSection
from yeipee.rendering.renderer import FragmentRenderer
from yeipee.runtime.scope_builder import SharedScopeBuilder


class TemplateProcessor:
    """Render a template many times against different models.

    Args:
        template: Template text, or bytes decoded with `encoding`.
        encoding: Encoding used when `template` is bytes.
        template_id: Identifier used in log messages.
        evaluator: Script Evaluation Port implementation.
        loader: Library loader (defaults to the packaged LibraryLoader).
        classifier: Fragment classifier (defaults to FragmentClassifier).
        renderer: Renderer (defaults to FragmentRenderer over `evaluator`).
        logger: Optional logger (defaults to 'yeipee.processor').

    Raises:
        MalformedTemplate: the template cannot be fragmented.
        EngineInitError: the shared scope cannot be built.
    """

    def __init__(
        self,
        template: Union[str, bytes],
        *,
        encoding: str = 'utf-8',
        template_id: str = '',
        evaluator: ScriptEvaluatorProtocol,
        loader: Optional[LibraryLoaderProtocol] = None,
        classifier: Optional[FragmentClassifierProtocol] = None,
        renderer: Optional[RendererProtocol] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._log = logger or get_logger('processor')
        self._evaluator = evaluator
        self._template_id = template_id
        self._renderer = renderer or FragmentRenderer(evaluator=evaluator)

        classifier = classifier or FragmentClassifier()
        self._fragments: Tuple[Fragment, ...] = tuple(classifier.classify(template, encoding))

        builder = SharedScopeBuilder(evaluator=evaluator, loader=loader or LibraryLoader())
        self._shared_scope = builder.build(self._fragments, template_id=template_id)
        self._closed = False

        self._log.info('✔ template %s ready (%d fragment(s))', template_id or '<anonymous>', len(self._fragments))

    @property
    def template_id(self) -> str:
        return self._template_id

    @property
    def fragments(self) -> Tuple[Fragment, ...]:
        return self._fragments

    @property
    def shared_scope(self) -> ScopeHandleProtocol:
        return self._shared_scope

    def read_shared(self, name: str) -> Any:
        """Value of a binding of the shared scope (None when unbound)."""
        return self._evaluator.read_binding(self._shared_scope, name)

    def render(self, model_text: str, status: Optional[ClientStatus] = None) -> str:
        """Produce the final document for `model_text`.

        A given `status` first adds its client-side switches to the model
        (see ModelSection.with_status). When it says the client processes
        the template, nothing is evaluated: the model section is
        substituted and every other fragment is copied verbatim.

        Raises:
            YeastRenderError: the model envelope cannot be unwrapped or no
                instance scope can be created.
        """
        if status is not None:
            model_text = self._with_status(model_text, status)
        if status is not None and not status.must_process_on_server:
            self._log.debug('[%s] deferred to client (%s)', self._template_id, status.name)
            return self._renderer.substitute(self._fragments, model_text)
        return self._renderer.render(
            self._fragments, self._shared_scope, model_text, template_id=self._template_id
        )

    @staticmethod
    def _with_status(model_text: str, status: ClientStatus) -> str:
        model = FragmentRenderer.unwrap_model(model_text or '')
        return ModelSection(model).with_status(status).data

    def close(self) -> None:
        """Release the shared scope. Further renders fail with YeastRenderError."""
        if self._closed:
            return
        self._closed = True
        self._evaluator.release_scope(self._shared_scope)
        self._log.debug('[%s] shared scope released', self._template_id)

    def __enter__(self) -> 'TemplateProcessor':
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __del__(self) -> None:
        if getattr(self, '_closed', True):
            return
        try:
            self.close()
        except Exception:  # noqa: BLE001
            pass
