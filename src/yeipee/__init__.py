from __future__ import annotations

import logging
from typing import Optional, Union

from yeipee.core.models import ClientStatus, Fragment, FragmentKind
from yeipee.engines.mini_racer import MiniRacerEvaluator
from yeipee.errors import (
    EngineInitError,
    LibraryNotFoundError,
    MalformedTemplate,
    ScriptEvaluationError,
    YeastRenderError,
    YeipeeError,
)
from yeipee.io.library_loader import LibraryLoader
from yeipee.parsing.fragments import FragmentClassifier
from yeipee.rendering.model_section import ModelSection
from yeipee.rendering.renderer import FragmentRenderer
from yeipee.runtime.config import YeipeeConfig
from yeipee.runtime.processor import TemplateProcessor
from yeipee.runtime.registry import ProcessorRegistry
from yeipee.runtime.status import add_status_to_href, detect_status

__version__ = '0.3.0'


def processor_factory(
    *,
    config: Optional[YeipeeConfig] = None,
    logger: Optional[logging.Logger] = None,
):
    """Return a callable building V8-backed TemplateProcessors from `config`.

    The callable has the signature expected by ProcessorRegistry:
    `factory(template, encoding='utf-8', template_id='')`. Every processor
    gets its own evaluator context; the library loader is shared.
    """
    cfg = config or YeipeeConfig.from_env()
    loader = LibraryLoader(cfg.library_path)

    def _build(template: Union[str, bytes], encoding: str = 'utf-8', template_id: str = '') -> TemplateProcessor:
        return TemplateProcessor(
            template,
            encoding=encoding,
            template_id=template_id,
            evaluator=MiniRacerEvaluator(timeout=cfg.eval_timeout),
            loader=loader,
            logger=logger,
        )

    return _build


__all__ = [
    'ClientStatus',
    'EngineInitError',
    'Fragment',
    'FragmentClassifier',
    'FragmentKind',
    'FragmentRenderer',
    'LibraryLoader',
    'LibraryNotFoundError',
    'MalformedTemplate',
    'MiniRacerEvaluator',
    'ModelSection',
    'ProcessorRegistry',
    'ScriptEvaluationError',
    'TemplateProcessor',
    'YeastRenderError',
    'YeipeeConfig',
    'YeipeeError',
    'add_status_to_href',
    'detect_status',
    'processor_factory',
]
