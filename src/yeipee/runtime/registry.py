from __future__ import annotations

"""Cache of template processors, rebuilt when a template changes."""

import logging
import threading
from dataclasses import dataclass
from hashlib import sha1
from typing import Callable, Dict, Optional, Union

from yeipee.logging.helpers import get_logger
from yeipee.runtime.processor import TemplateProcessor

ProcessorFactory = Callable[..., TemplateProcessor]


@dataclass(frozen=True)
class _Entry:
    digest: str
    processor: TemplateProcessor


def _digest(template: Union[str, bytes]) -> str:
    raw = template if isinstance(template, bytes) else template.encode('utf-8', 'surrogatepass')
    return sha1(raw).hexdigest()


class ProcessorRegistry:
    """Map template ids to processors.

    `factory(template, encoding=..., template_id=...)` builds a processor;
    it is called under the registry lock, so two threads never build the
    same template twice.

    Replaced, invalidated and cleared processors are only dropped from the
    registry, never closed: callers may still be rendering with them. Their
    engine state goes away with the last reference.
    """

    def __init__(self, factory: ProcessorFactory, *, logger: Optional[logging.Logger] = None) -> None:
        self._factory = factory
        self._log = logger or get_logger('runtime.registry')
        self._lock = threading.Lock()
        self._entries: Dict[str, _Entry] = {}

    def get(self, template_id: str, template: Union[str, bytes], encoding: str = 'utf-8') -> TemplateProcessor:
        digest = _digest(template)
        with self._lock:
            entry = self._entries.get(template_id)
            if entry is not None and entry.digest == digest:
                return entry.processor

            processor = self._factory(template, encoding=encoding, template_id=template_id)
            self._entries[template_id] = _Entry(digest, processor)
            if entry is not None:
                self._log.info('template %s changed; processor rebuilt', template_id)
            return processor

    def invalidate(self, template_id: str) -> bool:
        with self._lock:
            return self._entries.pop(template_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, template_id: object) -> bool:
        with self._lock:
            return template_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
