from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class FragmentKind(str, Enum):
    PLAIN = 'plain'
    MODEL = 'model'
    DECLARE = 'declare'
    YEAST_EXECUTABLE = 'yeast'
    OTHER_EXECUTABLE = 'other'


@dataclass(frozen=True)
class Fragment:
    """Typed, immutable slice of a template.

    `exec_span` holds (start, end) offsets into `content` delimiting the text
    handed to the evaluator; it is None when nothing must be executed.
    """
    content: str
    kind: FragmentKind = FragmentKind.PLAIN
    exec_span: Optional[Tuple[int, int]] = None
    offset: int = 0

    @property
    def is_executable(self) -> bool:
        return self.exec_span is not None

    @property
    def executable_source(self) -> str:
        if self.exec_span is None:
            return ''
        start, end = self.exec_span
        return self.content[start:end]


class ClientStatus(int, Enum):
    """Where a template must be processed for the current request."""
    PROCESS_AND_SEND_ON = 1
    PROCESS_AND_SEND_OFF = 2
    DEFER_AND_SEND_OFF = -1
    DISABLED_ON_CLIENT = -2

    @property
    def must_process_on_server(self) -> bool:
        return self.value > 0
