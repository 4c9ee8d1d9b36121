from __future__ import annotations

"""
FragmentClassifier – split a YEAST template into typed fragments.

The classifier walks the template looking for `<script` openings:
    * Text between scripts becomes PLAIN fragments (empty ones are dropped).
    * Each script, from `<script` to the first following `</script>`, becomes
      one fragment typed by, in priority order: model marker, declare marker,
      then body inspection (CDATA guards, macro-output call site, engine
      guard, plain script).
    * Self-closing `<script .../>` tags are a fragment of their own with
      nothing to execute.

Known limitations kept on purpose (templates depend on this matching order):
nested scripts are not supported, the first `</script>` closes the element,
`<script` is matched case-sensitively, and the first `>` ends the opening tag.
"""

import logging
from typing import List, Optional, Tuple, Union

from yeipee.constants import (
    CDATA_END,
    CDATA_START,
    CDATA_START_SKIP,
    DECLARE_FRAGMENT_RE,
    MODEL_FRAGMENT_RE,
    SCRIPT_CLOSE,
    SCRIPT_OPEN,
    YST_ABSENT_GUARD,
    YST_CALL_SITE,
    YST_CALL_SKIP,
)
from yeipee.core.interfaces.classifier import FragmentClassifierProtocol
from yeipee.core.models import Fragment, FragmentKind
from yeipee.errors import MalformedTemplate
from yeipee.logging.helpers import get_logger, trace_fragment


def _body_span(element: str) -> Optional[Tuple[int, int]]:
    """Return the (start, end) offsets of the body of a script element.

    `element` must start with `<script`. Self-closing elements have no body
    and yield None.

    Raises:
        MalformedTemplate: no `>` closes the opening tag, or no `</script>`
            follows it.
    """
    if not element.startswith(SCRIPT_OPEN):
        raise MalformedTemplate('expected <script at the beginning of element', 0)
    tag_end = element.find('>')
    if tag_end == -1:
        raise MalformedTemplate("expected '>' as delimiter of opening tag", len(element))
    if element[tag_end - 1] == '/':
        return None
    close = element.find(SCRIPT_CLOSE, tag_end)
    if close == -1:
        raise MalformedTemplate("expected '</script>' closing tag", len(element))
    return tag_end + 1, close


def unwrap_script(element: str) -> str:
    """Strip the `<script ...>` / `</script>` envelope and return the body."""
    span = _body_span(element)
    if span is None:
        return ''
    return element[span[0]:span[1]]


class FragmentClassifier(FragmentClassifierProtocol):
    """Default classifier; stateless and safe to share between threads."""

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('parsing.fragments')

    def classify(self, template: Union[str, bytes], encoding: str = 'utf-8') -> Tuple[Fragment, ...]:
        text = self._decode(template, encoding)
        fragments: List[Fragment] = []

        pos = 0
        start = text.find(SCRIPT_OPEN)
        while start != -1:
            if start > pos:
                fragments.append(Fragment(text[pos:start], FragmentKind.PLAIN, None, pos))
            end = self._element_end(text, start)
            fragments.append(self._classify_element(text[start:end], start))
            pos = end
            start = text.find(SCRIPT_OPEN, pos)

        if pos < len(text):
            fragments.append(Fragment(text[pos:], FragmentKind.PLAIN, None, pos))

        for idx, frag in enumerate(fragments):
            trace_fragment(self._log, 'classified fragment', index=idx, kind=frag.kind.value,
                           span=frag.exec_span, offset=frag.offset)
        return tuple(fragments)

    @staticmethod
    def _decode(template: Union[str, bytes], encoding: str) -> str:
        if isinstance(template, str):
            return template
        try:
            return bytes(template).decode(encoding or 'utf-8')
        except (LookupError, UnicodeDecodeError) as exc:
            raise MalformedTemplate(f'cannot decode template as {encoding!r}: {exc}') from exc

    @staticmethod
    def _element_end(text: str, start: int) -> int:
        """Offset right after the script element opened at `start`."""
        tag_end = text.find('>', start)
        if tag_end == -1:
            raise MalformedTemplate("expected '>' as delimiter of opening tag", start)
        if text[tag_end - 1] == '/':
            return tag_end + 1
        close = text.find(SCRIPT_CLOSE, start)
        if close == -1 or close < tag_end:
            raise MalformedTemplate("expected '</script>' closing tag", start)
        return close + len(SCRIPT_CLOSE)

    @staticmethod
    def _classify_element(content: str, offset: int) -> Fragment:
        if MODEL_FRAGMENT_RE.fullmatch(content):
            return Fragment(content, FragmentKind.MODEL, None, offset)

        body = _body_span(content)
        if DECLARE_FRAGMENT_RE.fullmatch(content):
            return Fragment(content, FragmentKind.DECLARE, body, offset)
        if body is None:
            return Fragment(content, FragmentKind.OTHER_EXECUTABLE, None, offset)

        start, end = body
        cdata = content.find(CDATA_START, start, end)
        if cdata != -1:
            cdata_end = content.rfind(CDATA_END, cdata, end)
            if cdata_end >= cdata + CDATA_START_SKIP:
                start, end = cdata + CDATA_START_SKIP, cdata_end

        call = content.find(YST_CALL_SITE, start, end)
        if call != -1:
            return Fragment(content, FragmentKind.YEAST_EXECUTABLE, (call + YST_CALL_SKIP, end), offset)

        if content.find(YST_ABSENT_GUARD, start, end) != -1:
            return Fragment(content, FragmentKind.OTHER_EXECUTABLE, None, offset)

        span = (start, end) if content[start:end].strip() else None
        return Fragment(content, FragmentKind.OTHER_EXECUTABLE, span, offset)
