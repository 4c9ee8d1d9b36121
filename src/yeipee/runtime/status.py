from __future__ import annotations

"""Client processing status helpers.

The status tells whether a template must be processed on the server or
left to the browser. It is decided per request from the `yst.yeipee`
parameter or cookie and passed explicitly to `TemplateProcessor.render`.
"""

from typing import Optional

from yeipee.constants import STATUS_PARAM
from yeipee.core.models import ClientStatus

_TRUE_WORDS = frozenset({'yes', 'true', 'on', '1'})


def is_true(value: Optional[str]) -> bool:
    return (value or '').strip().lower() in _TRUE_WORDS


def detect_status(
    param: Optional[str] = None,
    cookie: Optional[str] = None,
    *,
    may_process_on_server: bool = True,
) -> ClientStatus:
    """Resolve the status for one request.

    The request parameter wins over the cookie; with neither, the server
    processes the template and tells the client nothing.
    """
    if not may_process_on_server:
        return ClientStatus.DISABLED_ON_CLIENT
    value = param if param else cookie
    if not value:
        return ClientStatus.PROCESS_AND_SEND_OFF
    return ClientStatus.PROCESS_AND_SEND_ON if is_true(value) else ClientStatus.DEFER_AND_SEND_OFF


def add_status_to_href(href: str, status: ClientStatus) -> str:
    """Propagate the status to a link so the next request keeps it."""
    if status is ClientStatus.DISABLED_ON_CLIENT:
        return href
    value = 1 if status is ClientStatus.PROCESS_AND_SEND_ON else 0
    if '?' in href:
        query = href.split('?', 1)[1]
        if STATUS_PARAM in query:
            return href
        return f'{href}&{STATUS_PARAM}={value}'
    return f'{href}?{STATUS_PARAM}={value}'
