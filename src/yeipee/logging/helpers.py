from __future__ import annotations

"""Logger naming, output setup and fragment tracing for yeipee.

Every logger lives under the `yeipee` namespace. Records emitted while a
template is processed may carry `template`, `fragment` and `kind`
attributes (passed through `extra=`); the JSON formatter lifts them to
top-level keys so log lines can be filtered per template.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version
from typing import Optional, TextIO

ROOT_LOGGER = 'yeipee'
TRACE_ENV = 'YEIPEE_TRACE_FRAGMENTS'
_TEMPLATE_FIELDS = ('template', 'fragment', 'kind')


def _package_version() -> str:
    try:
        return version('yeipee')
    except PackageNotFoundError:
        return 'unknown'


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: ts (UTC, milliseconds), level, logger, msg, version, plus whichever
    of template / fragment / kind the record carries, and exc when the
    record has exception info.
    """

    def __init__(self, package_version: Optional[str] = None) -> None:
        super().__init__()
        self._version = package_version or _package_version()

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload = {
            'ts': ts.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'msg': record.getMessage(),
            'version': self._version,
        }
        for key in _TEMPLATE_FIELDS:
            value = getattr(record, key, None)
            if value is not None and value != '':
                payload[key] = value
        if record.exc_info:
            payload['exc'] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(
    *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Give the `yeipee` logger exactly one stream handler and return it.

    Earlier handlers are replaced, so switching between plain and JSON
    output never duplicates lines.
    """
    base = logging.getLogger(ROOT_LOGGER)
    for handler in list(base.handlers):
        base.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonLogFormatter() if json_logs else logging.Formatter('%(levelname)s: %(message)s'))
    base.addHandler(handler)
    base.setLevel(level)
    base.propagate = False
    return base


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return `yeipee` or `yeipee.<name>`."""
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if name.startswith(ROOT_LOGGER + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER}.{name}')


def fragment_trace_enabled() -> bool:
    return os.getenv(TRACE_ENV) == '1'


def trace_fragment(
    logger: logging.Logger,
    message: str,
    *,
    template: str = '',
    index: Optional[int] = None,
    kind: Optional[str] = None,
    **details: object,
) -> None:
    """DEBUG record about one fragment, emitted only when YEIPEE_TRACE_FRAGMENTS=1."""
    if not fragment_trace_enabled():
        return
    extra = {'template': template, 'fragment': index, 'kind': kind}
    if details:
        logger.debug('%s [%s#%s] %r', message, template, index, details, extra=extra)
    else:
        logger.debug('%s [%s#%s]', message, template, index, extra=extra)
