from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from yeipee.runtime.status import is_true

DEFAULT_EVAL_TIMEOUT: float = 5.0


@dataclass(frozen=True)
class YeipeeConfig:
    """Process-wide settings.

    Attributes:
        library_path: Filesystem directory searched for library scripts
            after the packaged resources.
        eval_timeout: Seconds allowed per evaluation (None disables).
        may_process_on_server: False forces every render to the client.
        json_logs: Emit JSON log lines.
    """
    library_path: Optional[str] = None
    eval_timeout: Optional[float] = DEFAULT_EVAL_TIMEOUT
    may_process_on_server: bool = True
    json_logs: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'YeipeeConfig':
        """Read YEIPEE_* variables.

        Raises:
            ValueError: YEIPEE_EVAL_TIMEOUT is not a non-negative number.
        """
        env = os.environ if environ is None else environ

        timeout: Optional[float] = DEFAULT_EVAL_TIMEOUT
        raw_timeout = (env.get('YEIPEE_EVAL_TIMEOUT') or '').strip()
        if raw_timeout:
            timeout = float(raw_timeout)
            if timeout < 0:
                raise ValueError(f'YEIPEE_EVAL_TIMEOUT must be >= 0, got {raw_timeout!r}')
            timeout = timeout or None

        raw_server = env.get('YEIPEE_MAY_PROCESS_ON_SERVER')
        return cls(
            library_path=(env.get('YEIPEE_LIBRARY_PATH') or None),
            eval_timeout=timeout,
            may_process_on_server=True if raw_server is None or not raw_server.strip() else is_true(raw_server),
            json_logs=env.get('YEIPEE_JSON_LOGS') == '1',
        )
