from __future__ import annotations

from typing import List, Optional

from yeipee.core.models import ClientStatus

_SCRIPT_HEAD = '<script type="text/javascript">\n//<![CDATA[\n'
_SCRIPT_TAIL = '//]]>\n</script>'

_STATUS_LINES = {
    ClientStatus.DISABLED_ON_CLIENT: 'YST.Acsbl.enable = false;',
    ClientStatus.PROCESS_AND_SEND_ON: 'YST.Acsbl.yeipeeParam.value = 1;',
}


class ModelSection:
    """Accumulate the script text that replaces a template's model section.

    Text is appended as-is; `script_data` wraps it in the script/CDATA
    envelope expected by `TemplateProcessor.render`.
    """

    def __init__(self, data: str = '') -> None:
        self._parts: List[str] = [data] if data else []

    def append(self, data: Optional[str]) -> 'ModelSection':
        if data is not None:
            self._parts.append(data)
        return self

    def append_line(self, data: Optional[str]) -> 'ModelSection':
        if data is not None:
            self._parts.append(data + '\n')
        return self

    def extend(self, other: 'ModelSection') -> 'ModelSection':
        """Append the content of `other`, newline-separated when both are non-empty."""
        if not self.is_empty and not other.is_empty:
            self._parts.append('\n')
        self._parts.append(other.data)
        return self

    def with_status(self, status: ClientStatus) -> 'ModelSection':
        """Copy of this section carrying the client-side switches for `status`."""
        section = ModelSection(self.data)
        line = _STATUS_LINES.get(status)
        if line is not None:
            if not section.is_empty and not section.data.endswith('\n'):
                section.append('\n')
            section.append_line('if (YST.Acsbl) {')
            section.append_line(line)
            section.append_line('}')
        return section

    @property
    def data(self) -> str:
        return ''.join(self._parts)

    @property
    def script_data(self) -> str:
        return f'{_SCRIPT_HEAD}{self.data}{_SCRIPT_TAIL}'

    @property
    def is_empty(self) -> bool:
        return not self.data

    def __str__(self) -> str:
        return self.script_data
