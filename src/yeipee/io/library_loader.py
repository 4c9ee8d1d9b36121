from __future__ import annotations

"""Resolve the library scripts loaded into every shared scope.

Two logical names are known (see `yeipee.constants.LIBRARY_FILES`):
`sharedEnv` (host shims) and `ystEngine` (the YST macro runtime). Lookup
order is the packaged `yeipee/resources` directory first, then a filesystem
directory (the configured search path or the working directory).
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from yeipee.constants import LIBRARY_FILES
from yeipee.core.interfaces.loader import LibraryLoaderProtocol
from yeipee.errors import LibraryNotFoundError
from yeipee.logging.helpers import get_logger


class LibraryLoader(LibraryLoaderProtocol):
    def __init__(
        self,
        search_path: Optional[Union[str, Path]] = None,
        *,
        files: Optional[Mapping[str, str]] = None,
        package: str = 'yeipee',
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._log = logger or get_logger('io.libraries')
        self._search_path = Path(search_path) if search_path else None
        self._files: Dict[str, str] = dict(files or LIBRARY_FILES)
        self._package = package
        self._cache: Dict[str, str] = {}

    def load(self, logical_name: str) -> str:
        cached = self._cache.get(logical_name)
        if cached is not None:
            return cached

        file_name = self._files.get(logical_name, logical_name)
        text = self._from_package(file_name)
        if text is None:
            text = self._from_filesystem(file_name)
        if text is None:
            raise LibraryNotFoundError(f"library '{logical_name}' ({file_name}) not found")

        self._cache[logical_name] = text
        return text

    def _from_package(self, file_name: str) -> Optional[str]:
        try:
            res = resources.files(self._package) / 'resources' / file_name
            if not res.is_file():
                return None
            text = res.read_text(encoding='utf-8')
        except (ModuleNotFoundError, FileNotFoundError):
            return None
        self._log.debug('library %s loaded from package %s', file_name, self._package)
        return text

    def _from_filesystem(self, file_name: str) -> Optional[str]:
        base = self._search_path or Path.cwd()
        path = base / file_name
        if not path.is_file():
            return None
        self._log.debug('library %s loaded from %s', file_name, path)
        return path.read_text(encoding='utf-8')
