"""Executable locator: PATH/PATHEXT lookup with the rules CreateProcess callers use."""

from __future__ import annotations

import logging
import ntpath
import os
import threading
from typing import Callable

from runscope.config import ScanConfig
from runscope.errors import ResolutionError

logger = logging.getLogger(__name__)

_SEPARATORS = ("\\", "/")


def has_ext(name: str) -> bool:
    """True if the last '.' comes after the last path separator."""
    dot = name.rfind(".")
    if dot < 0:
        return False
    return dot > max(name.rfind(sep) for sep in _SEPARATORS)


def is_pathlike(name: str) -> bool:
    return ":" in name or any(sep in name for sep in _SEPARATORS)


class Locator:
    """Find a real file for a command token.

    One instance per scan: results (including misses) are memoized by the
    exact candidate string. ``is_file`` can be swapped for a fixture.
    """

    def __init__(
        self,
        config: ScanConfig,
        is_file: Callable[[str], bool] = os.path.isfile,
    ) -> None:
        self.config = config
        self._is_file = is_file
        self._cache: dict[str, str | None] = {}
        self._lock = threading.Lock()

    def locate(self, candidate: str) -> str:
        """Return the resolved path for candidate. Raises ResolutionError."""
        with self._lock:
            cached = candidate in self._cache
            found = self._cache.get(candidate)
        if not cached:
            # Two threads may search the same candidate; both get the same answer
            found = self._search(candidate)
            with self._lock:
                self._cache.setdefault(candidate, found)
        if found is None:
            raise ResolutionError(candidate)
        return found

    def resolves(self, candidate: str) -> bool:
        try:
            self.locate(candidate)
        except ResolutionError:
            return False
        return True

    def _search(self, candidate: str) -> str | None:
        if not candidate:
            return None

        if is_pathlike(candidate):
            if not (ntpath.isabs(candidate) or os.path.isabs(candidate) or ":" in candidate):
                candidate = os.path.join(self.config.cwd, candidate)
            return self._find_executable(candidate)

        # Bare names: working directory first, then each search-path entry
        for directory in (self.config.cwd, *self.config.search_path):
            found = self._find_executable(os.path.join(directory, candidate))
            if found is not None:
                return found
        logger.debug("not found on search path: %s", candidate)
        return None

    def _find_executable(self, path: str) -> str | None:
        exts = self.config.path_ext
        if not exts:
            return path if self._is_file(path) else None
        if has_ext(path) and self._is_file(path):
            return path
        for ext in exts:
            if self._is_file(path + ext):
                return path + ext
        return None
