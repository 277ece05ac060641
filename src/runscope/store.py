"""In-memory store for scan results. Nothing is persisted."""

from __future__ import annotations

import os
import time

from runscope.models import Autorun


class Store:
    """In-memory autorun store."""

    def __init__(self) -> None:
        self._autoruns: dict[str, Autorun] = {}
        self._scan_index: dict[str, list[str]] = {}  # scanId -> autorunIds
        self._counter = 0

    def new_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}_{int(time.time() * 1000)}_{os.getpid()}_{self._counter}"

    def put_autorun(self, autorun_id: str, autorun: Autorun) -> None:
        self._autoruns[autorun_id] = autorun

    def get_autorun(self, autorun_id: str) -> Autorun | None:
        return self._autoruns.get(autorun_id)

    def register_scan(self, scan_id: str, autorun_ids: list[str]) -> None:
        self._scan_index[scan_id] = autorun_ids

    def get_scan_autoruns(self, scan_id: str) -> list[str] | None:
        return self._scan_index.get(scan_id)
