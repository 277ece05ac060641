"""Shared test fixtures for RunScope tests."""

from __future__ import annotations

from typing import Callable, Iterable

import pytest

from runscope.config import ScanConfig
from runscope.locator import Locator

SYSTEM_ROOT = "C:\\Windows"


@pytest.fixture
def config() -> ScanConfig:
    """Deterministic Windows-like configuration, independent of the host."""
    return ScanConfig(
        environ={
            "SYSTEMROOT": SYSTEM_ROOT,
            "PROGRAMFILES": "C:\\Program Files",
            "WINDIR": SYSTEM_ROOT,
        },
        search_path=(SYSTEM_ROOT + "\\System32", SYSTEM_ROOT),
        path_ext=(".com", ".exe", ".bat", ".cmd"),
        system_root=SYSTEM_ROOT,
        cwd="C:\\work",
    )


@pytest.fixture
def fake_locator(config: ScanConfig) -> Callable[[Iterable[str]], Locator]:
    """Build a Locator whose file system is exactly the given set of paths."""

    def make(files: Iterable[str]) -> Locator:
        present = set(files)
        return Locator(config, is_file=present.__contains__)

    return make


@pytest.fixture
def host_config(tmp_path) -> ScanConfig:
    """Configuration rooted in a real temporary directory (empty search path)."""
    return ScanConfig(
        environ={},
        search_path=(),
        path_ext=(".com", ".exe", ".bat", ".cmd"),
        system_root=SYSTEM_ROOT,
        cwd=str(tmp_path),
    )
