"""Raw autorun sources: run keys, services, startup folders, plus a static fixture source.

Registry sources import ``winreg`` lazily so the package (and everything
downstream of RawEntry) works on any platform.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Iterator, Protocol, Sequence

from runscope.config import (
    HIVE_LABELS,
    RUN_KEYS,
    SERVICES_KEY,
    STARTUP_ENV_VARS,
    STARTUP_IGNORED,
    STARTUP_SUBPATH,
    ScanConfig,
)
from runscope.models import EntryType, RawEntry

logger = logging.getLogger(__name__)


class RawSource(Protocol):
    name: str

    def entries(self) -> Iterator[RawEntry]:
        ...


class StaticSource:
    """Replays a fixed list of entries, in order."""

    def __init__(self, name: str, entries: Iterable[RawEntry]) -> None:
        self.name = name
        self._entries = list(entries)

    def entries(self) -> Iterator[RawEntry]:
        return iter(self._entries)


def _hive(label: str) -> int:
    import winreg

    return {
        "LOCAL_MACHINE": winreg.HKEY_LOCAL_MACHINE,
        "CURRENT_USER": winreg.HKEY_CURRENT_USER,
    }[label]


def _string_values(key: object) -> Iterator[tuple[str, str]]:
    """Yield (name, value) for REG_SZ / REG_EXPAND_SZ values of an open key."""
    import winreg

    i = 0
    while True:
        try:
            name, value, kind = winreg.EnumValue(key, i)
        except OSError:
            return  # ERROR_NO_MORE_ITEMS
        i += 1
        if kind in (winreg.REG_SZ, winreg.REG_EXPAND_SZ) and isinstance(value, str):
            yield name, value


class RunKeySource:
    """Values under CurrentVersion\\Run(Once), native and Wow6432Node, HKLM then HKCU."""

    name = "run_keys"

    def __init__(
        self,
        hives: Sequence[str] = HIVE_LABELS,
        key_names: Sequence[str] = RUN_KEYS,
    ) -> None:
        self.hives = hives
        self.key_names = key_names

    def entries(self) -> Iterator[RawEntry]:
        import winreg

        for hive in self.hives:
            for key_name in self.key_names:
                try:
                    key = winreg.OpenKey(_hive(hive), key_name, 0, winreg.KEY_READ)
                except OSError:
                    continue
                location = f"{hive}\\{key_name}"
                with key:
                    for value_name, value in _string_values(key):
                        if not value:
                            continue
                        yield RawEntry(EntryType.RUN_KEY, location, value, True, value_name)


class ServiceSource:
    """ImagePath of every subkey of HKLM\\System\\CurrentControlSet\\Services."""

    name = "services"

    def __init__(self, services_key: str = SERVICES_KEY) -> None:
        self.services_key = services_key

    def entries(self) -> Iterator[RawEntry]:
        import winreg

        hklm = winreg.HKEY_LOCAL_MACHINE
        try:
            with winreg.OpenKey(hklm, self.services_key, 0, winreg.KEY_READ) as key:
                names = list(_subkey_names(key))
        except OSError as exc:
            logger.warning("cannot open services key %s: %s", self.services_key, exc)
            return

        for name in names:
            subkey_path = f"{self.services_key}\\{name}"
            try:
                with winreg.OpenKey(hklm, subkey_path, 0, winreg.KEY_READ) as subkey:
                    image_path, kind = winreg.QueryValueEx(subkey, "ImagePath")
            except OSError:
                continue
            if kind not in (winreg.REG_SZ, winreg.REG_EXPAND_SZ) or not isinstance(image_path, str):
                continue
            yield RawEntry(EntryType.SERVICE, f"LOCAL_MACHINE\\{subkey_path}", image_path, True)


def _subkey_names(key: object) -> Iterator[str]:
    import winreg

    i = 0
    while True:
        try:
            yield winreg.EnumKey(key, i)
        except OSError:
            return
        i += 1


class StartupFolderSource:
    """Files in the all-users and per-user Start Menu StartUp folders.

    Entries are literal paths, so they bypass command-line parsing.
    """

    name = "startup"

    def __init__(self, config: ScanConfig) -> None:
        self.config = config

    def folders(self) -> list[str]:
        folders = []
        for var in STARTUP_ENV_VARS:
            base = self.config.getenv(var)
            if not base:
                continue
            folders.append(os.path.join(base, *STARTUP_SUBPATH.split("\\")))
        return folders

    def entries(self) -> Iterator[RawEntry]:
        for folder in self.folders():
            try:
                with os.scandir(folder) as it:
                    names = [entry.name for entry in it]
            except OSError:
                continue  # non-fatal: folder missing or unreadable
            for name in names:
                if name in STARTUP_IGNORED:
                    continue
                yield RawEntry(EntryType.STARTUP, folder, os.path.join(folder, name), False)


def default_sources(config: ScanConfig) -> list[RawSource]:
    """Sources in scan order. Registry sources only on Windows."""
    sources: list[RawSource] = []
    if os.name == "nt":
        sources.extend([RunKeySource(), ServiceSource()])
    sources.append(StartupFolderSource(config))
    return sources
