"""Configuration: environment snapshot, search path, registry locations."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

DEFAULT_SYSTEM_ROOT = "C:\\Windows"
DEFAULT_PATHEXT = ".com;.exe;.bat;.cmd"

HIVE_LABELS = ("LOCAL_MACHINE", "CURRENT_USER")

RUN_KEYS = (
    "Software\\Microsoft\\Windows\\CurrentVersion\\Run",
    "Software\\Microsoft\\Windows\\CurrentVersion\\RunOnce",
    "Software\\Wow6432Node\\Microsoft\\Windows\\CurrentVersion\\Run",
    "Software\\Wow6432Node\\Microsoft\\Windows\\CurrentVersion\\RunOnce",
)
SERVICES_KEY = "System\\CurrentControlSet\\Services"

# Relative to both %ProgramData% (all users) and %AppData% (current user)
STARTUP_SUBPATH = "Microsoft\\Windows\\Start Menu\\Programs\\StartUp"
STARTUP_ENV_VARS = ("ProgramData", "AppData")
STARTUP_IGNORED = frozenset({"desktop.ini"})

SERVER_NAME = "runscope"
SERVER_VERSION = "0.1.0"


@dataclass(frozen=True)
class ScanConfig:
    """Read-only lookups consulted while resolving launch strings.

    ``environ`` keys are upper-cased: Windows variable names are
    case-insensitive, so lookups go through :meth:`getenv`.
    """

    environ: Mapping[str, str] = field(default_factory=dict)
    search_path: tuple[str, ...] = ()
    path_ext: tuple[str, ...] = tuple(DEFAULT_PATHEXT.split(";"))
    system_root: str = DEFAULT_SYSTEM_ROOT
    cwd: str = "."

    def getenv(self, name: str) -> str:
        return self.environ.get(name.upper(), "")


def load_config(environ: Mapping[str, str] | None = None, cwd: str | None = None) -> ScanConfig:
    """Snapshot an environment mapping (default: ``os.environ``) into a ScanConfig."""
    source = os.environ if environ is None else environ
    env = {k.upper(): v for k, v in source.items()}

    search_path = tuple(p for p in env.get("PATH", "").split(os.pathsep) if p)
    raw_ext = env.get("PATHEXT", "") or DEFAULT_PATHEXT
    path_ext = tuple(e.strip().lower() for e in raw_ext.split(";") if e.strip())

    return ScanConfig(
        environ=env,
        search_path=search_path,
        path_ext=path_ext,
        system_root=env.get("SYSTEMROOT", "") or DEFAULT_SYSTEM_ROOT,
        cwd=cwd if cwd is not None else os.getcwd(),
    )


def get_log_level() -> str:
    return os.environ.get("RUNSCOPE_LOG_LEVEL", "WARNING").upper()


def get_default_workers() -> int:
    """Worker count for scans from RUNSCOPE_WORKERS. Fail closed on garbage."""
    raw = os.environ.get("RUNSCOPE_WORKERS", "1")
    try:
        workers = int(raw)
    except ValueError:
        raise RuntimeError(f"RUNSCOPE_WORKERS must be a positive integer, got: {raw!r}")
    if workers < 1:
        raise RuntimeError(f"RUNSCOPE_WORKERS must be a positive integer, got: {raw!r}")
    return workers
