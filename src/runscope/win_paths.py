"""Windows path utilities: kernel-prefix stripping, root tokens, %VAR% expansion."""

from __future__ import annotations

import ntpath
import os
from typing import TYPE_CHECKING

from runscope.config import ScanConfig
from runscope.errors import EmptyInputError, ExpansionError, ResolutionError

if TYPE_CHECKING:
    from runscope.locator import Locator

KERNEL_PREFIX = "\\??\\"
SYSTEMROOT_TOKEN = "\\systemroot"
SYSTEM32_TOKEN = "system32"


def normalize_launch_string(value: str, config: ScanConfig) -> str:
    """Turn a raw registry value into a user-mode command string.

    Steps run in order, each on the output of the previous one:

    1. ``\\??\\C:\\x.sys``      -> ``C:\\x.sys``
    2. ``\\SystemRoot\\x.sys``  -> ``<SystemRoot>\\x.sys``
    3. ``System32\\x.sys``      -> ``<SystemRoot>\\System32\\x.sys``
    4. ``%VAR%`` references are expanded.

    Stripping must come first: ``\\??\\`` can front a root token.

    Raises EmptyInputError for an empty value, ExpansionError for a
    malformed ``%`` reference.
    """
    if not value:
        raise EmptyInputError("empty launch string")

    if value.startswith(KERNEL_PREFIX):
        value = value[len(KERNEL_PREFIX):]

    if value[:len(SYSTEMROOT_TOKEN)].lower() == SYSTEMROOT_TOKEN:
        value = config.system_root + value[len(SYSTEMROOT_TOKEN):]

    if value[:len(SYSTEM32_TOKEN)].lower() == SYSTEM32_TOKEN:
        value = config.system_root + "\\System32" + value[len(SYSTEM32_TOKEN):]

    return expand_env(value, config)


def expand_env(value: str, config: ScanConfig) -> str:
    """Expand ``%NAME%`` references. Unset names expand to "".

    A ``%`` with no closing ``%`` is literal text, as is one whose span
    crosses a quote (``"%1" "%2"``). Only an empty name (``%%``) raises
    ExpansionError.
    """
    parts: list[str] = []
    pos = 0
    scan_from = 0
    while True:
        start = value.find("%", scan_from)
        if start < 0:
            break
        end = value.find("%", start + 1)
        if end < 0:
            break  # trailing "50%", "%1"
        name = value[start + 1:end]
        if not name:
            raise ExpansionError(f"empty variable name at offset {start}")
        if '"' in name:
            scan_from = start + 1
            continue
        parts.append(value[pos:start])
        parts.append(config.getenv(name))
        pos = scan_from = end + 1
    parts.append(value[pos:])
    return "".join(parts)


def clean_path(path: str, locator: Locator) -> str:
    """Re-resolve an accepted executable and collapse redundant segments.

    A path the locator cannot find (e.g. a quoted one) is returned as given.
    """
    try:
        found = locator.locate(path)
    except ResolutionError:
        return path
    return os.path.normpath(found)


def image_name(path: str) -> str:
    """Final path segment, splitting on both ``\\`` and ``/``."""
    if not path:
        return ""
    return ntpath.basename(path.rstrip("\\/")) or path
