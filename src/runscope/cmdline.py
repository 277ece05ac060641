"""Command-line splitting: (executable, arguments) from a normalized launch string.

Unquoted launch strings are ambiguous when the executable path has spaces:

    C:\\Program Files\\My Application\\app.exe --flag

is tried as ``C:\\Program``, then ``C:\\Program Files\\My``, then
``C:\\Program Files\\My Application\\app.exe``; the first prefix the locator
can resolve wins. Quoted executables are taken as written, unverified.
"""

from __future__ import annotations

from runscope.errors import ExecutableNotFoundError, ResolutionError, UnclosedQuoteError
from runscope.locator import Locator
from runscope.win_paths import clean_path

WHITESPACE = " \t"
QUOTE = '"'


def _next_boundary(value: str, start: int) -> int:
    """Index of the first space/tab at or after start, or len(value)."""
    for i in range(start, len(value)):
        if value[i] in WHITESPACE:
            return i
    return len(value)


def split_command_line(value: str, locator: Locator) -> tuple[str, str]:
    """Split a normalized launch string into (executable, arguments).

    Raises UnclosedQuoteError or ExecutableNotFoundError.
    """
    if value.startswith(QUOTE):
        closing = value.find(QUOTE, 1)
        if closing < 0:
            raise UnclosedQuoteError(value)
        executable = value[1:closing]
        arguments = value[closing + 1:]
    else:
        boundary = 0
        while True:
            if boundary == len(value):
                raise ExecutableNotFoundError(value)
            boundary = _next_boundary(value, boundary + 1)
            try:
                executable = locator.locate(value[:boundary])
            except ResolutionError:
                continue
            arguments = value[boundary + 1:]
            break

    return clean_path(executable, locator), arguments.strip()
