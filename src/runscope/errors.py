"""Error taxonomy: resolution exceptions plus structured error/success envelopes."""

from __future__ import annotations

from typing import Any


class ParseError(ValueError):
    """A launch string could not be turned into (executable, arguments)."""

    code = "E_PARSE"


class EmptyInputError(ParseError):
    code = "E_EMPTY_INPUT"


class ExpansionError(ParseError):
    """A %VAR% reference is malformed (unterminated or empty name)."""

    code = "E_EXPANSION"


class UnclosedQuoteError(ParseError):
    code = "E_UNCLOSED_QUOTE"


class ExecutableNotFoundError(ParseError):
    """No whitespace-delimited prefix of an unquoted string resolved."""

    code = "E_EXECUTABLE_NOT_FOUND"


class ResolutionError(LookupError):
    """The executable locator found no file for a candidate."""


class HashUnavailable(OSError):
    """Digests could not be computed. Never fatal for a record."""


def err(
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    next_steps: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a structured error envelope."""
    return {
        "ok": False,
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
            "nextSteps": next_steps or [],
        },
    }


def ok(result: dict[str, Any]) -> dict[str, Any]:
    """Build a structured success envelope."""
    return {"ok": True, "result": result}
