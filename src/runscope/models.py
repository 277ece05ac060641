"""Data models: RawEntry (source output) and Autorun (normalized record)."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any


class EntryType(str, Enum):
    RUN_KEY = "run_key"
    SERVICE = "service"
    STARTUP = "startup"


@dataclass(frozen=True)
class RawEntry:
    entryType: EntryType
    location: str
    rawValue: str
    shouldParse: bool
    name: str = ""


@dataclass(frozen=True)
class Autorun:
    type: EntryType
    location: str
    imagePath: str
    imageName: str
    arguments: str
    md5: str
    sha1: str
    sha256: str
    entry: str
    launchString: str  # raw value exactly as the source reported it

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["type"] = self.type.value
        return d
