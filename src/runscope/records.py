"""Record builder: one raw source tuple in, one Autorun out. Never raises for bad input."""

from __future__ import annotations

import logging

from runscope.cmdline import split_command_line
from runscope.config import ScanConfig
from runscope.errors import HashUnavailable, ParseError
from runscope.hashing import EMPTY_DIGESTS, hash_file
from runscope.locator import Locator
from runscope.models import Autorun, EntryType, RawEntry
from runscope.win_paths import image_name, normalize_launch_string

logger = logging.getLogger(__name__)


def parse_launch_string(value: str, config: ScanConfig, locator: Locator) -> tuple[str, str]:
    """Normalize then split a raw launch string. Raises ParseError subclasses."""
    return split_command_line(normalize_launch_string(value, config), locator)


class RecordBuilder:
    """Turns RawEntry tuples into Autorun records for one scan."""

    def __init__(self, config: ScanConfig, locator: Locator | None = None) -> None:
        self.config = config
        self.locator = locator or Locator(config)

    def build(
        self,
        entry_type: EntryType,
        location: str,
        value: str,
        should_parse: bool,
        entry: str = "",
    ) -> Autorun:
        image_path = value
        arguments = ""

        if should_parse:
            try:
                image_path, arguments = parse_launch_string(value, self.config, self.locator)
            except ParseError as exc:
                logger.debug("unparsed %s value %r: %s", entry_type.value, value, type(exc).__name__)

        try:
            md5, sha1, sha256 = hash_file(image_path)
        except HashUnavailable as exc:
            logger.debug("no digests for %r: %s", image_path, exc)
            md5, sha1, sha256 = EMPTY_DIGESTS

        return Autorun(
            type=entry_type,
            location=location,
            imagePath=image_path,
            imageName=image_name(image_path),
            arguments=arguments,
            md5=md5,
            sha1=sha1,
            sha256=sha256,
            entry=entry,
            launchString=value,
        )

    def build_from(self, raw: RawEntry) -> Autorun:
        return self.build(raw.entryType, raw.location, raw.rawValue, raw.shouldParse, raw.name)
