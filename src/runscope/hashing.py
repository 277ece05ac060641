"""MD5/SHA1/SHA256 digests of an image file in a single streaming read."""

from __future__ import annotations

import hashlib
import os

from runscope.errors import HashUnavailable

BUFFER_SIZE = 65536
EMPTY_DIGESTS = ("", "", "")


def hash_file(path: str) -> tuple[str, str, str]:
    """Return (md5, sha1, sha256) hex digests for path.

    Raises HashUnavailable if path is empty, not a regular file, or unreadable.
    """
    if not path:
        raise HashUnavailable("no image path to hash")
    if not os.path.isfile(path):
        raise HashUnavailable(f"not a file: {path}")

    md5 = hashlib.md5()
    sha1 = hashlib.sha1()
    sha256 = hashlib.sha256()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(BUFFER_SIZE), b""):
                md5.update(chunk)
                sha1.update(chunk)
                sha256.update(chunk)
    except OSError as exc:
        raise HashUnavailable(f"cannot read {path}: {exc}") from exc

    return md5.hexdigest(), sha1.hexdigest(), sha256.hexdigest()
