"""Content hashing for commit snapshots."""

import hashlib
from typing import Iterable


def snapshot_hash(contents: Iterable[bytes]) -> str:
    """Return the SHA-1 hex digest of the buffers concatenated in order."""
    digest = hashlib.sha1()  # noqa: S324
    for chunk in contents:
        digest.update(chunk)
    return digest.hexdigest()
