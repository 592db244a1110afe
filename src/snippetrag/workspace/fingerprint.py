"""Order-independent fingerprint over file metadata."""

import hashlib
from collections.abc import Iterable

from snippetrag.workspace.types import FileRecord


def fingerprint_line(record: FileRecord) -> str:
    return f"{record.path}|{record.size}|{record.mtime}"


def compute_fingerprint(files: Iterable[FileRecord]) -> str:
    """Compute a SHA-256 fingerprint of ``(path, size, mtime)`` triples.

    Lines are sorted before hashing, so discovery order does not matter.
    Samples and language tags are not part of the digest.

    Example:
        >>> compute_fingerprint([])
        'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'
    """
    joined = "\n".join(sorted(fingerprint_line(f) for f in files))
    return hashlib.sha256(joined.encode("utf-8")).hexdigest()
