"""Workspace analysis data model.

Both types are frozen: an Analysis is built once per project root and is
superseded by a fresh one on rebuild, never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class FileRecord:
    """Metadata (and optionally a content sample) for one project file."""

    path: str
    """Project-relative path with forward slashes."""

    size: int
    """Size in bytes as reported by the filesystem."""

    mtime: int
    """Modification time in integer milliseconds since the epoch."""

    language_id: str | None = None
    """Language tag derived from the extension, if known."""

    sample: str | None = None
    """Leading text of the file, only for non-sensitive sample-eligible files."""

    def to_dict(self) -> dict[str, Any]:
        """Wire form; optional keys are omitted rather than sent as null."""
        data: dict[str, Any] = {"path": self.path, "size": self.size, "mtime": self.mtime}
        if self.language_id is not None:
            data["languageId"] = self.language_id
        if self.sample is not None:
            data["sample"] = self.sample
        return data


@dataclass(frozen=True, slots=True)
class Analysis:
    """Immutable snapshot of a project root's file inventory."""

    project_name: str
    project_root: str
    fingerprint: str
    files: tuple[FileRecord, ...]

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def sampled_count(self) -> int:
        """Number of records that carry a content sample."""
        return sum(1 for f in self.files if f.sample is not None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "workspaceName": self.project_name,
            "workspaceRoot": self.project_root,
            "fingerprint": self.fingerprint,
            "fileCount": self.file_count,
            "files": [f.to_dict() for f in self.files],
        }
