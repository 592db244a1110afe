"""Workspace analyzer.

Walks a project root and builds an immutable :class:`Analysis`:

1. Enumerate candidate files, pruning build/dependency/VCS directories and
   anything the classifier marks sensitive, up to ``max_files`` candidates.
2. Stat each candidate into a :class:`FileRecord`; files that fail to stat
   are skipped (logged, never raised).
3. Attach a truncated UTF-8 sample to small, sample-eligible files.
4. Fingerprint the records and assemble the snapshot.

A missing project root is not an error: ``analyze`` returns None and the
caller asks the user to open a project.
"""

import logging
import os
import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from snippetrag.foundation.config import AnalysisConfig
from snippetrag.workspace.classifier import (
    is_sample_eligible,
    is_sensitive,
    is_sensitive_dir,
    language_id_for,
)
from snippetrag.workspace.fingerprint import compute_fingerprint
from snippetrag.workspace.types import Analysis, FileRecord

logger = logging.getLogger(__name__)

# Directories never descended into
EXCLUDED_DIRS: frozenset[str] = frozenset({
    "node_modules", ".git", "dist", "build", "out",
    ".hg", ".svn", "__pycache__", ".venv", "venv",
})


@dataclass(slots=True)
class WorkspaceAnalyzer:
    """Builds Analysis snapshots for project roots."""

    config: AnalysisConfig = field(default_factory=AnalysisConfig)
    log: logging.Logger = field(default=logger, repr=False)

    def analyze(self, root: str | Path | None) -> Analysis | None:
        """Analyze a project root.

        Args:
            root: Project root directory, or None when no project is open.

        Returns:
            The Analysis, or None when there is no usable project root.
        """
        if root is None:
            self.log.info("analysis.no_workspace")
            return None

        root_path = Path(root).expanduser()
        if not root_path.is_dir():
            self.log.info("analysis.no_workspace root=%s", root_path)
            return None
        root_path = root_path.resolve()

        started = time.monotonic()
        self.log.info("analysis.start workspace=%s", root_path.name)

        records: list[FileRecord] = []
        for rel_path in self.iter_candidates(root_path):
            record = self._build_record(root_path, rel_path)
            if record is not None:
                records.append(record)

        fingerprint = compute_fingerprint(records)
        analysis = Analysis(
            project_name=root_path.name,
            project_root=str(root_path),
            fingerprint=fingerprint,
            files=tuple(records),
        )

        elapsed_ms = int((time.monotonic() - started) * 1000)
        self.log.info(
            "analysis.complete files=%d sampled=%d fingerprint=%s elapsed_ms=%d",
            analysis.file_count,
            analysis.sampled_count,
            fingerprint[:8],
            elapsed_ms,
        )
        return analysis

    def iter_candidates(self, root: Path) -> Iterator[str]:
        """Yield project-relative, forward-slash paths of candidate files.

        Stops after ``max_files`` candidates. Directory and file names are
        visited in sorted order so repeated walks agree.
        """
        remaining = self.config.max_files

        def on_walk_error(error: OSError) -> None:
            self.log.debug("analysis.walk_error path=%s error=%s", error.filename, error)

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_walk_error):
            dirnames[:] = sorted(
                d for d in dirnames
                if d not in EXCLUDED_DIRS and not is_sensitive_dir(d)
            )
            rel_dir = Path(dirpath).relative_to(root)
            for name in sorted(filenames):
                rel_path = (rel_dir / name).as_posix()
                if is_sensitive(rel_path):
                    continue
                yield rel_path
                remaining -= 1
                if remaining <= 0:
                    return

    def _build_record(self, root: Path, rel_path: str) -> FileRecord | None:
        if is_sensitive(rel_path):
            return None

        full_path = root / rel_path
        try:
            stat = full_path.stat()
        except OSError as e:
            self.log.debug("analysis.file_skipped path=%s error=%s", rel_path, e)
            return None

        size = stat.st_size
        sample = None
        if (
            is_sample_eligible(rel_path)
            and 0 < size <= self.config.sample_ceiling_bytes
        ):
            sample = self._read_sample(full_path, rel_path)

        return FileRecord(
            path=rel_path,
            size=size,
            mtime=stat.st_mtime_ns // 1_000_000,
            language_id=language_id_for(rel_path),
            sample=sample,
        )

    def _read_sample(self, full_path: Path, rel_path: str) -> str | None:
        try:
            text = full_path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.log.debug("analysis.sample_skipped path=%s error=%s", rel_path, e)
            return None
        return text[: self.config.max_bytes_per_file]


def analyze(
    root: str | Path | None,
    config: AnalysisConfig | None = None,
    log: logging.Logger | None = None,
) -> Analysis | None:
    """Analyze ``root`` with the given limits (see :class:`WorkspaceAnalyzer`)."""
    analyzer = WorkspaceAnalyzer(config=config or AnalysisConfig(), log=log or logger)
    return analyzer.analyze(root)
