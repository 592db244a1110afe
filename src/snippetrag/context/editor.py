"""Active-editor context attached to each query.

Context can be provided via:
- Environment variable: SNIPPETRAG_EDITOR_CONTEXT (path to JSON file)
- CLI options: --file / --lines, or --editor-context <path>
- Direct construction in code

Example JSON format:
{
    "active_file": "src/app/main.py",
    "selection": {"startLine": 10, "endLine": 24}
}
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LineRange:
    """Inclusive, 1-based line range."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1 or self.end < self.start:
            raise ValueError(f"invalid line range {self.start}-{self.end}")

    @classmethod
    def from_zero_based(cls, start_line: int, end_line: int) -> LineRange:
        """Build from editor positions, which count lines from 0."""
        return cls(start=start_line + 1, end=end_line + 1)

    @classmethod
    def parse(cls, text: str) -> LineRange:
        """Parse ``"12"`` or ``"12-30"``."""
        start, sep, end = text.strip().partition("-")
        try:
            return cls(start=int(start), end=int(end) if sep else int(start))
        except ValueError as e:
            raise ValueError(f"invalid line range {text!r}") from e

    def to_dict(self) -> dict[str, int]:
        return {"startLine": self.start, "endLine": self.end}


@dataclass(frozen=True, slots=True)
class EditorContext:
    """What the user is looking at when they ask a question."""

    active_file: str | None = None
    """Project-relative path of the focused file."""

    selection: LineRange | None = None
    """Selected lines in ``active_file``; never set without an active file."""

    def __post_init__(self) -> None:
        if self.active_file is not None:
            object.__setattr__(self, "active_file", self.active_file.replace("\\", "/"))
        if self.selection is not None and self.active_file is None:
            object.__setattr__(self, "selection", None)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> EditorContext:
        """Parse from JSON (as written by an editor integration)."""
        selection = None
        raw = data.get("selection")
        if isinstance(raw, dict) and "startLine" in raw and "endLine" in raw:
            selection = LineRange(start=int(raw["startLine"]), end=int(raw["endLine"]))
        return cls(active_file=data.get("active_file"), selection=selection)

    @classmethod
    def from_file(cls, path: str) -> EditorContext:
        """Load from a JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file is not valid JSON
        """
        with open(path, encoding="utf-8") as f:
            return cls.from_json(json.load(f))

    @classmethod
    def from_env(cls) -> EditorContext | None:
        """Load from the file named by SNIPPETRAG_EDITOR_CONTEXT, if any."""
        path = os.environ.get("SNIPPETRAG_EDITOR_CONTEXT")
        if not path:
            return None
        try:
            return cls.from_file(path)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("editor_context.unreadable path=%s error=%s", path, e)
            return None

    def to_json(self) -> dict[str, Any]:
        return {
            "activeFile": self.active_file,
            "selection": self.selection.to_dict() if self.selection else None,
        }
