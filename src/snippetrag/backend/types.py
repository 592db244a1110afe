"""Request/response contract with the retrieval backend.

Request body (POST /query):
    {"query": str,
     "repo_context": {"workspaceName", "workspaceRoot", "fingerprint", "fileCount",
                      "activeFile": str | null,
                      "selection": {"startLine", "endLine"} | null,
                      "files": [{"path", "size", "mtime", "languageId"?, "sample"?}]}}

Response body:
    {"answers": [{"file", "start_line", "end_line", "code", "score", "explanation"}]}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from snippetrag.context.editor import EditorContext
from snippetrag.workspace.types import Analysis

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class QueryRequest:
    """A single question plus the context it is asked in. Built per query."""

    query: str
    analysis: Analysis
    editor: EditorContext = field(default_factory=EditorContext)

    def to_dict(self) -> dict[str, Any]:
        repo_context = self.analysis.to_dict()
        files = repo_context.pop("files")
        repo_context.update(self.editor.to_json())
        repo_context["files"] = files
        return {"query": self.query, "repo_context": repo_context}


@dataclass(frozen=True, slots=True)
class Answer:
    """One ranked snippet returned by the backend."""

    file: str
    start_line: int
    end_line: int
    code: str
    score: float
    explanation: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Answer:
        start = int(data.get("start_line") or 1)
        end = int(data.get("end_line") or start)
        return cls(
            file=str(data.get("file") or ""),
            start_line=start,
            end_line=max(start, end),
            code=str(data.get("code") or ""),
            score=float(data.get("score") or 0.0),
            explanation=str(data.get("explanation") or ""),
        )


@dataclass(frozen=True, slots=True)
class QueryResponse:
    """Answers in backend order. Never re-sorted."""

    answers: tuple[Answer, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> QueryResponse:
        """Parse a decoded JSON body.

        A missing or non-list ``answers`` means no matches. Entries that are
        not objects, or whose fields cannot be coerced, are dropped.
        """
        raw = payload.get("answers") if isinstance(payload, dict) else None
        if not isinstance(raw, list):
            return cls()

        answers = []
        for index, item in enumerate(raw):
            if not isinstance(item, dict):
                logger.debug("response.answer_dropped index=%d reason=not-an-object", index)
                continue
            try:
                answers.append(Answer.from_dict(item))
            except (TypeError, ValueError) as e:
                logger.debug("response.answer_dropped index=%d error=%s", index, e)
        return cls(answers=tuple(answers))

    def __len__(self) -> int:
        return len(self.answers)
