"""Markdown rendering for query results and failures.

``render_response`` keeps the backend's order exactly; nothing here sorts,
filters or merges answers.
"""

from snippetrag.backend.client import QUERY_ENDPOINT
from snippetrag.backend.types import Answer, QueryResponse
from snippetrag.context.editor import EditorContext
from snippetrag.foundation.errors import ErrorCode, SnippetRagError
from snippetrag.workspace.classifier import language_id_for
from snippetrag.workspace.types import Analysis

NO_RESULTS_MESSAGE = "No results found."

NO_WORKSPACE_MESSAGE = (
    "**Error:** Could not analyze workspace. Please ensure a project folder is open."
)

FALLBACK_FENCE_LANGUAGE = "text"


def render_answer(answer: Answer) -> str:
    language = language_id_for(answer.file) or FALLBACK_FENCE_LANGUAGE
    parts = [
        f"**{answer.file}** (lines {answer.start_line}-{answer.end_line}) "
        f"[score: {answer.score:.2f}]\n\n",
        f"```{language}\n{answer.code}\n```\n\n",
    ]
    if answer.explanation:
        parts.append(f"{answer.explanation}\n\n")
    parts.append("---\n\n")
    return "".join(parts)


def render_response(response: QueryResponse) -> str:
    """Render answers as Markdown, or the fixed no-results message."""
    if not response.answers:
        return NO_RESULTS_MESSAGE
    return "".join(render_answer(answer) for answer in response.answers)


def render_error(
    error: SnippetRagError,
    analysis: Analysis | None = None,
    editor: EditorContext | None = None,
) -> str:
    """Render a failure with what was already collected and what to do next."""
    if error.code is ErrorCode.WORKSPACE_NOT_FOUND:
        return NO_WORKSPACE_MESSAGE

    lines = [f"**Error:** {error.message}"]

    if analysis is not None:
        lines += [
            "",
            "**Workspace Context Collected:**",
            f"- **Files analyzed:** {analysis.file_count}",
            f"- **Workspace:** {analysis.project_name}",
            f"- **Files with samples:** {analysis.sampled_count}",
        ]
        if editor is not None and editor.active_file:
            lines.append(f"- **Active file:** {editor.active_file}")
        lines += [
            "",
            "*All file metadata and samples were collected and would be sent to the backend.*",
        ]

    if error.code is ErrorCode.BACKEND_ENDPOINT_MISSING:
        file_count = analysis.file_count if analysis is not None else 0
        lines += [
            "",
            f"**Note:** The backend `{QUERY_ENDPOINT}` endpoint is not yet implemented (404 error).",
            f"The workspace analysis has successfully collected {file_count} files.",
            f"Once the backend implements `{QUERY_ENDPOINT}`, this context will be sent automatically.",
        ]

    hints = error.recovery_hints
    if hints:
        lines += ["", "**Troubleshooting:**"]
        lines += [f"{i}. {hint}" for i, hint in enumerate(hints, 1)]

    lines += ["", "Run with `--debug` for detailed logs."]
    return "\n".join(lines)
