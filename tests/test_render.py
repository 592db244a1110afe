"""Tests for Markdown rendering of answers and failures."""

from snippetrag.backend.types import Answer, QueryResponse
from snippetrag.context.editor import EditorContext
from snippetrag.foundation.errors import ErrorCode, SnippetRagError
from snippetrag.render import (
    NO_RESULTS_MESSAGE,
    NO_WORKSPACE_MESSAGE,
    render_error,
    render_response,
)


def _answer(file: str, score: float = 0.5, explanation: str = "", code: str = "pass") -> Answer:
    return Answer(file=file, start_line=3, end_line=9, code=code, score=score, explanation=explanation)


class TestRenderResponse:
    def test_empty_is_no_results(self) -> None:
        assert render_response(QueryResponse()) == NO_RESULTS_MESSAGE == "No results found."

    def test_single_answer_layout(self) -> None:
        text = render_response(
            QueryResponse(answers=(_answer("src/app.py", score=0.876, explanation="Entry point."),))
        )
        assert text == (
            "**src/app.py** (lines 3-9) [score: 0.88]\n\n"
            "```python\npass\n```\n\n"
            "Entry point.\n\n"
            "---\n\n"
        )

    def test_empty_explanation_omitted(self) -> None:
        text = render_response(QueryResponse(answers=(_answer("a.py"),)))
        assert text == "**a.py** (lines 3-9) [score: 0.50]\n\n```python\npass\n```\n\n---\n\n"

    def test_unknown_extension_uses_text_fence(self) -> None:
        text = render_response(QueryResponse(answers=(_answer("Dockerfile"),)))
        assert "```text\n" in text

    def test_order_preserved_not_sorted_by_score(self) -> None:
        answers = (
            _answer("first.py", score=0.1),
            _answer("second.py", score=0.9),
            _answer("third.py", score=0.5),
        )
        text = render_response(QueryResponse(answers=answers))
        assert text.index("first.py") < text.index("second.py") < text.index("third.py")

    def test_duplicates_kept(self) -> None:
        text = render_response(QueryResponse(answers=(_answer("a.py"), _answer("a.py"))))
        assert text.count("**a.py**") == 2


class TestRenderError:
    def test_no_workspace(self) -> None:
        error = SnippetRagError(code=ErrorCode.WORKSPACE_NOT_FOUND)
        assert render_error(error) == NO_WORKSPACE_MESSAGE

    def test_includes_collected_context(self, sample_analysis) -> None:
        error = SnippetRagError(
            code=ErrorCode.BACKEND_TIMEOUT,
            context={"timeout_ms": 20000, "url": "http://localhost:8000/query"},
        )
        text = render_error(error, analysis=sample_analysis, editor=EditorContext(active_file="src/app.py"))

        assert text.startswith("**Error:** Request timeout after 20000ms")
        assert "- **Files analyzed:** 3" in text
        assert "- **Workspace:** demo" in text
        assert "- **Files with samples:** 2" in text
        assert "- **Active file:** src/app.py" in text
        assert "**Troubleshooting:**" in text
        assert "request_timeout_ms (currently 20000)" in text

    def test_endpoint_missing_note(self, sample_analysis) -> None:
        error = SnippetRagError(
            code=ErrorCode.BACKEND_ENDPOINT_MISSING,
            context={"url": "http://x/query", "status": 404, "body": "", "endpoint": "/query",
                     "file_count": 3},
        )
        text = render_error(error, analysis=sample_analysis)
        assert "not yet implemented (404 error)" in text
        assert "successfully collected 3 files" in text

    def test_without_analysis_has_no_context_block(self) -> None:
        error = SnippetRagError(code=ErrorCode.BACKEND_UNREACHABLE, context={"url": "http://x"})
        text = render_error(error)
        assert "Workspace Context Collected" not in text
        assert "1. Ensure your backend is running" in text
