"""SnippetRAG - ask a retrieval backend for code snippets from your project.

Public entry points:
    analyze()            build an Analysis snapshot of a project root
    AnalysisCache        one Analysis per project root
    query(), health_check()   talk to the retrieval backend
    render_response()    answers -> Markdown
    SnippetSession       all of the above wired together
"""

from snippetrag.backend import (
    Answer,
    QueryClient,
    QueryRequest,
    QueryResponse,
    health_check,
    query,
)
from snippetrag.context import EditorContext, LineRange
from snippetrag.foundation import ErrorCode, SnippetRagError
from snippetrag.render import render_error, render_response
from snippetrag.session import SnippetSession
from snippetrag.workspace import (
    Analysis,
    AnalysisCache,
    FileRecord,
    analyze,
    compute_fingerprint,
    get_analysis_cache,
    root_key,
)

__version__ = "0.1.0"

__all__ = [
    "Analysis",
    "AnalysisCache",
    "Answer",
    "EditorContext",
    "ErrorCode",
    "FileRecord",
    "LineRange",
    "QueryClient",
    "QueryRequest",
    "QueryResponse",
    "SnippetRagError",
    "SnippetSession",
    "analyze",
    "compute_fingerprint",
    "get_analysis_cache",
    "health_check",
    "query",
    "render_error",
    "render_response",
    "root_key",
]
