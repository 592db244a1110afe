"""Query session: ties analysis, cache, backend client and rendering together.

Flow for one question:

    root -> cache hit? -> (miss: analyze, put) -> QueryRequest -> backend
         -> QueryResponse -> Markdown

Analysis runs in a worker thread so concurrent asks for different roots do
not block each other. Two rebuilds of the same root may race; whichever
finishes last owns the cache slot.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from snippetrag.backend.client import QueryClient
from snippetrag.backend.types import QueryRequest
from snippetrag.context.editor import EditorContext
from snippetrag.foundation.config import SnippetRagConfig
from snippetrag.foundation.errors import ErrorCode, SnippetRagError
from snippetrag.render import render_error, render_response
from snippetrag.workspace.analyzer import WorkspaceAnalyzer
from snippetrag.workspace.cache import AnalysisCache, get_analysis_cache, root_key
from snippetrag.workspace.types import Analysis

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SnippetSession:
    """Long-lived entry point used by the CLI (or an editor integration)."""

    config: SnippetRagConfig = field(default_factory=SnippetRagConfig)
    cache: AnalysisCache = field(default_factory=get_analysis_cache)
    client: QueryClient | None = None

    def __post_init__(self) -> None:
        if self.client is None:
            self.client = QueryClient(
                server_url=self.config.backend.server_url,
                timeout_ms=self.config.backend.request_timeout_ms,
            )

    @property
    def analyzer(self) -> WorkspaceAnalyzer:
        return WorkspaceAnalyzer(config=self.config.analysis)

    def ensure_analysis(self, root: str | Path | None) -> Analysis | None:
        """Serve the cached Analysis for ``root`` or build and cache a new one."""
        if root is None or not Path(root).expanduser().is_dir():
            return self.analyzer.analyze(root)

        key = root_key(root)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info(
                "analysis.cache_hit workspace=%s files=%d fingerprint=%s",
                cached.project_name,
                cached.file_count,
                cached.fingerprint[:8],
            )
            return cached

        analysis = self.analyzer.analyze(root)
        if analysis is not None:
            self.cache.put(key, analysis)
        return analysis

    def rebuild(self, root: str | Path | None) -> Analysis | None:
        """Drop the cached Analysis for ``root`` and analyze it again."""
        if root is not None:
            dropped = self.cache.invalidate(root_key(root))
            logger.info("analysis.invalidated root=%s existed=%s", root, dropped)
        return self.ensure_analysis(root)

    def roots_changed(self) -> None:
        """The set of open project roots changed: forget every Analysis."""
        count = len(self.cache)
        self.cache.clear()
        logger.info("analysis.cache_cleared entries=%d", count)

    async def ask(
        self,
        question: str,
        root: str | Path | None,
        editor: EditorContext | None = None,
    ) -> str:
        """Answer ``question`` about ``root`` as Markdown.

        Backend failures are rendered, not raised, so the session stays
        ready for the next question.
        """
        editor = editor or EditorContext()
        analysis = await asyncio.to_thread(self.ensure_analysis, root)
        if analysis is None:
            return render_error(SnippetRagError(code=ErrorCode.WORKSPACE_NOT_FOUND))

        request = QueryRequest(query=question, analysis=analysis, editor=editor)
        try:
            response = await self.client.query(request)
        except SnippetRagError as e:
            logger.info("ask.failed code=%s", e.error_id)
            return render_error(e, analysis=analysis, editor=editor)
        return render_response(response)

    async def check_connection(self) -> bool:
        return await self.client.health_check()
