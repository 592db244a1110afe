"""End-to-end tests for the query session (real files, mocked backend)."""

import asyncio
import json

import httpx
import pytest

from snippetrag.context.editor import EditorContext, LineRange
from snippetrag.foundation.config import AnalysisConfig, BackendConfig, SnippetRagConfig
from snippetrag.render import NO_RESULTS_MESSAGE, NO_WORKSPACE_MESSAGE
from snippetrag.session import SnippetSession
from snippetrag.workspace.cache import AnalysisCache, root_key


def _session(handler, timeout_ms: int = 2000, **analysis) -> SnippetSession:
    config = SnippetRagConfig(
        backend=BackendConfig(server_url="http://backend.test", request_timeout_ms=timeout_ms),
        analysis=AnalysisConfig(**analysis),
    )
    session = SnippetSession(config=config, cache=AnalysisCache())
    session.client.transport = httpx.MockTransport(handler)
    return session


def _empty_answers(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"answers": []})


@pytest.fixture
def project(tmp_path, write_file):
    root = tmp_path / "proj"
    write_file(root, "a.ts", "a" * 100, mtime_ms=1000)
    write_file(root, "b.ts", "b" * 200, mtime_ms=2000)
    return root


class TestEnsureAnalysis:
    def test_cached_until_rebuild(self, project, write_file) -> None:
        session = _session(_empty_answers)
        first = session.ensure_analysis(project)

        write_file(project, "c.ts", "c")
        assert session.ensure_analysis(project) is first

        rebuilt = session.rebuild(project)
        assert rebuilt is not first
        assert rebuilt.file_count == 3
        assert rebuilt.fingerprint != first.fingerprint
        assert session.cache.get(root_key(project)) is rebuilt

    def test_unchanged_tree_same_fingerprint_after_rebuild(self, project) -> None:
        session = _session(_empty_answers)
        first = session.ensure_analysis(project)
        assert session.rebuild(project).fingerprint == first.fingerprint

    def test_roots_changed_clears(self, project) -> None:
        session = _session(_empty_answers)
        session.ensure_analysis(project)
        session.roots_changed()
        assert len(session.cache) == 0

    def test_absent_root_not_cached(self, tmp_path) -> None:
        session = _session(_empty_answers)
        assert session.ensure_analysis(tmp_path / "missing") is None
        assert session.ensure_analysis(None) is None
        assert len(session.cache) == 0


class TestAsk:
    @pytest.mark.asyncio
    async def test_empty_answers_render_no_results(self, project) -> None:
        session = _session(_empty_answers)
        assert await session.ask("anything?", project) == NO_RESULTS_MESSAGE

    @pytest.mark.asyncio
    async def test_renders_answers_and_sends_editor_context(self, project) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"answers": [
                {"file": "a.ts", "start_line": 1, "end_line": 1, "code": "aaa", "score": 0.75,
                 "explanation": "match"},
            ]})

        session = _session(handler)
        editor = EditorContext(active_file="b.ts", selection=LineRange(1, 1))
        text = await session.ask("find a", project, editor)

        assert "**a.ts** (lines 1-1) [score: 0.75]" in text
        assert "```typescript\naaa\n```" in text
        ctx = seen["body"]["repo_context"]
        assert ctx["fileCount"] == 2
        assert ctx["activeFile"] == "b.ts"
        assert ctx["selection"] == {"startLine": 1, "endLine": 1}

    @pytest.mark.asyncio
    async def test_no_workspace(self) -> None:
        session = _session(_empty_answers)
        assert await session.ask("q", None) == NO_WORKSPACE_MESSAGE

    @pytest.mark.asyncio
    async def test_404_rendered_with_collected_context(self, project) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="Not Found")

        session = _session(handler)
        text = await session.ask("q", project)

        assert "HTTP 404" in text
        assert "not yet implemented" in text
        assert "- **Files analyzed:** 2" in text

    @pytest.mark.asyncio
    async def test_timeout_rendered_then_session_recovers(self, project) -> None:
        calls = {"n": 0}

        async def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            if calls["n"] == 1:
                await asyncio.sleep(5)
            return httpx.Response(200, json={"answers": []})

        session = _session(handler, timeout_ms=100)

        failed = await session.ask("q", project)
        assert "Request timeout after 100ms" in failed

        assert await session.ask("q", project) == NO_RESULTS_MESSAGE

    @pytest.mark.asyncio
    async def test_concurrent_roots_isolated(self, tmp_path, write_file) -> None:
        root_a = tmp_path / "alpha"
        root_b = tmp_path / "beta"
        write_file(root_a, "a.py", "a")
        write_file(root_b, "b1.py", "b")
        write_file(root_b, "b2.py", "b")

        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content)["repo_context"]["workspaceName"])
            return httpx.Response(200, json={"answers": []})

        session = _session(handler)
        await asyncio.gather(session.ask("q", root_a), session.ask("q", root_b))

        assert sorted(seen) == ["alpha", "beta"]
        assert session.cache.get(root_key(root_a)).file_count == 1
        assert session.cache.get(root_key(root_b)).file_count == 2

    @pytest.mark.asyncio
    async def test_check_connection(self) -> None:
        session = _session(lambda request: httpx.Response(200, json={"status": "ok"}))
        assert await session.check_connection() is True
