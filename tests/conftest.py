"""Pytest fixtures for SnippetRAG tests."""

import os
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from snippetrag.backend.client import QueryClient
from snippetrag.foundation.config import reset_config
from snippetrag.workspace.cache import reset_analysis_cache
from snippetrag.workspace.fingerprint import compute_fingerprint
from snippetrag.workspace.types import Analysis, FileRecord


def _write_file(root: Path, rel_path: str, content: str | bytes, mtime_ms: int | None = None) -> Path:
    """Create ``root/rel_path`` (and parents), optionally pinning its mtime."""
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    if mtime_ms is not None:
        ns = mtime_ms * 1_000_000
        os.utime(path, ns=(ns, ns))
    return path


@pytest.fixture
def write_file() -> Callable[..., Path]:
    return _write_file


@pytest.fixture(autouse=True)
def _isolate_global_state():
    """Each test starts with no cached config or analyses."""
    reset_config()
    reset_analysis_cache()
    yield
    reset_config()
    reset_analysis_cache()


@pytest.fixture
def sample_records() -> tuple[FileRecord, ...]:
    return (
        FileRecord(path="src/app.py", size=120, mtime=1_700_000_000_000, language_id="python",
                   sample="def main():\n    pass\n"),
        FileRecord(path="README.md", size=40, mtime=1_700_000_000_500, language_id="markdown",
                   sample="# Demo\n"),
        FileRecord(path="assets/logo.png", size=2048, mtime=1_700_000_001_000),
    )


@pytest.fixture
def sample_analysis(sample_records: tuple[FileRecord, ...]) -> Analysis:
    return Analysis(
        project_name="demo",
        project_root="/work/demo",
        fingerprint=compute_fingerprint(sample_records),
        files=sample_records,
    )


@pytest.fixture
def make_client() -> Callable[..., QueryClient]:
    """Build a QueryClient whose requests are answered by ``handler``."""

    def _make(handler, timeout_ms: int = 2000) -> QueryClient:
        return QueryClient(
            server_url="http://backend.test",
            timeout_ms=timeout_ms,
            transport=httpx.MockTransport(handler),
        )

    return _make
