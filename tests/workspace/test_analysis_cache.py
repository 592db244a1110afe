"""Tests for the per-root Analysis cache."""

import threading
from dataclasses import replace

from snippetrag.workspace.cache import (
    AnalysisCache,
    get_analysis_cache,
    reset_analysis_cache,
    root_key,
)


class TestAnalysisCache:
    def test_get_after_put_returns_same_object(self, sample_analysis) -> None:
        cache = AnalysisCache()
        cache.put("root-a", sample_analysis)
        assert cache.get("root-a") is sample_analysis
        assert cache.get("root-a") is sample_analysis

    def test_miss_returns_none(self) -> None:
        assert AnalysisCache().get("nowhere") is None

    def test_invalidate_removes_only_that_root(self, sample_analysis) -> None:
        cache = AnalysisCache()
        other = replace(sample_analysis, project_name="other")
        cache.put("root-a", sample_analysis)
        cache.put("root-b", other)

        assert cache.invalidate("root-a") is True

        assert cache.get("root-a") is None
        assert cache.get("root-b") is other
        assert cache.invalidate("root-a") is False

    def test_clear_removes_everything(self, sample_analysis) -> None:
        cache = AnalysisCache()
        cache.put("root-a", sample_analysis)
        cache.put("root-b", sample_analysis)

        cache.clear()

        assert len(cache) == 0
        assert cache.get("root-a") is None

    def test_one_entry_per_root_last_write_wins(self, sample_analysis) -> None:
        cache = AnalysisCache()
        newer = replace(sample_analysis, fingerprint="f" * 64)
        cache.put("root-a", sample_analysis)
        cache.put("root-a", newer)

        assert len(cache) == 1
        assert cache.get("root-a") is newer

    def test_concurrent_puts_for_distinct_roots(self, sample_analysis) -> None:
        cache = AnalysisCache()
        keys = [f"root-{i}" for i in range(32)]

        threads = [
            threading.Thread(target=cache.put, args=(key, sample_analysis)) for key in keys
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(cache.keys()) == sorted(keys)


class TestRootKey:
    def test_equivalent_spellings_share_a_key(self, tmp_path) -> None:
        (tmp_path / "proj").mkdir()
        assert root_key(tmp_path / "proj") == root_key(f"{tmp_path}/proj/../proj")

    def test_distinct_roots_distinct_keys(self, tmp_path) -> None:
        assert root_key(tmp_path / "a") != root_key(tmp_path / "b")


class TestProcessWideCache:
    def test_singleton_until_reset(self, sample_analysis) -> None:
        first = get_analysis_cache()
        first.put("k", sample_analysis)
        assert get_analysis_cache() is first

        reset_analysis_cache()

        second = get_analysis_cache()
        assert second is not first
        assert second.get("k") is None
