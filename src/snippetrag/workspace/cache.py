"""In-memory Analysis cache, one entry per project root.

Lifecycle:
    The process-wide cache returned by :func:`get_analysis_cache` starts empty
    on first use. Entries leave only through ``invalidate`` (explicit rebuild)
    or ``clear`` (project-root set changed, shutdown). There is no TTL and no
    size-based eviction.

Thread Safety:
    Reads and writes go through a lock. Concurrent ``put`` calls for the same
    root are last-write-wins; different roots never share an entry.
"""

import threading
from pathlib import Path

from snippetrag.workspace.types import Analysis


def root_key(root: str | Path) -> str:
    """Stable identifier for a project root (canonical absolute path)."""
    return str(Path(root).expanduser().resolve())


class AnalysisCache:
    """Maps root keys to the most recent Analysis for that root.

    ``get`` never triggers analysis; on a miss the caller runs the analyzer
    and stores the result with ``put``.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Analysis] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Analysis | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, analysis: Analysis) -> None:
        with self._lock:
            self._entries[key] = analysis

    def invalidate(self, key: str) -> bool:
        """Drop the entry for ``key``. Returns whether one existed."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_cache: AnalysisCache | None = None
_cache_lock = threading.Lock()


def get_analysis_cache() -> AnalysisCache:
    """Get the process-wide cache, creating it on first use."""
    global _cache
    if _cache is not None:
        return _cache
    with _cache_lock:
        if _cache is None:
            _cache = AnalysisCache()
        return _cache


def reset_analysis_cache() -> None:
    """Discard the process-wide cache (teardown and tests)."""
    global _cache
    with _cache_lock:
        if _cache is not None:
            _cache.clear()
        _cache = None
