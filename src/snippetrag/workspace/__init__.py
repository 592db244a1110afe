"""Workspace analysis: classification, fingerprinting, analysis and caching."""

from snippetrag.workspace.analyzer import EXCLUDED_DIRS, WorkspaceAnalyzer, analyze
from snippetrag.workspace.cache import (
    AnalysisCache,
    get_analysis_cache,
    reset_analysis_cache,
    root_key,
)
from snippetrag.workspace.classifier import (
    is_sample_eligible,
    is_sensitive,
    language_id_for,
)
from snippetrag.workspace.fingerprint import compute_fingerprint
from snippetrag.workspace.types import Analysis, FileRecord

__all__ = [
    "EXCLUDED_DIRS",
    "Analysis",
    "AnalysisCache",
    "FileRecord",
    "WorkspaceAnalyzer",
    "analyze",
    "compute_fingerprint",
    "get_analysis_cache",
    "is_sample_eligible",
    "is_sensitive",
    "language_id_for",
    "reset_analysis_cache",
    "root_key",
]
