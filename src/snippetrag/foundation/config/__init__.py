"""Configuration management for SnippetRAG."""

from snippetrag.foundation.config.loader import (
    get_config,
    load_config,
    reset_config,
)
from snippetrag.foundation.config.types import (
    AnalysisConfig,
    BackendConfig,
    SnippetRagConfig,
)

__all__ = [
    "AnalysisConfig",
    "BackendConfig",
    "SnippetRagConfig",
    "get_config",
    "load_config",
    "reset_config",
]
