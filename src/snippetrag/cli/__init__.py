"""Command-line interface for SnippetRAG."""

from snippetrag.cli.main import main

__all__ = ["main"]
