"""Config command - inspect SnippetRAG configuration."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel

from snippetrag.foundation.config import SnippetRagConfig

console = Console()


@click.group("config")
def config() -> None:
    """Inspect SnippetRAG configuration.

    \b
    Configuration is loaded from (in priority order):
    1. Environment variables (SNIPPETRAG_*)
    2. --config PATH
    3. .snippetrag/config.yaml (project-local)
    4. ~/.snippetrag/config.yaml (user-global)
    5. Built-in defaults
    """


@config.command("show")
@click.pass_context
def show(ctx: click.Context) -> None:
    """Show the effective configuration."""
    cfg: SnippetRagConfig = ctx.obj["config"]

    console.print(Panel("[bold]SnippetRAG Configuration[/bold]", border_style="cyan"))

    console.print("\n[cyan]Backend[/cyan]")
    console.print(f"  Server URL: {cfg.backend.server_url}")
    console.print(f"  Request timeout: {cfg.backend.request_timeout_ms}ms")

    console.print("\n[cyan]Analysis[/cyan]")
    console.print(f"  Max files: {cfg.analysis.max_files}")
    console.print(f"  Max bytes per file: {cfg.analysis.max_bytes_per_file}")
    console.print(f"  Sample ceiling: {cfg.analysis.sample_ceiling_bytes} bytes")

    console.print(f"\n[cyan]Debug[/cyan]: {cfg.debug}")

    console.print("\n[dim]Config sources:[/dim]")
    for candidate in (
        Path(".snippetrag/config.yaml"),
        Path.home() / ".snippetrag" / "config.yaml",
    ):
        if candidate.exists():
            console.print(f"  [green]✓[/green] {candidate}")
        else:
            console.print(f"  [dim]○[/dim] {candidate} (not found)")
