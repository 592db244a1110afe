"""Main CLI entry point.

    snippetrag analyze .                   # inventory + fingerprint
    snippetrag ask "where is auth handled" --file src/app.py --lines 10-20
    snippetrag health                      # is the backend up?
    snippetrag config show
"""

from __future__ import annotations

import asyncio
import json
import sys

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from snippetrag.cli.config_cmd import config
from snippetrag.context.editor import EditorContext, LineRange
from snippetrag.foundation.config import SnippetRagConfig, load_config
from snippetrag.foundation.errors import SnippetRagError
from snippetrag.foundation.logging import configure_logging
from snippetrag.render import NO_WORKSPACE_MESSAGE
from snippetrag.session import SnippetSession

console = Console()
# Warnings go to stderr so --json output stays parseable
stderr_console = Console(stderr=True)


def _session(ctx: click.Context) -> SnippetSession:
    return SnippetSession(config=ctx.obj["config"])


@click.group()
@click.option("--debug", is_flag=True, help="Enable DEBUG logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (default: .snippetrag/config.yaml)",
)
@click.version_option(version="0.1.0")
@click.pass_context
def main(ctx: click.Context, debug: bool, config_path: str | None) -> None:
    """SnippetRAG - find relevant code snippets in your project.

    \b
    Analyzes the project, sends your question plus the project inventory to
    the retrieval backend, and prints the ranked snippets.
    """
    ctx.ensure_object(dict)
    try:
        cfg = load_config(config_path)
    except SnippetRagError as e:
        stderr_console.print(f"[red]{e}[/red]")
        for hint in e.recovery_hints:
            stderr_console.print(f"  [dim]- {hint}[/dim]")
        ctx.exit(1)
        return
    configure_logging(debug=debug or cfg.debug)
    ctx.obj["config"] = cfg


@main.command("analyze")
@click.argument("root", type=click.Path(), default=".")
@click.option("--rebuild", is_flag=True, help="Discard any cached analysis first")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def analyze_cmd(ctx: click.Context, root: str, rebuild: bool, json_output: bool) -> None:
    """Analyze a project root and show its inventory summary."""
    session = _session(ctx)
    analysis = session.rebuild(root) if rebuild else session.ensure_analysis(root)

    if analysis is None:
        stderr_console.print(NO_WORKSPACE_MESSAGE)
        sys.exit(1)

    if json_output:
        data = analysis.to_dict()
        data["sampledCount"] = analysis.sampled_count
        for entry in data["files"]:
            entry.pop("sample", None)
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(show_header=False, title="Workspace Analysis")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Workspace", analysis.project_name)
    table.add_row("Root", analysis.project_root)
    table.add_row("Fingerprint", analysis.fingerprint)
    table.add_row("Files", str(analysis.file_count))
    table.add_row("Files with samples", str(analysis.sampled_count))
    console.print(table)


def _resolve_editor(
    editor_context: str | None,
    active_file: str | None,
    lines: str | None,
) -> EditorContext | None:
    if editor_context:
        try:
            return EditorContext.from_file(editor_context)
        except (OSError, ValueError, TypeError) as e:
            raise click.BadParameter(str(e), param_hint="--editor-context") from e

    if active_file or lines:
        selection = None
        if lines:
            try:
                selection = LineRange.parse(lines)
            except ValueError as e:
                raise click.BadParameter(str(e), param_hint="--lines") from e
        return EditorContext(active_file=active_file, selection=selection)

    return EditorContext.from_env()


@main.command("ask")
@click.argument("question")
@click.option("--root", type=click.Path(), default=".", help="Project root to analyze")
@click.option("--file", "active_file", default=None, help="Active file (project-relative)")
@click.option("--lines", default=None, help="Selected lines in the active file, e.g. 10-24")
@click.option(
    "--editor-context",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON file with active_file/selection",
)
@click.option("--raw", is_flag=True, help="Print Markdown source instead of rendering it")
@click.pass_context
def ask_cmd(
    ctx: click.Context,
    question: str,
    root: str,
    active_file: str | None,
    lines: str | None,
    editor_context: str | None,
    raw: bool,
) -> None:
    """Ask the retrieval backend a question about the project."""
    editor = _resolve_editor(editor_context, active_file, lines)
    session = _session(ctx)
    text = asyncio.run(session.ask(question, root, editor))

    if raw:
        click.echo(text)
    else:
        console.print(Markdown(text))


@main.command("health")
@click.pass_context
def health_cmd(ctx: click.Context) -> None:
    """Check that the retrieval backend is reachable."""
    cfg: SnippetRagConfig = ctx.obj["config"]
    session = _session(ctx)
    ok = asyncio.run(session.check_connection())

    if ok:
        console.print(f"[green]✓ Connection successful to {cfg.backend.server_url}[/green]")
        return

    console.print(f"[red]✗ Connection failed to {cfg.backend.server_url}[/red]")
    console.print("[dim]Run with --debug for the failure reason.[/dim]")
    sys.exit(1)


main.add_command(config)
