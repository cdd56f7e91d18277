"""draft commands: manage locally buffered draft comments."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from prbadge_cli.commands.common import open_pull
from prbadge_drafts.models import DraftComment

console = Console()


def _require_persistent_sink(ctx):
    from prbadge_drafts.memory import MemoryDraftSink

    sink = ctx.obj.get("sink") if ctx.obj else None
    if sink is None or isinstance(sink, MemoryDraftSink):
        raise click.UsageError(
            "Drafts are kept in memory only. Set 'drafts: sqlite' in .prbadge.yml to manage drafts from the CLI."
        )
    return sink


def _resolve_revision(ctx, repo: str, pr_number: int, revision: str | None) -> str:
    """Use --revision when given, otherwise the PR's current head SHA."""
    if revision:
        return revision
    _, this_pr = open_pull(ctx.obj["config"], repo, pr_number)
    return this_pr.head.sha


@click.group("draft")
def draft_cmd():
    """Add, list and clear draft comments buffered for a pull request."""


@draft_cmd.command("add")
@click.option("--repo", required=True, help="GitHub repository (owner/name).")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option("--file", "path", required=True, help="Repository-relative file path.")
@click.option("--line", type=int, required=True, help="Line number in the new version of the file.")
@click.option("--message", "-m", required=True, help="Comment text.")
@click.option("--revision", default=None, help="Commit SHA the draft applies to. Defaults to the PR head.")
@click.pass_context
def draft_add_cmd(ctx, repo: str, pr_number: int, path: str, line: int, message: str, revision: str | None):
    """Buffer a draft comment on a file of a pull request."""
    sink = _require_persistent_sink(ctx)
    revision = _resolve_revision(ctx, repo, pr_number, revision)
    sink.add_comment(
        DraftComment(change_id=str(pr_number), revision_id=revision, path=path, line=line, message=message)
    )
    console.print(f"[green]Draft added to {repo}#{pr_number} {path}:{line} @ {revision[:7]}[/green]")


@draft_cmd.command("list")
@click.option("--repo", required=True, help="GitHub repository (owner/name).")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option("--revision", default=None, help="Commit SHA. Defaults to the PR head.")
@click.pass_context
def draft_list_cmd(ctx, repo: str, pr_number: int, revision: str | None):
    """Show draft comments buffered for a pull request revision."""
    sink = _require_persistent_sink(ctx)
    revision = _resolve_revision(ctx, repo, pr_number, revision)

    drafts = sink.get_comments_for_change(str(pr_number), revision)
    if not drafts:
        console.print("[yellow]No drafts found.[/yellow]")
        return

    table = Table(title=f"Drafts: {repo}#{pr_number} @ {revision[:7]}", show_header=True, header_style="bold cyan")
    table.add_column("File")
    table.add_column("Line", justify="right", width=6)
    table.add_column("Message", max_width=60)
    table.add_column("Created At", width=20)
    for d in drafts:
        table.add_row(d.path, str(d.line), d.message, d.created_at[:19].replace("T", " "))
    console.print(table)


@draft_cmd.command("clear")
@click.option("--repo", required=True, help="GitHub repository (owner/name).")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option("--revision", default=None, help="Commit SHA. Defaults to the PR head.")
@click.pass_context
def draft_clear_cmd(ctx, repo: str, pr_number: int, revision: str | None):
    """Discard every draft buffered for a pull request revision."""
    sink = _require_persistent_sink(ctx)
    revision = _resolve_revision(ctx, repo, pr_number, revision)

    count = len(sink.get_comments_for_change(str(pr_number), revision))
    sink.remove_comments_for_change(str(pr_number), revision)
    console.print(f"Removed {count} draft(s).")
