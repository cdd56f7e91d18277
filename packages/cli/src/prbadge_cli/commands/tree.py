"""tree command: changed files of a pull request with comment/draft counts."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from prbadge_cli.commands.common import open_pull
from prbadge_core.decorators.comment_count import CommentCountDecorator
from prbadge_core.gh.pull_request import change_from_pull, file_entries, get_diff
from prbadge_core.gh.review_comments import RemoteApiError, ReviewCommentApi
from prbadge_core.utils.paths import PathResolver

console = Console()
logger = logging.getLogger(__name__)

SUFFIX_STYLE = "italic grey50"


def node_label(file, suffix: str) -> Text:
    """File name as shown in the tree, with the decorator suffix in a muted style."""
    name = file.filename.rsplit("/", 1)[-1]
    previous = getattr(file, "previous_filename", None)
    if file.status == "removed":
        label = Text(name, style="strike red")
    elif file.status == "added":
        label = Text(name, style="green")
    elif file.status == "renamed" and previous:
        label = Text(f"{previous.rsplit('/', 1)[-1]} → {name}", style="yellow")
    else:
        label = Text(name)
    if suffix:
        label.append(f" ({suffix})", style=SUFFIX_STYLE)
    return label


def build_tree(title: str, rows: list[tuple[str, Text]]) -> Tree:
    """Nest ``(path, label)`` rows under one branch per directory."""
    tree = Tree(Text(title, style="bold"))
    branches: dict[str, Tree] = {}
    for path, label in rows:
        parts = path.split("/")
        parent = tree
        for depth in range(len(parts) - 1):
            key = "/".join(parts[: depth + 1])
            if key not in branches:
                branches[key] = parent.add(f"[bold blue]{parts[depth]}/[/bold blue]")
            parent = branches[key]
        parent.add(label)
    return tree


@click.command("tree")
@click.option("--repo", required=True, help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option(
    "--root",
    default=None,
    help="Local checkout of the repository. Defaults to the configured repositories entry or project_root.",
)
@click.pass_context
def tree_cmd(ctx, repo: str, pr_number: int, root: str | None):
    """Show the files changed by a pull request with review comment and draft counts.

    Comments are fetched once for the PR's head commit; drafts come from the
    local draft buffer (see `prbadge draft`).
    """
    config = ctx.obj["config"]
    sink = ctx.obj["sink"]

    this_repo, this_pr = open_pull(config, repo, pr_number)
    repositories = config.get("repositories") or {}
    root_path = Path(root or repositories.get(repo) or config.get("project_root", ".")).absolute()

    change = change_from_pull(this_pr, repo)
    files = sorted(get_diff(this_pr), key=lambda f: f.filename)
    entries = file_entries(files, root_path)

    decorator = CommentCountDecorator(ReviewCommentApi(this_repo), sink, PathResolver({**repositories, repo: str(root_path)}))
    decorator.on_change_selected(root_path, change)

    rows: list[tuple[str, Text]] = []
    comments_unavailable = False
    for file, entry in zip(files, entries):
        if not comments_unavailable:
            try:
                suffix = decorator.decorate(root_path, entry, change)
            except RemoteApiError as e:
                # Failures are not cached; stop here rather than refetching for every node.
                logger.warning("Comment counts unavailable for %s#%s: %s", repo, pr_number, e)
                console.print(f"[yellow]Could not load review comments: {e}[/yellow]")
                comments_unavailable = True
        if comments_unavailable:
            suffix = decorator.draft_suffix(root_path, entry, change)
        rows.append((file.filename, node_label(file, suffix)))

    title = f"{repo}#{pr_number} {this_pr.title or ''} @ {change.current_revision[:7]}"
    console.print(build_tree(title, rows))
    console.print(f"[dim]{len(files)} file(s) changed.[/dim]")
