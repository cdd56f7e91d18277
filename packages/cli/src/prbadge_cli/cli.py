"""CLI entry point for prbadge.

Commands:
  tree: print a pull request's changed files with comment/draft counts
  draft: add, list and clear locally buffered draft comments
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from prbadge_cli.commands.draft import draft_cmd
from prbadge_cli.commands.tree import tree_cmd

console = Console()


def _build_sink(config: dict):
    """Instantiate the configured draft sink from .prbadge.yml settings.

    Sink selection:
      drafts: sqlite → SQLiteDraftSink (drafts_path, default .prbadge.db)
      drafts: memory → MemoryDraftSink (nothing survives the process)

    This factory lives in cli.py so neither prbadge_core nor prbadge_drafts
    know about the CLI config format.
    """
    sink_type = config.get("drafts", "sqlite")

    if sink_type == "memory":
        from prbadge_drafts.memory import MemoryDraftSink

        return MemoryDraftSink()

    if sink_type == "sqlite":
        from prbadge_drafts.sqlite import SQLiteDraftSink

        return SQLiteDraftSink(db_path=config.get("drafts_path", ".prbadge.db"))

    raise ValueError(f"Unknown drafts backend: {sink_type!r}. Choose 'sqlite' or 'memory'.")


@click.group()
@click.version_option(
    version=importlib.metadata.version("prbadge"),
    prog_name="prbadge",
)
@click.option(
    "--config",
    "config_path",
    default=".prbadge.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRBADGE_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output (API calls, cache activity).")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Review comment and draft counts for GitHub pull request files."""
    from prbadge_core.config import load_config
    from prbadge_cli.auth import resolve_github_token

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(console=console)])

    ctx.ensure_object(dict)

    config = load_config(config_path)

    # Resolve token early so all subcommands share the same resolution.
    token = resolve_github_token()
    if token:
        config["github_token"] = token

    try:
        sink = _build_sink(config)
    except ValueError as e:
        raise click.UsageError(str(e))
    ctx.obj["sink"] = sink
    ctx.obj["config"] = config
    ctx.call_on_close(sink.close)


main.add_command(tree_cmd)
main.add_command(draft_cmd)
