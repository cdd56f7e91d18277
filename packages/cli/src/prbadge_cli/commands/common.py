"""Helpers shared by commands that talk to GitHub."""

from __future__ import annotations

import click
from github import GithubException

from prbadge_core.gh.pull_request import get_pull, get_repo


def require_token(config: dict) -> str:
    token = config.get("github_token")
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    return token


def open_pull(config: dict, repo: str, pr_number: int):
    """Return (repo_obj, pr) or fail the command with a readable message."""
    token = require_token(config)
    try:
        this_repo = get_repo(repo, token=token)
        return this_repo, get_pull(this_repo, pr_number)
    except GithubException as e:
        raise click.ClickException(f"PR #{pr_number} not found in {repo} ({e.status}).")
