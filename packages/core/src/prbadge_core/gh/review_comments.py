"""Remote review comments for a pull request revision."""

from __future__ import annotations

import logging

from github import GithubException
from requests.exceptions import RequestException

logger = logging.getLogger(__name__)


class RemoteApiError(Exception):
    """The GitHub API could not return review comments (HTTP, network or protocol failure)."""


class ReviewCommentApi:
    """Fetches inline review comments grouped by file path.

    Only comments anchored on the requested revision are returned: GitHub
    moves a comment's commit_id forward while its line still exists in the
    diff, so comments left on outdated code are excluded.
    """

    def __init__(self, repo):
        self._repo = repo

    def fetch_comments(self, change_id: str, revision_id: str) -> dict[str, list]:
        logger.debug("Fetching review comments for #%s at %s", change_id, revision_id[:7])
        try:
            pr = self._repo.get_pull(int(change_id))
            comments = [c for c in pr.get_review_comments() if c.commit_id == revision_id]
        except (GithubException, RequestException) as e:
            raise RemoteApiError(f"Could not fetch review comments for #{change_id} ({type(e).__name__}: {e})") from e

        grouped: dict[str, list] = {}
        for c in comments:
            grouped.setdefault(c.path, []).append(c)
        logger.debug("Fetched %d comment(s) across %d file(s)", len(comments), len(grouped))
        return grouped
