"""Comment/draft count suffix for changed-file nodes.

Renders e.g. ``"3 comments, 1 draft"`` next to a file: remote review comments
come from the SelectionCache (one GitHub round trip per selected PR), drafts
come from the local draft sink. The draft sink is duck-typed so prbadge_core
carries no dependency on prbadge_drafts.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from prbadge_core.decorators.base import ChangeNodeDecorator
from prbadge_core.selection import SelectionCache

if TYPE_CHECKING:
    from prbadge_core.models import Change, FileChangeEntry
    from prbadge_core.utils.paths import PathResolver

SUFFIX_SEPARATOR = ", "


def affected_file_path(entry: FileChangeEntry) -> str | None:
    """The path a node is annotated by: the new path, or the old one for deletions."""
    if entry.after_path is not None:
        return entry.after_path
    if entry.before_path is not None:
        return entry.before_path
    return None


def drafts_for_file(drafts: Iterable, file_name: str) -> list:
    return [d for d in drafts if d.path == file_name]


def _count_clause(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def node_suffix(comments: Sequence, drafts: Sequence) -> str:
    """Join the comment and draft clauses, in that order, skipping empty ones."""
    parts = []
    if comments:
        parts.append(_count_clause(len(comments), "comment"))
    if drafts:
        parts.append(_count_clause(len(drafts), "draft"))
    return SUFFIX_SEPARATOR.join(parts)


class CommentCountDecorator(ChangeNodeDecorator):
    """Annotates file nodes with remote comment and local draft counts.

    Collaborators:
      comments_api: anything with ``fetch_comments(change_id, revision_id)``
        (normally prbadge_core.gh.review_comments.ReviewCommentApi)
      draft_sink: anything with ``get_comments_for_change(change_id, revision_id)``
      path_resolver: PathResolver mapping local paths to GitHub paths
    """

    def __init__(self, comments_api, draft_sink, path_resolver: PathResolver):
        self._draft_sink = draft_sink
        self._path_resolver = path_resolver
        self._cache = SelectionCache(comments_api.fetch_comments)

    @property
    def cache(self) -> SelectionCache:
        return self._cache

    def on_change_selected(self, project: str | Path, change: Change) -> None:
        self._cache.on_select(change)

    def decorate(self, project: str | Path, entry: FileChangeEntry, change: Change) -> str:
        """Return the suffix for ``entry``; RemoteApiError from the first fetch propagates."""
        affected = affected_file_path(entry)
        if affected is None:
            return ""

        file_name = self._path_resolver.get_relative_or_absolute_path(project, affected, change.project)
        comments = self._cache.get_comments().get(file_name, ())
        return node_suffix(comments, self._drafts(file_name, change))

    def draft_suffix(self, project: str | Path, entry: FileChangeEntry, change: Change) -> str:
        """Drafts-only suffix, for hosts whose comment fetch failed. Never touches the remote API."""
        affected = affected_file_path(entry)
        if affected is None:
            return ""

        file_name = self._path_resolver.get_relative_or_absolute_path(project, affected, change.project)
        return node_suffix((), self._drafts(file_name, change))

    def _drafts(self, file_name: str, change: Change) -> list:
        return drafts_for_file(
            self._draft_sink.get_comments_for_change(change.id, change.current_revision),
            file_name,
        )
