"""Abstract draft sink interface.

Decorators and CLI commands depend on DraftSink, not on a concrete backend,
so the in-memory and SQLite sinks are interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prbadge_drafts.models import DraftComment


class DraftSink(ABC):
    """Buffer of draft comments keyed by change id and revision."""

    @abstractmethod
    def add_comment(self, draft: DraftComment) -> None:
        """Buffer a draft under its change id and revision."""

    @abstractmethod
    def remove_comment(self, draft: DraftComment) -> None:
        """Drop a single draft. Unknown drafts are ignored."""

    @abstractmethod
    def get_comments_for_change(self, change_id: str, revision_id: str) -> list[DraftComment]:
        """Return drafts for a change revision in insertion order.

        Returns an empty list if there are none. Backend errors (e.g. a corrupt
        database file) propagate.
        """

    @abstractmethod
    def remove_comments_for_change(self, change_id: str, revision_id: str) -> None:
        """Drop every draft for a change revision, e.g. after the review is posted."""

    def close(self) -> None:
        """Release any resources held by the sink (connections, file handles).

        Default is a no-op so callers can always call close() safely.
        """
