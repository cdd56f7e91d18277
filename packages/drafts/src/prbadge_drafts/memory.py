"""In-memory draft sink: drafts live as long as the process."""

from __future__ import annotations

from typing import TYPE_CHECKING

from prbadge_drafts.base import DraftSink

if TYPE_CHECKING:
    from prbadge_drafts.models import DraftComment


class MemoryDraftSink(DraftSink):
    """Keeps drafts in a dict keyed by (change_id, revision_id).

    Suited to embedding hosts that submit drafts in the same session. The
    CLI refuses to manage drafts with this sink since nothing would survive
    the command.
    """

    def __init__(self):
        self._drafts: dict[tuple[str, str], list[DraftComment]] = {}

    def add_comment(self, draft: DraftComment) -> None:
        self._drafts.setdefault((draft.change_id, draft.revision_id), []).append(draft)

    def remove_comment(self, draft: DraftComment) -> None:
        drafts = self._drafts.get((draft.change_id, draft.revision_id), [])
        if draft in drafts:
            drafts.remove(draft)

    def get_comments_for_change(self, change_id: str, revision_id: str) -> list[DraftComment]:
        return list(self._drafts.get((change_id, revision_id), []))

    def remove_comments_for_change(self, change_id: str, revision_id: str) -> None:
        self._drafts.pop((change_id, revision_id), None)
