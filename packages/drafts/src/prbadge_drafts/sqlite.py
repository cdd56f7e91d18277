"""SQLiteDraftSink: local file-based draft buffer.

Drafts outlive the CLI process, so `prbadge draft add` in one run shows up
as a draft count in a later `prbadge tree`.

Schema:
  drafts: one row per buffered comment, indexed on (change_id, revision_id)
    which is the only lookup the decorators perform.
"""

from __future__ import annotations

import sqlite3

from prbadge_drafts.base import DraftSink
from prbadge_drafts.models import DraftComment

_SCHEMA = """
CREATE TABLE IF NOT EXISTS drafts (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    change_id    TEXT NOT NULL,
    revision_id  TEXT NOT NULL,
    path         TEXT NOT NULL,
    line         INTEGER DEFAULT 0,
    message      TEXT,
    created_at   TEXT
);
CREATE INDEX IF NOT EXISTS idx_drafts_change ON drafts (change_id, revision_id);
"""


class SQLiteDraftSink(DraftSink):
    """Stores drafts in a local SQLite database file.

    The database file path defaults to `.prbadge.db` in the current working
    directory. Configure via .prbadge.yml: `drafts_path: /path/to/drafts.db`.
    """

    def __init__(self, db_path: str = ".prbadge.db"):
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def add_comment(self, draft: DraftComment) -> None:
        self._conn.execute(
            """
            INSERT INTO drafts (change_id, revision_id, path, line, message, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (draft.change_id, draft.revision_id, draft.path, draft.line, draft.message, draft.created_at),
        )
        self._conn.commit()

    def remove_comment(self, draft: DraftComment) -> None:
        # Drafts carry no row id; delete the oldest identical row only.
        self._conn.execute(
            """
            DELETE FROM drafts WHERE id = (
              SELECT id FROM drafts
              WHERE change_id=? AND revision_id=? AND path=? AND line=? AND message=? AND created_at=?
              ORDER BY id LIMIT 1
            )
            """,
            (draft.change_id, draft.revision_id, draft.path, draft.line, draft.message, draft.created_at),
        )
        self._conn.commit()

    def get_comments_for_change(self, change_id: str, revision_id: str) -> list[DraftComment]:
        rows = self._conn.execute(
            "SELECT * FROM drafts WHERE change_id=? AND revision_id=? ORDER BY id",
            (change_id, revision_id),
        ).fetchall()
        return [self._row_to_draft(r) for r in rows]

    def remove_comments_for_change(self, change_id: str, revision_id: str) -> None:
        self._conn.execute("DELETE FROM drafts WHERE change_id=? AND revision_id=?", (change_id, revision_id))
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()

    @staticmethod
    def _row_to_draft(row: sqlite3.Row) -> DraftComment:
        return DraftComment(
            change_id=row["change_id"],
            revision_id=row["revision_id"],
            path=row["path"],
            line=row["line"] or 0,
            message=row["message"] or "",
            created_at=row["created_at"] or "",
        )
