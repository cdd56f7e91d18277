"""Tests for prbadge-drafts sink implementations."""

from __future__ import annotations

import sqlite3

import pytest

from prbadge_drafts.memory import MemoryDraftSink
from prbadge_drafts.models import DraftComment
from prbadge_drafts.sqlite import SQLiteDraftSink


def _make_draft(change_id="1", revision_id="a" * 40, path="src/auth.py", line=42, message="Missing null check"):
    return DraftComment(change_id=change_id, revision_id=revision_id, path=path, line=line, message=message)


@pytest.fixture(params=["memory", "sqlite"])
def sink(request, tmp_path):
    if request.param == "memory":
        s = MemoryDraftSink()
    else:
        s = SQLiteDraftSink(db_path=str(tmp_path / "drafts.db"))
    yield s
    s.close()


# ---------------------------------------------------------------------------
# Behaviour shared by every sink
# ---------------------------------------------------------------------------


class TestDraftSinkContract:
    def test_add_and_get(self, sink):
        sink.add_comment(_make_draft())
        drafts = sink.get_comments_for_change("1", "a" * 40)
        assert len(drafts) == 1
        assert drafts[0].path == "src/auth.py"
        assert drafts[0].line == 42
        assert drafts[0].message == "Missing null check"

    def test_unknown_change_returns_empty_list(self, sink):
        assert sink.get_comments_for_change("999", "f" * 40) == []

    def test_keyed_by_revision(self, sink):
        sink.add_comment(_make_draft(revision_id="a" * 40))
        sink.add_comment(_make_draft(revision_id="b" * 40))
        assert len(sink.get_comments_for_change("1", "a" * 40)) == 1

    def test_keyed_by_change(self, sink):
        sink.add_comment(_make_draft(change_id="1"))
        sink.add_comment(_make_draft(change_id="2"))
        assert [d.change_id for d in sink.get_comments_for_change("2", "a" * 40)] == ["2"]

    def test_insertion_order_preserved(self, sink):
        for line in (3, 1, 2):
            sink.add_comment(_make_draft(line=line))
        assert [d.line for d in sink.get_comments_for_change("1", "a" * 40)] == [3, 1, 2]

    def test_remove_comment(self, sink):
        keep, drop = _make_draft(line=1), _make_draft(line=2)
        sink.add_comment(keep)
        sink.add_comment(drop)
        sink.remove_comment(drop)
        assert [d.line for d in sink.get_comments_for_change("1", "a" * 40)] == [1]

    def test_remove_unknown_comment_is_ignored(self, sink):
        sink.add_comment(_make_draft(line=1))
        sink.remove_comment(_make_draft(line=99))
        assert len(sink.get_comments_for_change("1", "a" * 40)) == 1

    def test_remove_comments_for_change(self, sink):
        sink.add_comment(_make_draft(line=1))
        sink.add_comment(_make_draft(line=2))
        sink.add_comment(_make_draft(change_id="2"))
        sink.remove_comments_for_change("1", "a" * 40)
        assert sink.get_comments_for_change("1", "a" * 40) == []
        assert len(sink.get_comments_for_change("2", "a" * 40)) == 1

    def test_returned_list_is_a_copy(self, sink):
        sink.add_comment(_make_draft())
        sink.get_comments_for_change("1", "a" * 40).clear()
        assert len(sink.get_comments_for_change("1", "a" * 40)) == 1


# ---------------------------------------------------------------------------
# SQLiteDraftSink
# ---------------------------------------------------------------------------


class TestSQLiteDraftSink:
    def test_persists_across_connections(self, tmp_path):
        """Drafts written by one SQLiteDraftSink instance must be readable by another."""
        db_path = str(tmp_path / "drafts.db")
        sink_a = SQLiteDraftSink(db_path=db_path)
        sink_a.add_comment(_make_draft())
        sink_a.close()

        sink_b = SQLiteDraftSink(db_path=db_path)
        drafts = sink_b.get_comments_for_change("1", "a" * 40)
        assert len(drafts) == 1
        assert drafts[0].created_at
        sink_b.close()

    def test_remove_comment_drops_only_one_duplicate(self, tmp_path):
        sink = SQLiteDraftSink(db_path=str(tmp_path / "drafts.db"))
        draft = _make_draft()
        sink.add_comment(draft)
        sink.add_comment(draft)
        sink.remove_comment(draft)
        assert len(sink.get_comments_for_change("1", "a" * 40)) == 1
        sink.close()

    def test_created_at_roundtrip(self, tmp_path):
        sink = SQLiteDraftSink(db_path=str(tmp_path / "drafts.db"))
        draft = _make_draft()
        sink.add_comment(draft)
        assert sink.get_comments_for_change("1", "a" * 40)[0] == draft
        sink.close()

    def test_corrupt_database_raises(self, tmp_path):
        db_path = tmp_path / "drafts.db"
        sink = SQLiteDraftSink(db_path=str(db_path))
        sink.add_comment(_make_draft())
        sink._conn.execute("DROP TABLE drafts")

        with pytest.raises(sqlite3.Error):
            sink.get_comments_for_change("1", "a" * 40)
        sink.close()


# ---------------------------------------------------------------------------
# MemoryDraftSink
# ---------------------------------------------------------------------------


class TestMemoryDraftSink:
    def test_close_is_safe(self):
        sink = MemoryDraftSink()
        sink.close()
        sink.close()

    def test_returns_same_draft_objects(self):
        sink = MemoryDraftSink()
        draft = _make_draft()
        sink.add_comment(draft)
        assert sink.get_comments_for_change("1", "a" * 40)[0] is draft
