"""Per-selection memoization of remote review comments.

A tree of changed files is decorated node by node, and every node needs the
same comment listing. SelectionCache fetches that listing once per selected
change and hands the same frozen mapping to every caller until the
selection changes.

Lifecycle per selection:

    UNFETCHED → FETCHING → FETCHED          (kept until the next on_select)
    UNFETCHED → FETCHING → FAILED → FETCHING (failures are never memoized)

on_select() returns to UNFETCHED from any state.
"""

from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prbadge_core.models import Change

logger = logging.getLogger(__name__)

CommentsByPath = Mapping[str, Sequence]


class FetchState(enum.Enum):
    UNFETCHED = "unfetched"
    FETCHING = "fetching"
    FETCHED = "fetched"
    FAILED = "failed"


class _Attempt:
    """One fetch in progress; waiters block on ``done``."""

    def __init__(self):
        self.done = threading.Event()
        self.result: CommentsByPath | None = None
        self.error: BaseException | None = None


class SelectionCache:
    def __init__(self, fetch_comments: Callable[[str, str], Mapping[str, Sequence]]):
        self._fetch_comments = fetch_comments
        self._lock = threading.Lock()
        self._change: Change | None = None
        self._comments: CommentsByPath | None = None
        self._attempt: _Attempt | None = None
        self._failed = False

    @property
    def selected_change(self) -> Change | None:
        return self._change

    @property
    def state(self) -> FetchState:
        with self._lock:
            if self._comments is not None:
                return FetchState.FETCHED
            if self._attempt is not None:
                return FetchState.FETCHING
            if self._failed:
                return FetchState.FAILED
            return FetchState.UNFETCHED

    def on_select(self, change: Change) -> None:
        """Select ``change`` and drop whatever was cached for the previous one.

        Always invalidates, even when ``change`` equals the current selection.
        """
        with self._lock:
            self._change = change
            self._comments = None
            self._attempt = None
            self._failed = False
        logger.debug("Selected change #%s at %s; comment cache reset", change.id, change.current_revision[:7])

    def get_comments(self) -> CommentsByPath:
        """Return path → comments for the selected change's current revision.

        The first call after on_select() performs the fetch and blocks until
        it completes. Concurrent callers during that fetch wait for it and
        receive the same mapping or the same exception. Exceptions from the
        fetch propagate unchanged and leave the cache empty, so the next call
        fetches again.
        """
        with self._lock:
            if self._comments is not None:
                return self._comments
            if self._change is None:
                raise ValueError("No change selected.")
            attempt = self._attempt
            if attempt is None:
                attempt = self._attempt = _Attempt()
                change = self._change
                owner = True
            else:
                owner = False

        if not owner:
            attempt.done.wait()
            if attempt.error is not None:
                raise attempt.error
            return attempt.result

        try:
            fetched = self._fetch_comments(change.id, change.current_revision)
        except BaseException as e:
            # KeyboardInterrupt and friends too: waiters must never block on an abandoned attempt.
            attempt.error = e
            with self._lock:
                if self._attempt is attempt:
                    self._attempt = None
                    self._failed = True
            attempt.done.set()
            raise

        comments = MappingProxyType({path: tuple(items) for path, items in fetched.items()})
        attempt.result = comments
        with self._lock:
            if self._attempt is attempt:
                self._attempt = None
                self._comments = comments
            else:
                logger.debug("Discarding comments for #%s: selection changed during fetch", change.id)
        attempt.done.set()
        return comments
