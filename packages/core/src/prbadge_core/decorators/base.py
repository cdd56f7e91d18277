"""Abstract file-node decorator interface.

A UI host keeps a list of decorators and calls each of them for every file
node it renders. Selection events are broadcast to all decorators so each
can reset whatever it caches per pull request.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prbadge_core.models import Change, FileChangeEntry


class ChangeNodeDecorator(ABC):
    @abstractmethod
    def decorate(self, project: str | Path, entry: FileChangeEntry, change: Change) -> str:
        """Return suffix text for the node, or "" when there is nothing to show.

        ``project`` is the local working-copy root the entry's paths live under.
        """

    @abstractmethod
    def on_change_selected(self, project: str | Path, change: Change) -> None:
        """Called by the host whenever a (possibly identical) change is selected."""
