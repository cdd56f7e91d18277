"""Review-unit data models shared by the selection cache and decorators.

Kept free of PyGithub types so decorators can be driven by any host; the
GitHub adapters in prbadge_core.gh build these from API objects.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Change:
    """A selected pull request, snapshotted at selection time."""

    id: str  # PR number as a string; stable across pushes
    current_revision: str  # head commit SHA
    project: str  # "owner/name"


@dataclass(frozen=True)
class FileChangeEntry:
    """A file modification in the local working-copy diff.

    after_path is None for deleted files, before_path is None for added files.
    An entry with neither set cannot be annotated.
    """

    after_path: str | None = None
    before_path: str | None = None
