"""Draft comment model.

Decoupled from prbadge_core so the draft sink can be used on its own and
the decorators only depend on the ``path`` attribute.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class DraftComment:
    """An inline comment buffered locally until the review is submitted."""

    change_id: str
    revision_id: str
    path: str  # repository-relative, same form as GitHub comment paths
    line: int
    message: str
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
