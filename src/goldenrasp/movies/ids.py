"""Monotonic movie ID allocation persisted to a small JSON file.

File structure:
    {
        "_meta": {"version": 1, "updated_at": "2025-01-25T10:00:00+00:00"},
        "last_id": 206
    }

IDs are never reused: deleting a movie does not lower ``last_id``, and the
value survives restarts.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from goldenrasp.errors import IdAllocationError

logger = logging.getLogger(__name__)

ID_FILE_VERSION = 1


class IdAllocator:
    """Hand out increasing integer IDs, remembering the last one on disk."""

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the allocator.

        Args:
            path: JSON file holding the last issued ID. None keeps the
                counter in memory only.
        """
        self.path = path
        self._last_id: int | None = None

    def _load(self) -> int:
        """Read the last ID from disk (lazy loading)."""
        if self._last_id is not None:
            return self._last_id

        if self.path is None or not self.path.exists():
            self._last_id = 0
            return self._last_id

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            value = int(data.get("last_id", 0))
        except (json.JSONDecodeError, OSError, TypeError, ValueError, AttributeError):
            # Corrupted file - start fresh
            logger.warning("Ignoring unreadable ID file %s", self.path)
            value = 0

        self._last_id = max(value, 0)
        return self._last_id

    def _save(self) -> None:
        """Write the last ID to disk."""
        if self.path is None or self._last_id is None:
            return

        data = {
            "_meta": {
                "version": ID_FILE_VERSION,
                "updated_at": datetime.now(UTC).isoformat(),
            },
            "last_id": self._last_id,
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise IdAllocationError(f"Cannot write ID file {self.path}: {e}") from e

    @property
    def last_id(self) -> int:
        """The most recently issued (or synchronized) ID; 0 if none."""
        return self._load()

    def next_id(self) -> int:
        """Issue the next ID and persist it.

        Returns:
            An ID greater than every ID issued before.
        """
        self._last_id = self._load() + 1
        self._save()
        return self._last_id

    def synchronize(self, max_existing_id: int) -> int:
        """Raise the counter to at least ``max_existing_id``.

        Never lowers the stored value, so IDs handed out before a restart
        stay retired.

        Args:
            max_existing_id: Highest ID currently present in the data.

        Returns:
            The resulting last ID.
        """
        if max_existing_id < 0:
            raise IdAllocationError(f"ID cannot be negative: {max_existing_id}")
        current = self._load()
        if max_existing_id > current:
            self._last_id = max_existing_id
            self._save()
        return self._load()
