"""Tests for the movie ID allocator."""

import json
from pathlib import Path

import pytest

from goldenrasp.errors import IdAllocationError
from goldenrasp.movies import IdAllocator


class TestIdAllocator:
    """Tests for IdAllocator."""

    def test_in_memory(self) -> None:
        """Test IDs increase from 1 without a file."""
        ids = IdAllocator()
        assert ids.last_id == 0
        assert [ids.next_id(), ids.next_id(), ids.next_id()] == [1, 2, 3]

    def test_persists_between_instances(self, tmp_path: Path) -> None:
        """Test the last ID survives a restart."""
        path = tmp_path / "ids.json"
        IdAllocator(path).next_id()
        IdAllocator(path).next_id()

        assert IdAllocator(path).last_id == 2
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["last_id"] == 2
        assert data["_meta"]["version"] == 1

    def test_synchronize_raises_counter(self) -> None:
        """Test synchronizing moves past existing IDs."""
        ids = IdAllocator()
        assert ids.synchronize(206) == 206
        assert ids.next_id() == 207

    def test_synchronize_never_lowers(self, tmp_path: Path) -> None:
        """Test IDs handed out earlier stay retired."""
        ids = IdAllocator(tmp_path / "ids.json")
        ids.synchronize(10)
        assert ids.synchronize(3) == 10
        assert ids.next_id() == 11

    def test_negative_synchronize_rejected(self) -> None:
        """Test negative IDs are refused."""
        ids = IdAllocator()
        with pytest.raises(IdAllocationError):
            ids.synchronize(-1)
        assert ids.last_id == 0

    def test_corrupted_file_starts_fresh(self, tmp_path: Path) -> None:
        """Test an unreadable file is treated as empty."""
        path = tmp_path / "ids.json"
        path.write_text("not json", encoding="utf-8")
        ids = IdAllocator(path)
        assert ids.last_id == 0
        assert ids.next_id() == 1
