"""Unit tests for purge list file I/O."""

import json
from pathlib import Path

from wpslim.purge.listing import read_purge_list, write_purge_list, write_summary
from wpslim.purge.models import PurgeSummary


class TestWritePurgeList:
    """Tests for write_purge_list function."""

    def test_one_path_per_line(self, tmp_path: Path) -> None:
        """Each path ends with a newline."""
        target = tmp_path / "images_to_purge.txt"

        result = write_purge_list(["a-150x150.jpg", "2024/b.jpg"], target)

        assert result == target
        assert target.read_text() == "a-150x150.jpg\n2024/b.jpg\n"

    def test_empty_list_writes_empty_file(self, tmp_path: Path) -> None:
        """An empty purge list is an empty file."""
        target = tmp_path / "purge.txt"

        write_purge_list([], target)

        assert target.read_text() == ""

    def test_replaces_existing_file(self, tmp_path: Path) -> None:
        """A previous list is overwritten and no temp files remain."""
        target = tmp_path / "purge.txt"
        target.write_text("old.jpg\n")

        write_purge_list(["new.jpg"], target)

        assert target.read_text() == "new.jpg\n"
        assert list(tmp_path.glob("*.tmp")) == []

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Missing parent directories are created."""
        target = tmp_path / "out" / "purge.txt"

        write_purge_list(["a.jpg"], target)

        assert target.exists()


class TestReadPurgeList:
    """Tests for read_purge_list function."""

    def test_reads_written_list(self, tmp_path: Path) -> None:
        """A written list reads back in order."""
        target = write_purge_list(["b.jpg", "a.jpg"], tmp_path / "purge.txt")

        assert read_purge_list(target) == ["b.jpg", "a.jpg"]

    def test_ignores_blank_lines(self, tmp_path: Path) -> None:
        """Blank lines from hand editing are skipped."""
        target = tmp_path / "purge.txt"
        target.write_text("a.jpg\n\n   \nb.jpg\n")

        assert read_purge_list(target) == ["a.jpg", "b.jpg"]


def test_write_summary_exports_json(tmp_path: Path) -> None:
    """The summary is written as a JSON object."""
    target = write_summary(PurgeSummary.from_counts(4, 3), tmp_path / "summary.json")

    assert json.loads(target.read_text()) == {
        "total_images": 4,
        "kept_images": 1,
        "purgeable_images": 3,
        "kept_percentage": "25.00",
    }
