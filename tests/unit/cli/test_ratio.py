"""Unit tests for the ratio CLI command."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner
from wpslim.cli.main import app

runner = CliRunner()


def _flat(output: str) -> str:
    """Collapse whitespace so wrapped console lines can be matched."""
    return " ".join(output.split())


@pytest.fixture
def converted(uploads_dir: Path) -> list[Path]:
    """Create two originals with AVIF siblings and one without."""
    originals = []
    for name, original_size, avif_size in (("a.jpg", 1000, 250), ("b.png", 1000, 500)):
        original = uploads_dir / name
        original.write_bytes(b"x" * original_size)
        original.with_suffix(".avif").write_bytes(b"x" * avif_size)
        originals.append(original)
    (uploads_dir / "unconverted.jpg").write_bytes(b"x" * 100)
    return originals


class TestRatio:
    """Tests for wpslim ratio command."""

    def test_report(self, html_dir: Path, converted: list[Path]) -> None:
        """The report shows totals, distribution and top images."""
        result = runner.invoke(app, ["ratio", str(html_dir)])

        assert result.exit_code == 0
        output = _flat(result.output)
        assert "Analysis based on 2 image pairs found." in output
        assert "62.50%" in output
        assert "best 50% optimized by at least 75.00%" in output
        assert "a.jpg" in output
        assert all(p.exists() for p in converted)

    def test_top_limits_table(self, html_dir: Path, converted: list[Path]) -> None:
        """--top limits the number of listed images."""
        result = runner.invoke(app, ["ratio", str(html_dir), "--top", "1"])

        assert result.exit_code == 0
        assert "Top 1 Images" in result.output
        assert "b.png" not in result.output

    def test_quiet_prints_summary_only(self, html_dir: Path, converted: list[Path]) -> None:
        """--quiet keeps the summary tables and drops the header and top list."""
        result = runner.invoke(app, ["--quiet", "ratio", str(html_dir)])

        assert result.exit_code == 0
        output = _flat(result.output)
        assert "62.50%" in output
        assert "Analysis based on" not in output
        assert "Top 30 Images" not in output
        assert "a.jpg" not in output

    def test_json(self, html_dir: Path, converted: list[Path]) -> None:
        """--format json prints the statistics record."""
        result = runner.invoke(app, ["ratio", str(html_dir), "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["pair_count"] == 2
        assert data["total_original_size"] == 2000
        assert data["total_avif_size"] == 750
        assert data["optimization_rate"] == "62.50"
        assert data["percentiles"] == {"50": "75.00", "10": "75.00", "1": "75.00"}

    def test_no_pairs(self, html_dir: Path, uploads_dir: Path) -> None:
        """A directory without AVIF files reports nothing to compare."""
        (uploads_dir / "a.jpg").write_bytes(b"x")

        result = runner.invoke(app, ["ratio", str(html_dir), "--delete-originals", "-y"])

        assert result.exit_code == 0
        assert "No matching image/.avif pairs" in _flat(result.output)
        assert (uploads_dir / "a.jpg").exists()

    def test_missing_uploads(self, tmp_path: Path) -> None:
        """A missing uploads directory is fatal."""
        result = runner.invoke(app, ["ratio", str(tmp_path / "nowhere")])

        assert result.exit_code == 1
        assert "not found" in _flat(result.output)


class TestDeleteOriginals:
    """Tests for wpslim ratio --delete-originals."""

    def test_deletes_converted_originals(
        self, html_dir: Path, uploads_dir: Path, converted: list[Path]
    ) -> None:
        """Originals with an AVIF counterpart are deleted after --yes."""
        result = runner.invoke(app, ["ratio", str(html_dir), "--delete-originals", "--yes"])

        assert result.exit_code == 0
        assert not any(p.exists() for p in converted)
        assert all(p.with_suffix(".avif").exists() for p in converted)
        assert (uploads_dir / "unconverted.jpg").exists()
        assert "All 2 file(s) were removed." in _flat(result.output)

    def test_declined(self, html_dir: Path, converted: list[Path]) -> None:
        """Declining the prompt keeps every file."""
        result = runner.invoke(app, ["ratio", str(html_dir), "--delete-originals"], input="n\n")

        assert result.exit_code == 0
        assert "Deletion cancelled by user" in _flat(result.output)
        assert all(p.exists() for p in converted)

    def test_dry_run(self, html_dir: Path, converted: list[Path]) -> None:
        """--dry-run reports what would be deleted."""
        result = runner.invoke(
            app, ["ratio", str(html_dir), "--delete-originals", "--dry-run"]
        )

        assert result.exit_code == 0
        assert "Dry-run: 2 file(s) would be deleted." in _flat(result.output)
        assert all(p.exists() for p in converted)
