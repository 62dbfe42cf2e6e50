"""Unit tests for wpslim configuration."""

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from wpslim.core.config import (
    ConfigError,
    ConfigParseError,
    ConvertSettings,
    WpslimConfig,
    config_to_dict,
    load_config,
    save_config,
)


class TestConvertSettings:
    """Tests for ConvertSettings model."""

    def test_defaults(self) -> None:
        """Defaults match the conversion script settings."""
        settings = ConvertSettings()

        assert settings.max_dimension == 1500
        assert settings.quality == 75
        assert settings.speed == 0
        assert settings.jobs == "all"
        assert 1 <= settings.workers <= 4

    def test_default_workers_without_cpu_count(self) -> None:
        """Unknown CPU count falls back to a single worker."""
        with patch("wpslim.core.config.os.cpu_count", return_value=None):
            assert ConvertSettings().workers == 1

    @pytest.mark.parametrize("jobs", ["all", "1", "16", 8])
    def test_valid_jobs(self, jobs: object) -> None:
        """jobs accepts 'all' or a positive integer."""
        assert ConvertSettings(jobs=jobs).jobs == str(jobs)  # type: ignore[arg-type]

    @pytest.mark.parametrize("jobs", ["0", "-2", "many", ""])
    def test_invalid_jobs(self, jobs: str) -> None:
        """Other jobs values are rejected."""
        with pytest.raises(ValueError, match="jobs must be"):
            ConvertSettings(jobs=jobs)

    @pytest.mark.parametrize(
        ("field", "value"),
        [("quality", 101), ("quality", -1), ("speed", 11), ("max_dimension", 0), ("workers", 0)],
    )
    def test_out_of_range(self, field: str, value: int) -> None:
        """Numeric settings are range-checked."""
        with pytest.raises(ValueError):
            ConvertSettings.model_validate({field: value})


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        """A missing config file yields the defaults."""
        config = load_config(tmp_path / "config.toml")

        assert config.purge.purge_file == "images_to_purge.txt"
        assert config.purge.uploads_subdir == "wp-content/uploads"
        assert config.ratio.top_n == 30

    def test_partial_file(self, tmp_path: Path) -> None:
        """Sections and keys not in the file keep their defaults."""
        path = tmp_path / "config.toml"
        path.write_text('[convert]\nquality = 60\njobs = "4"\n\n[ratio]\ntop_n = 10\n')

        config = load_config(path)

        assert config.convert.quality == 60
        assert config.convert.jobs == "4"
        assert config.convert.max_dimension == 1500
        assert config.ratio.top_n == 10

    def test_default_location(self, tmp_path: Path) -> None:
        """Without a path, the XDG config file is read."""
        config_file = tmp_path / "xdg-config" / "wpslim" / "config.toml"
        config_file.parent.mkdir(parents=True)
        config_file.write_text('[purge]\npurge_file = "orphans.txt"\n')

        assert load_config().purge.purge_file == "orphans.txt"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Malformed TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("[convert\nquality = ")

        with pytest.raises(ConfigParseError, match="Invalid TOML syntax"):
            load_config(path)

    def test_unknown_key(self, tmp_path: Path) -> None:
        """Unknown keys are rejected."""
        path = tmp_path / "config.toml"
        path.write_text("[convert]\ncolour = 1\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        """Out-of-range values are rejected."""
        path = tmp_path / "config.toml"
        path.write_text("[convert]\nquality = 500\n")

        with pytest.raises(ConfigError):
            load_config(path)


class TestSaveConfig:
    """Tests for save_config function."""

    def test_writes_toml(self, tmp_path: Path) -> None:
        """The saved file parses back to the same settings."""
        path = tmp_path / "sub" / "config.toml"
        config = WpslimConfig.model_validate({"convert": {"quality": 50, "workers": 2}})

        result = save_config(config, path)

        assert result == path
        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert data["convert"]["quality"] == 50
        assert load_config(path) == config

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """The atomic write leaves no temporary files behind."""
        save_config(WpslimConfig(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_write_error(self, tmp_path: Path) -> None:
        """OS errors become ConfigError."""
        with (
            patch("wpslim.core.config.os.replace", side_effect=PermissionError("denied")),
            pytest.raises(ConfigError, match="Failed to write config"),
        ):
            save_config(WpslimConfig(), tmp_path / "config.toml")

        assert list(tmp_path.iterdir()) == []


def test_config_to_dict_sections() -> None:
    """The dict form has one table per command."""
    data = config_to_dict(WpslimConfig())

    assert set(data) == {"purge", "convert", "ratio"}
    assert data["convert"]["jobs"] == "all"
