"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory for every test."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def html_dir(tmp_path: Path) -> Path:
    """WordPress web root with an empty uploads directory."""
    root = tmp_path / "html"
    (root / "wp-content" / "uploads").mkdir(parents=True)
    return root


@pytest.fixture
def uploads_dir(html_dir: Path) -> Path:
    """The uploads directory below html_dir."""
    return html_dir / "wp-content" / "uploads"


@pytest.fixture
def sql_dump_text() -> str:
    """Excerpt of a WordPress SQL dump referencing a few uploads."""
    return (
        "INSERT INTO `wp_posts` VALUES (1,1,'2024-01-01','<p>Hello</p>"
        "<img src=\"https://example.com/wp-content/uploads/2024/01/Hero.JPG?ver=3\" />');\n"
        "INSERT INTO `wp_postmeta` VALUES (7,5,'_wp_attached_file','2024/01/logo.svg');\n"
        "INSERT INTO `wp_postmeta` VALUES (8,5,'_wp_attachment_metadata',"
        "'a:1:{s:4:\"file\";s:22:\"2023/12/banner-art.png\";}');\n"
    )


def _write_files(root: Path, names: list[str], content: bytes = b"img") -> list[Path]:
    paths = []
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        paths.append(path)
    return paths


@pytest.fixture
def make_files() -> Callable[..., list[Path]]:
    """Factory creating files (and parent directories) below a root."""
    return _write_files
