"""Unit tests for upload filename patterns."""

import pytest
from wpslim.purge.patterns import IMAGE_EXTENSIONS, has_image_extension, is_derivative


class TestIsDerivative:
    """Tests for is_derivative function."""

    @pytest.mark.parametrize(
        "filename",
        [
            "photo-150x150.jpg",
            "photo-1024x768.png",
            "banner-scaled.jpg",
            "banner-scaled-300x200.jpg",
            "a-1x1.gif",
        ],
    )
    def test_matches_generated_variants(self, filename: str) -> None:
        """Size and scaled suffixes mark a derivative."""
        assert is_derivative(filename) is True

    @pytest.mark.parametrize(
        "filename",
        [
            "photo.jpg",
            "photo-150x.jpg",
            "photo-x150.jpg",
            "photo150x150.jpg",
            "photo-scaled",
            "photo-SCALED.jpg",
            "photo-150X150.jpg",
        ],
    )
    def test_rejects_originals(self, filename: str) -> None:
        """Filenames without a complete suffix are originals."""
        assert is_derivative(filename) is False

    def test_suffix_may_appear_mid_name(self) -> None:
        """The suffix is searched anywhere in the filename."""
        assert is_derivative("logo-100x100.backup.png") is True


class TestHasImageExtension:
    """Tests for has_image_extension function."""

    def test_default_extensions(self) -> None:
        """All common WordPress image types are included."""
        assert IMAGE_EXTENSIONS == {"jpg", "jpeg", "png", "gif", "webp", "svg"}

    def test_case_insensitive(self) -> None:
        """Extensions match regardless of case."""
        assert has_image_extension("Hero.JPG") is True
        assert has_image_extension("icon.Svg") is True

    def test_rejects_other_files(self) -> None:
        """Non-image files and names without extension are rejected."""
        assert has_image_extension("notes.txt") is False
        assert has_image_extension("README") is False
        assert has_image_extension("photo.jpg.bak") is False

    def test_custom_extensions(self) -> None:
        """A custom extension set restricts the match."""
        assert has_image_extension("photo.png", frozenset({"jpg"})) is False
        assert has_image_extension("photo.jpg", frozenset({"jpg"})) is True
