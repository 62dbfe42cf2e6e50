"""Filename patterns for WordPress uploads.

WordPress generates resized copies of every upload ("photo-150x150.jpg")
and, for large images, a downscaled copy ("photo-scaled.jpg"). Both are
regenerable from the original and are treated as derivatives.

Adapt DERIVATIVE_PATTERN if your theme or plugins use other suffixes.
"""

import re

# Extensions considered images (lower-case, without dot)
IMAGE_EXTENSIONS: frozenset[str] = frozenset({"jpg", "jpeg", "png", "gif", "webp", "svg"})

# "-<W>x<H>." size suffix or "-scaled." suffix, case-sensitive
DERIVATIVE_PATTERN: re.Pattern[str] = re.compile(r"-[0-9]+x[0-9]+\.|-scaled\.")


def is_derivative(filename: str) -> bool:
    """Check if a base filename names a generated thumbnail or scaled image.

    Args:
        filename: Base filename without directory component.

    Returns:
        True if the filename contains a size or scaled suffix.
    """
    return DERIVATIVE_PATTERN.search(filename) is not None


def has_image_extension(name: str, extensions: frozenset[str] = IMAGE_EXTENSIONS) -> bool:
    """Check if a filename ends with one of the given extensions (case-insensitive)."""
    if "." not in name:
        return False
    return name.rsplit(".", 1)[-1].lower() in extensions
