"""Compression ratio analysis of converted images.

Pairs every original image with its AVIF sibling and measures how much
space the conversion saved.
"""

import logging
from pathlib import Path

from wpslim.avif.models import CompressionStats, ImagePair, avif_path_for
from wpslim.purge.scanner import UploadsScanner

logger = logging.getLogger(__name__)

# Originals considered when looking for AVIF counterparts
ORIGINAL_EXTENSIONS: frozenset[str] = frozenset({"jpg", "jpeg", "png", "gif", "webp"})


def find_pairs(root: Path) -> list[ImagePair]:
    """Find original images below root that have an AVIF counterpart.

    Args:
        root: Uploads directory.

    Returns:
        Pairs in scan order.

    Raises:
        MissingInputDirectoryError: If root does not exist.
    """
    scanner = UploadsScanner(root, extensions=ORIGINAL_EXTENSIONS)
    pairs: list[ImagePair] = []

    for original in scanner.scan_files():
        avif = avif_path_for(original)
        if not avif.is_file():
            continue
        pairs.append(
            ImagePair(
                original=original,
                avif=avif,
                original_size=original.stat().st_size,
                avif_size=avif.stat().st_size,
            )
        )

    logger.debug("Found %d image/AVIF pairs below %s", len(pairs), root)
    return pairs


def analyze(root: Path) -> CompressionStats:
    """Compute compression statistics for all pairs below root."""
    return CompressionStats.from_pairs(find_pairs(root))
