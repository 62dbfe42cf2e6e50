"""AVIF conversion and compression reporting.

This module drives the external image resizer and AVIF encoder, and
measures the savings of converted images.
"""

from wpslim.avif.converter import AvifConverter, check_tools, find_convertible, remove_existing_avif
from wpslim.avif.models import (
    CompressionStats,
    ConversionReport,
    ConversionResult,
    ImagePair,
    avif_path_for,
)
from wpslim.avif.ratio import analyze, find_pairs

__all__ = [
    "AvifConverter",
    "CompressionStats",
    "ConversionReport",
    "ConversionResult",
    "ImagePair",
    "analyze",
    "avif_path_for",
    "check_tools",
    "find_convertible",
    "find_pairs",
    "remove_existing_avif",
]
