"""AVIF conversion and compression report models."""

from dataclasses import dataclass, field
from decimal import ROUND_DOWN, Decimal
from pathlib import Path
from typing import Any

from wpslim.utils.formatting import format_percent

_RATIO_QUANTUM = Decimal("0.0001")
_PERCENT_QUANTUM = Decimal("0.01")

# Percentiles shown in the distribution report, best files first
PERCENTILES: tuple[int, ...] = (50, 10, 1)


def avif_path_for(source: Path) -> Path:
    """Return the AVIF sibling path for an image (same stem, .avif suffix)."""
    return source.with_suffix(".avif")


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Result of converting one image to AVIF.

    Attributes:
        source: Image that was converted.
        output: AVIF file path.
        success: Whether the AVIF file was produced.
        original_size: Size of the source image in bytes.
        avif_size: Size of the AVIF file in bytes (0 on failure).
        error: Error message if the conversion failed, None otherwise.
    """

    source: Path
    output: Path
    success: bool
    original_size: int = 0
    avif_size: int = 0
    error: str | None = None


@dataclass(frozen=True, slots=True)
class ConversionReport:
    """Totals over a batch of conversions.

    Sizes only count successful conversions.
    """

    total_files: int
    converted: int
    total_original_size: int
    total_avif_size: int

    @classmethod
    def from_results(cls, results: list[ConversionResult]) -> "ConversionReport":
        ok = [r for r in results if r.success]
        return cls(
            total_files=len(results),
            converted=len(ok),
            total_original_size=sum(r.original_size for r in ok),
            total_avif_size=sum(r.avif_size for r in ok),
        )

    @property
    def failed(self) -> int:
        return self.total_files - self.converted

    @property
    def saved_size(self) -> int:
        return self.total_original_size - self.total_avif_size

    @property
    def reduction_percentage(self) -> str:
        """Overall size reduction with two decimals, "0.00" if nothing was converted."""
        return format_percent(self.saved_size, self.total_original_size)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_files": self.total_files,
            "converted": self.converted,
            "failed": self.failed,
            "total_original_size": self.total_original_size,
            "total_avif_size": self.total_avif_size,
            "saved_size": self.saved_size,
            "reduction_percentage": self.reduction_percentage,
        }


@dataclass(frozen=True, slots=True)
class ImagePair:
    """An original image and its AVIF counterpart.

    Attributes:
        original: Path of the original image.
        avif: Path of the AVIF file.
        original_size: Original size in bytes.
        avif_size: AVIF size in bytes.
    """

    original: Path
    avif: Path
    original_size: int
    avif_size: int

    @property
    def ratio(self) -> Decimal | None:
        """Fraction of the original size saved, truncated to four decimals.

        None when the original is empty. Negative when the AVIF is larger.
        """
        if self.original_size <= 0:
            return None
        value = Decimal(self.original_size - self.avif_size) / Decimal(self.original_size)
        return value.quantize(_RATIO_QUANTUM, rounding=ROUND_DOWN)


def ratio_to_percent(ratio: Decimal) -> str:
    """Format a ratio as a percentage string with two decimals."""
    return f"{ratio * 100:.2f}"


@dataclass(frozen=True, slots=True)
class CompressionStats:
    """Compression statistics over all image/AVIF pairs.

    Attributes:
        pairs: Every pair found, in scan order.
        ranked: ``(ratio, pair)`` for every pair with a ratio, best
            compression first.
    """

    pairs: tuple[ImagePair, ...]
    ranked: tuple[tuple[Decimal, ImagePair], ...] = field(default_factory=tuple)

    @classmethod
    def from_pairs(cls, pairs: list[ImagePair]) -> "CompressionStats":
        rated: list[tuple[Decimal, ImagePair]] = []
        for pair in pairs:
            ratio = pair.ratio
            if ratio is not None:
                rated.append((ratio, pair))
        # Stable sort keeps scan order among equal ratios
        ranked = sorted(rated, key=lambda item: item[0], reverse=True)
        return cls(pairs=tuple(pairs), ranked=tuple(ranked))

    @property
    def pair_count(self) -> int:
        return len(self.pairs)

    @property
    def is_empty(self) -> bool:
        return not self.pairs

    @property
    def total_original_size(self) -> int:
        return sum(p.original_size for p in self.pairs)

    @property
    def total_avif_size(self) -> int:
        return sum(p.avif_size for p in self.pairs)

    @property
    def saved_size(self) -> int:
        return self.total_original_size - self.total_avif_size

    @property
    def optimization_rate(self) -> str:
        """Overall savings in percent, truncated to two decimals."""
        if self.total_original_size <= 0:
            return "0.00"
        rate = Decimal(self.saved_size * 100) / Decimal(self.total_original_size)
        return f"{rate.quantize(_PERCENT_QUANTUM, rounding=ROUND_DOWN):.2f}"

    def percentile(self, percent: int) -> str:
        """Minimum reduction achieved by the best ``percent``% of files.

        The index into the ranked ratios is ``count * percent // 100 - 1``,
        clamped to the first entry.

        Returns:
            Percentage string with two decimals, "0.00" if no pair has a ratio.
        """
        if not self.ranked:
            return "0.00"
        index = max(0, len(self.ranked) * percent // 100 - 1)
        return ratio_to_percent(self.ranked[index][0])

    def percentiles(self) -> dict[int, str]:
        return {p: self.percentile(p) for p in PERCENTILES}

    def top(self, count: int) -> list[tuple[Decimal, ImagePair]]:
        """Return ``(ratio, pair)`` for the ``count`` best compressed pairs."""
        return list(self.ranked[:count])

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "pair_count": self.pair_count,
            "total_original_size": self.total_original_size,
            "total_avif_size": self.total_avif_size,
            "saved_size": self.saved_size,
            "optimization_rate": self.optimization_rate,
            "percentiles": {str(p): v for p, v in self.percentiles().items()},
        }
