"""Purge domain models for orphan image classification.

This module defines the data structures produced when partitioning an
uploads directory listing into images to keep and images to purge.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from wpslim.utils.formatting import format_percent


class Classification(str, Enum):
    """Classification of a single image path.

    Attributes:
        DERIVATIVE: Generated thumbnail or scaled variant, always purgeable.
        ORIGINAL_REFERENCED: Original whose filename appears in the corpus.
        ORIGINAL_UNREFERENCED: Original whose filename is absent from the corpus.
    """

    DERIVATIVE = "derivative"
    ORIGINAL_REFERENCED = "original_referenced"
    ORIGINAL_UNREFERENCED = "original_unreferenced"

    @property
    def is_purgeable(self) -> bool:
        """Whether images with this classification belong to the purge set."""
        return self is not Classification.ORIGINAL_REFERENCED


@dataclass(frozen=True, slots=True)
class ImagePath:
    """Relative path of an image below the uploads directory.

    Attributes:
        path: Path relative to the uploads root, using "/" separators.
    """

    path: str

    def __post_init__(self) -> None:
        """Validate image path data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)

    @property
    def filename(self) -> str:
        """Base filename (component after the last separator)."""
        return self.path.rsplit("/", 1)[-1]

    @property
    def extension(self) -> str:
        """Lower-cased extension without the dot, or "" if there is none."""
        name = self.filename
        if "." not in name:
            return ""
        return name.rsplit(".", 1)[-1].lower()


@dataclass(frozen=True, slots=True)
class ClassifiedImage:
    """An image path together with its classification."""

    image: ImagePath
    classification: Classification

    @property
    def path(self) -> str:
        return self.image.path


@dataclass(frozen=True, slots=True)
class PurgeSummary:
    """Summary counters for a purge run.

    Attributes:
        total_images: Number of image paths in the disk listing.
        kept_images: Number of referenced originals.
        purgeable_images: Number of derivatives plus unreferenced originals.
        kept_percentage: kept/total * 100 with two decimals, "0.00" for an empty listing.
    """

    total_images: int
    kept_images: int
    purgeable_images: int
    kept_percentage: str

    @classmethod
    def from_counts(cls, total: int, purgeable: int) -> "PurgeSummary":
        """Derive the summary from total and purgeable counts."""
        kept = total - purgeable
        return cls(
            total_images=total,
            kept_images=kept,
            purgeable_images=purgeable,
            kept_percentage=format_percent(kept, total),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_images": self.total_images,
            "kept_images": self.kept_images,
            "purgeable_images": self.purgeable_images,
            "kept_percentage": self.kept_percentage,
        }


@dataclass(frozen=True, slots=True)
class PurgePlan:
    """Partition of a disk listing into purge and keep sets.

    Attributes:
        purge: Purgeable images, derivatives first, then unreferenced
            originals, each group in disk-listing order.
        keep: Referenced originals in disk-listing order.
    """

    purge: tuple[ClassifiedImage, ...] = field(default_factory=tuple)
    keep: tuple[ClassifiedImage, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return len(self.purge) + len(self.keep)

    @property
    def is_empty(self) -> bool:
        """True when the disk listing contained no images."""
        return self.total == 0

    @property
    def purge_paths(self) -> list[str]:
        return [item.path for item in self.purge]

    @property
    def keep_paths(self) -> list[str]:
        return [item.path for item in self.keep]

    def count(self, classification: Classification) -> int:
        """Count images with the given classification."""
        return sum(1 for item in (*self.purge, *self.keep) if item.classification == classification)

    @property
    def summary(self) -> PurgeSummary:
        return PurgeSummary.from_counts(self.total, len(self.purge))
