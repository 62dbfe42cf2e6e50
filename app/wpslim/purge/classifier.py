"""Orphan image classifier.

Partitions a disk listing of upload images into images to keep and
images to purge:

1. Every derivative (thumbnail or scaled copy) is purgeable.
2. An original is kept only if its filename appears in the references.
   Otherwise it is purgeable too.

Classification of one path is a pure function of its filename and the
ReferenceSet, which is immutable once built.
"""

import logging
from collections.abc import Iterable

from wpslim.purge.models import Classification, ClassifiedImage, ImagePath, PurgePlan
from wpslim.purge.patterns import is_derivative
from wpslim.purge.references import ReferenceSet

logger = logging.getLogger(__name__)


def classify(image: ImagePath, references: ReferenceSet) -> Classification:
    """Classify a single image path.

    Derivatives are classified without consulting the references.

    Args:
        image: Image path relative to the uploads root.
        references: Filenames referenced by the corpus.

    Returns:
        The image's Classification.
    """
    filename = image.filename
    if is_derivative(filename):
        return Classification.DERIVATIVE
    if filename in references:
        return Classification.ORIGINAL_REFERENCED
    return Classification.ORIGINAL_UNREFERENCED


def build_purge_plan(paths: Iterable[str | ImagePath], references: ReferenceSet) -> PurgePlan:
    """Partition a disk listing into purge and keep sets.

    The purge sequence lists all derivatives first and then all
    unreferenced originals; both groups keep the order of the input
    listing. Duplicate input paths are classified independently and
    appear once per occurrence.

    Args:
        paths: Relative image paths as produced by the uploads scanner.
        references: Filenames referenced by the corpus.

    Returns:
        PurgePlan covering every input path exactly once.
    """
    derivatives: list[ClassifiedImage] = []
    unreferenced: list[ClassifiedImage] = []
    keep: list[ClassifiedImage] = []

    for entry in paths:
        image = entry if isinstance(entry, ImagePath) else ImagePath(entry)
        classification = classify(image, references)
        item = ClassifiedImage(image=image, classification=classification)

        if classification == Classification.DERIVATIVE:
            derivatives.append(item)
        elif classification == Classification.ORIGINAL_UNREFERENCED:
            unreferenced.append(item)
        else:
            keep.append(item)

    logger.debug(
        "Classified %d images: %d derivatives, %d unreferenced, %d kept",
        len(derivatives) + len(unreferenced) + len(keep),
        len(derivatives),
        len(unreferenced),
        len(keep),
    )
    return PurgePlan(purge=(*derivatives, *unreferenced), keep=tuple(keep))
