"""Orphan image detection for WordPress uploads.

This module provides the uploads scanner, the derivative filename
patterns, reference extraction from a database dump, the classifier
that builds the purge list, and the deletion operator.
"""

from wpslim.purge.classifier import build_purge_plan, classify
from wpslim.purge.listing import read_purge_list, write_purge_list, write_summary
from wpslim.purge.models import (
    Classification,
    ClassifiedImage,
    ImagePath,
    PurgePlan,
    PurgeSummary,
)
from wpslim.purge.operator import DeletionResult, PurgeOperator
from wpslim.purge.patterns import IMAGE_EXTENSIONS, is_derivative
from wpslim.purge.references import ReferenceSet, extract_references, load_reference_set
from wpslim.purge.scanner import UploadsScanner

__all__ = [
    "IMAGE_EXTENSIONS",
    "Classification",
    "ClassifiedImage",
    "DeletionResult",
    "ImagePath",
    "PurgeOperator",
    "PurgePlan",
    "PurgeSummary",
    "ReferenceSet",
    "UploadsScanner",
    "build_purge_plan",
    "classify",
    "extract_references",
    "is_derivative",
    "load_reference_set",
    "read_purge_list",
    "write_purge_list",
    "write_summary",
]
