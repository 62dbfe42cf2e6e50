"""Extraction of referenced image filenames from a text corpus.

The corpus is usually a raw SQL dump of the WordPress database. It is
scanned line by line as bytes, so dumps of several hundred MB never
have to be held in memory and binary or mis-encoded content cannot
make the scan fail.

The extraction is a heuristic, not a parse: a filename is the longest
run of characters that are not quotes or slashes and that ends with an
image extension. Lines are split on those separators first and each
piece is searched for its last extension, which keeps the scan linear
in the line length. Filenames embedded in escaped or serialized content
may be under- or over-matched; an original whose reference is missed
ends up in the purge list, so review it before deleting.
"""

import logging
import os
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from wpslim.core.errors import MissingCorpusFileError, UnreadableCorpusError

logger = logging.getLogger(__name__)

# Characters that can never be part of a referenced filename
SEPARATOR_PATTERN: re.Pattern[bytes] = re.compile(rb"""["'/\r\n]""")

# Image extension not followed by further word characters
EXTENSION_PATTERN: re.Pattern[bytes] = re.compile(
    rb"\.(?:jpg|jpeg|png|gif|webp|svg)(?![A-Za-z0-9])",
    re.IGNORECASE,
)


def _normalize(filename: str) -> str:
    return filename.lower()


class ReferenceSet:
    """Immutable set of referenced bare filenames.

    Membership tests are case-insensitive: names are lower-cased both
    when stored and when queried.
    """

    __slots__ = ("_names",)

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: frozenset[str] = frozenset(_normalize(name) for name in names)

    def __contains__(self, filename: object) -> bool:
        if not isinstance(filename, str):
            return False
        return _normalize(filename) in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._names))

    def __repr__(self) -> str:
        return f"ReferenceSet({len(self._names)} names)"


def iter_references(chunks: Iterable[bytes | str]) -> Iterator[str]:
    """Yield every filename match found in the given corpus chunks.

    Chunks are matched independently; callers should split on line
    boundaries. Text chunks are encoded as UTF-8 first. Matches are
    decoded the same way the OS layer decodes filenames, so undecodable
    bytes round-trip instead of raising.

    Args:
        chunks: Lines (or other newline-aligned pieces) of the corpus.

    Yields:
        Matched filenames in corpus order, case preserved, with duplicates.
    """
    for chunk in chunks:
        data = chunk.encode("utf-8", "surrogateescape") if isinstance(chunk, str) else chunk
        for segment in SEPARATOR_PATTERN.split(data):
            end = _reference_end(segment)
            if end:
                yield os.fsdecode(segment[:end])


def _reference_end(segment: bytes) -> int:
    """End offset of the filename in a separator-free segment, 0 if there is none.

    A filename is the longest prefix ending in an image extension, so
    only the last extension match counts. It needs at least one
    character before the dot.
    """
    last: re.Match[bytes] | None = None
    for last in EXTENSION_PATTERN.finditer(segment):
        pass
    if last is None or last.start() == 0:
        return 0
    return last.end()


def extract_references(chunks: Iterable[bytes | str]) -> ReferenceSet:
    """Build a ReferenceSet from corpus chunks."""
    return ReferenceSet(iter_references(chunks))


def load_reference_set(path: Path) -> ReferenceSet:
    """Scan a corpus file and return the set of referenced filenames.

    The set is fully built before it is returned; no partial set is
    ever exposed to the caller.

    Args:
        path: Path to the corpus file (e.g. a SQL dump).

    Returns:
        ReferenceSet of every filename mentioned in the corpus.

    Raises:
        MissingCorpusFileError: If the file does not exist.
        UnreadableCorpusError: If the file cannot be opened or read.
    """
    if not path.is_file():
        raise MissingCorpusFileError(path)

    try:
        with path.open("rb") as f:
            references = extract_references(f)
    except OSError as e:
        raise UnreadableCorpusError(path, e.strerror or str(e)) from e

    logger.debug("Found %d distinct referenced filenames in %s", len(references), path)
    return references
