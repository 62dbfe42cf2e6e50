"""Uploads directory scanner.

Walks a WordPress uploads directory and yields the paths of image
files relative to it, the input listing for the classifier.
"""

import os
from collections.abc import Iterator
from pathlib import Path

from wpslim.core.errors import MissingInputDirectoryError
from wpslim.purge.patterns import IMAGE_EXTENSIONS, has_image_extension


class UploadsScanner:
    """Enumerates image files below an uploads directory.

    Args:
        root: Uploads directory to scan.
        extensions: Lower-case extensions (without dot) to include.
            Matching is case-insensitive.
    """

    def __init__(
        self,
        root: Path,
        *,
        extensions: frozenset[str] = IMAGE_EXTENSIONS,
    ) -> None:
        self._root = root
        self._extensions = extensions

    @property
    def root(self) -> Path:
        return self._root

    def check(self) -> None:
        """Raise MissingInputDirectoryError if the root is not a directory."""
        if not self._root.is_dir():
            raise MissingInputDirectoryError(self._root)

    def scan(self) -> Iterator[str]:
        """Yield image paths relative to the root, "/"-separated.

        Directories are walked top-down; within a directory, entries
        are visited in sorted order so the listing is deterministic.
        Only regular files are yielded, symlinks are skipped (find -type f).
        Walk errors propagate.

        Yields:
            Relative paths of image files.

        Raises:
            MissingInputDirectoryError: If the root does not exist.
        """
        self.check()

        for dirpath, dirnames, filenames in os.walk(self._root, onerror=self._on_error):
            dirnames.sort()
            current = Path(dirpath)
            for name in sorted(filenames):
                if not has_image_extension(name, self._extensions):
                    continue
                full = current / name
                if full.is_symlink() or not full.is_file():
                    continue
                yield full.relative_to(self._root).as_posix()

    def scan_files(self) -> Iterator[Path]:
        """Yield absolute paths of image files below the root."""
        for relative in self.scan():
            yield self._root / relative

    @staticmethod
    def _on_error(error: OSError) -> None:
        raise error
