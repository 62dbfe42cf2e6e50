"""Image deletion operator.

Deletes listed image files below a root directory with dry-run support.
Files that have already disappeared are skipped with a warning instead
of failing the run.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Result of a single file deletion.

    Attributes:
        path: Path as given by the caller.
        success: Whether the file was deleted (or would be, in dry-run).
        error: Error message if the deletion failed, None otherwise.
        dry_run: Whether this was a dry-run (no actual deletion).
        skipped: Whether the file no longer existed and was skipped.
    """

    path: str
    success: bool
    error: str | None = None
    dry_run: bool = False
    skipped: bool = False

    @property
    def failed(self) -> bool:
        return not self.success and not self.skipped


class PurgeOperator:
    """Deletes image files listed relative to a root directory.

    Paths that resolve outside the root are refused.

    Args:
        root: Directory the listed paths are relative to. Absolute
            paths are accepted as-is when root is None.
        dry_run: If True, report what would be deleted without deleting.
    """

    def __init__(self, root: Path | None = None, dry_run: bool = False) -> None:
        self._root = root
        self._dry_run = dry_run

    def delete(self, paths: list[str]) -> list[DeletionResult]:
        """Delete multiple files and return one result per input path.

        Failures are isolated per path.

        Args:
            paths: File paths, relative to the root.

        Returns:
            List of DeletionResult in input order.
        """
        return [self._delete_single(path) for path in paths]

    def _resolve(self, path: str) -> Path:
        if self._root is None:
            return Path(path)
        target = self._root / path
        root = self._root.resolve()
        if not target.resolve().is_relative_to(root):
            msg = f"Path escapes {self._root}: {path}"
            raise ValueError(msg)
        return target

    def _delete_single(self, path: str) -> DeletionResult:
        try:
            target = self._resolve(path)
        except ValueError as e:
            return DeletionResult(path=path, success=False, error=str(e))

        if not target.is_file():
            logger.warning("File not found, skipping: %s", target)
            return DeletionResult(
                path=path,
                success=False,
                error=f"File not found: {target}",
                dry_run=self._dry_run,
                skipped=True,
            )

        if self._dry_run:
            logger.info("Dry-run: would delete %s", target)
            return DeletionResult(path=path, success=True, dry_run=True)

        try:
            target.unlink()
        except FileNotFoundError:
            logger.warning("File vanished before deletion, skipping: %s", target)
            return DeletionResult(
                path=path,
                success=False,
                error=f"File not found: {target}",
                skipped=True,
            )
        except OSError as e:
            return DeletionResult(path=path, success=False, error=str(e))

        logger.debug("Deleted %s", target)
        return DeletionResult(path=path, success=True)
