"""Purge list file I/O.

The purge list is a plain text file with one path per line, relative to
the uploads directory, suitable for review before deletion.
"""

import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from wpslim.purge.models import PurgeSummary


def _write_atomic(path: Path, content: str) -> None:
    """Write text to path via a temporary file and os.replace().

    The destination is untouched if writing fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            errors="surrogateescape",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            f.write(content)
        os.replace(str(tmp_path), str(path))
    except OSError:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise


def write_purge_list(paths: list[str], path: Path) -> Path:
    """Write purge paths one per line.

    Args:
        paths: Relative image paths in purge order.
        path: Destination file.

    Returns:
        The destination path.

    Raises:
        OSError: If the file cannot be written.
    """
    _write_atomic(path, "".join(f"{p}\n" for p in paths))
    return path


def read_purge_list(path: Path) -> list[str]:
    """Read a purge list, ignoring blank lines.

    Raises:
        OSError: If the file cannot be read.
    """
    text = path.read_text(encoding="utf-8", errors="surrogateescape")
    return [line for line in text.splitlines() if line.strip()]


def write_summary(summary: PurgeSummary, path: Path) -> Path:
    """Export the summary record as JSON.

    Raises:
        OSError: If the file cannot be written.
    """
    _write_atomic(path, json.dumps(summary.to_dict(), indent=2) + "\n")
    return path
