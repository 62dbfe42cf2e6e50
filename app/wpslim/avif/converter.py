"""Batch AVIF conversion.

Each image is first bounded to a maximum dimension with ImageMagick
(``magick``, auto-oriented, aspect ratio preserved, never upscaled) into
a temporary PNG, which is then encoded with ``avifenc``. The AVIF file
is written next to the source with the same stem.

Images are independent, so they are converted concurrently on a bounded
thread pool; the heavy lifting happens in the external processes.
"""

import logging
import subprocess
import tempfile
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from wpslim.avif.models import ConversionResult, avif_path_for
from wpslim.core.config import ConvertSettings
from wpslim.purge.scanner import UploadsScanner
from wpslim.utils.shell import require_command, run_command

logger = logging.getLogger(__name__)

# Raster formats handed to the encoder (gif and svg are left alone)
CONVERTIBLE_EXTENSIONS: frozenset[str] = frozenset({"jpg", "jpeg", "png", "webp"})

MAGICK_BIN = "magick"
AVIFENC_BIN = "avifenc"

# Per-step timeout; speed 0 on large images can take minutes
_STEP_TIMEOUT = 900.0


def check_tools() -> None:
    """Ensure ImageMagick and avifenc are installed.

    Raises:
        MissingToolError: If either binary is not on PATH.
    """
    require_command(MAGICK_BIN, "Please install ImageMagick.")
    require_command(AVIFENC_BIN, "Please install libavif-tools.")


def find_convertible(root: Path) -> list[Path]:
    """List images below root that can be converted to AVIF.

    Images sharing a stem in one folder (``photo.jpg`` and ``photo.png``)
    would all be written to the same ``photo.avif``. Only the first one
    in scan order is kept; the others are skipped with a warning.

    Raises:
        MissingInputDirectoryError: If root does not exist.
    """
    scanner = UploadsScanner(root, extensions=CONVERTIBLE_EXTENSIONS)
    claimed: dict[Path, Path] = {}
    sources: list[Path] = []
    for path in scanner.scan_files():
        output = avif_path_for(path)
        if output in claimed:
            logger.warning(
                "Skipping '%s': '%s' already converts to '%s'", path, claimed[output], output
            )
            continue
        claimed[output] = path
        sources.append(path)
    return sources


def remove_existing_avif(root: Path) -> int:
    """Delete every pre-existing .avif file below root.

    Returns:
        Number of files deleted.
    """
    scanner = UploadsScanner(root, extensions=frozenset({"avif"}))
    removed = 0
    for path in scanner.scan_files():
        try:
            path.unlink()
        except FileNotFoundError:
            continue
        removed += 1
    logger.debug("Removed %d existing AVIF files below %s", removed, root)
    return removed


class AvifConverter:
    """Converts images to AVIF using magick and avifenc.

    Args:
        settings: Resize and encoder settings.
    """

    def __init__(self, settings: ConvertSettings | None = None) -> None:
        self._settings = settings or ConvertSettings()

    @property
    def settings(self) -> ConvertSettings:
        return self._settings

    def encoder_options(self) -> list[str]:
        """avifenc options derived from the settings."""
        s = self._settings
        return ["-q", str(s.quality), "--speed", str(s.speed), "--jobs", s.jobs]

    def _resize_command(self, source: Path, target: Path) -> list[str]:
        size = self._settings.max_dimension
        return [MAGICK_BIN, str(source), "-auto-orient", "-resize", f"{size}x{size}>", str(target)]

    def _encode_command(self, source: Path, target: Path) -> list[str]:
        return [AVIFENC_BIN, *self.encoder_options(), str(source), str(target)]

    def convert(self, source: Path) -> ConversionResult:
        """Convert a single image.

        The intermediate PNG is created in a private temporary directory
        that is removed on every exit path.

        Args:
            source: Image to convert.

        Returns:
            ConversionResult describing the outcome. Never raises for
            per-image failures.
        """
        output = avif_path_for(source)
        try:
            original_size = source.stat().st_size
        except OSError as e:
            return ConversionResult(source=source, output=output, success=False, error=str(e))

        with tempfile.TemporaryDirectory(prefix="wpslim-") as tmp:
            resized = Path(tmp) / f"{source.stem}.png"
            steps = (
                ("resize", self._resize_command(source, resized)),
                ("encode", self._encode_command(resized, output)),
            )
            for step, command in steps:
                error = self._run_step(command)
                if error is not None:
                    logger.warning("Failed to %s '%s': %s", step, source, error)
                    return ConversionResult(
                        source=source,
                        output=output,
                        success=False,
                        original_size=original_size,
                        error=f"{step} failed: {error}",
                    )

        try:
            avif_size = output.stat().st_size
        except OSError as e:
            return ConversionResult(
                source=source,
                output=output,
                success=False,
                original_size=original_size,
                error=str(e),
            )

        logger.debug("Converted %s (%d -> %d bytes)", source, original_size, avif_size)
        return ConversionResult(
            source=source,
            output=output,
            success=True,
            original_size=original_size,
            avif_size=avif_size,
        )

    @staticmethod
    def _run_step(command: list[str]) -> str | None:
        """Run one external step, returning an error message on failure."""
        try:
            result = run_command(command, timeout=_STEP_TIMEOUT)
        except subprocess.TimeoutExpired:
            return f"timed out after {_STEP_TIMEOUT:.0f}s"
        except OSError as e:
            return str(e)
        if not result.success:
            return result.stderr.strip() or f"exit code {result.returncode}"
        return None

    def convert_all(
        self,
        sources: Iterable[Path],
        on_result: Callable[[ConversionResult], None] | None = None,
    ) -> list[ConversionResult]:
        """Convert many images concurrently.

        At most ``settings.workers`` conversions run at a time. Sources
        that share an output path are converted one after another on the
        same worker, so no two encoders write the same file.

        Args:
            sources: Images to convert.
            on_result: Called from the calling thread as each conversion
                finishes (e.g. to advance a progress bar).

        Returns:
            Results in the same order as ``sources``.
        """
        items = list(sources)
        results: list[ConversionResult | None] = [None] * len(items)

        groups: dict[Path, list[int]] = {}
        for i, src in enumerate(items):
            groups.setdefault(avif_path_for(src), []).append(i)

        def run_group(indices: list[int]) -> list[tuple[int, ConversionResult]]:
            return [(i, self.convert(items[i])) for i in indices]

        with ThreadPoolExecutor(max_workers=self._settings.workers) as pool:
            futures = [pool.submit(run_group, indices) for indices in groups.values()]
            for future in as_completed(futures):
                for i, result in future.result():
                    results[i] = result
                    if on_result is not None:
                        on_result(result)

        return [r for r in results if r is not None]
