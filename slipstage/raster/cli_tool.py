"""Raster tools driven through their command-line interface."""

import subprocess
from pathlib import Path
from typing import ClassVar

from slipstage.logging.logger import Log
from slipstage.raster.base import BaseRasterTool
from slipstage.raster.exceptions import (
    PageCountUndetermined,
    RasterToolError,
    RasterToolExitError,
    RasterToolSpawnError,
    RasterToolTimeout,
)
from slipstage.raster.models import PageCount
from slipstage.raster.page_count import decode_page_count

_STDERR_LIMIT = 4000
_UNDECODABLE_MARKERS = ("NoDecodeDelegateForThisImageFormat", "no decode delegate")


class CliRasterTool(BaseRasterTool):
    """Runs ``<program> identify`` / ``<program> convert`` as child processes."""

    PROGRAM: ClassVar[str]
    DISPLAY_NAME: ClassVar[str]

    def __init__(self, *, timeout_seconds: float | None = None) -> None:
        self._timeout_seconds = timeout_seconds

    def count_pages(self, source: Path) -> PageCount:
        try:
            return self._count_pages(source.resolve())
        except RasterToolError as exc:
            Log.error("PageCounter", str(exc))
            raise

    def _count_pages(self, resolved: Path) -> PageCount:
        proc = self._run(["identify", "-format", "%n", str(resolved)])
        if proc.returncode != 0:
            raise RasterToolExitError(
                f"{self.DISPLAY_NAME} identify exited with code {proc.returncode}"
                + (f"\nStderr: {proc.stderr.strip()}" if proc.stderr.strip() else ""),
                returncode=proc.returncode,
                stderr=proc.stderr,
                hint=self._identify_hint(proc, resolved),
                source_spec=str(resolved),
            )
        try:
            page_count = decode_page_count(proc.stdout)
        except PageCountUndetermined as exc:
            raise PageCountUndetermined(
                f"{exc} for {resolved}", stderr=proc.stderr
            ) from exc
        Log.info("PageCounter", f"{resolved} has {page_count} page(s)")
        return PageCount(page_count=page_count, resolved_path=resolved)

    def convert_page(
        self,
        source: Path,
        frame_index: int,
        output_path: Path,
        density: int,
    ) -> Path:
        source_spec = f"{source}[{frame_index}]"
        proc = self._run(["convert", "-density", str(density), source_spec, str(output_path)])
        if proc.returncode != 0:
            raise RasterToolExitError(
                f"{self.DISPLAY_NAME} convert failed for page {frame_index + 1} "
                f"with code {proc.returncode}.\nInput: {source_spec}\nOutput: {output_path}"
                f"\nStderr: {proc.stderr.strip()}",
                returncode=proc.returncode,
                stderr=proc.stderr,
                page_index=frame_index,
                source_spec=source_spec,
            )
        return output_path

    def _run(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        cmd = [self.PROGRAM, *args]
        try:
            proc = subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                text=True,
                timeout=self._timeout_seconds,
            )
        except (FileNotFoundError, PermissionError) as exc:
            raise RasterToolSpawnError(
                f"Failed to start {self.DISPLAY_NAME}: {exc}",
                hint=f"Ensure {self.DISPLAY_NAME} ({self.PROGRAM}) is installed and on PATH.",
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise RasterToolTimeout(
                f"{self.DISPLAY_NAME} timed out after {self._timeout_seconds}s: {' '.join(cmd)}"
            ) from exc
        proc.stderr = proc.stderr[-_STDERR_LIMIT:]
        return proc

    def _identify_hint(
        self, proc: subprocess.CompletedProcess[str], source: Path
    ) -> str | None:
        if any(marker in proc.stderr for marker in _UNDECODABLE_MARKERS):
            return (
                f"The file might not be a valid PDF, or {self.DISPLAY_NAME} lacks the "
                "delegate (e.g. Ghostscript) needed to read it."
            )
        if proc.returncode == 1 and not proc.stderr and not proc.stdout:
            return f"The input file ({source}) might be invalid or corrupted."
        return None


class GraphicsMagickTool(CliRasterTool):
    PROGRAM = "gm"
    DISPLAY_NAME = "GraphicsMagick"


class ImageMagickTool(CliRasterTool):
    PROGRAM = "magick"
    DISPLAY_NAME = "ImageMagick"
