import os
import re
from collections.abc import Sequence
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from slipstage.composition.exceptions import InsufficientTiles, MetadataUnreadable
from slipstage.composition.layout import CanvasLayout, compute_layout
from slipstage.logging.logger import Log
from slipstage.staging.ledger import ArtifactLedger
from slipstage.staging.models import Stage, StagingArtifact

_DIGITS = re.compile(r"(\d+)")


def natural_key(path: Path) -> list[object]:
    return [int(part) if part.isdigit() else part for part in _DIGITS.split(path.name)]


class Compositor:
    """Composes the tiles of one submission into a single JPEG canvas."""

    def __init__(self, ledger: ArtifactLedger, *, quality: int = 95) -> None:
        self._ledger = ledger
        self._quality = quality

    def compose(
        self,
        document_name: str,
        tiles: Sequence[StagingArtifact],
    ) -> StagingArtifact:
        """Render ``tiles`` side by side into PendingUpload as ``<document_name>.jpg``.

        The canvas is rendered under a temporary name, the consumed tiles
        are archived, and only then is the render moved into PendingUpload.
        A tile that fails to archive is logged and left where it is.

        Raises:
            InsufficientTiles: if fewer than two tiles are given.
            MetadataUnreadable: if a tile's dimensions cannot be read.
        """
        if len(tiles) < 2:
            exc = InsufficientTiles(
                f"Composing '{document_name}' needs at least two tiles, got {len(tiles)}"
            )
            Log.error("Compositor", str(exc))
            raise exc

        layout = compute_layout([self._read_size(tile.path) for tile in tiles])
        staging = self._ledger.layout
        pending_render = staging.combine_inbox / f"{document_name}.jpg.part"
        final_path = staging.pending_upload / f"{document_name}.jpg"

        self._render(tiles, layout, pending_render)
        Log.info(
            "Compositor",
            f"Combined {len(tiles)} tiles into a {layout.width}x{layout.height} canvas",
        )

        self._archive(tiles)
        os.replace(pending_render, final_path)
        Log.info("Compositor", f"Staged composite {final_path}")
        return self._ledger.register(document_name, final_path, Stage.PENDING_UPLOAD)

    def compose_directory(
        self,
        document_name: str,
        source_dir: Path | None = None,
    ) -> StagingArtifact:
        """Compose every file currently in ``source_dir`` (default PendingCombine).

        Files are taken in natural name order so page ``_p10`` follows ``_p9``.
        """
        directory = source_dir or self._ledger.layout.pending_combine
        paths = sorted((p for p in directory.iterdir() if p.is_file()), key=natural_key)
        tiles = [
            StagingArtifact(document=document_name, path=path, stage=Stage.PENDING_COMBINE)
            for path in paths
        ]
        return self.compose(document_name, tiles)

    @staticmethod
    def _read_size(path: Path) -> tuple[int, int]:
        try:
            with Image.open(path) as image:
                width, height = image.size
        except (OSError, UnidentifiedImageError) as exc:
            Log.error("Compositor", f"Error while reading {path}: {exc}")
            raise MetadataUnreadable(f"Cannot read dimensions of {path}: {exc}") from exc
        if not width or not height:
            Log.error("Compositor", f"{path} reports no width or height")
            raise MetadataUnreadable(f"{path} has no width or height")
        return width, height

    def _render(
        self,
        tiles: Sequence[StagingArtifact],
        layout: CanvasLayout,
        output_path: Path,
    ) -> None:
        canvas = Image.new("RGB", (layout.width, layout.height), "white")
        for tile, placement in zip(tiles, layout.placements):
            with Image.open(tile.path) as image:
                canvas.paste(image.convert("RGB"), (placement.left, placement.top))
        canvas.save(output_path, format="JPEG", quality=self._quality)

    def _archive(self, tiles: Sequence[StagingArtifact]) -> None:
        for tile in tiles:
            try:
                self._ledger.transition(tile, Stage.ARCHIVED_COMBINED)
            except OSError as exc:
                Log.error("Compositor", f"Failed to archive tile {tile.path}: {exc}")
