from collections.abc import Sequence
from dataclasses import dataclass

from slipstage.composition.exceptions import InsufficientTiles


@dataclass(frozen=True)
class TilePlacement:
    left: int
    top: int
    width: int
    height: int


@dataclass(frozen=True)
class CanvasLayout:
    """Tiles side by side, left to right, each centered vertically."""

    width: int
    height: int
    placements: tuple[TilePlacement, ...]


def center_offset(canvas_height: int, tile_height: int) -> int:
    """``round((canvas_height - tile_height) / 2)`` with halves rounded up."""
    return (canvas_height - tile_height + 1) // 2


def compute_layout(sizes: Sequence[tuple[int, int]]) -> CanvasLayout:
    """Lay out tiles of ``(width, height)`` sizes in input order.

    Raises:
        InsufficientTiles: if fewer than two sizes are given.
    """
    if len(sizes) < 2:
        raise InsufficientTiles(f"At least two tiles are required, got {len(sizes)}")

    height = max(tile_height for _, tile_height in sizes)
    placements: list[TilePlacement] = []
    left = 0
    for tile_width, tile_height in sizes:
        placements.append(
            TilePlacement(
                left=left,
                top=center_offset(height, tile_height),
                width=tile_width,
                height=tile_height,
            )
        )
        left += tile_width
    return CanvasLayout(width=left, height=height, placements=tuple(placements))
