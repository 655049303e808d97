"""Square-tile grid layout over an image."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from tile_rebuilder.config import RebuildConfig


@dataclass(frozen=True)
class TileSpec:
    """One way of cutting an image into square tiles.

    Attributes:
        edge:        Tile side length in pixels.
        perfect_cut: True when *edge* divides both image dimensions.
    """

    edge: int
    perfect_cut: bool = True


@dataclass(frozen=True)
class TileLayout:
    """Grid of ``cols x rows`` tiles anchored at the top-left corner."""

    spec: TileSpec
    cols: int
    rows: int

    @property
    def count(self) -> int:
        return self.cols * self.rows

    @property
    def covered(self) -> tuple[int, int]:
        """(width, height) of the region painted by tiles."""
        return self.cols * self.spec.edge, self.rows * self.spec.edge

    def tiles(self) -> Iterator[tuple[int, int]]:
        """Yield the (x, y) origin of every tile, row-major."""
        edge = self.spec.edge
        for row in range(self.rows):
            for col in range(self.cols):
                yield col * edge, row * edge


def _check_dimensions(width: int, height: int) -> None:
    if width < 1 or height < 1:
        msg = f"Image dimensions must be positive, got {width}x{height}"
        raise ValueError(msg)


def candidate_cuts(
    width: int,
    height: int,
    config: RebuildConfig | None = None,
) -> list[TileSpec]:
    """List the tile sizes worth trying for a *width* x *height* image.

    Only the configured fixed edge is offered for now; callers take the
    first entry.
    """
    _check_dimensions(width, height)
    cfg = config or RebuildConfig()
    edge = cfg.tile_edge
    return [TileSpec(edge, perfect_cut=(width % edge == 0 and height % edge == 0))]


def partition(width: int, height: int, edge: int) -> TileLayout:
    """Fit as many whole *edge* x *edge* tiles as possible.

    Pixels past the last full column/row are not covered by any tile.
    """
    _check_dimensions(width, height)
    if edge < 1:
        msg = f"Tile edge must be a positive integer, got {edge}"
        raise ValueError(msg)
    spec = TileSpec(edge, perfect_cut=(width % edge == 0 and height % edge == 0))
    return TileLayout(spec=spec, cols=width // edge, rows=height // edge)
