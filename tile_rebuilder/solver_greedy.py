"""Greedy tile-to-colour assignment with an early-exit closeness margin."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from tile_rebuilder.color_utils import (
    CHANNELS,
    OPAQUE_BLACK,
    average_color,
    color_distance,
    distances_to,
)
from tile_rebuilder.config import RebuildConfig
from tile_rebuilder.errors import ConsistencyError
from tile_rebuilder.grid import TileLayout, candidate_cuts, partition
from tile_rebuilder.palette import Palette, generate_palette

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

# Palette rows compared per step before checking for an early exit
SCAN_CHUNK = 1024


@dataclass(frozen=True)
class RebuildResult:
    """Output of :func:`rebuild`.

    Attributes:
        canvas:     (H, W, 4) uint8 rebuilt image.
        layout:     Tile grid that was painted.
        palette:    (N, 4) uint8 palette as generated, before consumption.
        mean_error: Mean distance between each tile's average colour and
                    the colour it was given (0 when there are no tiles).
    """

    canvas: np.ndarray
    layout: TileLayout
    palette: np.ndarray
    mean_error: float


def new_canvas(height: int, width: int) -> np.ndarray:
    """Allocate an (H, W, 4) canvas filled with opaque black."""
    canvas = np.empty((height, width, CHANNELS), dtype=np.uint8)
    canvas[:] = OPAQUE_BLACK
    return canvas


def select_color(
    representative: np.ndarray,
    colors: np.ndarray,
    closeness_margin: float,
    chunk_size: int = SCAN_CHUNK,
) -> int:
    """Pick a palette index for *representative*.

    The first colour (in palette order) within *closeness_margin* wins
    even if a closer one follows it. If none is that close, the closest
    colour is chosen, earliest index on ties. The palette is compared
    *chunk_size* rows at a time and the scan stops at the first chunk
    holding a close-enough colour.

    Raises:
        ConsistencyError: if *colors* is empty.
    """
    if len(colors) == 0:
        msg = "Palette exhausted: no colour left to assign"
        raise ConsistencyError(msg)
    best_index = 0
    best_dist = np.inf
    for start in range(0, len(colors), chunk_size):
        dist = distances_to(representative, colors[start:start + chunk_size])
        close_enough = np.flatnonzero(dist <= closeness_margin)
        if close_enough.size:
            return start + int(close_enough[0])
        i = int(np.argmin(dist))
        # strict: an equal distance in a later chunk keeps the earlier index
        if dist[i] < best_dist:
            best_dist = float(dist[i])
            best_index = start + i
    return best_index


def assign_tiles(
    source: np.ndarray,
    palette: Palette,
    edge: int,
    closeness_margin: float,
    on_progress: ProgressCallback | None = None,
) -> np.ndarray:
    """Paint every tile of *source* with a colour taken from *palette*.

    Tiles are visited row-major. Each chosen colour is removed from the
    palette, so with as many colours as tiles every colour is used
    exactly once and the palette ends up empty.

    Args:
        source:           (H, W, 4) uint8 source canvas (not modified).
        palette:          Pool to consume; mutated in place.
        edge:             Tile side length in pixels.
        closeness_margin: Early-exit threshold, see :func:`select_color`.
        on_progress:      Called as ``on_progress(painted, total)`` after
                          each tile, in pixels.

    Returns:
        (H, W, 4) uint8 canvas; pixels outside the tile grid stay opaque black.

    Raises:
        ConsistencyError: if the palette runs out before the last tile.
    """
    if source.ndim != 3 or source.shape[2] != CHANNELS:
        msg = f"Source canvas must be (H, W, {CHANNELS}), got shape {source.shape}"
        raise ValueError(msg)
    height, width = source.shape[:2]
    layout = partition(width, height, edge)
    canvas = new_canvas(height, width)
    total = width * height

    logger.debug(
        "Assigning %d tiles (%dx%d, edge=%d) from %d colours, margin=%.1f",
        layout.count, layout.cols, layout.rows, edge, len(palette), closeness_margin,
    )
    t0 = time.perf_counter()

    painted = 0
    for x, y in layout.tiles():
        block = source[y:y + edge, x:x + edge]
        representative = average_color(block)
        index = select_color(representative, palette.colors, closeness_margin)
        canvas[y:y + edge, x:x + edge] = palette.take(index)

        painted += edge * edge
        if on_progress is not None:
            on_progress(painted, total)

    logger.info(
        "Assigned %d tiles  (%.2f s, %d colours left)",
        layout.count, time.perf_counter() - t0, len(palette),
    )
    return canvas


def _mean_tile_error(source: np.ndarray, canvas: np.ndarray, layout: TileLayout) -> float:
    if layout.count == 0:
        return 0.0
    edge = layout.spec.edge
    total = 0.0
    for x, y in layout.tiles():
        total += color_distance(
            average_color(source[y:y + edge, x:x + edge]), canvas[y, x],
        )
    return total / layout.count


def rebuild(
    source: np.ndarray,
    config: RebuildConfig | None = None,
    on_progress: ProgressCallback | None = None,
) -> RebuildResult:
    """Rebuild *source* with a random palette sized to its tile grid.

    Args:
        source:      (H, W, 4) uint8 source canvas.
        config:      Tile edge, margin and seed; defaults to :class:`RebuildConfig`.
        on_progress: Forwarded to :func:`assign_tiles`.
    """
    cfg = config or RebuildConfig()
    height, width = source.shape[:2]

    spec = candidate_cuts(width, height, cfg)[0]
    layout = partition(width, height, spec.edge)
    if not spec.perfect_cut:
        cov_w, cov_h = layout.covered
        logger.warning(
            "%dx%d is not a multiple of %d; only the top-left %dx%d is tiled",
            width, height, spec.edge, cov_w, cov_h,
        )

    colors = generate_palette(layout.count, seed=cfg.seed)
    logger.info("Palette: %d random colours (seed=%s)", layout.count, cfg.seed)

    palette = Palette(colors)
    canvas = assign_tiles(
        source, palette, spec.edge, cfg.closeness_margin, on_progress=on_progress,
    )
    if len(palette):
        msg = f"{len(palette)} palette colours left unused after the last tile"
        raise ConsistencyError(msg)

    return RebuildResult(
        canvas=canvas,
        layout=layout,
        palette=colors,
        mean_error=_mean_tile_error(source, canvas, layout),
    )
