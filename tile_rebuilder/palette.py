"""Random palette generation and the consumable palette pool."""

from __future__ import annotations

import numpy as np

from tile_rebuilder.color_utils import CHANNEL_MAX, CHANNELS, Color
from tile_rebuilder.errors import ConsistencyError


def generate_palette(
    num_colors: int,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """Generate *num_colors* uniformly random opaque colours.

    R, G and B are drawn independently from 0..255; alpha is always 255.
    Duplicates are allowed.

    Args:
        num_colors: How many colours to produce (0 gives an empty palette).
        seed: Reproducibility seed (``None`` = non-deterministic).
        rng: Existing generator to draw from; takes precedence over *seed*.

    Returns:
        (num_colors, 4) uint8 array.
    """
    if num_colors < 0:
        msg = f"num_colors must be non-negative, got {num_colors}"
        raise ValueError(msg)
    if rng is None:
        rng = np.random.default_rng(seed)
    rgb = rng.integers(0, CHANNEL_MAX + 1, size=(num_colors, 3), dtype=np.uint8)
    alpha = np.full((num_colors, 1), CHANNEL_MAX, dtype=np.uint8)
    return np.hstack([rgb, alpha])


class Palette:
    """Ordered pool of colours where every entry can be taken exactly once."""

    def __init__(self, colors: np.ndarray) -> None:
        arr = np.asarray(colors, dtype=np.uint8)
        if arr.size == 0:
            arr = arr.reshape(0, CHANNELS)
        if arr.ndim != 2 or arr.shape[1] != CHANNELS:
            msg = f"Palette expects an (N, {CHANNELS}) array, got shape {arr.shape}"
            raise ValueError(msg)
        self._colors = arr.copy()

    def __len__(self) -> int:
        return len(self._colors)

    def __repr__(self) -> str:
        return f"Palette({len(self)} colours)"

    @property
    def colors(self) -> np.ndarray:
        """Read-only view of the remaining colours, in scan order."""
        view = self._colors.view()
        view.flags.writeable = False
        return view

    def take(self, index: int) -> Color:
        """Remove and return the colour at *index*."""
        if len(self._colors) == 0:
            msg = "Palette exhausted: more tiles than palette colours"
            raise ConsistencyError(msg)
        color = self._colors[index].copy()
        self._colors = np.delete(self._colors, index, axis=0)
        return color
