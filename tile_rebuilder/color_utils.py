"""RGBA colour arithmetic: Euclidean distance and tile averaging."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

Color = NDArray[np.uint8]  # shape (4,): R, G, B, A in 0..255

CHANNELS = 4
CHANNEL_MAX = 255
OPAQUE_BLACK = (0, 0, 0, CHANNEL_MAX)


def color_distance(a: ArrayLike, b: ArrayLike) -> float:
    """Euclidean distance between two RGBA colours."""
    d = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return float(np.sqrt(np.sum(d ** 2)))


def distances_to(color: ArrayLike, colors: np.ndarray) -> np.ndarray:
    """Distance from *color* to every row of an (N, 4) array.

    Same metric as :func:`color_distance`, vectorised over the palette.

    Returns:
        (N,) float64.
    """
    diff = colors.astype(np.float64) - np.asarray(color, dtype=np.float64)
    return np.sqrt(np.sum(diff ** 2, axis=1))


def average_color(colors: ArrayLike) -> Color:
    """Per-channel mean of a set of RGBA colours.

    Accepts a flat (N, 4) list or an (h, w, 4) tile block. Means are
    truncated to integers. A single colour is returned unchanged.

    Raises:
        ValueError: if *colors* is empty.
    """
    flat = np.asarray(colors, dtype=np.uint8).reshape(-1, CHANNELS)
    n = len(flat)
    if n == 0:
        msg = "Cannot average an empty set of colours"
        raise ValueError(msg)
    if n == 1:
        return flat[0].copy()
    return (flat.sum(axis=0, dtype=np.int64) // n).astype(np.uint8)
