"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RebuildConfig:
    """All tuneable parameters for a rebuild run.

    Attributes:
        tile_edge:        Side length in pixels of every square tile. Controls
                          grid granularity (and therefore palette size).
        closeness_margin: Distance under which a palette colour is accepted
                          immediately instead of searching for the closest one.
                          Larger values trade accuracy for fewer comparisons.
        seed:             Random seed for palette generation (None = non-deterministic).
        output_format:    ".png" or ".jpg"; None keeps the source format.
        output_prefix:    Prefix of the derived output file name.
    """

    # Tiling
    tile_edge: int = 4

    # Matching
    closeness_margin: float = 10.0

    # Palette
    seed: int | None = None

    # Output
    output_format: str | None = None
    output_prefix: str = "output_"

    SUPPORTED_FORMATS: frozenset[str] = frozenset({".png", ".jpg"})

    def __post_init__(self) -> None:
        if self.tile_edge < 1:
            msg = f"tile_edge must be a positive integer, got {self.tile_edge}"
            raise ValueError(msg)
        if self.closeness_margin < 0:
            msg = f"closeness_margin must be non-negative, got {self.closeness_margin}"
            raise ValueError(msg)
