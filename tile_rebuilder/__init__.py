"""
Tile Rebuilder
==============

Cut an image into square tiles, then repaint every tile with a colour
from a random palette that has exactly one colour per tile. Each colour
is used once: the first palette colour close enough to a tile's average
is taken, otherwise the closest remaining one.
"""

__version__ = "1.0.0"

from tile_rebuilder.color_utils import average_color, color_distance
from tile_rebuilder.config import RebuildConfig
from tile_rebuilder.errors import (
    ConsistencyError,
    DecodeError,
    EncodeError,
    InputError,
    OutputCollisionWarning,
    RebuildError,
)
from tile_rebuilder.grid import TileLayout, TileSpec, candidate_cuts, partition
from tile_rebuilder.image_io import load_image, save_image
from tile_rebuilder.palette import Palette, generate_palette
from tile_rebuilder.solver_greedy import (
    RebuildResult,
    assign_tiles,
    new_canvas,
    rebuild,
    select_color,
)

__all__ = [
    "ConsistencyError",
    "DecodeError",
    "EncodeError",
    "InputError",
    "OutputCollisionWarning",
    "Palette",
    "RebuildConfig",
    "RebuildError",
    "RebuildResult",
    "TileLayout",
    "TileSpec",
    "assign_tiles",
    "average_color",
    "candidate_cuts",
    "color_distance",
    "generate_palette",
    "load_image",
    "new_canvas",
    "partition",
    "rebuild",
    "save_image",
    "select_color",
]
