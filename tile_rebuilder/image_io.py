"""Image loading/saving and output path resolution."""

from __future__ import annotations

import logging
import warnings
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from tile_rebuilder.config import RebuildConfig
from tile_rebuilder.errors import (
    DecodeError,
    EncodeError,
    InputError,
    OutputCollisionWarning,
)

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = RebuildConfig.SUPPORTED_FORMATS
_ALIASES = {".jpeg": ".jpg"}
_PIL_FORMATS = {".png": "PNG", ".jpg": "JPEG"}


def normalise_format(fmt: str) -> str:
    """Map ``"png"``, ``".JPEG"`` etc. to ``".png"`` or ``".jpg"``."""
    key = fmt.strip().lower()
    if not key.startswith("."):
        key = "." + key
    key = _ALIASES.get(key, key)
    if key not in SUPPORTED_FORMATS:
        supported = ", ".join(sorted(SUPPORTED_FORMATS))
        msg = f"Unsupported image format '{fmt}'. Supported: {supported}"
        raise InputError(msg)
    return key


def check_source(path: str | Path) -> str:
    """Validate the source file and return its canonical format.

    Raises:
        InputError: if the file is missing or its extension is unsupported.
    """
    path = Path(path)
    if not path.is_file():
        msg = f"Source file does not exist: {path}"
        raise InputError(msg)
    if not path.suffix:
        msg = f"Source file has no extension: {path}"
        raise InputError(msg)
    return normalise_format(path.suffix)


def default_output_path(
    source: str | Path,
    fmt: str,
    prefix: str = "output_",
) -> Path:
    """``output_<stem><fmt>`` in the current working directory."""
    return Path.cwd() / f"{prefix}{Path(source).stem}{fmt}"


def resolve_output_path(path: str | Path) -> Path:
    """Return *path*, or the first free ``<stem>_N<suffix>`` if it exists."""
    path = Path(path)
    if not path.exists():
        return path

    n = 1
    candidate = path.with_name(f"{path.stem}_{n}{path.suffix}")
    while candidate.exists():
        n += 1
        candidate = path.with_name(f"{path.stem}_{n}{path.suffix}")

    logger.warning("%s already exists, writing %s instead", path, candidate.name)
    warnings.warn(
        f"{path} already exists; using {candidate}",
        OutputCollisionWarning,
        stacklevel=2,
    )
    return candidate


def load_image(path: str | Path) -> np.ndarray:
    """Decode an image file to RGBA.

    Returns:
        (H, W, 4) uint8 array.

    Raises:
        InputError: if the file does not exist.
        DecodeError: if the file is not a readable image.
    """
    path = Path(path)
    if not path.is_file():
        msg = f"Source file does not exist: {path}"
        raise InputError(msg)
    try:
        with Image.open(path) as img:
            mode = img.mode
            rgba = img.convert("RGBA")
    except (UnidentifiedImageError, OSError) as exc:
        msg = f"Could not decode {path}: {exc}"
        raise DecodeError(msg) from exc
    logger.debug("Loaded %s: %dx%d (%s)", path, rgba.width, rgba.height, mode)
    return np.array(rgba, dtype=np.uint8)


def save_image(canvas: np.ndarray, path: str | Path, fmt: str | None = None) -> Path:
    """Encode an (H, W, 4) canvas to *path*.

    *fmt* defaults to the suffix of *path*. JPEG output drops alpha.

    Raises:
        EncodeError: if the file cannot be written.
    """
    path = Path(path)
    fmt = normalise_format(fmt or path.suffix)
    img = Image.fromarray(canvas.astype(np.uint8))
    if fmt == ".jpg":
        img = img.convert("RGB")
    try:
        img.save(path, format=_PIL_FORMATS[fmt])
    except (OSError, ValueError) as exc:
        msg = f"Could not write {path}: {exc}"
        raise EncodeError(msg) from exc
    logger.debug("Saved %s (%s)", path, _PIL_FORMATS[fmt])
    return path
