"""Exception hierarchy shared by the library and the CLI."""

from __future__ import annotations


class RebuildError(Exception):
    """Base class for every error raised by tile_rebuilder."""


class InputError(RebuildError, ValueError):
    """Missing source file or unsupported image format."""


class DecodeError(RebuildError):
    """The source file exists but is not a decodable image."""


class EncodeError(RebuildError):
    """The output image could not be written."""


class ConsistencyError(RebuildError, RuntimeError):
    """Palette ran dry before every tile had a colour."""


class OutputCollisionWarning(UserWarning):
    """The requested output path exists and a free name was chosen instead."""
