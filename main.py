#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

    python main.py --source photo.png
    python main.py --source photo.jpg --output-format png --seed 7

Or use the installed script:

    tile-rebuilder --help
"""

from tile_rebuilder.cli import app

if __name__ == "__main__":
    app()
