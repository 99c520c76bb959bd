#!/usr/bin/env python3
"""
main.py - Quick-start entry point.

    python main.py new 15 15 -o output/canvas.png
    python main.py brush output/canvas.png 7 7 --color red --size 3
    python main.py guide output/canvas.png -o output/guide.pdf

Or use the module directly:

    python -m pixel_canvas.cli --help
"""

from pixel_canvas.cli import app

if __name__ == "__main__":
    app()
