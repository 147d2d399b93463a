#!/usr/bin/env python3
"""Ascent — entry point.

Run with:
    python main.py
    python -m ascent
"""

from ascent.__main__ import main


if __name__ == "__main__":
    main()
