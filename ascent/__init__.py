"""Ascent: practice log with a drill interval timer."""

__version__ = "0.1.0"
