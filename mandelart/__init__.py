"""Escape-time fractal renderer emitting concatenated binary PPM frames."""

__version__ = "0.1.0"
