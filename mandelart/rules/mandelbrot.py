from __future__ import annotations

from typing import Optional

import numpy as np
from numba import njit

from mandelart.rules.base import BOUNDED, EscapeRule

MAX_ITER = 4000
ESCAPE_RADIUS_SQ = 4.0


@njit(cache=True, nogil=True)
def escape_time(x, y, max_iter):
    zr = 0.0
    zi = 0.0
    for n in range(max_iter):
        zr, zi = zr * zr - zi * zi + x, 2.0 * zr * zi + y
        if zr * zr + zi * zi >= ESCAPE_RADIUS_SQ:
            return n
    return BOUNDED


@njit(cache=True, nogil=True)
def _fill_counts(start_x, start_y, step, max_iter, out):
    # Coordinates advance by repeated addition, matching EscapeRule.escape_counts.
    height, width = out.shape
    y = start_y
    for row in range(height):
        x = start_x
        for col in range(width):
            out[row, col] = escape_time(x, y, max_iter)
            x += step
        y -= step


class Mandelbrot(EscapeRule):
    """z <- z^2 + c starting from z = 0."""

    name = "mandelbrot"

    def __init__(self, max_iter: int = MAX_ITER):
        if max_iter <= 0:
            raise ValueError("max_iter must be positive.")
        self.max_iter = int(max_iter)

    def compute(self, x: float, y: float) -> Optional[int]:
        n = int(escape_time(float(x), float(y), self.max_iter))
        return None if n == BOUNDED else n

    def escape_counts(self, start_x: float, start_y: float, step: float, width: int, height: int) -> np.ndarray:
        counts = np.empty((height, width), dtype=np.int32)
        _fill_counts(float(start_x), float(start_y), float(step), self.max_iter, counts)
        return counts

    def __repr__(self) -> str:
        return f"Mandelbrot(max_iter={self.max_iter})"
