from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

CHANNEL_MAX = 255
GREEN_THRESHOLD = 256
BLUE_THRESHOLD = 512


def colorize(result: Optional[int]) -> Tuple[int, int, int]:
    """Map an escape count to a black -> red -> yellow -> white ramp.

    Bounded points (``None``) are black. The count is halved first, so
    green switches on from iteration 512 and blue from iteration 1024.
    """
    if result is None:
        return (0, 0, 0)
    h = int(result) // 2
    level = min(h, CHANNEL_MAX)
    green = 0 if h < GREEN_THRESHOLD else level
    blue = 0 if h < BLUE_THRESHOLD else level
    return (level, green, blue)


def colorize_counts(counts: np.ndarray) -> np.ndarray:
    """Vectorised ``colorize`` over a grid of counts where negative means bounded."""
    counts = np.asarray(counts)
    h = counts.astype(np.int64) // 2
    level = np.minimum(h, CHANNEL_MAX)
    rgb = np.zeros(counts.shape + (3,), dtype=np.uint8)
    escaped = counts >= 0
    rgb[..., 0] = np.where(escaped, level, 0)
    rgb[..., 1] = np.where(escaped & (h >= GREEN_THRESHOLD), level, 0)
    rgb[..., 2] = np.where(escaped & (h >= BLUE_THRESHOLD), level, 0)
    return rgb
