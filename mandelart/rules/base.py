from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

BOUNDED = -1


class EscapeRule(ABC):
    """An escape-time iteration rule sampled over a viewport grid.

    ``compute`` is the scalar contract: an iteration count for points that
    escape, ``None`` for points that stay bounded. ``escape_counts`` fills a
    whole ``(height, width)`` grid, storing ``BOUNDED`` for bounded points.
    """

    name: str = ""

    @abstractmethod
    def compute(self, x: float, y: float) -> Optional[int]:
        ...

    def escape_counts(self, start_x: float, start_y: float, step: float, width: int, height: int) -> np.ndarray:
        counts = np.empty((height, width), dtype=np.int32)
        y = start_y
        for row in range(height):
            x = start_x
            for col in range(width):
                n = self.compute(x, y)
                counts[row, col] = BOUNDED if n is None else n
                x += step
            y -= step
        return counts

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
