from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator


def next_range(range_: float, zoom: float) -> float:
    return range_ * zoom


@dataclass(frozen=True)
class ViewportSpec:
    """Window of the complex plane sampled by one frame.

    ``range`` is the horizontal span; the vertical span follows from the
    same pixel step, so pixels are always square.
    """

    focus_x: float
    focus_y: float
    range: float
    width: int
    height: int

    @property
    def step(self) -> float:
        return self.range / self.width

    @property
    def start_x(self) -> float:
        return self.focus_x - self.range / 2

    @property
    def start_y(self) -> float:
        return self.focus_y + self.step * self.height / 2

    def zoomed(self, zoom: float) -> "ViewportSpec":
        return replace(self, range=next_range(self.range, zoom))


def iter_viewports(start: ViewportSpec, zoom: float, count: int) -> Iterator[ViewportSpec]:
    view = start
    for _ in range(count):
        yield view
        view = view.zoomed(zoom)
