from __future__ import annotations

from dataclasses import dataclass

from mandelart.color import colorize_counts
from mandelart.rules import EscapeRule
from mandelart.util.logging_setup import get_logger
from mandelart.viewport import ViewportSpec

MAX_CHANNEL_VALUE = 255


def ppm_header(width: int, height: int) -> bytes:
    return f"P6\n{width} {height}\n{MAX_CHANNEL_VALUE}\n".encode("ascii")


@dataclass(frozen=True)
class Frame:
    index: int
    viewport: ViewportSpec
    data: bytes

    def __len__(self) -> int:
        return len(self.data)


def generate_frame(index: int, viewport: ViewportSpec, rule: EscapeRule) -> Frame:
    """Render one viewport into a self-delimited P6 image.

    Row 0 is the top of the view; the buffer ends with a single newline
    after the pixel data.
    """
    logger = get_logger()
    logger.debug("[Frame %s] render start range=%r", index, viewport.range)
    counts = rule.escape_counts(viewport.start_x, viewport.start_y, viewport.step, viewport.width, viewport.height)
    pixels = colorize_counts(counts)
    data = b"".join((ppm_header(viewport.width, viewport.height), pixels.tobytes(), b"\n"))
    logger.debug("[Frame %s] render done", index)
    return Frame(index=index, viewport=viewport, data=data)
