import pytest

from mandelart.rules import Mandelbrot
from mandelart.viewport import ViewportSpec


@pytest.fixture
def rule():
    return Mandelbrot()


@pytest.fixture
def small_viewport():
    return ViewportSpec(focus_x=-0.75, focus_y=0.1, range=3.0, width=24, height=16)
