import threading

from mandelart.rules import EscapeRule


class PythonMandelbrot(EscapeRule):
    """Pure Python mandelbrot used as a reference for the compiled kernel."""

    name = "python-mandelbrot"

    def __init__(self, max_iter: int = 4000):
        self.max_iter = max_iter

    def compute(self, x, y):
        zr = zi = 0.0
        for n in range(self.max_iter):
            zr, zi = zr * zr - zi * zi + x, 2.0 * zr * zi + y
            if zr * zr + zi * zi >= 4.0:
                return n
        return None


class RecordingRule(EscapeRule):
    """Records every sampled coordinate and reports every point as bounded."""

    name = "recording"

    def __init__(self):
        self.points = []
        self._lock = threading.Lock()

    def compute(self, x, y):
        with self._lock:
            self.points.append((x, y))
        return None
