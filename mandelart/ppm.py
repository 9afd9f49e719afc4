from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Iterator

import numpy as np

from mandelart.errors import StreamFormatError

_WHITESPACE = b" \t\n\r\v\f"


@dataclass(frozen=True)
class PPMImage:
    width: int
    height: int
    pixels: bytes

    def to_array(self) -> np.ndarray:
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.height, self.width, 3)


class _Reader:
    def __init__(self, stream: BinaryIO):
        self._stream = stream

    def read_byte(self) -> bytes:
        return self._stream.read(1)

    def read_exact(self, n: int) -> bytes:
        chunks = []
        while n > 0:
            chunk = self._stream.read(n)
            if not chunk:
                break
            chunks.append(chunk)
            n -= len(chunk)
        return b"".join(chunks)

    def skip_space(self) -> bytes:
        """Skip whitespace and comments; return the first other byte (b"" at EOF)."""
        while True:
            b = self.read_byte()
            if not b:
                return b
            if b == b"#":
                while b and b not in b"\r\n":
                    b = self.read_byte()
                continue
            if b not in _WHITESPACE:
                return b

    def read_int(self, what: str) -> int:
        b = self.skip_space()
        digits = b""
        while b and b.isdigit():
            digits += b
            b = self.read_byte()
        if not digits:
            raise StreamFormatError(f"Expected {what} in PPM header, got {b!r}")
        if b and b not in _WHITESPACE:
            raise StreamFormatError(f"Malformed {what} in PPM header")
        return int(digits)


def iter_frames(stream: BinaryIO) -> Iterator[PPMImage]:
    """Yield each P6 image of a concatenated stream by re-reading headers.

    Whitespace between images (such as the newline the renderer appends to
    every frame) is skipped. Only 8-bit images are accepted.
    """
    reader = _Reader(stream)
    index = 0
    while True:
        first = reader.skip_space()
        if not first:
            return
        magic = first + reader.read_byte()
        if magic != b"P6":
            raise StreamFormatError(f"Frame {index}: bad magic {magic!r}, expected b'P6'")
        width = reader.read_int("width")
        height = reader.read_int("height")
        maxval = reader.read_int("maxval")
        if width <= 0 or height <= 0:
            raise StreamFormatError(f"Frame {index}: invalid size {width}x{height}")
        if maxval != 255:
            raise StreamFormatError(f"Frame {index}: unsupported maxval {maxval}")
        size = width * height * 3
        pixels = reader.read_exact(size)
        if len(pixels) != size:
            raise StreamFormatError(f"Frame {index}: truncated pixel data ({len(pixels)}/{size} bytes)")
        yield PPMImage(width=width, height=height, pixels=pixels)
        index += 1
