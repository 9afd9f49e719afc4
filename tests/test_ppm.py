import io

import numpy as np
import pytest

from mandelart.errors import StreamFormatError
from mandelart.ppm import iter_frames


def test_single_frame():
    data = b"P6\n2 1\n255\n\x00\x00\x00\x01\x00\x00\n"
    (image,) = list(iter_frames(io.BytesIO(data)))
    assert (image.width, image.height) == (2, 1)
    assert image.pixels == b"\x00\x00\x00\x01\x00\x00"
    np.testing.assert_array_equal(image.to_array(), [[[0, 0, 0], [1, 0, 0]]])


def test_concatenated_frames_with_comments():
    first = b"P6\n1 1\n255\n\x0a\x0b\x0c\n"
    second = b"P6 # comment\n1 2 255\n\x01\x02\x03\x04\x05\x06"
    images = list(iter_frames(io.BytesIO(first + second)))
    assert [im.pixels for im in images] == [b"\x0a\x0b\x0c", b"\x01\x02\x03\x04\x05\x06"]


def test_pixel_bytes_may_look_like_whitespace():
    data = b"P6\n1 1\n255\n\n\n\n\n"
    (image,) = list(iter_frames(io.BytesIO(data)))
    assert image.pixels == b"\n\n\n"


def test_empty_stream():
    assert list(iter_frames(io.BytesIO(b""))) == []


@pytest.mark.parametrize("data", [
    b"P5\n1 1\n255\n\x00",
    b"P6\nx 1\n255\n\x00\x00\x00",
    b"P6\n1 1\n65535\n\x00\x00\x00\x00\x00\x00",
    b"P6\n0 1\n255\n",
    b"P6\n2 2\n255\n\x00\x00\x00",
])
def test_malformed(data):
    with pytest.raises(StreamFormatError):
        list(iter_frames(io.BytesIO(data)))
