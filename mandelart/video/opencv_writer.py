from __future__ import annotations

from typing import BinaryIO

from mandelart.errors import MandelartError, OutputError, StreamFormatError
from mandelart.ppm import iter_frames
from mandelart.util.logging_setup import get_logger

def encode_stream(*, stream: BinaryIO, output_file: str, fps: int) -> int:
    logger = get_logger()
    try:
        import cv2  # type: ignore
    except ImportError as e:
        raise MandelartError(f"OpenCV not installed (pip install 'mandelart[video]'): {e}") from e

    out = None
    size = None
    count = 0
    try:
        for count, image in enumerate(iter_frames(stream), start=1):
            if out is None:
                size = (image.width, image.height)
                fourcc = cv2.VideoWriter_fourcc(*"mp4v")
                out = cv2.VideoWriter(output_file, fourcc, fps, size)
                if not out.isOpened():
                    raise OutputError(f"Failed to open VideoWriter for {output_file}")
                logger.info("Encoding video %s (%sx%s @ %sfps)", output_file, size[0], size[1], fps)
            if (image.width, image.height) != size:
                raise StreamFormatError(
                    f"Frame {count - 1} is {image.width}x{image.height}, expected {size[0]}x{size[1]}")
            out.write(cv2.cvtColor(image.to_array(), cv2.COLOR_RGB2BGR))
            if count % 200 == 0:
                logger.info("Encoded %s frames", count)
    finally:
        if out is not None:
            out.release()

    if count == 0:
        raise StreamFormatError("No frames found in input stream")
    logger.info("Video written: %s (%s frames)", output_file, count)
    return count
