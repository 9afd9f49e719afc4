from __future__ import annotations

import os
from typing import BinaryIO

from PIL import Image

from mandelart.errors import OutputError
from mandelart.ppm import PPMImage, iter_frames
from mandelart.util.logging_setup import get_logger

def _save_frame(image: PPMImage, frames_dir: str, frame_index: int) -> str:
    path = os.path.join(frames_dir, f"frame_{frame_index:06d}.png")
    img = Image.frombytes("RGB", (image.width, image.height), image.pixels)
    try:
        img.save(path, format="PNG", optimize=True)
    except OSError as e:
        raise OutputError(f"Failed to save frame {frame_index} to {path}: {e}") from e
    return path

def export_frames(*, stream: BinaryIO, frames_dir: str) -> int:
    logger = get_logger()
    os.makedirs(frames_dir, exist_ok=True)
    count = 0
    for i, image in enumerate(iter_frames(stream)):
        path = _save_frame(image, frames_dir, i)
        logger.debug("Saved frame %s -> %s", i, path)
        count += 1
    logger.info("Exported %s frames to %s", count, frames_dir)
    return count
