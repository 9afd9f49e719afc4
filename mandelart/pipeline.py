from __future__ import annotations

import sys
from concurrent.futures import Future, ThreadPoolExecutor
from typing import BinaryIO, List

from tqdm import tqdm

from mandelart.errors import OutputError, WorkerError
from mandelart.frame import Frame, generate_frame
from mandelart.rules import EscapeRule
from mandelart.util.logging_setup import get_logger
from mandelart.viewport import ViewportSpec


def plan_batches(frames: int, threads: int) -> List[int]:
    if frames <= 0:
        raise ValueError("frames must be positive.")
    if threads <= 0:
        raise ValueError("threads must be positive.")
    full, rest = divmod(frames, threads)
    sizes = [threads] * full
    if rest:
        sizes.append(rest)
    return sizes


def _collect(futures: List[Future], first_index: int) -> List[Frame]:
    # Dispatch order, not completion order.
    out: List[Frame] = []
    for slot, fut in enumerate(futures):
        try:
            out.append(fut.result())
        except Exception as e:
            raise WorkerError(f"Frame {first_index + slot} failed: {e}") from e
    return out


def _write_frame(sink: BinaryIO, frame: Frame) -> None:
    try:
        sink.write(frame.data)
        sink.flush()
    except (OSError, ValueError) as e:
        raise OutputError(f"Failed writing frame {frame.index} to output: {e}") from e


def render_sequence(
    *,
    viewport: ViewportSpec,
    zoom: float,
    frames: int,
    threads: int,
    rule: EscapeRule,
    sink: BinaryIO,
    progress: bool = False,
) -> int:
    """Render ``frames`` zoom steps from ``viewport`` and stream them to ``sink``.

    Frames are computed in batches of at most ``threads`` workers. Each batch
    gets a fresh executor sized to the batch and is fully written before the
    next one starts, so the bytes on ``sink`` do not depend on ``threads``.
    """
    logger = get_logger()
    batches = plan_batches(frames, threads)

    logger.info("Render start frames=%s size=%sx%s focus=(%r, %r) range=%r zoom=%r threads=%s rule=%r",
                frames, viewport.width, viewport.height, viewport.focus_x, viewport.focus_y,
                viewport.range, zoom, threads, rule)

    view = viewport
    index = 0
    bar = tqdm(total=frames, unit="frame", file=sys.stderr, disable=not progress)
    try:
        for batch_no, size in enumerate(batches):
            first_index = index
            with ThreadPoolExecutor(max_workers=size, thread_name_prefix=f"frame-batch{batch_no}") as pool:
                futures = []
                for _ in range(size):
                    futures.append(pool.submit(generate_frame, index, view, rule))
                    view = view.zoomed(zoom)
                    index += 1
                done = _collect(futures, first_index)

            logger.debug("Batch %s done frames=%s..%s range=%r", batch_no, first_index, index - 1, done[-1].viewport.range)
            for frame in done:
                _write_frame(sink, frame)
                bar.update(1)
    finally:
        bar.close()

    logger.info("Render complete frames=%s batches=%s", frames, len(batches))
    return frames
