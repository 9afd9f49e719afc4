from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

from mandelart.config import load_config, normalise_config
from mandelart.errors import MandelartError, OutputError
from mandelart.pipeline import render_sequence
from mandelart.rules import available_rules, get_rule
from mandelart.util.logging_setup import configure_root_logging, get_logger
from mandelart.util.manifest import build_manifest, write_manifest

_EXAMPLES = """\
examples:
  single image of the mandelbrot set using the default values:
    mandelart render -x -1 -y 0.005 -r 0.00005 -w 1920 -ht 1080 -a mandelbrot -f 1 > image.ppm
  60 second zoom at 60 fps:
    mandelart render -x -1 -y 0.005 -r 0.00005 -w 1920 -ht 1080 -a mandelbrot -z 0.99 -f 3600 > zoom.ppm
"""

def _git_commit() -> Optional[str]:
    try:
        r = subprocess.run(["git", "rev-parse", "HEAD"], capture_output=True, text=True, check=True)
        return r.stdout.strip()
    except (OSError, subprocess.CalledProcessError):
        return None

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mandelart", description="Render escape-time fractals as a stream of binary PPM (P6) frames.")
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG","INFO","WARNING","ERROR"], help="Log level.")
    p.add_argument("--log-file", type=str, default="", help="Rotating log file path. Empty disables file logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser(
        "render",
        help="Render frames to stdout or a file. One frame is an image, two or more a video.",
        epilog=_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # None means "not given": JSON config values and then defaults apply.
    r.add_argument("-x", "--x_coor", dest="focus_x", type=float, default=None, help="X coordinate of the focus point. Default: -1")
    r.add_argument("-y", "--y_coor", dest="focus_y", type=float, default=None, help="Y coordinate of the focus point. Default: 0.005")
    r.add_argument("-r", "--range", dest="range", type=float, default=None, help="Distance between the leftmost and rightmost pixel. Default: 0.00005")
    r.add_argument("-w", "--width", dest="width", type=int, default=None, help="Width in pixels. Default: 1920")
    r.add_argument("-ht", "--height", dest="height", type=int, default=None, help="Height in pixels. Default: 1080")
    r.add_argument("-a", "--algorithm", dest="algorithm", type=str.lower, default=None, choices=available_rules(), help="Fractal rule. Default: mandelbrot")
    r.add_argument("-z", "--zoom", dest="zoom", type=float, default=None, help="Range multiplier between frames. Default: 0.99")
    r.add_argument("-f", "--frames", dest="frames", type=int, default=None, help="Number of frames. 1 for an image, >= 2 for a video. Default: 1")
    r.add_argument("-t", "--threads", dest="threads", type=int, default=None, help="Frames rendered concurrently. Default: CPU count")
    r.add_argument("-o", "--output", type=str, default="-", help="Output file, '-' for stdout.")
    r.add_argument("--config", type=str, default=None, help="JSON config file; command line flags take precedence.")
    r.add_argument("--progress", action="store_true", help="Show a progress bar on stderr.")
    r.add_argument("--manifest", type=str, default=None, help="Write a JSON run manifest to this path.")

    e = sub.add_parser("encode", help="Encode a PPM frame stream into an MP4 video using OpenCV.")
    e.add_argument("-i", "--input", type=str, default="-", help="PPM stream file, '-' for stdin.")
    e.add_argument("-o", "--output", type=str, default="output.mp4", help="Output MP4 file.")
    e.add_argument("--fps", type=int, default=60, help="Frames per second.")

    x = sub.add_parser("export", help="Save each frame of a PPM stream as a PNG file.")
    x.add_argument("-i", "--input", type=str, default="-", help="PPM stream file, '-' for stdin.")
    x.add_argument("--frames-dir", type=str, default="frames", help="Directory for the PNG files.")

    return p

@contextmanager
def _open_output(path: str) -> Iterator[BinaryIO]:
    if path == "-":
        yield sys.stdout.buffer
        return
    try:
        f = open(path, "wb")
    except OSError as e:
        raise OutputError(f"Cannot open output {path}: {e}") from e
    with f:
        yield f

@contextmanager
def _open_input(path: str) -> Iterator[BinaryIO]:
    if path == "-":
        yield sys.stdin.buffer
        return
    try:
        f = open(path, "rb")
    except OSError as e:
        raise MandelartError(f"Cannot open input {path}: {e}") from e
    with f:
        yield f

def _render(args: argparse.Namespace) -> int:
    logger = get_logger()
    raw = load_config(args.config)
    for key in ("focus_x", "focus_y", "range", "width", "height", "algorithm", "zoom", "frames", "threads"):
        value = getattr(args, key)
        if value is not None:
            raw[key] = value
    cfg = normalise_config(raw)
    rule = get_rule(cfg.algorithm)

    with _open_output(args.output) as sink:
        render_sequence(
            viewport=cfg.viewport(), zoom=cfg.zoom, frames=cfg.frames, threads=cfg.threads,
            rule=rule, sink=sink, progress=args.progress,
        )

    if args.manifest:
        manifest = build_manifest(config=cfg.as_dict(), rule=repr(rule), git_commit=_git_commit())
        write_manifest(args.manifest, manifest)
        logger.info("Run manifest written: %s", args.manifest)
    return 0

def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    log_file = args.log_file if args.log_file and args.log_file.strip() else None
    logger = configure_root_logging(level=log_level, console=True, log_file=log_file)

    try:
        if args.cmd == "render":
            return _render(args)

        if args.cmd == "encode":
            from mandelart.video.opencv_writer import encode_stream
            with _open_input(args.input) as stream:
                encode_stream(stream=stream, output_file=args.output, fps=args.fps)
            return 0

        if args.cmd == "export":
            from mandelart.video.png_frames import export_frames
            with _open_input(args.input) as stream:
                export_frames(stream=stream, frames_dir=args.frames_dir)
            return 0

        raise RuntimeError("Unknown command.")
    except MandelartError as e:
        logger.error("%s", e)
        return 1
