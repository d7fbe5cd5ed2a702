"""Command-line entry point: live preview of synthetic monochrome frames."""

import argparse
import logging
import signal
import sys
from typing import List, Optional

from monoview import __version__
from monoview.errors import ConfigurationError, MonoviewError
from monoview.pipeline import StopSignal, StreamLoop
from monoview.utils.config import load_config


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_RUNTIME_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monoview",
        description="Render synthetic single-channel frames in a live window "
                    "and print FPS once per second.",
    )
    parser.add_argument("--config", help="YAML config file (default: config/default.yaml)")
    parser.add_argument("--width", type=int, help="Frame width in pixels")
    parser.add_argument("--height", type=int, help="Frame height in pixels")
    parser.add_argument("--title", help="Window title")
    parser.add_argument("--max-frames", type=int, help="Stop after N frames")
    parser.add_argument("--seed", type=int, help="Seed for the noise generator")
    parser.add_argument("--headless", action="store_true",
                        help="Render off-screen (no window)")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING...")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _collect_overrides(args: argparse.Namespace) -> dict:
    overrides = {}
    if args.width is not None:
        overrides["frame.width"] = args.width
    if args.height is not None:
        overrides["frame.height"] = args.height
    if args.title is not None:
        overrides["display.window_title"] = args.title
    if args.max_frames is not None:
        overrides["loop.max_frames"] = args.max_frames
    if args.seed is not None:
        overrides["source.seed"] = args.seed
    if args.headless:
        overrides["display.backend"] = "headless"
    if args.log_level is not None:
        overrides["logging.level"] = args.log_level
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    """Run the preview loop; returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config, overrides=_collect_overrides(args))
        stop = StopSignal()
        loop = StreamLoop.from_config(config, stop=stop)
    except ConfigurationError as e:
        print(f"monoview: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    previous = signal.signal(signal.SIGTERM, lambda signum, frame: stop.set())
    try:
        loop.run()
    except MonoviewError:
        return EXIT_RUNTIME_ERROR
    finally:
        signal.signal(signal.SIGTERM, previous)

    return EXIT_OK
