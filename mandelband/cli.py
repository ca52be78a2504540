from __future__ import annotations

import argparse
import re
from typing import Any, Dict, Optional

from mandelband.config import ConfigError, load_config, normalise_config
from mandelband.pipeline import render_to_file
from mandelband.scheduler import RenderError
from mandelband.util.logging_setup import configure_root_logging, get_logger, level_from_name
from mandelband.util.manifest import build_manifest, write_manifest

# "-1.20,0.35" or "-1e-3" is a value, not an option flag
_NUMBER = r"(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_NEGATIVE_VALUE = re.compile(rf"^-{_NUMBER}(?:,[-+]?{_NUMBER})?$")

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mandelband",
        description="Render the Mandelbrot set to a grayscale image using a pool of band workers.",
        epilog="Example: mandelband mandel.png 1000x750 -1.20,0.35 -1,0.20 8",
    )
    p._negative_number_matcher = _NEGATIVE_VALUE
    p.add_argument("file", nargs="?", default=None, metavar="FILE", help="Output image path (PNG unless the extension says otherwise).")
    p.add_argument("pixels", nargs="?", default=None, metavar="PIXELS", help="Image size as WIDTHxHEIGHT, e.g. 1000x750.")
    p.add_argument("upper_left", nargs="?", default=None, metavar="UPPERLEFT", help="Complex point at the top-left pixel as RE,IM.")
    p.add_argument("lower_right", nargs="?", default=None, metavar="LOWERRIGHT", help="Complex point at the bottom-right corner as RE,IM.")
    p.add_argument("threads", nargs="?", default=None, metavar="THREADS", help="Number of worker threads (defaults to the CPU count).")
    p.add_argument("--config", type=str, default=None, help="Path to config JSON. Positional arguments override its values.")
    p.add_argument("--limit", type=int, default=None, help="Iteration limit per pixel (default 255).")
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level.")
    p.add_argument("--log-file", type=str, default="", help="Log file path (rotating). Empty disables file logging.")
    p.add_argument("--manifest", type=str, default=None, help="Write a JSON run manifest to this path.")
    p.add_argument("--progress", action="store_true", help="Show a progress bar over completed bands.")
    return p

def _merge(cfg: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    out = dict(cfg)
    overrides = {
        "output": args.file,
        "pixels": args.pixels,
        "upper_left": args.upper_left,
        "lower_right": args.lower_right,
        "threads": args.threads,
        "max_iterations": args.limit,
    }
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    if args.pixels is not None:
        out.pop("width", None)
        out.pop("height", None)
    return out

def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    log_level = level_from_name(args.log_level)
    log_file = args.log_file if args.log_file and args.log_file.strip() else None
    configure_root_logging(level=log_level, console=True, log_file=log_file)
    logger = get_logger()

    try:
        config, output = normalise_config(_merge(load_config(args.config), args))
    except (ConfigError, OSError) as e:
        logger.error("Invalid render parameters: %s", e)
        return 1

    try:
        summary = render_to_file(config, output, progress=args.progress)
    except RenderError as e:
        logger.error("Render failed, no image written: %s", e)
        return 1
    except (OSError, ValueError) as e:
        logger.error("Could not write %s: %s", output, e)
        return 1

    if args.manifest:
        write_manifest(args.manifest, build_manifest(config=config, summary=summary))
        logger.info("Run manifest written: %s", args.manifest)
    return 0
