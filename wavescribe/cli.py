#!/usr/bin/env python3
"""
Render .wvy waveform descriptions to timing diagram images.

Usage:
    wavescribe -i input.wvy [-o output.png] [--fs 16] [--debug] [--config opts.yaml]

The image is sized to the smallest box that fits every track. Options from
--config are applied first; --fs and --debug override them.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .composer import render_file
from .config import RenderOptions
from .errors import WaveformError
from .persistence import load_options

logger = logging.getLogger("wavescribe")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wavescribe",
        description="Generate timing diagram images from .wvy waveform descriptions")
    parser.add_argument("-i", "--input", required=True,
                        help="input file in wvy format")
    parser.add_argument("-o", "--output",
                        help="output image file (default: input name with .png suffix)")
    parser.add_argument("--fs", type=float, default=None,
                        help="font size in pixels (default: 16)")
    parser.add_argument("--debug", action="store_true", default=None,
                        help="draw vertical gridlines at every column")
    parser.add_argument("--config",
                        help="YAML file with rendering options")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log pipeline details")
    return parser


def resolve_options(args: argparse.Namespace) -> RenderOptions:
    options = load_options(args.config) if args.config else RenderOptions()
    if args.fs is not None:
        options = RenderOptions(**{**options.to_dict(), 'font_size': args.fs})
    if args.debug:
        options.debug = True
    return options


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    output = args.output or str(Path(args.input).with_suffix(".png"))
    try:
        options = resolve_options(args)
    except OSError as e:
        print(f"Error: failed to read options {args.config!r}: {e.strerror}", file=sys.stderr)
        return 1
    except (WaveformError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        diagram = render_file(args.input, output, options)
    except WaveformError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: failed to read {args.input!r}: {e.strerror}", file=sys.stderr)
        return 1

    logger.info("rendered %d signals to %s", len(diagram.signals), output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
