"""Argument parser construction for the har-extract command."""

from __future__ import annotations

import argparse
from typing import List, Optional

from .config import ExtractDefaults


def build_extract_parser(defaults: Optional[ExtractDefaults] = None) -> argparse.ArgumentParser:
    defaults = defaults or ExtractDefaults()
    parser = argparse.ArgumentParser(
        prog="har-extract",
        description="Extract images embedded in a HAR (HTTP Archive) file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  # Extract into session_extract/ next to the input file
  har-extract session.har

  # Extract into a specific folder
  har-extract session.har images/

  # One subfolder per host
  har-extract session.har --output-domain

  # Host and URL path subfolders, keeping only the last two path parts
  har-extract session.har --output-domain --output-path --output-path-depth -2

  # Also extract a format missing from the built-in table
  har-extract session.har --content-type image/tiff=.tiff
""",
    )

    parser.add_argument(
        "input_har",
        help="HAR file to extract images from",
    )
    parser.add_argument(
        "output_dir",
        nargs="?",
        default=None,
        help="Output folder (default: <input name>_extract next to the input file)",
    )

    layout_group = parser.add_argument_group("Output layout")
    layout_group.add_argument(
        "--output-domain",
        action=argparse.BooleanOptionalAction,
        default=defaults.output_domain,
        help="Create a subfolder for each URL host",
    )
    layout_group.add_argument(
        "--output-path",
        action=argparse.BooleanOptionalAction,
        default=defaults.output_path,
        help="Create subfolders for the URL path (requires --output-domain)",
    )
    layout_group.add_argument(
        "--output-path-depth",
        type=int,
        default=defaults.output_path_depth,
        help="URL path parts to keep: 0 = all, N = first N, -N = last N "
             f"(default: {defaults.output_path_depth})",
    )

    parser.add_argument(
        "--content-type",
        dest="content_types",
        action="append",
        default=[],
        metavar="TYPE=EXT",
        help="Extract an additional content type with the given extension "
             "(repeatable, e.g. image/tiff=.tiff)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser


def parse_extract_args(
    argv: Optional[List[str]] = None,
    defaults: Optional[ExtractDefaults] = None,
) -> argparse.Namespace:
    parser = build_extract_parser(defaults)
    return parser.parse_args(argv)
