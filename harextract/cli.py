"""Command-line interface for HAR image extraction."""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from . import extract_har
from .cli_config import load_config
from .cli_parsers import parse_extract_args
from .config import ExtractDefaults, build_registry, load_defaults_from_env
from .content_types import parse_content_type_pair
from .entry import OutputLayoutPolicy
from .errors import ConfigurationError

# Configuration directory for global CLI usage
CONFIG_DIR = Path.home() / ".config" / "harextract"
CONFIG_ENV_FILE = CONFIG_DIR / ".env"


def _load_config() -> None:
    load_config(
        config_dir=CONFIG_DIR,
        config_env_file=CONFIG_ENV_FILE,
        cwd=Path.cwd(),
        load_env=load_dotenv,
        copy_file=shutil.copy,
    )


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_policy(args: argparse.Namespace) -> OutputLayoutPolicy:
    if args.output_path_depth and not args.output_path:
        logging.debug("--output-path-depth has no effect without --output-path")
    return OutputLayoutPolicy(
        use_domain_subfolder=bool(args.output_domain),
        use_path_subfolder=bool(args.output_path),
        path_depth=int(args.output_path_depth),
    )


def _extra_content_types(
    args: argparse.Namespace, defaults: ExtractDefaults
) -> Dict[str, str]:
    extra = dict(defaults.content_types)
    for value in args.content_types or []:
        content_type, extension = parse_content_type_pair(value)
        extra[content_type] = extension
    return extra


def _run_extract(args: argparse.Namespace, defaults: ExtractDefaults) -> int:
    policy = _build_policy(args)
    registry = build_registry(_extra_content_types(args, defaults))
    extract_har(
        args.input_har,
        args.output_dir,
        policy=policy,
        registry=registry,
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for har-extract."""
    _load_config()
    try:
        defaults = load_defaults_from_env()
    except ConfigurationError as exc:
        _setup_logging(False)
        logging.error("Error: %s", exc)
        return 1

    args = parse_extract_args(argv, defaults)
    _setup_logging(args.verbose)

    try:
        return _run_extract(args, defaults)
    except KeyboardInterrupt:
        logging.info("Interrupted")
        return 130
    except Exception as exc:
        logging.error("Error: %s", exc)
        if args.verbose:
            logging.exception("Full traceback:")
        return 1


if __name__ == "__main__":
    sys.exit(main())
