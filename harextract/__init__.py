"""Extract images embedded in HTTP Archive (HAR) recordings.

This module provides a small API for turning the base64 response bodies
captured in a ``.har`` file into individual files. It supports:

- Flat output (every file directly in the output folder)
- One subfolder per URL host
- Host plus URL path subfolders, optionally limited in depth
- Extra content types on top of the built-in image table

Example usage:

    from harextract import OutputLayoutPolicy, extract_har

    tally = extract_har(
        "session.har",
        policy=OutputLayoutPolicy(use_domain_subfolder=True),
    )
    print(f"{tally.extracted} of {tally.total} entries extracted")

    # Entries from another source
    from harextract import CapturedEntry, run_extraction

    entries = [CapturedEntry("https://example.com/logo", "image/png", "iVBORw0KGgo=")]
    run_extraction(entries, OutputLayoutPolicy(), "out/")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from .config import OUTPUT_DIR_SUFFIX, describe_policy, validate_policy
from .content_types import ContentTypeRegistry, default_registry
from .entry import CapturedEntry, ExtractionTally, OutputLayoutPolicy, ResolvedDestination
from .errors import (
    ArchiveParseError,
    ConfigurationError,
    ExtractionError,
    InvalidEncodingError,
    MalformedUrlError,
    OutputWriteError,
)
from .extractor import decode_payload, run_extraction
from .har import load_har, parse_har
from .paths import resolve_destination
from .sink import write_payload

LOGGER = logging.getLogger(__name__)

__all__ = [
    # Data types
    "CapturedEntry",
    "ExtractionTally",
    "OutputLayoutPolicy",
    "ResolvedDestination",
    # Registry
    "ContentTypeRegistry",
    "default_registry",
    # Errors
    "ExtractionError",
    "ConfigurationError",
    "ArchiveParseError",
    "MalformedUrlError",
    "InvalidEncodingError",
    "OutputWriteError",
    # Pipeline
    "decode_payload",
    "resolve_destination",
    "run_extraction",
    "write_payload",
    # HAR input
    "load_har",
    "parse_har",
    # Top level
    "default_output_dir",
    "extract_har",
]


def default_output_dir(har_path: Union[str, Path]) -> Path:
    """Output folder next to the input file: ``<stem>_extract``."""
    path = Path(har_path)
    return path.with_name(path.stem + OUTPUT_DIR_SUFFIX)


def extract_har(
    har_path: Union[str, Path],
    output_dir: Optional[Union[str, Path]] = None,
    *,
    policy: Optional[OutputLayoutPolicy] = None,
    registry: Optional[ContentTypeRegistry] = None,
) -> ExtractionTally:
    """
    Extract all registered payloads of a HAR file.

    Args:
        har_path: Path to the ``.har`` file.
        output_dir: Output root. Defaults to ``<stem>_extract`` next to
            the input file.
        policy: Output layout policy (flat by default).
        registry: Content type registry (defaults to the built-in one).

    Returns:
        ExtractionTally for the run.

    Raises:
        ConfigurationError: If the policy is invalid or the input is not a file.
        ArchiveParseError: If the HAR file cannot be parsed.
        MalformedUrlError, InvalidEncodingError, OutputWriteError: On the
            first failing entry.
    """
    policy = policy or OutputLayoutPolicy()
    validate_policy(policy)

    input_path = Path(har_path).expanduser().resolve()
    if not input_path.is_file():
        raise ConfigurationError(f"Specified path ({har_path}) is not a file")

    folder = Path(output_dir) if output_dir else default_output_dir(input_path)
    if not folder.is_dir():
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputWriteError(
                f"Cannot create dirs at path {folder}: {exc}", path=str(folder)
            ) from exc

    LOGGER.info("Loading file %s", input_path)
    entries = load_har(input_path)

    LOGGER.info("Extraction output settings:")
    for line in describe_policy(policy):
        LOGGER.info("%s", line)

    LOGGER.info("Starting extraction...")
    tally = run_extraction(entries, policy, folder, registry=registry)
    LOGGER.info(
        "Finished extracting %d (out of total %d) files.",
        tally.extracted,
        tally.total,
    )
    return tally
