"""Sequential extraction of captured payloads to files."""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from .content_types import ContentTypeRegistry, default_registry
from .entry import CapturedEntry, ExtractionTally, OutputLayoutPolicy
from .errors import InvalidEncodingError
from .paths import resolve_destination
from .sink import write_payload

LOGGER = logging.getLogger(__name__)


def decode_payload(entry: CapturedEntry) -> bytes:
    """Decode the base64 body of *entry* (standard alphabet, padding required)."""
    try:
        payload = base64.b64decode(entry.payload_text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidEncodingError(
            f"Payload of {entry.url} is not valid base64: {exc}", url=entry.url
        ) from exc
    # non-zero trailing bits ("AB==") decode fine but are not canonical
    if base64.b64encode(payload).decode("ascii") != entry.payload_text:
        raise InvalidEncodingError(
            f"Payload of {entry.url} is not valid base64: non-canonical trailing bits",
            url=entry.url,
        )
    return payload


def run_extraction(
    entries: Iterable[CapturedEntry],
    policy: OutputLayoutPolicy,
    base_dir: Union[str, Path],
    *,
    registry: Optional[ContentTypeRegistry] = None,
) -> ExtractionTally:
    """
    Extract every entry with a registered content type under *base_dir*.

    Entries are processed in order. Unregistered content types are skipped.
    Any other failure propagates immediately; files written for earlier
    entries are kept. Entries resolving to the same path overwrite each
    other in encounter order.

    Args:
        entries: Captured entries in archive order.
        policy: Output layout policy.
        base_dir: Output root directory.
        registry: Content type registry (defaults to the built-in one).

    Returns:
        ExtractionTally with total/extracted counts.

    Raises:
        MalformedUrlError: If an extractable entry has an unusable URL.
        InvalidEncodingError: If an extractable entry has an invalid payload.
        OutputWriteError: If a file or directory cannot be written.
    """
    registry = registry or default_registry()
    root = Path(base_dir)
    tally = ExtractionTally()

    for entry in entries:
        tally.total += 1
        if entry.content_type not in registry:
            LOGGER.debug("Skipping %s (%s)", entry.url, entry.content_type)
            continue

        destination = resolve_destination(
            entry.url, entry.content_type, policy, registry
        )
        payload = decode_payload(entry)
        out_dir = root / destination.relative_dir
        size = write_payload(out_dir / destination.filename, payload)

        tally.extracted += 1
        tally.bytes_written += size
        LOGGER.info(
            "- %s: extracted to %s [%d bytes]",
            destination.filename,
            destination.relative_dir if destination.relative_dir.parts else root,
            size,
        )

    return tally
