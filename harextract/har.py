"""Load HTTP Archive (HAR) files into captured entries."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union
from urllib.parse import urlsplit

from .entry import CapturedEntry
from .errors import ArchiveParseError

LOGGER = logging.getLogger(__name__)


def load_har(path: Union[str, Path]) -> List[CapturedEntry]:
    """Read and parse the HAR file at *path*.

    Raises:
        ArchiveParseError: If the file cannot be read or is not a valid HAR.
    """
    har_path = Path(path)
    try:
        with open(har_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as exc:
        raise ArchiveParseError(f"Cannot open file {har_path}: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ArchiveParseError(
            f"Cannot parse file {har_path} as JSON: {exc}"
        ) from exc

    entries = parse_har(data)
    LOGGER.debug("Loaded %d entries from %s", len(entries), har_path)
    return entries


def parse_har(data: Any) -> List[CapturedEntry]:
    """Convert decoded HAR JSON into a list of captured entries."""
    log = _require_dict(data, "log", "HAR document")
    raw_entries = log.get("entries")
    if not isinstance(raw_entries, list):
        raise ArchiveParseError("HAR log has no 'entries' list")
    return [_parse_entry(raw, index) for index, raw in enumerate(raw_entries)]


def _parse_entry(raw: Any, index: int) -> CapturedEntry:
    where = f"entry {index}"
    if not isinstance(raw, dict):
        raise ArchiveParseError(f"HAR {where} is not an object")

    request = _require_dict(raw, "request", where)
    response = _require_dict(raw, "response", where)
    content = _require_dict(response, "content", f"{where} response")

    url = request.get("url")
    if not isinstance(url, str) or not urlsplit(url).scheme:
        raise ArchiveParseError(f"HAR {where} has an invalid request url: {url!r}")

    mime_type = content.get("mimeType")
    if not isinstance(mime_type, str):
        raise ArchiveParseError(f"HAR {where} has no response content mimeType")

    text = content.get("text")
    if text is None:
        text = ""
    elif not isinstance(text, str):
        raise ArchiveParseError(f"HAR {where} response content text is not a string")

    return CapturedEntry(url=url, content_type=mime_type, payload_text=text)


def _require_dict(parent: Any, key: str, where: str) -> Dict[str, Any]:
    value = parent.get(key) if isinstance(parent, dict) else None
    if not isinstance(value, dict):
        raise ArchiveParseError(f"{where} has no '{key}' object")
    return value
