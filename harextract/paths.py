"""Map entry URLs to output directories and filenames."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import List, Optional, Sequence, Tuple
from urllib.parse import SplitResult, urlsplit

from .content_types import ContentTypeRegistry, default_registry
from .entry import OutputLayoutPolicy, ResolvedDestination
from .errors import MalformedUrlError

# Schemes whose empty path is equivalent to "/" and whose backslashes are
# path separators (WHATWG "special" schemes).
SPECIAL_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})

# Filename used when the URL path ends with "/".
INDEX_FILENAME = "index"

_SINGLE_DOT = frozenset({".", "%2e"})
_DOUBLE_DOT = frozenset({"..", ".%2e", "%2e.", "%2e%2e"})


def resolve_destination(
    url: str,
    content_type: str,
    policy: OutputLayoutPolicy,
    registry: Optional[ContentTypeRegistry] = None,
) -> ResolvedDestination:
    """Compute where the payload of an entry should be written.

    Args:
        url: Absolute URL of the captured request.
        content_type: Declared content type of the response.
        policy: Output layout policy.
        registry: Content type registry (defaults to the built-in one).

    Returns:
        ResolvedDestination relative to the output root.

    Raises:
        MalformedUrlError: If the URL has no host, no path segments, or a
            segment that cannot be used as a path component.
    """
    registry = registry or default_registry()
    parsed = _split_url(url)
    host = _host_segment(parsed, url)
    directories, filename = _path_segments(parsed, url)

    directories = truncate_segments(directories, policy.path_depth)

    parts: List[str] = []
    if policy.use_domain_subfolder:
        parts.append(host)
    if policy.use_path_subfolder:
        parts.extend(directories)

    extension = registry.extension_for(content_type)
    if extension and not registry.has_known_extension(filename):
        filename += extension

    return ResolvedDestination(relative_dir=PurePosixPath(*parts), filename=filename)


def truncate_segments(segments: Sequence[str], depth: int) -> List[str]:
    """Keep the first *depth* segments (last ``|depth|`` if negative, all if 0)."""
    if depth > 0:
        return list(segments[:depth])
    if depth < 0:
        return list(segments[depth:])
    return list(segments)


def remove_dot_segments(segments: Sequence[str]) -> List[str]:
    """Resolve ``.`` and ``..`` path segments (RFC 3986, section 5.2.4).

    A trailing dot segment leaves an empty final segment, the equivalent
    of a trailing slash.
    """
    output: List[str] = []
    last = len(segments) - 1
    for index, segment in enumerate(segments):
        lowered = segment.lower()
        if lowered in _SINGLE_DOT:
            if index == last:
                output.append("")
            continue
        if lowered in _DOUBLE_DOT:
            if output:
                output.pop()
            if index == last:
                output.append("")
            continue
        output.append(segment)
    return output


def _split_url(url: str) -> SplitResult:
    try:
        parsed = urlsplit(url)
        # hostname/port parsing is lazy and may fail on bad netlocs
        _ = (parsed.hostname, parsed.port)
    except ValueError as exc:
        raise MalformedUrlError(f"Cannot parse URL {url!r}: {exc}", url=url) from exc
    return parsed


def _host_segment(parsed: SplitResult, url: str) -> str:
    host = parsed.hostname
    if not host:
        raise MalformedUrlError(f"URL has no host: {url}", url=url)
    if ":" in host:
        host = f"[{host}]"
    if not _is_safe_segment(host):
        raise MalformedUrlError(f"URL host cannot be used as a folder: {url}", url=url)
    return host


def _path_segments(parsed: SplitResult, url: str) -> Tuple[List[str], str]:
    path = parsed.path
    special = parsed.scheme.lower() in SPECIAL_SCHEMES
    if special:
        path = path.replace("\\", "/") or "/"
    if not path.startswith("/"):
        raise MalformedUrlError(f"URL has no path segments: {url}", url=url)

    segments = remove_dot_segments(path.split("/")[1:])
    if not segments:
        raise MalformedUrlError(f"URL has no path segments: {url}", url=url)

    for segment in segments:
        if segment and not _is_safe_segment(segment):
            raise MalformedUrlError(
                f"URL path segment {segment!r} cannot be used as a path component: {url}",
                url=url,
            )

    *directories, filename = segments
    return [segment for segment in directories if segment], filename or INDEX_FILENAME


def _is_safe_segment(segment: str) -> bool:
    if segment in {"", ".", ".."}:
        return False
    return "/" not in segment and "\\" not in segment and "\x00" not in segment
