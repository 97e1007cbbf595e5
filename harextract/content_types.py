"""Registry of extractable content types and their file extensions."""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from .errors import ConfigurationError

# Content types are matched literally; parameters such as "; charset=" are
# not stripped.
DEFAULT_CONTENT_TYPES: Mapping[str, str] = MappingProxyType(
    {
        "image/webp": ".webp",
        "image/jpeg": ".jpg",
        "image/png": ".png",
        "image/svg+xml": ".svg",
        "image/gif": ".gif",
        "image/avif": ".avif",
        "image/bmp": ".bmp",
        "image/x-icon": ".ico",
        "image/vnd.microsoft.icon": ".ico",
    }
)

# Extensions that count as "already present" without being the canonical
# extension of any content type.
DEFAULT_EXTENSION_ALIASES: Tuple[str, ...] = (".jpeg",)


class ContentTypeRegistry:
    """Immutable lookup from content type to canonical file extension."""

    __slots__ = ("_types", "_aliases")

    def __init__(
        self,
        types: Mapping[str, str],
        aliases: Iterable[str] = (),
    ) -> None:
        self._types: Mapping[str, str] = MappingProxyType(dict(types))
        self._aliases: FrozenSet[str] = frozenset(aliases)

    def __contains__(self, content_type: object) -> bool:
        return content_type in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"ContentTypeRegistry({dict(self._types)!r})"

    @property
    def types(self) -> Mapping[str, str]:
        return self._types

    @property
    def known_extensions(self) -> FrozenSet[str]:
        return frozenset(self._types.values()) | self._aliases

    def extension_for(self, content_type: str) -> Optional[str]:
        """Return the extension for *content_type*, or None if not extractable."""
        return self._types.get(content_type)

    def has_known_extension(self, filename: str) -> bool:
        """True when *filename* already ends with any registered extension."""
        return any(filename.endswith(ext) for ext in self.known_extensions)

    def with_types(self, extra: Mapping[str, str]) -> "ContentTypeRegistry":
        """Return a new registry with *extra* added (or overriding) entries."""
        merged: Dict[str, str] = dict(self._types)
        merged.update(extra)
        return ContentTypeRegistry(merged, self._aliases)


@lru_cache(maxsize=1)
def default_registry() -> ContentTypeRegistry:
    """The built-in image registry, constructed once per process."""
    return ContentTypeRegistry(DEFAULT_CONTENT_TYPES, DEFAULT_EXTENSION_ALIASES)


def parse_content_type_pair(value: str) -> Tuple[str, str]:
    """Parse ``TYPE=EXT`` into a ``(content_type, extension)`` pair.

    A missing leading dot on the extension is added.
    """
    content_type, sep, extension = value.partition("=")
    content_type = content_type.strip()
    extension = extension.strip()
    if not sep or not content_type or not extension.lstrip("."):
        raise ConfigurationError(
            f"Invalid content type mapping {value!r} (expected TYPE=EXT)"
        )
    if not extension.startswith("."):
        extension = "." + extension
    if "/" in extension or "\\" in extension:
        raise ConfigurationError(
            f"Invalid extension in content type mapping {value!r}"
        )
    return content_type, extension
