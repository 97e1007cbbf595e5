"""Layout policy validation and environment-driven defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .content_types import ContentTypeRegistry, default_registry, parse_content_type_pair
from .entry import OutputLayoutPolicy
from .errors import ConfigurationError

LOGGER = logging.getLogger(__name__)

OUTPUT_DIR_SUFFIX = "_extract"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"", "0", "false", "no", "off"})


@dataclass
class ExtractDefaults:
    """Defaults for CLI options, read from the environment."""

    output_domain: bool = False
    output_path: bool = False
    output_path_depth: int = 0
    content_types: Dict[str, str] = field(default_factory=dict)


def validate_policy(policy: OutputLayoutPolicy) -> None:
    """Reject layout combinations that are not allowed.

    Raises:
        ConfigurationError: If a path layout is requested without a
            domain layout.
    """
    if policy.use_path_subfolder and not policy.use_domain_subfolder:
        raise ConfigurationError("--output-domain is required in this context")


def describe_policy(policy: OutputLayoutPolicy) -> List[str]:
    """Human-readable description of the output layout."""
    if policy.is_flat:
        return [
            "- do not create any directory structure - "
            "extract images directly to base folder"
        ]

    lines: List[str] = []
    if policy.use_domain_subfolder:
        lines.append("- create subfolders for domain")
    if policy.use_path_subfolder:
        if policy.path_depth == 0:
            lines.append(" - create subfolders for URL path (all parts)")
        else:
            lines.append(
                " - create subfolders for URL path (only for %s %d parts)"
                % ("first" if policy.path_depth > 0 else "last", abs(policy.path_depth))
            )
    return lines


def build_registry(
    extra: Optional[Dict[str, str]] = None,
    base: Optional[ContentTypeRegistry] = None,
) -> ContentTypeRegistry:
    """Return *base* (default registry) extended with *extra* mappings."""
    registry = base or default_registry()
    if extra:
        registry = registry.with_types(extra)
    return registry


def parse_bool(value: str, name: str) -> bool:
    candidate = value.strip().lower()
    if candidate in _TRUE_VALUES:
        return True
    if candidate in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}")


def load_defaults_from_env() -> ExtractDefaults:
    """Load CLI defaults from environment variables.

    Supported variables:
        HAR_EXTRACT_OUTPUT_DOMAIN: Create a subfolder per host (bool).
        HAR_EXTRACT_OUTPUT_PATH: Create subfolders for the URL path (bool).
        HAR_EXTRACT_OUTPUT_PATH_DEPTH: URL path depth limit (int).
        HAR_EXTRACT_CONTENT_TYPES: Extra ``TYPE=EXT`` pairs, comma separated.

    Raises:
        ConfigurationError: If a variable holds an invalid value.
    """
    defaults = ExtractDefaults()

    domain = os.environ.get("HAR_EXTRACT_OUTPUT_DOMAIN")
    if domain is not None:
        defaults.output_domain = parse_bool(domain, "HAR_EXTRACT_OUTPUT_DOMAIN")

    path = os.environ.get("HAR_EXTRACT_OUTPUT_PATH")
    if path is not None:
        defaults.output_path = parse_bool(path, "HAR_EXTRACT_OUTPUT_PATH")

    depth = os.environ.get("HAR_EXTRACT_OUTPUT_PATH_DEPTH")
    if depth is not None and depth.strip():
        try:
            defaults.output_path_depth = int(depth)
        except ValueError as exc:
            raise ConfigurationError(
                f"Invalid integer for HAR_EXTRACT_OUTPUT_PATH_DEPTH: {depth!r}"
            ) from exc

    types = os.environ.get("HAR_EXTRACT_CONTENT_TYPES")
    if types:
        for item in types.split(","):
            if not item.strip():
                continue
            content_type, extension = parse_content_type_pair(item)
            defaults.content_types[content_type] = extension
        LOGGER.debug(
            "Loaded %d extra content type(s) from environment",
            len(defaults.content_types),
        )

    return defaults
