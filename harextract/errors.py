"""Error types raised by the extraction pipeline."""

from __future__ import annotations

from typing import Optional


class ExtractionError(Exception):
    """Base class for every failure that aborts an extraction run."""


class ConfigurationError(ExtractionError):
    """Raised when the layout policy or CLI options are invalid."""


class ArchiveParseError(ExtractionError):
    """Raised when the HAR container cannot be read or parsed."""


class MalformedUrlError(ExtractionError):
    """Raised when an entry URL has no host or no usable path."""

    def __init__(self, message: str, url: str = ""):
        self.url = url
        super().__init__(message)


class InvalidEncodingError(ExtractionError):
    """Raised when an entry payload is not valid base64."""

    def __init__(self, message: str, url: str = ""):
        self.url = url
        super().__init__(message)


class OutputWriteError(ExtractionError):
    """Raised when a directory or output file cannot be written."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)
