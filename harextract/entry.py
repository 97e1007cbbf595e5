"""Data structures shared by the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath


@dataclass(frozen=True, slots=True)
class CapturedEntry:
    """One recorded request/response pair from the archive."""

    url: str
    content_type: str
    payload_text: str = ""  # base64, empty means no body


@dataclass(frozen=True, slots=True)
class OutputLayoutPolicy:
    """How much of the URL structure is reproduced under the output root.

    Attributes:
        use_domain_subfolder: Nest files under a folder named after the host.
        use_path_subfolder: Nest files under the URL directory segments.
        path_depth: Limit on URL directory segments. ``0`` keeps all of
            them, a positive value keeps the first N, a negative value
            keeps the last N.
    """

    use_domain_subfolder: bool = False
    use_path_subfolder: bool = False
    path_depth: int = 0

    @property
    def is_flat(self) -> bool:
        return not self.use_domain_subfolder and not self.use_path_subfolder


@dataclass(frozen=True, slots=True)
class ResolvedDestination:
    """Relative directory and filename computed for one entry."""

    relative_dir: PurePosixPath
    filename: str

    @property
    def relative_path(self) -> PurePosixPath:
        return self.relative_dir / self.filename


@dataclass(slots=True)
class ExtractionTally:
    """Running counts for a single extraction run."""

    total: int = 0
    extracted: int = 0
    bytes_written: int = 0

    @property
    def skipped(self) -> int:
        return self.total - self.extracted
