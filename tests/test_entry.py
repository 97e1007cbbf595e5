"""Tests for harextract.entry module."""

from dataclasses import FrozenInstanceError
from pathlib import PurePosixPath

import pytest

from harextract.entry import (
    CapturedEntry,
    ExtractionTally,
    OutputLayoutPolicy,
    ResolvedDestination,
)


class TestCapturedEntry:
    def test_payload_defaults_to_empty(self):
        entry = CapturedEntry(url="https://a.com/x.png", content_type="image/png")
        assert entry.payload_text == ""

    def test_is_immutable(self):
        entry = CapturedEntry(url="u", content_type="image/png", payload_text="")
        with pytest.raises(FrozenInstanceError):
            entry.url = "other"


class TestOutputLayoutPolicy:
    def test_defaults_are_flat(self):
        policy = OutputLayoutPolicy()
        assert policy.is_flat
        assert policy.path_depth == 0

    def test_domain_is_not_flat(self):
        assert not OutputLayoutPolicy(use_domain_subfolder=True).is_flat

    def test_path_only_is_not_flat(self):
        assert not OutputLayoutPolicy(use_path_subfolder=True).is_flat


class TestResolvedDestination:
    def test_relative_path(self):
        dest = ResolvedDestination(PurePosixPath("img.example.com", "a"), "photo.jpg")
        assert dest.relative_path == PurePosixPath("img.example.com/a/photo.jpg")

    def test_flat_relative_path(self):
        dest = ResolvedDestination(PurePosixPath(), "photo.jpg")
        assert str(dest.relative_path) == "photo.jpg"


class TestExtractionTally:
    def test_defaults(self):
        tally = ExtractionTally()
        assert (tally.total, tally.extracted, tally.bytes_written) == (0, 0, 0)

    def test_skipped(self):
        tally = ExtractionTally(total=5, extracted=2)
        assert tally.skipped == 3
