"""Global pytest hooks and shared fixtures."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF"


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def har_entry(url: str, mime_type: str, text: Optional[str] = None) -> Dict:
    content: Dict = {"size": 0, "mimeType": mime_type}
    if text is not None:
        content["text"] = text
        content["encoding"] = "base64"
    return {
        "request": {"method": "GET", "url": url},
        "response": {"status": 200, "content": content},
    }


@pytest.fixture
def write_har(tmp_path: Path) -> Callable[[List[Dict], str], Path]:
    """Write a HAR document with the given entries and return its path."""

    def _write(entries: List[Dict], name: str = "session.har") -> Path:
        path = tmp_path / name
        document = {"log": {"version": "1.2", "entries": entries}}
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "HAR_EXTRACT_OUTPUT_DOMAIN",
        "HAR_EXTRACT_OUTPUT_PATH",
        "HAR_EXTRACT_OUTPUT_PATH_DEPTH",
        "HAR_EXTRACT_CONTENT_TYPES",
    ):
        monkeypatch.delenv(name, raising=False)


@dataclass
class _TestAccounting:
    deselected: int = 0
    skipped: int = 0
    xfailed: int = 0
    xpassed: int = 0


_ACCOUNTING = _TestAccounting()


def pytest_deselected(items):  # pragma: no cover - pytest hook
    _ACCOUNTING.deselected += len(items)


def pytest_runtest_logreport(report):  # pragma: no cover - pytest hook
    if report.when not in {"setup", "call"}:
        return

    is_xfail = bool(getattr(report, "wasxfail", False))
    if is_xfail:
        if report.outcome == "skipped":
            _ACCOUNTING.xfailed += 1
        elif report.outcome == "passed":
            _ACCOUNTING.xpassed += 1
        return

    if report.outcome == "skipped":
        _ACCOUNTING.skipped += 1


def pytest_sessionfinish(session, exitstatus):  # pragma: no cover - pytest hook
    violations = []
    if _ACCOUNTING.deselected:
        violations.append(f"deselected={_ACCOUNTING.deselected}")
    if _ACCOUNTING.skipped:
        violations.append(f"skipped={_ACCOUNTING.skipped}")
    if _ACCOUNTING.xfailed:
        violations.append(f"xfailed={_ACCOUNTING.xfailed}")
    if _ACCOUNTING.xpassed:
        violations.append(f"xpassed={_ACCOUNTING.xpassed}")

    if not violations:
        return

    reporter = session.config.pluginmanager.get_plugin("terminalreporter")
    if reporter:
        reporter.write_sep(
            "=",
            "Strict guard failed: test accounting violations detected "
            f"({', '.join(violations)})",
        )
        reporter.write_line(
            "Hard guard requires zero skipped/deselected/xfail/xpass tests."
        )

    session.exitstatus = 1
