"""Tests for harextract.cli_config module."""

from pathlib import Path
from typing import List, Optional

from harextract.cli_config import EXAMPLE_ENV_FILE, load_config


class _Recorder:
    def __init__(self) -> None:
        self.loaded: List[Path] = []
        self.copied: List[tuple] = []

    def load_env(self, path: Path) -> bool:
        self.loaded.append(path)
        return True

    def copy_file(self, src: Path, dst: Path) -> str:
        self.copied.append((src, dst))
        dst.write_text(src.read_text())
        return str(dst)


def _call(rec: _Recorder, tmp_path: Path, example: Optional[Path] = None) -> None:
    config_dir = tmp_path / "config"
    (tmp_path / "cwd").mkdir(exist_ok=True)
    load_config(
        config_dir=config_dir,
        config_env_file=config_dir / ".env",
        cwd=tmp_path / "cwd",
        load_env=rec.load_env,
        copy_file=rec.copy_file,
        example_file=example or tmp_path / "missing.example",
    )


class TestPackagedTemplate:
    def test_ships_inside_package(self):
        assert EXAMPLE_ENV_FILE.parent.name == "harextract"
        assert EXAMPLE_ENV_FILE.is_file()
        assert "HAR_EXTRACT_OUTPUT_DOMAIN" in EXAMPLE_ENV_FILE.read_text()


class TestLoadConfig:
    def test_prefers_local_env(self, tmp_path: Path):
        (tmp_path / "cwd").mkdir()
        (tmp_path / "cwd" / ".env").write_text("A=1")
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / ".env").write_text("A=2")
        rec = _Recorder()
        _call(rec, tmp_path)
        assert rec.loaded == [tmp_path / "cwd" / ".env"]

    def test_falls_back_to_user_config(self, tmp_path: Path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / ".env").write_text("A=2")
        rec = _Recorder()
        _call(rec, tmp_path)
        assert rec.loaded == [tmp_path / "config" / ".env"]
        assert rec.copied == []

    def test_copies_example(self, tmp_path: Path):
        example = tmp_path / "env.example"
        example.write_text("HAR_EXTRACT_OUTPUT_DOMAIN=false\n")

        rec = _Recorder()
        _call(rec, tmp_path, example)

        target = tmp_path / "config" / ".env"
        assert rec.copied == [(example, target)]
        assert rec.loaded == [target]
        assert target.read_text() == "HAR_EXTRACT_OUTPUT_DOMAIN=false\n"

    def test_nothing_found(self, tmp_path: Path):
        rec = _Recorder()
        _call(rec, tmp_path)
        assert rec.loaded == []
        assert rec.copied == []
        assert not (tmp_path / "config").exists()

    def test_copy_failure_is_ignored(self, tmp_path: Path):
        example = tmp_path / "env.example"
        example.write_text("X=1\n")

        def failing_copy(src, dst):
            raise OSError("read-only")

        loaded: List[Path] = []
        config_dir = tmp_path / "config"
        (tmp_path / "cwd").mkdir()
        load_config(
            config_dir=config_dir,
            config_env_file=config_dir / ".env",
            cwd=tmp_path / "cwd",
            load_env=loaded.append,
            copy_file=failing_copy,
            example_file=example,
        )
        assert loaded == []
