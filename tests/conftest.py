"""Shared test fixtures."""

import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from juiceit.config.options import RipOptions
from juiceit.config.settings import Settings


@pytest.fixture(autouse=True)
def wide_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Render CLI help at a fixed wide width so option names are not truncated."""
    monkeypatch.setenv("COLUMNS", "200")


@pytest.fixture
def anyio_backend() -> str:
    """Run async tests on asyncio only (the encoder uses asyncio subprocesses)."""
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        handbrake_path="HandBrakeCLI",
        video_codec="x264",
        handbrake_preset="HQ 1080p30 Surround",
        frame_rate="30",
    )


@pytest.fixture
def options(tmp_path: Path) -> RipOptions:
    """Rip options writing into a temporary directory."""
    output_dir = tmp_path / "out"
    output_dir.mkdir()
    return RipOptions(output_dir=output_dir, dvd_source="/dev/disk5")


@pytest.fixture
def make_script(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write an executable shell script standing in for an external tool."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def _make(name: str, body: str) -> Path:
        path = bin_dir / name
        path.write_text("#!/bin/sh\n" + body + "\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make
