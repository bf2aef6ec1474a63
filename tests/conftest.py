"""Pytest configuration and fixtures for hustle tests.

This module ensures the hustle package is importable during tests
without requiring installation.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add src directory to path for development testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from hustle.runner import CommandResult  # noqa: E402


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Project directory with a persisted container name."""
    (tmp_path / ".env").write_text("CONTAINER_NAME=web-app-abc123\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Empty home directory, separate from the project directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


class RecordingRunner:
    """Runner double: records commands, fails from a given call onward."""

    def __init__(self, fail_at: int | None = None, returncode: int = 1) -> None:
        self.calls: list[tuple[list[str], str]] = []
        self.fail_at = fail_at
        self.returncode = returncode

    def __call__(self, command, mode=None):  # type: ignore[no-untyped-def]
        self.calls.append((command.argv, getattr(mode, "value", "inherit")))
        if self.fail_at is not None and len(self.calls) - 1 >= self.fail_at:
            return CommandResult(output="", returncode=self.returncode)
        return CommandResult(output="", returncode=0)

    @property
    def argvs(self) -> list[list[str]]:
        return [argv for argv, _ in self.calls]


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_runner() -> type[RecordingRunner]:
    return RecordingRunner
