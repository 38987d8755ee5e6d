"""Shared test fixtures and configuration."""

from __future__ import annotations

from pathlib import Path

import pytest


class RecordingLauncher:
    """Launcher double that records commands instead of running them."""

    def __init__(self, exit_code: int = 0):
        self.exit_code = exit_code
        self.commands: list[list[str]] = []

    def run(self, command: list[str]) -> int:
        self.commands.append(command)
        return self.exit_code


@pytest.fixture
def notes_dir(tmp_path) -> Path:
    """Provide an empty notes directory."""
    path = tmp_path / "Notes"
    path.mkdir()
    return path


@pytest.fixture
def make_note(notes_dir):
    """Factory that writes a note relative to the notes directory."""

    def _make_note(name: str, content: str = "") -> Path:
        path = notes_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _make_note


@pytest.fixture
def config_file(tmp_path, notes_dir, monkeypatch) -> Path:
    """Write a valid config file and point NOTE_CONFIG_FILE at it."""
    path = tmp_path / ".note"
    path.write_text(f"editor=vim\nnotesdir={notes_dir}\n", encoding="utf-8")
    monkeypatch.setenv("NOTE_CONFIG_FILE", str(path))
    return path


@pytest.fixture
def launcher():
    """Provide a launcher that records editor invocations."""
    return RecordingLauncher()


@pytest.fixture
def home_dir(tmp_path, monkeypatch) -> Path:
    """Point HOME at a temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home
