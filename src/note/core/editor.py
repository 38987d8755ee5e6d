"""Launching the user's editor."""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class EditorError(Exception):
    """Raised when the editor cannot be started or exits with an error."""

    pass


class Launcher(Protocol):
    """Runs a command in the foreground and returns its exit code."""

    def run(self, command: list[str]) -> int:
        pass


class SubprocessLauncher:
    """Launcher that blocks on a child process sharing our terminal."""

    def run(self, command: list[str]) -> int:
        completed = subprocess.run(command, check=False)
        return completed.returncode


def build_editor_command(editor: str, path: Path) -> list[str]:
    """Split the configured editor (``code -w`` is allowed) and append the note."""
    parts = shlex.split(editor)
    if not parts:
        raise EditorError("No editor configured")
    return [*parts, str(path)]


def open_in_editor(editor: str, path: Path, launcher: Launcher | None = None) -> None:
    """Open ``path`` in ``editor`` and wait for it to close.

    Raises:
        EditorError: If the editor is missing or exits non-zero.
    """
    launcher = launcher or SubprocessLauncher()
    try:
        command = build_editor_command(editor, path)
    except ValueError as e:
        raise EditorError(f"Invalid editor command {editor!r}: {e}") from e

    logger.debug(f"Running editor: {command}")
    try:
        code = launcher.run(command)
    except OSError as e:
        raise EditorError(f"Error opening editor: {e}") from e

    if code != 0:
        raise EditorError(f"Editor {command[0]!r} exited with status {code}")
