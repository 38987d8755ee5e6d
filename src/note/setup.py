"""Interactive setup for first run and ``note --config``."""

import logging
import os
import shutil
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.prompt import Confirm, Prompt

from note import shell
from note.core.config import (
    DEFAULT_EDITOR,
    DEFAULT_NOTES_DIR,
    ConfigError,
    NoteConfig,
    read_existing_values,
    save_config,
)
from note.core.scanner import resolve_archive_dir

logger = logging.getLogger(__name__)


def _default_editor(existing: dict[str, str]) -> str:
    return existing.get("editor") or os.environ.get("EDITOR") or DEFAULT_EDITOR


def run_setup(console: Console, config_path: Path | None = None) -> NoteConfig:
    """Prompt for editor and notes folder, create the folders, save the config.

    Raises:
        ConfigError: If the editor is not on PATH or the folders cannot be
            created.
    """
    existing = read_existing_values(config_path)

    editor = Prompt.ask(
        "What is your preferred text editor",
        default=_default_editor(existing),
        console=console,
    ).strip()
    executable = editor.split()[0] if editor.split() else ""
    if not executable or shutil.which(executable) is None:
        raise ConfigError(
            f"Editor '{editor}' not found in PATH. "
            "Try 'vim', 'nano', or install your preferred editor."
        )
    console.print(f"Setting {editor} as default text editor...")

    notes_dir = Prompt.ask(
        "Where are you saving your notes",
        default=existing.get("notesdir") or DEFAULT_NOTES_DIR,
        console=console,
    ).strip()
    try:
        config = NoteConfig(editor=editor, notes_dir=notes_dir)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
    console.print(f"Setting your notes location to {config.notes_dir} ...")

    try:
        config.notes_dir.mkdir(parents=True, exist_ok=True)
        resolve_archive_dir(config.notes_dir).mkdir(exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Error creating notes directory: {e}") from e

    offer_shell_integration(console)

    path = save_config(config, config_path)
    console.print(f"[green]Configuration saved to {path}[/green]")
    return config


def offer_shell_integration(console: Console) -> None:
    """Ask once about aliases and completion if neither is installed."""
    name = shell.detect_shell()
    if name not in shell.SUPPORTED_SHELLS:
        return
    has_aliases, has_completion = shell.get_status(name)
    if has_aliases or has_completion:
        return

    completion = Confirm.ask(
        "Would you like to set up command line completion for note?",
        default=False,
        console=console,
    )
    aliases = Confirm.ask(
        "Would you like to add the aliases n, nls and nrm?",
        default=False,
        console=console,
    )
    if not (completion or aliases):
        console.print(
            "[dim]Skipping shell integration. Run 'note --autocomplete' "
            "or 'note --alias' later.[/dim]"
        )
        return

    try:
        path = shell.install(name, aliases=aliases, completion=completion)
    except shell.ShellIntegrationError as e:
        console.print(f"[yellow]Warning: {e}[/yellow]")
        return
    console.print(f"[green]Shell integration written to {path}[/green]")
