"""CLI application for note using Rich and Typer.

Typer only supplies the entry point and exit handling here: the raw
arguments are handed untouched to ``note.core.flags`` so that chained short
flags such as ``-as todo`` keep their meaning.
"""

import logging
from pathlib import Path

import click
import typer
from rich.console import Console
from rich.table import Table
from typer.core import TyperCommand

from note import __version__, shell
from note.core.archive import archive_notes, find_archivable
from note.core.config import ConfigError, NoteConfig, load_config, setup_logging
from note.core.editor import EditorError, Launcher, open_in_editor
from note.core.flags import UsageError, parse
from note.core.highlight import highlight
from note.core.notes import resolve_note
from note.core.scanner import list_notes, resolve_archive_dir
from note.core.search import search
from note.core.types import Command, CommandKind
from note.setup import run_setup

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="note",
    help="note - A minimalist CLI note-taking tool",
    add_completion=False,
    no_args_is_help=False,
)

console = Console()
err_console = Console(stderr=True)

# Tests swap this for a recording double
launcher: Launcher | None = None


def print_help():
    """Print usage text."""
    console.print("[bold]note[/bold] - A minimalist CLI note-taking tool\n")
    console.print("[bold cyan]USAGE[/bold cyan]")
    console.print("  note [name]              Create/open note with automatic dating")
    console.print("  note [name-date.md]      Open specific dated note")
    console.print("  note [OPTIONS]\n")

    table = Table(title="Options", show_header=True, header_style="bold cyan")
    table.add_column("Flag", style="green")
    table.add_column("Description")

    options = [
        ("-l [pattern]", "List notes (optionally matching pattern)"),
        ("-s <term>", "Full-text search in notes"),
        ("-d <pattern>", "Archive matching notes"),
        ("-a [pattern]", "Include archived notes when listing or searching"),
        ("-h, --help", "Show this help message"),
        ("--version", "Show version"),
        ("--config", "Run setup/reconfigure"),
        ("--autocomplete", "Setup/update command line autocompletion"),
        ("--alias", "Setup shell aliases (n, nls, nrm)"),
    ]
    for flag, desc in options:
        table.add_row(flag, desc)
    console.print(table)

    console.print("\n[bold cyan]EXAMPLES[/bold cyan]")
    console.print("  note meeting             Creates meeting-YYYYMMDD.md")
    console.print("  note -l project          List notes containing 'project'")
    console.print("  note -al                 List all notes including archived")
    console.print("  note -as todo            Search for 'todo' in all notes")
    console.print("  note -d 'old-*'          Archive notes starting with 'old-'")
    console.print("\nShort flags can be combined; -s and -d must come last.")
    console.print("Settings are stored in ~/.note. Use 'note --config' to reconfigure.")


def show_list(config: NoteConfig, pattern: str, include_archived: bool) -> None:
    """Print matching note names, sorted."""
    color = console.is_terminal
    for name in list_notes(config.notes_dir, pattern, include_archived):
        typer.echo(highlight(name, pattern, enabled=color))


def show_search(config: NoteConfig, term: str, include_archived: bool) -> None:
    """Print search hits file by file as they are found."""
    directories = [config.notes_dir]
    if include_archived:
        directories.append(resolve_archive_dir(config.notes_dir))

    color = console.is_terminal
    typer.echo(f"Searching for '{term}'...\n")
    for found in search(directories, term, config.notes_dir):
        typer.echo(f"{found.rel_path}:")
        for hit in found.hits:
            typer.echo(f"  {hit.line_number}: {highlight(hit.line_text, term, enabled=color)}")
        if found.truncated:
            typer.echo("  ...")
        typer.echo()


def run_archive(config: NoteConfig, pattern: str) -> int:
    """Archive notes matching ``pattern``; returns the exit code."""
    names = find_archivable(config.notes_dir, pattern)
    if not names:
        typer.echo(f"No notes found matching '{pattern}'")
        return 0

    typer.echo("Archiving:")
    for name in names:
        typer.echo(f"  {name}")

    try:
        results = archive_notes(config.notes_dir, names)
    except OSError as e:
        err_console.print(f"[red]Error creating archive directory: {e}[/red]")
        return 1

    failed = [result for result in results if not result.ok]
    for result in failed:
        err_console.print(f"[red]Error archiving {result.name}: {result.error}[/red]")
    return 1 if failed else 0


def open_note(config: NoteConfig, name: str) -> None:
    """Create or open the note called ``name``."""
    target = resolve_note(config.notes_dir, name)
    if target.similar:
        typer.echo("Similar notes found:")
        for similar in target.similar:
            typer.echo(f"  {similar}")
        typer.echo()

    if not target.exists:
        target.path.parent.mkdir(parents=True, exist_ok=True)
    open_in_editor(config.editor, target.path, launcher)


def run_shell_integration(aliases: bool) -> int:
    """Handle ``--alias`` and ``--autocomplete``."""
    feature = "aliases" if aliases else "autocompletion"
    name = shell.detect_shell()
    if name is None:
        err_console.print("[red]Could not detect shell type.[/red]")
        err_console.print(f"[dim]Supported shells: {', '.join(shell.SUPPORTED_SHELLS)}[/dim]")
        return 1

    console.print(f"Detected shell: {name}")
    try:
        if aliases:
            path = shell.install(name, aliases=True)
        else:
            path = shell.install(name, completion=True)
    except shell.ShellIntegrationError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        return 1

    console.print(f"[green]✓ Shell {feature} setup complete![/green]")
    console.print(f"  Wrote {path}")
    console.print(f"  To activate, run: source {shell.rc_path(name, Path.home())}")
    console.print("  Or simply restart your shell")
    return 0


def get_config() -> NoteConfig | None:
    """Load the config, running setup when it is missing or invalid.

    Returns None right after a first-time setup so the invocation ends there.
    """
    try:
        return load_config()
    except ConfigError as e:
        logger.debug(f"Config unavailable: {e}")

    console.print("[yellow]No valid configuration found. Running setup...[/yellow]")
    run_setup(console)
    return None


def dispatch(command: Command) -> int:
    """Run one parsed command and return the process exit code."""
    if command.kind == CommandKind.HELP:
        print_help()
        return 0

    if command.kind == CommandKind.VERSION:
        console.print(f"note {__version__}")
        return 0

    if command.kind == CommandKind.CONFIG:
        run_setup(console)
        return 0

    if command.kind in (CommandKind.AUTOCOMPLETE, CommandKind.ALIAS):
        return run_shell_integration(aliases=command.kind == CommandKind.ALIAS)

    config = get_config()
    if config is None:
        return 0

    if command.kind == CommandKind.LIST:
        show_list(config, command.value, command.include_archived)
    elif command.kind == CommandKind.SEARCH:
        show_search(config, command.value, command.include_archived)
    elif command.kind == CommandKind.ARCHIVE:
        return run_archive(config, command.value)
    elif command.kind == CommandKind.CREATE:
        open_note(config, command.value)
    return 0


class RawArgsCommand(TyperCommand):
    """Command that records argv before click drops a bare ``--``."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.meta["note.raw_args"] = list(args)
        return super().parse_args(ctx, args)


@app.command(
    cls=RawArgsCommand,
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    }
)
def main(ctx: typer.Context):
    """Create, open, list, search and archive dated markdown notes."""
    setup_logging()

    try:
        command, _ = parse(ctx.meta.get("note.raw_args", list(ctx.args)))
    except UsageError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        err_console.print("[dim]Run 'note --help' for usage.[/dim]")
        raise typer.Exit(2)

    try:
        code = dispatch(command)
    except EditorError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    except ConfigError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    raise typer.Exit(code)


def run_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()
