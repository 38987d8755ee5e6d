"""Note file naming and the create-or-open rules."""

from dataclasses import dataclass
from datetime import date
from pathlib import Path

from note.core.scanner import NOTE_SUFFIX, scan

MAX_SIMILAR_NOTES = 5


@dataclass(frozen=True)
class NoteTarget:
    """The file a ``note <name>`` invocation will open."""

    path: Path
    exists: bool
    similar: list[str]


def dated_filename(name: str, today: date | None = None) -> str:
    """Build ``<name>-YYYYMMDD.md`` with spaces turned into underscores."""
    stamp = (today or date.today()).strftime("%Y%m%d")
    return f"{name.replace(' ', '_')}-{stamp}{NOTE_SUFFIX}"


def resolve_note(notes_dir: Path, name: str, today: date | None = None) -> NoteTarget:
    """Work out which file to open for ``name``.

    An explicit ``.md`` name, or an existing ``<name>.md``, is opened as-is.
    Otherwise today's dated note is used, and when it does not exist yet up
    to five similarly named notes are offered as a hint.
    """
    if name.endswith(NOTE_SUFFIX):
        path = notes_dir / name
        return NoteTarget(path, path.exists(), [])

    exact = notes_dir / f"{name}{NOTE_SUFFIX}"
    if exact.exists():
        return NoteTarget(exact, True, [])

    path = notes_dir / dated_filename(name, today)
    if path.exists():
        return NoteTarget(path, True, [])

    similar = sorted(scan(notes_dir, name))
    if len(similar) > MAX_SIMILAR_NOTES:
        similar = []
    return NoteTarget(path, False, similar)
