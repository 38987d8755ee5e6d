"""Directory scanning for notes.

Scans are best-effort: an unreadable directory or entry is skipped and the
rest of the listing is still produced.
"""

import logging
import os
from pathlib import Path

from note.core.matcher import matches

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"
ARCHIVE_DIR_NAMES = ("Archive", "archive")


def resolve_archive_dir(notes_dir: Path) -> Path:
    """Return the archive directory inside ``notes_dir``.

    An existing ``Archive`` or ``archive`` folder is used as-is; otherwise
    ``Archive`` is returned (it is created the first time a note is archived).
    """
    for name in ARCHIVE_DIR_NAMES:
        candidate = notes_dir / name
        if candidate.is_dir():
            return candidate
    return notes_dir / ARCHIVE_DIR_NAMES[0]


def _walk(
    root: Path, relative: str, pattern: str, recurse: bool, exclude: set[str]
) -> list[str]:
    found = []
    try:
        with os.scandir(root) as it:
            entries = list(it)
    except OSError as e:
        logger.debug(f"Skipping unreadable directory {root}: {e}")
        return found

    for entry in entries:
        name = entry.name
        try:
            is_dir = entry.is_dir()
            is_file = entry.is_file()
        except OSError as e:
            logger.debug(f"Skipping unreadable entry {entry.path}: {e}")
            continue

        if is_dir:
            if recurse and name not in exclude and not name.startswith("."):
                found.extend(
                    _walk(Path(entry.path), relative + name + "/", pattern, True, set())
                )
            continue

        if is_file and name.endswith(NOTE_SUFFIX) and matches(name, pattern):
            found.append(relative + name)

    return found


def scan(
    directory: Path,
    pattern: str = "",
    include_subdirs: bool = False,
    exclude: tuple[str, ...] = (),
) -> list[str]:
    """Collect markdown notes in ``directory`` whose name matches ``pattern``.

    Nested notes are only reported with ``include_subdirs`` and come back as
    paths relative to ``directory``. Directories named in ``exclude`` are
    never entered. Results are in scan order; callers sort for display.
    """
    return _walk(Path(directory), "", pattern, include_subdirs, set(exclude))


def list_notes(
    notes_dir: Path, pattern: str = "", include_archived: bool = False
) -> list[str]:
    """Sorted listing of notes, with archived notes prefixed by the archive folder."""
    archive_dir = resolve_archive_dir(notes_dir)
    notes = scan(notes_dir, pattern, include_subdirs=True, exclude=(archive_dir.name,))

    if include_archived:
        archived = scan(archive_dir, pattern, include_subdirs=True)
        notes.extend(f"{archive_dir.name}/{name}" for name in archived)

    return sorted(notes)
