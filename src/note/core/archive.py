"""Moving notes into the archive folder."""

import logging
import shutil
from pathlib import Path

from note.core.scanner import resolve_archive_dir, scan
from note.core.types import ArchiveResult

logger = logging.getLogger(__name__)


def move_to_archive(src: Path, dst: Path) -> None:
    """Move one note, copying then deleting when a rename is not possible."""
    shutil.move(str(src), str(dst))


def find_archivable(notes_dir: Path, pattern: str) -> list[str]:
    """Top-level notes matching ``pattern``, sorted."""
    return sorted(scan(notes_dir, pattern))


def archive_notes(notes_dir: Path, names: list[str]) -> list[ArchiveResult]:
    """Move each named note into the archive folder.

    A failure on one note is recorded in its result and the rest of the
    batch is still processed.

    Raises:
        OSError: If the archive folder itself cannot be created.
    """
    archive_dir = resolve_archive_dir(notes_dir)
    archive_dir.mkdir(parents=True, exist_ok=True)

    results = []
    for name in names:
        src = notes_dir / name
        dst = archive_dir / name
        try:
            move_to_archive(src, dst)
        except OSError as e:
            logger.debug(f"Failed to archive {src}: {e}")
            results.append(ArchiveResult(name, dst, str(e)))
            continue
        logger.debug(f"Archived {src} -> {dst}")
        results.append(ArchiveResult(name, dst))
    return results
