"""Full-text search across notes.

Results are produced one file at a time so callers can print as the scan
goes instead of waiting for every file to be read.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

from note.core.scanner import resolve_archive_dir, scan
from note.core.types import FileMatches, SearchHit

logger = logging.getLogger(__name__)

MAX_HITS_PER_FILE = 3


def search_file(
    path: Path, term: str, rel_path: str, max_hits: int = MAX_HITS_PER_FILE
) -> FileMatches | None:
    """Collect up to ``max_hits`` lines of ``path`` containing ``term``.

    Reading stops as soon as the cap is reached. Returns None when the file
    has no hits or cannot be read.
    """
    needle = term.lower()
    result = FileMatches(rel_path=rel_path)

    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            for line_number, line in enumerate(f, start=1):
                line = line.rstrip("\r\n")
                if needle not in line.lower():
                    continue
                result.hits.append(SearchHit(path, line_number, line))
                if len(result.hits) >= max_hits:
                    result.truncated = True
                    break
    except OSError as e:
        logger.debug(f"Skipping unreadable note {path}: {e}")
        return None

    return result if result.hits else None


def search(
    directories: list[Path],
    term: str,
    base_dir: Path,
    max_hits: int = MAX_HITS_PER_FILE,
) -> Iterator[FileMatches]:
    """Yield matches file by file across ``directories``.

    Paths in the results are relative to ``base_dir``. The archive folder is
    skipped while walking ``base_dir`` itself; pass it explicitly to search it.
    """
    if not term:
        return

    archive_name = resolve_archive_dir(base_dir).name
    for directory in directories:
        exclude = (archive_name,) if directory == base_dir else ()
        for name in sorted(scan(directory, "", include_subdirs=True, exclude=exclude)):
            path = directory / name
            try:
                rel_path = path.relative_to(base_dir).as_posix()
            except ValueError:
                rel_path = path.as_posix()

            found = search_file(path, term, rel_path, max_hits)
            if found is not None:
                yield found
