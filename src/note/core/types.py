"""Shared types and data structures for note."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path


class CommandKind(StrEnum):
    """What a single invocation asks for."""

    HELP = "help"
    VERSION = "version"
    CONFIG = "config"
    AUTOCOMPLETE = "autocomplete"
    ALIAS = "alias"
    LIST = "list"
    SEARCH = "search"
    ARCHIVE = "archive"
    CREATE = "create"


@dataclass(frozen=True)
class Command:
    """A parsed invocation.

    ``value`` carries the variant's payload: the list pattern, the search
    term, the archive pattern, or the note name. It is empty for the
    variants that take no argument.
    """

    kind: CommandKind
    value: str = ""
    include_archived: bool = False


@dataclass(frozen=True)
class SearchHit:
    """One matching line inside a note."""

    file_path: Path
    line_number: int
    line_text: str


@dataclass
class FileMatches:
    """All hits collected from one file during a search."""

    rel_path: str
    hits: list[SearchHit] = field(default_factory=list)
    truncated: bool = False


@dataclass(frozen=True)
class ArchiveResult:
    """Outcome of moving one note into the archive."""

    name: str
    destination: Path
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
