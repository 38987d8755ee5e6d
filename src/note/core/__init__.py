"""note core library - flag parsing, matching, scanning and search."""

from note.core.flags import UsageError, parse
from note.core.highlight import highlight
from note.core.matcher import matches
from note.core.scanner import list_notes, scan
from note.core.search import search
from note.core.types import Command, CommandKind, FileMatches, SearchHit

__all__ = [
    # Parsing
    "parse",
    "UsageError",
    # Matching and output
    "matches",
    "highlight",
    # Scanning
    "scan",
    "list_notes",
    "search",
    # Types
    "Command",
    "CommandKind",
    "FileMatches",
    "SearchHit",
]
