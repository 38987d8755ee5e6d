"""Argument interpreter for the note command line.

Short flags may be chained (``-al``, ``-as term``). The value-bearing
flags ``-s`` and ``-d`` must close their chain and take the next whole
argument as their value.
"""

import logging
from dataclasses import dataclass

from note.core.types import Command, CommandKind

logger = logging.getLogger(__name__)

LONG_FLAGS = {
    "--help": "help",
    "--version": "version",
    "--config": "config",
    "--autocomplete": "autocomplete",
    "--alias": "alias",
}

SHORT_FLAGS = {
    "h": "help",
    "l": "listing",
    "a": "include_archived",
}

VALUE_FLAGS = {
    "s": "search",
    "d": "archive",
}


class UsageError(Exception):
    """Raised when the command line cannot be interpreted."""

    pass


@dataclass
class FlagSet:
    """Every flag seen on the command line, OR-ed together."""

    help: bool = False
    version: bool = False
    config: bool = False
    autocomplete: bool = False
    alias: bool = False
    listing: bool = False
    include_archived: bool = False
    search: str | None = None
    archive: str | None = None


def _apply_chain(token: str, argv: list[str], index: int, flags: FlagSet) -> int:
    """Apply one ``-xyz`` chain and return the index of the next token."""
    chain = token[1:]
    for position, char in enumerate(chain):
        if char in SHORT_FLAGS:
            setattr(flags, SHORT_FLAGS[char], True)
            continue

        if char in VALUE_FLAGS:
            if position != len(chain) - 1:
                raise UsageError(
                    f"flag -{char} takes a value and must be last in '{token}'"
                )
            if index + 1 >= len(argv):
                raise UsageError(f"flag -{char} requires a value")
            setattr(flags, VALUE_FLAGS[char], argv[index + 1])
            return index + 2

        raise UsageError(f"unknown flag -{char} in '{token}'")

    return index + 1


def parse_flags(argv: list[str]) -> tuple[FlagSet, list[str]]:
    """Tokenize argv into a FlagSet plus positional arguments in order."""
    flags = FlagSet()
    positional: list[str] = []

    index = 0
    while index < len(argv):
        token = argv[index]

        if token.startswith("--"):
            if token in LONG_FLAGS:
                setattr(flags, LONG_FLAGS[token], True)
            else:
                # Unknown long flags are treated as part of a note name
                positional.append(token)
            index += 1
        elif token.startswith("-") and len(token) > 1:
            index = _apply_chain(token, argv, index, flags)
        else:
            positional.append(token)
            index += 1

    return flags, positional


def build_command(flags: FlagSet, positional: list[str]) -> Command:
    """Pick the single command an invocation runs."""
    joined = " ".join(positional)

    if flags.help:
        return Command(CommandKind.HELP)
    if flags.version:
        return Command(CommandKind.VERSION)
    if flags.config:
        return Command(CommandKind.CONFIG)
    if flags.autocomplete:
        return Command(CommandKind.AUTOCOMPLETE)
    if flags.alias:
        return Command(CommandKind.ALIAS)
    if flags.search is not None:
        if not flags.search:
            raise UsageError("flag -s requires a non-empty search term")
        return Command(
            CommandKind.SEARCH, flags.search, include_archived=flags.include_archived
        )
    if flags.archive is not None:
        if not flags.archive.strip():
            raise UsageError("flag -d requires a non-empty pattern")
        return Command(CommandKind.ARCHIVE, flags.archive)
    if flags.listing or flags.include_archived:
        return Command(
            CommandKind.LIST, joined, include_archived=flags.include_archived
        )
    if positional:
        return Command(CommandKind.CREATE, joined)
    return Command(CommandKind.HELP)


def parse(argv: list[str]) -> tuple[Command, list[str]]:
    """Parse argv into the command to run and the leftover positionals.

    Raises:
        UsageError: On an unknown flag character, a value flag that is not
            last in its chain, or a missing value.
    """
    flags, positional = parse_flags(argv)
    command = build_command(flags, positional)
    logger.debug(f"Parsed {argv!r} as {command}")
    return command, positional
