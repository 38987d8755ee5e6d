"""Filename matching for note patterns."""

from fnmatch import fnmatchcase


def matches(candidate: str, pattern: str) -> bool:
    """Return True if ``candidate`` matches ``pattern``.

    The pattern is tried as a shell glob first and then as a plain
    substring, so both ``E*`` and ``2021`` work. Matching ignores case.
    """
    if not pattern:
        return True

    name = candidate.lower()
    lowered = pattern.lower()

    if fnmatchcase(name, lowered):
        return True
    return lowered in name
