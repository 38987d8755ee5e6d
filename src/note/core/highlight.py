"""Search term highlighting for terminal output.

Spans are located on the original text first and the markers are inserted
in a single pass afterwards, so inserted escape codes never shift the
offsets of later matches.
"""

import re

HIGHLIGHT_START = "\033[31m"
HIGHLIGHT_END = "\033[0m"


def find_spans(text: str, term: str) -> list[tuple[int, int]]:
    """Return non-overlapping ``[start, end)`` ranges where ``term`` occurs.

    Matching ignores case and runs left to right; the returned ranges are
    sorted and always lie within ``text``.
    """
    if not term or len(term) > len(text):
        return []

    spans = []
    for match in re.finditer(re.escape(term), text, flags=re.IGNORECASE):
        start, end = match.span()
        if end == start:
            continue
        spans.append((start, end))
    return spans


def render(text: str, spans: list[tuple[int, int]]) -> str:
    """Wrap each span of ``text`` in highlight markers."""
    pieces = []
    cursor = 0
    for start, end in spans:
        # Skip anything overlapping a span already rendered or past the end
        if start < cursor or end > len(text) or start >= end:
            continue
        pieces.append(text[cursor:start])
        pieces.append(HIGHLIGHT_START)
        pieces.append(text[start:end])
        pieces.append(HIGHLIGHT_END)
        cursor = end
    pieces.append(text[cursor:])
    return "".join(pieces)


def highlight(text: str, term: str, *, enabled: bool = True) -> str:
    """Highlight every case-insensitive occurrence of ``term`` in ``text``.

    With ``enabled`` False (output is piped or redirected) the text is
    returned untouched, so downstream tools never see escape codes.
    """
    if not enabled or not term:
        return text
    spans = find_spans(text, term)
    if not spans:
        return text
    return render(text, spans)
