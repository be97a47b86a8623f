"""Godeps manifest parsing.

Each non-empty line reads ``<import-path> <revision> [# comment]``.
Parsing is pure: the caller decides how to report a malformed line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple, Union

from .errors import MalformedLineError

COMMENT_MARKER = "#"


@dataclass(frozen=True)
class ManifestEntry:
    """One package pin taken from the manifest."""
    import_path: str
    revision: str  # opaque; only the VCS tool interprets it
    line_number: int = 0
    extra: Tuple[str, ...] = ()  # trailing tokens, ignored


def strip_comment(line: str) -> str:
    return line.split(COMMENT_MARKER, 1)[0].strip()


def parse_line(line: str, line_number: int) -> Optional[ManifestEntry]:
    """Parse one raw manifest line.

    Returns ``None`` for blank and comment-only lines. Raises
    ``MalformedLineError`` when fewer than two tokens remain.
    """
    content = strip_comment(line)
    if not content:
        return None

    tokens = content.split()
    if len(tokens) < 2:
        raise MalformedLineError(line_number, line)

    return ManifestEntry(
        import_path=tokens[0],
        revision=tokens[1],
        line_number=line_number,
        extra=tuple(tokens[2:]),
    )


def iter_entries(
    lines: Iterable[str],
) -> Iterator[Tuple[int, Union[ManifestEntry, MalformedLineError]]]:
    """Yield ``(line_number, entry_or_error)`` for every non-blank line, 1-based."""
    for line_number, line in enumerate(lines, start=1):
        try:
            entry = parse_line(line, line_number)
        except MalformedLineError as exc:
            yield line_number, exc
            continue
        if entry is not None:
            yield line_number, entry
