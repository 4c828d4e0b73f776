"""Freeform lyric-sheet parser.

Turns pasted or extracted lyric text into a
:class:`~songimport.models.ParsedSongImport`:

  1. normalize_text()        - line endings and leading BOM
  2. header window scan      - explicit title, then CCLI / key / artist / link
  3. fallback title          - first plain line in the header window
  4. body assembly           - heading blocks, or one flattened block

The parser is best-effort and total: it never raises for any ``str`` input.
Malformed or missing metadata just leaves the corresponding field unset.

Usage::

    from songimport.parser import parse_song_import_text
    song = parse_song_import_text(text, fallback_title="Amazing Grace")
"""

import logging
import re
from collections.abc import Callable, Sequence

from .lines import (
    LineType,
    classify_line,
    extract_artist,
    extract_ccli,
    extract_default_key,
    extract_link,
    extract_title_line,
    is_heading,
    trim_line,
)
from .models import ParsedSongImport

logger = logging.getLogger(__name__)

# Metadata is only looked for in the first HEADER_LINE_LIMIT lines when the
# text has no section headings at all.
HEADER_LINE_LIMIT = 8

# Fields tested on every non-title header line, in priority order.
# A line may populate several of them; each field keeps its first match.
HEADER_FIELDS: list[tuple[str, Callable[[str], str | None]]] = [
    ("ccli_id", extract_ccli),
    ("default_key", extract_default_key),
    ("artist", extract_artist),
    ("link_url", extract_link),
]

_EXCESS_BLANK_LINES_RE = re.compile(r"\n{3,}")


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------


def normalize_text(text: str) -> str:
    """Return *text* with ``\\n`` line endings and no leading byte-order mark."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if text.startswith("\ufeff"):
        text = text[1:]
    return text


# ---------------------------------------------------------------------------
# Header extraction
# ---------------------------------------------------------------------------


def header_limit(lines: Sequence[str]) -> int:
    """Return the end (exclusive) of the header window for *lines*.

    The window stops at the first section heading.  Without any heading it
    covers at most :data:`HEADER_LINE_LIMIT` lines.
    """
    for index, line in enumerate(lines):
        if is_heading(line):
            return index
    return min(len(lines), HEADER_LINE_LIMIT)


def extract_header_fields(header_lines: Sequence[str]) -> tuple[dict[str, str], dict[str, int]]:
    """Scan *header_lines* for metadata fields.

    Returns ``(fields, field_lines)``: the values found, keyed by
    :class:`~songimport.models.ParsedSongImport` attribute name, and the
    index of the line each value came from.

    An explicit title line is taken on its own; no other field is read from
    it.  Every other line is tested against :data:`HEADER_FIELDS`.
    """
    fields: dict[str, str] = {}
    field_lines: dict[str, int] = {}

    for index, line in enumerate(header_lines):
        stripped = trim_line(line)
        if not stripped:
            continue

        if "title" not in fields:
            title = extract_title_line(stripped)
            if title:
                fields["title"] = title
                field_lines["title"] = index
                continue

        for name, extract in HEADER_FIELDS:
            if name in fields:
                continue
            value = extract(stripped)
            if value:
                fields[name] = value
                field_lines[name] = index

    return fields, field_lines


def find_fallback_title(header_lines: Sequence[str]) -> int | None:
    """Return the index of the first plain line in *header_lines*, or None.

    Only :attr:`LineType.CONTENT` lines qualify; blank, link, explicit-title,
    metadata-like and heading lines are skipped.
    """
    for index, line in enumerate(header_lines):
        if classify_line(line) is LineType.CONTENT:
            return index
    return None


# ---------------------------------------------------------------------------
# Body assembly
# ---------------------------------------------------------------------------


def has_lyric_group_headings(lines: Sequence[str] | str) -> bool:
    """Return True if any line is a section heading.

    *lines* may be a list of lines or a single block of text, which is
    normalized and split on newlines first.
    """
    if isinstance(lines, str):
        lines = normalize_text(lines).split("\n")
    return any(is_heading(line) for line in lines)


def build_heading_blocks(lines: Sequence[str]) -> str:
    """Group *lines* into heading-led blocks joined by one blank line.

    Runs of blank lines inside a block collapse to one; blank lines at the
    start of a block are dropped.  Content lines are trimmed.
    """
    blocks: list[str] = []
    current: list[str] = []

    for line in lines:
        stripped = trim_line(line)
        line_type = classify_line(stripped)
        if line_type is LineType.BLANK:
            if current and current[-1] != "":
                current.append("")
            continue

        if line_type is LineType.HEADING:
            if current:
                blocks.append("\n".join(current).strip())
            current = [stripped]
            continue

        current.append(stripped)

    if current:
        blocks.append("\n".join(current).strip())

    return "\n\n".join(block for block in blocks if block)


def flatten_lyrics(lines: Sequence[str]) -> str:
    """Join *lines* into one block with at most one blank line in a row."""
    return _EXCESS_BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def parse_song_import_text(raw_text: str, fallback_title: str | None = None) -> ParsedSongImport:
    """Parse a freeform lyric sheet into a :class:`ParsedSongImport`.

    Args:
        raw_text:       Pasted or extracted text, any line endings.
        fallback_title: Used as the title only when none is found in the text
                        (typically the uploaded file's name).

    Returns:
        A new :class:`ParsedSongImport`.  Lines consumed as metadata or as the
        title are removed from ``lyrics``; every other line keeps its order.
    """
    lines = normalize_text(raw_text).split("\n")
    limit = header_limit(lines)
    header_lines = lines[:limit]
    logger.debug("Scanning %d header line(s) of %d", limit, len(lines))

    fields, field_lines = extract_header_fields(header_lines)

    if "title" not in fields:
        index = find_fallback_title(header_lines)
        if index is not None:
            fields["title"] = trim_line(header_lines[index])
            field_lines["title"] = index

    removed = set(field_lines.values())
    body_lines = [line for index, line in enumerate(lines) if index not in removed]

    has_headings = has_lyric_group_headings(body_lines)
    lyrics = build_heading_blocks(body_lines) if has_headings else flatten_lyrics(body_lines)

    if fields:
        logger.debug("Header fields: %s", ", ".join(sorted(fields)))
    logger.debug("Lyrics %s section headings", "have" if has_headings else "have no")

    return ParsedSongImport(
        title=fields.get("title") or fallback_title,
        default_key=fields.get("default_key"),
        ccli_id=fields.get("ccli_id"),
        artist=fields.get("artist"),
        link_url=fields.get("link_url"),
        lyrics=lyrics,
        has_group_headings=has_headings,
        field_lines=field_lines,
    )
