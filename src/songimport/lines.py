"""Single-line classification for pasted lyric sheets.

Every function here looks at exactly one line, is pure, and never raises:
a line that does not match simply yields ``None`` / ``False``.

  1. is_heading()          - section label: ``Verse 2``, ``(Chorus)``, ``[Tag]``
  2. extract_title_line()  - explicit ``Title: ...`` field
  3. extract_ccli()        - ``CCLI #1234567``
  4. extract_default_key() - ``Key: G``, ``Key - Ebm``, ``Key: D/E``
  5. extract_artist()      - ``Artist: ...``, ``Words and Music by ...``
  6. extract_link()        - first http(s) URL on the line
  7. is_metadata_line()    - anything that looks like a credit or field
  8. classify_line()       - one :class:`LineType` per line

Lines are trimmed with :func:`trim_line` before testing, so callers may pass
raw lines.
"""

import re
from enum import Enum, auto

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

# Canonical section labels, optionally wrapped in one pair of parentheses
# and followed by a number: "Verse", "V2", "Verse 2", "(Chorus)", "PC".
HEADING_RE = re.compile(
    r"^\(?"
    r"(?:verse|v|chorus|c|bridge|b|pre-?chorus|pc|outro|ending|intro|opening|"
    r"tag|coda|interlude|instrumental)"
    r"(?:\s*\d+)?"
    r"\)?$",
    re.IGNORECASE | re.ASCII,
)

# Any fully bracketed line: "[Verse 1]", "[Spontaneous]"
BRACKET_HEADING_RE = re.compile(r"^\[.+\]$")

TITLE_RE = re.compile(r"^\s*(?:title|song title|song name)\s*[:\-]\s*(.+)$", re.IGNORECASE)

CCLI_RE = re.compile(r"CCLI\s*(?:#|ID)?\s*[:\-]?\s*(\d{4,})", re.IGNORECASE | re.ASCII)

# Key with an optional slash alternate: "G", "Ebm", "D/E", "C# / Db"
KEY_RE = re.compile(
    r"\bKey\b\s*[:\-]?\s*([A-G](?:#|b)?m?(?:\s*/\s*[A-G](?:#|b)?m?)?)",
    re.IGNORECASE,
)

# Credit lines are tried before the bare "Artist" field.
ARTIST_CREDIT_RE = re.compile(
    r"\b(?:words?\s*(?:and\s+)?music|music|lyrics|written|author)\s+by\b\s*[:\-]?\s*(.+)",
    re.IGNORECASE,
)
ARTIST_FIELD_RE = re.compile(r"\bartist\b\s*[:\-]?\s*(.+)", re.IGNORECASE)

# Where an artist credit stops: a CCLI marker or a " - " separator.
_ARTIST_CCLI_CUT_RE = re.compile(r"\bCCLI\b", re.IGNORECASE)
_ARTIST_DASH_CUT_RE = re.compile(r"\s+-\s+")

LINK_RE = re.compile(r"https?://\S+", re.IGNORECASE)
_LINK_TRAILING_PUNCT = "),.;"

# Used only to keep credit-like lines out of the title fallback.
METADATA_MARKER_RE = re.compile(
    r"\b(?:Artist|Author|Written by|Words(?:\s+and\s+Music)?\s+by|Music\s+by|Lyrics\s+by)\b",
    re.IGNORECASE,
)
_KEY_MARKER_RE = re.compile(r"\bKey\b\s*[:\-]?\s*[A-G](?:#|b)?m?", re.IGNORECASE)

# Whitespace and stray byte-order marks.
_TRIM_RE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


# ---------------------------------------------------------------------------
# LineType
# ---------------------------------------------------------------------------


class LineType(Enum):
    BLANK = auto()  # empty or whitespace only
    HEADING = auto()  # section label: Verse 1, [Chorus], (Bridge)
    TITLE = auto()  # explicit "Title: ..." field
    METADATA = auto()  # CCLI, key or credit line
    LINK = auto()  # contains an http(s) URL
    CONTENT = auto()  # everything else


# ---------------------------------------------------------------------------
# Trimming
# ---------------------------------------------------------------------------


def trim_line(line: str) -> str:
    """Return *line* without surrounding whitespace or byte-order marks."""
    return _TRIM_RE.sub("", line)


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------


def is_heading(line: str) -> bool:
    """Return True if *line* is a section heading.

    Matches the canonical labels in :data:`HEADING_RE` as well as any line
    that is entirely wrapped in square brackets.
    """
    stripped = trim_line(line)
    if not stripped:
        return False
    return bool(HEADING_RE.match(stripped) or BRACKET_HEADING_RE.match(stripped))


# ---------------------------------------------------------------------------
# Field extractors
# ---------------------------------------------------------------------------


def extract_title_line(line: str) -> str | None:
    m = TITLE_RE.match(trim_line(line))
    if not m:
        return None
    return m.group(1).strip() or None


def extract_ccli(line: str) -> str | None:
    m = CCLI_RE.search(trim_line(line))
    return m.group(1) if m else None


def extract_default_key(line: str) -> str | None:
    m = KEY_RE.search(trim_line(line))
    return m.group(1).strip() if m else None


def extract_artist(line: str) -> str | None:
    """Return the credited artist on *line*, or None.

    ``"Words and Music by Jane Doe - 2019"`` gives ``"Jane Doe"``;
    ``"Artist: Jane Doe CCLI #123456"`` gives ``"Jane Doe"``.
    """
    stripped = trim_line(line)
    m = ARTIST_CREDIT_RE.search(stripped) or ARTIST_FIELD_RE.search(stripped)
    if not m:
        return None
    value = _ARTIST_CCLI_CUT_RE.split(m.group(1), maxsplit=1)[0]
    value = _ARTIST_DASH_CUT_RE.split(value, maxsplit=1)[0]
    return value.strip() or None


def extract_link(line: str) -> str | None:
    m = LINK_RE.search(trim_line(line))
    if not m:
        return None
    return m.group().rstrip(_LINK_TRAILING_PUNCT) or None


def is_metadata_line(line: str) -> bool:
    """Return True if *line* carries a CCLI number, a key or a credit marker."""
    stripped = trim_line(line)
    return bool(
        CCLI_RE.search(stripped)
        or _KEY_MARKER_RE.search(stripped)
        or METADATA_MARKER_RE.search(stripped)
    )


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------


def classify_line(line: str) -> LineType:
    """Classify a single line of a lyric sheet.

    The first matching type wins, in the order BLANK, HEADING, TITLE,
    METADATA, LINK, CONTENT.
    """
    stripped = trim_line(line)
    if not stripped:
        return LineType.BLANK
    if is_heading(stripped):
        return LineType.HEADING
    if extract_title_line(stripped):
        return LineType.TITLE
    if is_metadata_line(stripped) or extract_artist(stripped):
        return LineType.METADATA
    if extract_link(stripped):
        return LineType.LINK
    return LineType.CONTENT
