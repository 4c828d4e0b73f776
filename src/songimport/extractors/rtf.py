"""Extractor for ``.rtf`` lyric sheets.

A small control-word walker, enough for the RTF that word processors and
TextEdit write for a page of lyrics:

* destination groups that hold no body text (font / colour tables, style
  sheets, document info, pictures, headers and footers, field
  instructions, and any ``{\\* ...}`` group) are skipped
* ``\\par``, ``\\line`` and an escaped newline become line breaks
* ``\\tab`` becomes a tab
* ``\\'hh`` is decoded as Windows-1252 and ``\\uN`` as a Unicode code
  point (its one-character ASCII fallback is skipped)

Documents the walker cannot make sense of are stripped bluntly instead and
the result carries a warning.
"""

import logging
import re

from ..models import ExtractionResult
from ..parser import normalize_text
from .base import TextExtractor

logger = logging.getLogger(__name__)

PARTIAL_PARSE_WARNING = "RTF parsing was incomplete, some formatting may be lost"

# Groups to skip (they contain metadata, not content)
SKIP_DESTINATIONS = frozenset({
    "fonttbl", "colortbl", "stylesheet", "listtable", "listoverridetable",
    "info", "generator", "header", "footer", "headerl", "headerr", "headerf",
    "footerl", "footerr", "footerf", "pict", "object", "shp", "shpinst",
    "fldinst", "themedata", "colorschememapping", "datastore",
})

_CONTROL_WORD_RE = re.compile(r"([a-zA-Z]+)(-?\d+)? ?")
_EXCESS_BLANK_LINES_RE = re.compile(r"\n{3,}")


class RtfExtractor(TextExtractor):
    """Extractor for ``text/rtf`` files."""

    extensions = (".rtf",)
    mime_types = ("text/rtf", "application/rtf")

    def extract(self, data: bytes) -> ExtractionResult:
        # RTF is 7-bit; anything outside ASCII is escaped in the document.
        rtf = data.decode("latin-1")
        try:
            text = rtf_to_text(rtf)
        except (ValueError, OverflowError) as exc:
            logger.warning("RTF walk failed (%s), falling back to stripping", exc)
            return ExtractionResult(text=strip_rtf(rtf).strip(), warning=PARTIAL_PARSE_WARNING)
        return ExtractionResult(text=text.strip())


# ---------------------------------------------------------------------------
# Control-word walker
# ---------------------------------------------------------------------------


def rtf_to_text(rtf: str) -> str:
    """Return the body text of an RTF document.

    Raises:
        ValueError: if *rtf* is not an RTF document or its groups are unbalanced.
    """
    rtf = normalize_text(rtf)
    if not rtf.lstrip().startswith("{\\rtf"):
        raise ValueError("missing {\\rtf header")

    out: list[str] = []
    depth = 0
    skip_depth: int | None = None  # depth of the group being skipped
    i = 0

    while i < len(rtf):
        char = rtf[i]

        if char == "{":
            depth += 1
            i += 1
            continue

        if char == "}":
            if skip_depth is not None and depth == skip_depth:
                skip_depth = None
            depth -= 1
            if depth < 0:
                raise ValueError(f"unbalanced '}}' at offset {i}")
            i += 1
            continue

        if skip_depth is not None:
            # Escaped braces must not change the depth of a skipped group.
            i += 2 if char == "\\" else 1
            continue

        if char != "\\":
            if char != "\n":
                out.append(char)
            i += 1
            continue

        i += 1
        if i >= len(rtf):
            break
        symbol = rtf[i]

        if symbol in "\\{}":
            out.append(symbol)
            i += 1
        elif symbol == "\n":
            out.append("\n")
            i += 1
        elif symbol == "'":
            out.append(_decode_hex(rtf[i + 1:i + 3]))
            i += 3
        elif symbol == "*":
            skip_depth = depth
            i += 1
        elif symbol == "~":
            out.append(" ")
            i += 1
        elif not symbol.isascii() or not symbol.isalpha():
            # \- (optional hyphen), \_ (non-breaking hyphen) and the like
            i += 1
        else:
            m = _CONTROL_WORD_RE.match(rtf, i)
            word, param = m.group(1), m.group(2)
            i = m.end()
            if word in SKIP_DESTINATIONS:
                skip_depth = depth
            elif word in ("par", "line"):
                out.append("\n")
            elif word == "tab":
                out.append("\t")
            elif word == "u" and param:
                out.append(_decode_unicode(param))
                i = _skip_unicode_fallback(rtf, i)

    if depth > 0:
        raise ValueError(f"{depth} unclosed group(s)")

    # Characters outside the BMP arrive as two \uN surrogate halves.
    text = "".join(out).encode("utf-16", "surrogatepass").decode("utf-16", "replace")
    text = _EXCESS_BLANK_LINES_RE.sub("\n\n", text)
    return "\n".join(line.strip() for line in text.split("\n"))


def _decode_hex(code: str) -> str:
    try:
        value = int(code, 16)
    except ValueError:
        return ""
    return bytes([value]).decode("cp1252", errors="replace")


def _decode_unicode(param: str) -> str:
    """Return the UTF-16 code unit for a signed 16-bit ``\\uN`` value."""
    code = int(param)
    if code < 0:
        code += 65536
    if not 0 <= code <= 0xFFFF:
        raise ValueError(f"\\u value out of range: {param}")
    return chr(code)


def _skip_unicode_fallback(rtf: str, i: int) -> int:
    """Return the offset just past the ASCII fallback that follows ``\\uN``."""
    if rtf.startswith("\\'", i):
        return i + 4
    if i < len(rtf) and rtf[i] not in "\\{}":
        return i + 1
    return i


# ---------------------------------------------------------------------------
# Fallback
# ---------------------------------------------------------------------------


def strip_rtf(rtf: str) -> str:
    """Blunt RTF removal for documents :func:`rtf_to_text` rejects.

    Paragraph structure is lost; the result is a single line of text.
    """
    text = re.sub(r"^\{\\rtf1[^}]*\}", "", rtf, flags=re.IGNORECASE)
    text = re.sub(r"\\'([0-9a-f]{2})", lambda m: _decode_hex(m.group(1)), text, flags=re.IGNORECASE)
    text = re.sub(r"\\[a-z]+(-?\d+)? ?", " ", text, flags=re.IGNORECASE)
    text = re.sub(r"\{[^{}]*\}", "", text)
    text = re.sub(r"[{}]", "", text)
    return re.sub(r"\s+", " ", text).strip()
