from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class ParsedSongImport:
    """Structured result of parsing a pasted or extracted lyric sheet.

    ``field_lines`` records, for each populated metadata field, the index of
    the line (in the normalized input) it was read from.  A single line can
    own several fields, e.g. ``"Key: G - Artist: Jane Doe"``.  It is a
    read-only mapping.
    """

    lyrics: str
    has_group_headings: bool = False
    title: str | None = None
    default_key: str | None = None
    ccli_id: str | None = None
    artist: str | None = None
    link_url: str | None = None
    field_lines: Mapping[str, int] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "field_lines", MappingProxyType(dict(self.field_lines)))

    def to_dict(self) -> dict:
        """Return a JSON-ready dict; absent metadata fields are omitted."""
        data = {
            "title": self.title,
            "defaultKey": self.default_key,
            "ccliId": self.ccli_id,
            "artist": self.artist,
            "linkUrl": self.link_url,
        }
        data = {name: value for name, value in data.items() if value is not None}
        data["lyrics"] = self.lyrics
        data["hasGroupHeadings"] = self.has_group_headings
        return data


@dataclass
class LyricGroup:
    """A blank-line separated block of lyrics, optionally under a heading."""

    label: str | None  # e.g. "Verse 1", "Chorus", None for unlabelled blocks
    lines: list[str] = field(default_factory=list)


@dataclass
class ExtractionResult:
    """Plain text pulled out of an uploaded file.

    ``warning`` is set when the text was recovered with reduced confidence
    (fallback decoding, partial RTF parse).  The parser never looks at it.
    """

    text: str
    warning: str | None = None
