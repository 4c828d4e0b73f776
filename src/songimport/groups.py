"""Split a parsed lyrics body into labelled groups for slide building."""

import re

from .lines import is_heading, trim_line
from .models import LyricGroup
from .parser import normalize_text

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")


def heading_label(line: str) -> str:
    """Return the display label for a heading line.

    ``"[Verse 1]"`` → ``"Verse 1"``, ``"(Chorus)"`` → ``"Chorus"``,
    ``"Bridge:"`` → ``"Bridge"``.
    """
    label = trim_line(line)
    if label.startswith("[") and label.endswith("]"):
        label = label[1:-1]
    else:
        label = label.removeprefix("(").removesuffix(")")
    return label.strip().rstrip(":").strip()


def split_lyric_groups(lyrics: str) -> list[LyricGroup]:
    """Split *lyrics* into :class:`LyricGroup` objects.

    Blocks are separated by blank lines.  A block whose first line is a
    heading takes that heading as its label and drops it from ``lines``.
    """
    groups: list[LyricGroup] = []
    for block in _BLOCK_SPLIT_RE.split(normalize_text(lyrics)):
        lines = [line for line in map(trim_line, block.split("\n")) if line]
        if not lines:
            continue
        if is_heading(lines[0]):
            groups.append(LyricGroup(label=heading_label(lines[0]) or None, lines=lines[1:]))
        else:
            groups.append(LyricGroup(label=None, lines=lines))
    return groups
