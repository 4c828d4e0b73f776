"""Extractor for lyric sheets pasted or saved as HTML.

Rich-text paste from a browser or word processor arrives as HTML with one
``<p>`` or ``<div>`` per lyric line and ``<br>`` for soft breaks.  Those are
turned back into newlines; scripts, styles and ``<head>`` are dropped.
"""

import re

from bs4 import BeautifulSoup, NavigableString

from ..models import ExtractionResult
from ..parser import normalize_text
from .base import TextExtractor

# Elements that end a line of text when rendered.
BLOCK_TAGS = [
    "p", "div", "li", "tr", "pre", "blockquote",
    "h1", "h2", "h3", "h4", "h5", "h6",
]

_EXCESS_BLANK_LINES_RE = re.compile(r"\n{3,}")
_WHITESPACE_RE = re.compile(r"\s+")


class HtmlExtractor(TextExtractor):
    """Extractor for ``text/html`` files."""

    extensions = (".html", ".htm")
    mime_types = ("text/html",)

    def extract(self, data: bytes) -> ExtractionResult:
        soup = BeautifulSoup(data, "html.parser")
        return ExtractionResult(text=html_to_text(soup))


def html_to_text(soup: BeautifulSoup) -> str:
    """Return the visible text of *soup* with line structure preserved."""
    for tag in soup(["script", "style", "noscript", "head"]):
        tag.decompose()

    # Source formatting whitespace renders as a single space, except in <pre>.
    for node in soup.find_all(string=True):
        if type(node) is not NavigableString:
            node.extract()  # comments, doctype, CDATA
        elif node.find_parent("pre") is None:
            node.replace_with(_WHITESPACE_RE.sub(" ", node))

    for br in soup.find_all("br"):
        br.replace_with("\n")

    # A trailing newline per block keeps empty paragraphs as blank lines.
    for block in soup.find_all(BLOCK_TAGS):
        block.append("\n")

    text = normalize_text(soup.get_text()).replace("\xa0", " ")
    lines = [line.strip() for line in text.split("\n")]
    return _EXCESS_BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()
