"""Extractor for plain ``.txt`` lyric sheets.

Files are read as UTF-8.  Older files saved in a legacy Windows / Mac
encoding come out with replacement characters; those are re-read as Latin-1
and flagged with a warning.
"""

import logging

from ..models import ExtractionResult
from ..parser import normalize_text
from .base import TextExtractor

logger = logging.getLogger(__name__)

LATIN1_WARNING = "File was decoded as Latin-1 (may have encoding issues)"


class PlainTextExtractor(TextExtractor):
    """Extractor for ``text/plain`` files."""

    extensions = (".txt",)
    mime_types = ("text/plain",)

    def extract(self, data: bytes) -> ExtractionResult:
        text = normalize_text(data.decode("utf-8", errors="replace"))
        if "\ufffd" not in text:
            return ExtractionResult(text=text)

        logger.warning("Invalid UTF-8 in text file, decoding as Latin-1")
        text = data.removeprefix(b"\xef\xbb\xbf").decode("latin-1")
        return ExtractionResult(text=normalize_text(text), warning=LATIN1_WARNING)
