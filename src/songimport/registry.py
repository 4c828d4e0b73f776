from pathlib import Path

from .exceptions import UnsupportedFileTypeError
from .extractors.base import TextExtractor
from .extractors.html import HtmlExtractor
from .extractors.rtf import RtfExtractor
from .extractors.txt import PlainTextExtractor
from .models import ExtractionResult

_EXTRACTORS: list[type[TextExtractor]] = [
    PlainTextExtractor,
    RtfExtractor,
    HtmlExtractor,
]

# Formats users commonly upload that need a binary decoder this package
# does not ship, keyed by extension.
_UNSUPPORTED_HINTS = {
    ".doc": "Legacy .doc files are not supported. Please convert to .docx or .pdf format.",
    ".ppt": "PowerPoint files are not yet supported. Please convert to .pdf or .txt format.",
    ".pptx": "PowerPoint files are not yet supported. Please convert to .pdf or .txt format.",
    ".docx": "Word documents need a binary decoder. Please save as .txt or .rtf.",
    ".pdf": "PDF files need a binary decoder. Please save as .txt or .rtf.",
}

_UNSUPPORTED_MIME_TYPES = {
    "application/msword": ".doc",
    "application/vnd.ms-powerpoint": ".ppt",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": ".pptx",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
    "application/pdf": ".pdf",
}


def supported_extensions() -> list[str]:
    return [ext for cls in _EXTRACTORS for ext in cls.extensions]


def get_extractor(filename: str, mime_type: str = "") -> TextExtractor:
    """Return an instantiated extractor for the given file.

    Raises UnsupportedFileTypeError if no extractor matches.
    """
    for cls in _EXTRACTORS:
        if cls.can_handle(filename, mime_type):
            return cls()

    ext = _UNSUPPORTED_MIME_TYPES.get(mime_type.lower(), Path(filename).suffix.lower())
    raise UnsupportedFileTypeError(filename, mime_type, hint=_UNSUPPORTED_HINTS.get(ext))


def extract_text(data: bytes, filename: str, mime_type: str = "") -> ExtractionResult:
    """Extract plain text from the raw bytes of an uploaded file."""
    return get_extractor(filename, mime_type).extract(data)
