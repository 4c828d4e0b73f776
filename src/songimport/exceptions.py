class SongImportError(Exception):
    """Base exception for songimport."""


class ExtractionError(SongImportError):
    """Raised when text cannot be recovered from an uploaded file."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"Could not extract text from {filename}: {reason}")


class UnsupportedFileTypeError(SongImportError):
    """Raised when no extractor handles the given file."""

    def __init__(self, filename: str, mime_type: str = "", hint: str | None = None):
        self.filename = filename
        self.mime_type = mime_type
        self.hint = hint
        message = hint or f"Unsupported file type: {mime_type or 'unknown'} ({filename})"
        super().__init__(message)
