from abc import ABC, abstractmethod
from pathlib import Path

from ..exceptions import ExtractionError
from ..models import ExtractionResult


class TextExtractor(ABC):
    """Abstract base class for all upload-format extractors."""

    extensions: tuple[str, ...] = ()
    mime_types: tuple[str, ...] = ()

    @classmethod
    def can_handle(cls, filename: str, mime_type: str = "") -> bool:
        """Return True if this extractor reads files of the given name or MIME type."""
        if mime_type and mime_type.lower() in cls.mime_types:
            return True
        return Path(filename).suffix.lower() in cls.extensions

    @abstractmethod
    def extract(self, data: bytes) -> ExtractionResult:
        """Decode the raw file bytes and return plain text with ``\\n`` line endings.

        Recoverable problems are reported through ``ExtractionResult.warning``
        rather than raised.
        """

    def extract_file(self, path: Path) -> ExtractionResult:
        """Convenience method: read + extract."""
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ExtractionError(str(path), exc.strerror or str(exc)) from exc
        return self.extract(data)
