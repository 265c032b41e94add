"""File-to-text extraction for uploaded briefs.

Only plain-text files are handled here; richer formats plug in by
implementing the ``TextExtractor`` protocol.
"""

from pathlib import PurePath
from typing import Protocol

import structlog

from offerdesk.domain.errors import ExtractionFailedError, UnsupportedFormatError

logger = structlog.get_logger()


class TextExtractor(Protocol):
    """Anything that can turn uploaded bytes into plain text."""

    def extract(self, data: bytes, filename: str) -> str:
        """Return the text content of *data*.

        Raises:
            UnsupportedFormatError: If the file type is not handled.
            ExtractionFailedError: If the file could not be read.
        """
        ...


class PlainTextExtractor:
    """Decode ``.txt`` uploads as UTF-8."""

    supported_extensions: tuple[str, ...] = (".txt",)

    def extract(self, data: bytes, filename: str) -> str:
        extension = PurePath(filename).suffix.lower()
        if extension not in self.supported_extensions:
            raise UnsupportedFormatError(extension, self.supported_extensions)

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.warning("text_extraction_failed", filename=filename, error=str(exc))
            raise ExtractionFailedError(f"Could not decode '{filename}' as UTF-8") from exc

        logger.debug("text_extracted", filename=filename, characters=len(text))
        return text
