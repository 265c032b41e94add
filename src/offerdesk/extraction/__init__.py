"""Text extraction collaborators for uploaded offer files."""

from offerdesk.extraction.text import PlainTextExtractor, TextExtractor

__all__ = [
    "PlainTextExtractor",
    "TextExtractor",
]
