"""Port: Source reader: decodes source text into a Value tree."""

from __future__ import annotations

from abc import ABC, abstractmethod

from docconvert.domain.models.formats import DocumentFormat
from docconvert.domain.models.value import Value


class SourceReaderPort(ABC):
    """Contract for parsing one source format.

    Implementations raise ``ParseError`` on malformed input and never return
    a partially built tree.
    """

    source_format: DocumentFormat

    @abstractmethod
    def read(self, text: str) -> Value:
        """Parse *text* into a Value."""
        ...
