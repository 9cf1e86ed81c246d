"""Port: Serializer: renders a Value tree into output bytes.

Infrastructure adapters (CSV, HTML, XML, text, JSON, PDF) implement this
interface. Each adapter serves exactly one target format.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone

from docconvert.domain.models.conversion import ConversionOptions
from docconvert.domain.models.formats import DocumentFormat
from docconvert.domain.models.value import Value


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RenderContext:
    """Per-call inputs a serializer may need besides the value itself."""

    options: ConversionOptions = field(default_factory=ConversionOptions)
    source_name: str = "document"
    generated_at: datetime = field(default_factory=_utc_now)


class SerializerPort(ABC):
    """Contract for rendering a Value into one target format."""

    target_format: DocumentFormat

    @abstractmethod
    def serialize(self, value: Value, context: RenderContext) -> bytes:
        """Return the encoded output for *value*."""
        ...
