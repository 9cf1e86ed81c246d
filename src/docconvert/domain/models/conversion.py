"""Conversion options and results.

Both are Pydantic models: options arrive from the outer shell as plain
dictionaries (camelCase keys, possibly with fields meant for other
formats), so validation happens once at the boundary and unknown keys are
dropped rather than rejected.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from docconvert.domain.models.formats import DocumentFormat, PageSize, Quality


class ConversionOptions(BaseModel):
    """Flat configuration for one conversion call."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    quality: Quality = Field(
        default=Quality.MEDIUM,
        description="Reserved for image-bearing formats; ignored by text, CSV, XML and PDF.",
    )
    font_size: int = Field(default=11, ge=4, le=72, description="PDF body font size in points.")
    page_size: PageSize = Field(default=PageSize.A4, description="PDF paper size.")
    margin: int = Field(default=15, ge=0, description="PDF page margin in millimetres.")
    preserve_formatting: bool = Field(
        default=True,
        description="Indent JSON output instead of writing it compactly.",
    )
    include_metadata: bool = Field(
        default=True,
        description="Emit source/generated banners and PDF document info.",
    )
    compression: bool = Field(default=False, description="Compress PDF content streams.")


class ConversionMetadata(BaseModel):
    """Size and timing information attached to a result."""

    model_config = ConfigDict(frozen=True)

    original_size: int
    converted_size: int
    processing_time_ms: float
    is_zip: bool = False
    image_count: Optional[int] = None
    source_format: Optional[DocumentFormat] = None
    target_format: Optional[DocumentFormat] = None


class ConversionResult(BaseModel):
    """Output bytes plus MIME type and metadata. Owned by the caller."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str
    metadata: ConversionMetadata

    def text(self, encoding: str = "utf-8") -> str:
        """Decode ``data`` for textual targets."""
        return self.data.decode(encoding)
