"""User preferences model for docconvert.

``UserSettings`` captures the defaults a user wants applied to every CLI
conversion. These are *separate* from ``EngineConfig``, which encodes
layout and presentation constants of the renderers.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from docconvert.domain.models.conversion import ConversionOptions
from docconvert.domain.models.formats import DocumentFormat


class UserSettings(BaseModel):
    """Root settings model persisted to ``user_settings.json``."""

    options: ConversionOptions = Field(
        default_factory=ConversionOptions,
        description="Default conversion options for new conversions.",
    )
    default_target: Optional[DocumentFormat] = Field(
        default=None,
        description="Target format used when --to is omitted.",
    )
    output_dir: Optional[str] = Field(
        default=None,
        description="Directory for converted files (defaults to the source's directory).",
    )
