"""Structural classification results.

A conversion looks at its Value once and decides whether it is paged prose
(Document Mode) or record-shaped data (Data Mode). Data Mode is further
split into data shapes that the tabular renderers share.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from docconvert.domain.models.value import Value


class StructureKind(str, Enum):
    DOCUMENT = "document"
    DATA = "data"


class DataShape(str, Enum):
    """How a Data Mode value is laid out in tables."""

    RECORDS = "records"  # sequence whose first element is a mapping
    OBJECT = "object"  # single mapping
    SCALAR_LIST = "scalar_list"  # any other sequence
    SCALAR = "scalar"  # bare null/bool/number/text


@dataclass(frozen=True)
class Page:
    """One source page of a Document Mode value."""

    page_number: int
    paragraphs: tuple[str, ...] = ()
    word_count: Optional[int] = None


@dataclass(frozen=True)
class DocumentMetadata:
    """Fields read from the source's ``metadata`` mapping (all optional)."""

    type: Optional[str] = None
    total_pages: Optional[int] = None
    total_characters: Optional[int] = None
    converted_at: Optional[str] = None


@dataclass(frozen=True)
class DocumentMode:
    pages: tuple[Page, ...] = ()
    full_text: Optional[str] = None
    metadata: Optional[DocumentMetadata] = None

    @property
    def kind(self) -> StructureKind:
        return StructureKind.DOCUMENT


@dataclass(frozen=True)
class DataMode:
    value: Value

    @property
    def kind(self) -> StructureKind:
        return StructureKind.DATA


StructuralClassification = Union[DocumentMode, DataMode]
