"""Structural classifier: Document Mode or Data Mode.

This is a structural sniff, not schema validation. A value is treated as a
paged document when it looks like one of the document exports the rest of
the product produces::

    {"pages": [{"pageNumber": 1, "paragraphs": ["..."], "wordCount": 12}]}
    {"fullText": "...", "metadata": {...}}

Anything else falls through to Data Mode; :func:`classify` never raises.
"""

from __future__ import annotations

import math
from typing import Optional

from docconvert.domain.models.classification import (
    DataMode,
    DataShape,
    DocumentMetadata,
    DocumentMode,
    Page,
    StructuralClassification,
)
from docconvert.domain.models.value import (
    MappingValue,
    NumberValue,
    SequenceValue,
    TextValue,
    Value,
    scalar_text,
)

PAGES_KEY = "pages"
PARAGRAPHS_KEY = "paragraphs"
FULL_TEXT_KEY = "fullText"
METADATA_KEY = "metadata"


def classify(value: Value) -> StructuralClassification:
    """Decide between Document Mode and Data Mode for *value*."""
    if not isinstance(value, MappingValue):
        return DataMode(value)

    pages = value.get(PAGES_KEY)
    has_pages = isinstance(pages, SequenceValue) and len(pages) > 0
    has_paragraphs = has_pages and any(_has_paragraphs(page) for page in pages)

    full_text = value.get(FULL_TEXT_KEY)
    metadata = value.get(METADATA_KEY)
    has_full_text = isinstance(full_text, TextValue)
    has_metadata = isinstance(metadata, MappingValue)

    if not ((has_pages and has_paragraphs) or (has_full_text and has_metadata)):
        return DataMode(value)

    return DocumentMode(
        pages=tuple(_read_page(page, index) for index, page in enumerate(pages))
        if has_pages
        else (),
        full_text=full_text.value if has_full_text else None,
        metadata=_read_metadata(metadata) if has_metadata else None,
    )


def data_shape(value: Value) -> DataShape:
    """Sub-classify a Data Mode value for the tabular renderers."""
    if isinstance(value, SequenceValue):
        if len(value) > 0 and isinstance(value.items[0], MappingValue):
            return DataShape.RECORDS
        return DataShape.SCALAR_LIST
    if isinstance(value, MappingValue):
        return DataShape.OBJECT
    return DataShape.SCALAR


# ---------------------------------------------------------------------------
# Lenient field extraction
# ---------------------------------------------------------------------------


def _has_paragraphs(page: Value) -> bool:
    return isinstance(page, MappingValue) and isinstance(page.get(PARAGRAPHS_KEY), SequenceValue)


def _read_page(page: Value, index: int) -> Page:
    if not isinstance(page, MappingValue):
        return Page(page_number=index + 1)

    page_number = _positive_int(page.get("pageNumber")) or index + 1
    paragraphs = page.get(PARAGRAPHS_KEY)
    texts: tuple[str, ...] = ()
    if isinstance(paragraphs, SequenceValue):
        texts = tuple(scalar_text(item) for item in paragraphs.items)
    return Page(
        page_number=page_number,
        paragraphs=texts,
        word_count=_positive_int(page.get("wordCount")),
    )


def _read_metadata(metadata: MappingValue) -> DocumentMetadata:
    doc_type = metadata.get("type")
    converted_at = metadata.get("convertedAt")
    return DocumentMetadata(
        type=doc_type.value if isinstance(doc_type, TextValue) and doc_type.value else None,
        total_pages=_positive_int(metadata.get("totalPages")),
        total_characters=_positive_int(metadata.get("totalCharacters")),
        converted_at=converted_at.value if isinstance(converted_at, TextValue) else None,
    )


def _positive_int(value: Optional[Value]) -> Optional[int]:
    if not isinstance(value, NumberValue):
        return None
    number = value.value
    # Integers are exact at any size; only floats can be non-finite
    if isinstance(number, float) and not math.isfinite(number):
        return None
    return int(number) if number > 0 else None
