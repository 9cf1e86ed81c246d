"""Domain models: value tree, formats, classification and conversion DTOs."""

from docconvert.domain.models.classification import (
    DataMode,
    DataShape,
    DocumentMetadata,
    DocumentMode,
    Page,
    StructuralClassification,
    StructureKind,
)
from docconvert.domain.models.conversion import (
    ConversionMetadata,
    ConversionOptions,
    ConversionResult,
)
from docconvert.domain.models.formats import DocumentFormat, PageSize, Quality
from docconvert.domain.models.value import (
    BoolValue,
    MappingValue,
    NullValue,
    NumberValue,
    SequenceValue,
    TextValue,
    Value,
)

__all__ = [
    "BoolValue",
    "ConversionMetadata",
    "ConversionOptions",
    "ConversionResult",
    "DataMode",
    "DataShape",
    "DocumentFormat",
    "DocumentMetadata",
    "DocumentMode",
    "MappingValue",
    "NullValue",
    "NumberValue",
    "Page",
    "PageSize",
    "Quality",
    "SequenceValue",
    "StructuralClassification",
    "StructureKind",
    "TextValue",
    "Value",
]
