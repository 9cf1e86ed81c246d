"""docconvert: structural document/data conversion engine."""

from docconvert.api import classify, convert, flatten, parse
from docconvert.domain.errors import ConversionError, ErrorKind
from docconvert.domain.models.conversion import ConversionOptions, ConversionResult
from docconvert.domain.models.formats import DocumentFormat

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "ConversionOptions",
    "ConversionResult",
    "DocumentFormat",
    "ErrorKind",
    "classify",
    "convert",
    "flatten",
    "parse",
]
