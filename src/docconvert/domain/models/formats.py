"""Format enumerations and the static support matrix.

The tables below are built once at import time and wrapped in
``MappingProxyType`` so nothing can mutate them afterwards.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Union

from docconvert.domain.errors import UnsupportedConversionError


class DocumentFormat(str, Enum):
    """Closed enumeration of format tags known to the conversion shell."""

    PDF = "pdf"
    DOCX = "docx"
    RTF = "rtf"
    ODT = "odt"
    EPUB = "epub"
    TXT = "txt"
    MD = "md"
    HTML = "html"
    LATEX = "latex"
    CSV = "csv"
    JSON = "json"
    XML = "xml"
    PNG = "png"
    JPG = "jpg"


class Quality(str, Enum):
    """Output quality (only meaningful for image-bearing formats)."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PageSize(str, Enum):
    """Paper sizes understood by the PDF renderer."""

    A3 = "A3"
    A4 = "A4"
    LETTER = "Letter"
    LEGAL = "Legal"


F = DocumentFormat

SUPPORT_MATRIX: MappingProxyType[DocumentFormat, frozenset[DocumentFormat]] = MappingProxyType(
    {
        F.JSON: frozenset({F.CSV, F.XML, F.TXT, F.HTML, F.PDF, F.JSON}),
        F.CSV: frozenset({F.JSON, F.XML, F.HTML, F.TXT, F.PDF}),
        F.XML: frozenset({F.JSON, F.HTML, F.TXT, F.PDF}),
    }
)

MIME_TYPES: MappingProxyType[DocumentFormat, str] = MappingProxyType(
    {
        F.PDF: "application/pdf",
        F.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        F.RTF: "application/rtf",
        F.ODT: "application/vnd.oasis.opendocument.text",
        F.EPUB: "application/epub+zip",
        F.TXT: "text/plain;charset=utf-8",
        F.MD: "text/markdown;charset=utf-8",
        F.HTML: "text/html;charset=utf-8",
        F.LATEX: "application/x-latex",
        F.CSV: "text/csv;charset=utf-8",
        F.JSON: "application/json;charset=utf-8",
        F.XML: "application/xml;charset=utf-8",
        F.PNG: "image/png",
        F.JPG: "image/jpeg",
    }
)

DESCRIPTIONS: MappingProxyType[DocumentFormat, str] = MappingProxyType(
    {
        F.PDF: "Portable Document Format",
        F.DOCX: "Microsoft Word Document",
        F.RTF: "Rich Text Format",
        F.ODT: "OpenDocument Text",
        F.EPUB: "Electronic Publication",
        F.TXT: "Plain Text",
        F.MD: "Markdown",
        F.HTML: "HyperText Markup Language",
        F.LATEX: "LaTeX Document",
        F.CSV: "Comma Separated Values",
        F.JSON: "JavaScript Object Notation",
        F.XML: "Extensible Markup Language",
        F.PNG: "Portable Network Graphics",
        F.JPG: "JPEG Image",
    }
)

# File-name extensions that map onto a format tag other than their own name
_EXTENSION_ALIASES: MappingProxyType[str, DocumentFormat] = MappingProxyType(
    {
        "jpeg": F.JPG,
        "htm": F.HTML,
        "markdown": F.MD,
        "tex": F.LATEX,
        "text": F.TXT,
    }
)


def coerce_format(tag: Union[str, DocumentFormat]) -> DocumentFormat:
    """Turn a format tag (``"json"``, ``".JSON"``, enum member) into a ``DocumentFormat``."""
    if isinstance(tag, DocumentFormat):
        return tag
    normalized = str(tag).strip().lstrip(".").lower()
    if normalized in _EXTENSION_ALIASES:
        return _EXTENSION_ALIASES[normalized]
    try:
        return DocumentFormat(normalized)
    except ValueError:
        raise UnsupportedConversionError(f"Unknown format: {tag!r}") from None


def is_conversion_supported(
    source: Union[str, DocumentFormat], target: Union[str, DocumentFormat]
) -> bool:
    """True if the (source, target) pair is in the support matrix."""
    try:
        source_fmt, target_fmt = coerce_format(source), coerce_format(target)
    except UnsupportedConversionError:
        return False
    return target_fmt in SUPPORT_MATRIX.get(source_fmt, frozenset())


def supported_targets(source: Union[str, DocumentFormat]) -> list[DocumentFormat]:
    """Targets reachable from *source*, in enumeration order."""
    reachable = SUPPORT_MATRIX.get(coerce_format(source), frozenset())
    return [fmt for fmt in DocumentFormat if fmt in reachable]


def ensure_supported(source: DocumentFormat, target: DocumentFormat) -> None:
    """Raise ``UnsupportedConversionError`` unless the pair is in the matrix."""
    if target not in SUPPORT_MATRIX.get(source, frozenset()):
        raise UnsupportedConversionError(
            f"Conversion from {source.value} to {target.value} is not supported"
        )
