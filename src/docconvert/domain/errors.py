"""Domain errors: custom exceptions for docconvert.

Readers, serializers and renderers raise the specific subclasses; the
conversion use case catches them at its boundary and re-raises a single
tagged :class:`ConversionError`. They carry no infrastructure dependencies.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Tag carried by :class:`ConversionError`."""

    PARSE = "parse"
    UNSUPPORTED = "unsupported"
    EMPTY_INPUT = "empty_input"
    RENDER = "render"
    INVALID_OPTIONS = "invalid_options"
    INTERNAL = "internal"


class DocConvertError(Exception):
    """Base exception for all docconvert errors."""

    kind: ErrorKind = ErrorKind.INTERNAL


class ParseError(DocConvertError):
    """Raised when the source content is malformed."""

    kind = ErrorKind.PARSE


class UnsupportedConversionError(DocConvertError):
    """Raised when a (source, target) format pair is not in the support matrix."""

    kind = ErrorKind.UNSUPPORTED


class EmptyInputError(DocConvertError):
    """Raised when the source holds nothing to convert (e.g. an empty array to CSV)."""

    kind = ErrorKind.EMPTY_INPUT


class RenderError(DocConvertError):
    """Raised when the PDF layout engine fails."""

    kind = ErrorKind.RENDER


class ConfigurationError(DocConvertError):
    """Raised when the engine configuration is invalid or missing."""


class ConversionError(DocConvertError):
    """Tagged error surfaced by the conversion use case.

    ``kind`` tells callers which stage failed; ``message`` is safe to show to
    a user. The original exception stays available as ``__cause__``.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"ConversionError(kind={self.kind.value!r}, message={self.message!r})"
