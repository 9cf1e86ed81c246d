"""Use Case: Convert content between formats.

This is the single entry point of the engine. It checks the format pair
against the support matrix, validates the options, reads the source into a
Value tree and hands it to exactly one serializer. Every failure leaves as
a :class:`ConversionError` tagged with the stage that failed.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Union

from pydantic import ValidationError

from docconvert.domain.errors import (
    ConversionError,
    DocConvertError,
    EmptyInputError,
    ErrorKind,
    ParseError,
    UnsupportedConversionError,
)
from docconvert.domain.models.conversion import (
    ConversionMetadata,
    ConversionOptions,
    ConversionResult,
)
from docconvert.domain.models.formats import (
    MIME_TYPES,
    DocumentFormat,
    coerce_format,
    ensure_supported,
)
from docconvert.domain.ports.serializer import RenderContext, SerializerPort
from docconvert.domain.ports.source_reader import SourceReaderPort

logger = logging.getLogger(__name__)

FormatTag = Union[str, DocumentFormat]
OptionsInput = Union[ConversionOptions, Mapping[str, Any], None]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def coerce_options(options: OptionsInput) -> ConversionOptions:
    """Validate *options*; unknown keys are dropped, bad values rejected."""
    if options is None:
        return ConversionOptions()
    if isinstance(options, ConversionOptions):
        return options
    try:
        return ConversionOptions.model_validate(dict(options))
    except (ValidationError, TypeError, ValueError) as exc:
        raise ConversionError(ErrorKind.INVALID_OPTIONS, f"Invalid conversion options: {exc}") from exc


class ConvertContentUseCase:
    """Convert one source document into one target format.

    Parameters
    ----------
    readers : Mapping[DocumentFormat, SourceReaderPort]
        Source readers keyed by the format they decode.
    serializers : Mapping[DocumentFormat, SerializerPort]
        Serializers keyed by the format they produce.
    clock : callable, optional
        Returns the timestamp written into generated output.
    """

    def __init__(
        self,
        readers: Mapping[DocumentFormat, SourceReaderPort],
        serializers: Mapping[DocumentFormat, SerializerPort],
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._readers = dict(readers)
        self._serializers = dict(serializers)
        self._clock = clock

    def execute(
        self,
        content: Union[str, bytes],
        source_format: FormatTag,
        target_format: FormatTag,
        options: OptionsInput = None,
        *,
        source_name: str = "document",
    ) -> ConversionResult:
        """Run the conversion.

        Raises:
            ConversionError: For any failure; ``kind`` names the stage and
                the original exception is chained as ``__cause__``.
        """
        try:
            return self._convert(content, source_format, target_format, options, source_name)
        except ConversionError:
            raise
        except DocConvertError as exc:
            logger.info("Conversion of %s failed (%s): %s", source_name, exc.kind.value, exc)
            raise ConversionError(exc.kind, str(exc)) from exc
        except Exception as exc:
            logger.exception("Unexpected failure converting %s", source_name)
            raise ConversionError(ErrorKind.INTERNAL, f"Conversion failed: {exc}") from exc

    def _convert(
        self,
        content: Union[str, bytes],
        source_format: FormatTag,
        target_format: FormatTag,
        options: OptionsInput,
        source_name: str,
    ) -> ConversionResult:
        source = coerce_format(source_format)
        target = coerce_format(target_format)
        ensure_supported(source, target)
        opts = coerce_options(options)

        reader = self._readers.get(source)
        serializer = self._serializers.get(target)
        if reader is None or serializer is None:
            raise UnsupportedConversionError(
                f"No adapter registered for {source.value} to {target.value}"
            )

        text, original_size = _decode(content)
        if not text.strip():
            raise EmptyInputError("Source content is empty")

        value = reader.read(text)
        context = RenderContext(options=opts, source_name=source_name, generated_at=self._clock())

        started = time.perf_counter()
        data = serializer.serialize(value, context)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            "Converted %s: %s -> %s, %d -> %d bytes in %.1f ms",
            source_name,
            source.value,
            target.value,
            original_size,
            len(data),
            elapsed_ms,
        )
        return ConversionResult(
            data=data,
            mime_type=MIME_TYPES[target],
            metadata=ConversionMetadata(
                original_size=original_size,
                converted_size=len(data),
                processing_time_ms=elapsed_ms,
                source_format=source,
                target_format=target,
            ),
        )


def _decode(content: Union[str, bytes]) -> tuple[str, int]:
    """Return the source text and its size in bytes."""
    if isinstance(content, (bytes, bytearray)):
        try:
            return bytes(content).decode("utf-8-sig"), len(content)
        except UnicodeDecodeError as exc:
            raise ParseError(f"Source is not valid UTF-8: {exc}") from exc
    return content, len(content.encode("utf-8", "surrogatepass"))
