"""Convenience functions over a lazily built default :class:`Container`.

    >>> import docconvert
    >>> docconvert.convert('[{"a": 1, "b": {"c": 2}}]', "json", "csv").text()
    '"a","b.c"\\n"1","2"\\n'
"""

from __future__ import annotations

from typing import Optional, Union

from docconvert.application.use_cases.convert_content import FormatTag, OptionsInput
from docconvert.bootstrap import Container
from docconvert.domain.errors import UnsupportedConversionError
from docconvert.domain.models.classification import StructuralClassification
from docconvert.domain.models.conversion import ConversionResult
from docconvert.domain.models.formats import coerce_format
from docconvert.domain.models.value import Value
from docconvert.domain.services.classifier import classify as _classify
from docconvert.domain.services.flattener import FlatRecord, to_record

_container: Optional[Container] = None


def default_container() -> Container:
    global _container
    if _container is None:
        _container = Container()
    return _container


def convert(
    content: Union[str, bytes],
    source_format: FormatTag,
    target_format: FormatTag,
    options: OptionsInput = None,
    *,
    source_name: str = "document",
) -> ConversionResult:
    """Convert *content*; raises ``ConversionError`` on any failure."""
    return default_container().convert_content().execute(
        content, source_format, target_format, options, source_name=source_name
    )


def parse(text: str, source_format: FormatTag = "json") -> Value:
    """Read *text* into a Value tree; raises ``ParseError`` when malformed."""
    fmt = coerce_format(source_format)
    reader = default_container().get_reader(fmt)
    if reader is None:
        raise UnsupportedConversionError(f"No reader for {fmt.value} sources")
    return reader.read(text)


def classify(value: Value) -> StructuralClassification:
    return _classify(value)


def flatten(value: Value) -> FlatRecord:
    """Flatten a mapping (or wrap a scalar) into a dot-path record."""
    return to_record(value)
