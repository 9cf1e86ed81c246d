"""JSON source reader."""

from __future__ import annotations

import json
import math
from typing import NoReturn

from docconvert.domain.errors import ParseError
from docconvert.domain.models.formats import DocumentFormat
from docconvert.domain.models.value import Value, from_python
from docconvert.domain.ports.source_reader import SourceReaderPort


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(literal: str) -> float:
    number = float(literal)
    if not math.isfinite(number):
        raise ValueError(f"number {literal} is out of range")
    return number


def parse(raw_text: str) -> Value:
    """Parse JSON text into a Value.

    Raises ``ParseError`` on malformed syntax, non-standard constants
    (``NaN``, ``Infinity``), numbers that overflow a float or nesting
    deeper than the interpreter allows.
    Duplicate keys keep their first position and their last value.
    """
    try:
        data = json.loads(raw_text, parse_constant=_reject_constant, parse_float=_finite_float)
        return from_python(data)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}"
        ) from exc
    except ValueError as exc:
        raise ParseError(f"Invalid JSON: {exc}") from exc
    except RecursionError as exc:
        raise ParseError("Invalid JSON: nesting is too deep") from exc


class JsonSourceReader(SourceReaderPort):
    source_format = DocumentFormat.JSON

    def read(self, text: str) -> Value:
        return parse(text)
