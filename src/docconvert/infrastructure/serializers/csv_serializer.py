"""CSV serializer.

Every field is double-quoted and embedded quotes are doubled, whether or
not quoting is strictly needed, so the output is stable byte for byte.
"""

from __future__ import annotations

import csv
import io
from typing import Optional

from docconvert.config.models import CsvConfig
from docconvert.domain.errors import EmptyInputError
from docconvert.domain.models.classification import DataShape
from docconvert.domain.models.formats import DocumentFormat
from docconvert.domain.models.value import SequenceValue, Value, display_text
from docconvert.domain.ports.serializer import RenderContext, SerializerPort
from docconvert.domain.services.classifier import data_shape
from docconvert.domain.services.flattener import collect_headers, record_rows, records_from


def to_csv(value: Value, *, scalar_header: str = "Value") -> str:
    """Render *value* as CSV text.

    Sequences produce one row per element, a mapping produces a single row
    and a bare scalar produces a one-column ``Value`` table.

    Raises
    ------
    EmptyInputError
        If *value* is an empty sequence.
    """
    if isinstance(value, SequenceValue) and len(value) == 0:
        raise EmptyInputError("JSON array is empty")

    if data_shape(value) is DataShape.SCALAR:
        headers = [scalar_header]
        rows = [[display_text(value)]]
    else:
        records = records_from(value)
        headers = collect_headers(records)
        rows = record_rows(records, headers)

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


class CsvSerializer(SerializerPort):
    """Flattened records → CSV."""

    target_format = DocumentFormat.CSV

    def __init__(self, config: Optional[CsvConfig] = None) -> None:
        self._config = config or CsvConfig()

    def serialize(self, value: Value, context: RenderContext) -> bytes:
        return to_csv(value, scalar_header=self._config.scalar_header).encode("utf-8")
