"""CSV source reader.

The first row is the header; every following non-empty row becomes a
mapping of header → cell text. Cells are kept as text, no type inference.
"""

from __future__ import annotations

import csv
import io
import logging

from docconvert.domain.errors import ParseError
from docconvert.domain.models.formats import DocumentFormat
from docconvert.domain.models.value import MappingValue, SequenceValue, TextValue, Value
from docconvert.domain.ports.source_reader import SourceReaderPort

logger = logging.getLogger(__name__)

EXTRA_CELLS_KEY = "__parsed_extra"


def _unique_headers(header: list[str]) -> list[str]:
    seen: dict[str, int] = {}
    unique: list[str] = []
    for name in header:
        if name in seen:
            seen[name] += 1
            candidate = f"{name}_{seen[name]}"
            while candidate in seen:
                seen[name] += 1
                candidate = f"{name}_{seen[name]}"
            seen[candidate] = 0
            unique.append(candidate)
        else:
            seen[name] = 0
            unique.append(name)
    return unique


def read_csv(text: str) -> Value:
    """Parse CSV text into a sequence of mappings."""
    try:
        rows = [row for row in csv.reader(io.StringIO(text, newline=""), strict=True) if row]
    except csv.Error as exc:
        raise ParseError(f"Invalid CSV: {exc}") from exc

    if not rows:
        return SequenceValue()

    header = _unique_headers(rows[0])
    if header != rows[0]:
        logger.debug("Renamed duplicate CSV headers: %s", header)
    # Overflow cells go under a key no header already uses
    extra_key = _unique_headers(header + [EXTRA_CELLS_KEY])[-1]
    records = []
    for row in rows[1:]:
        entries: list[tuple[str, Value]] = [
            (name, TextValue(row[index] if index < len(row) else ""))
            for index, name in enumerate(header)
        ]
        if len(row) > len(header):
            extra = SequenceValue(tuple(TextValue(cell) for cell in row[len(header):]))
            entries.append((extra_key, extra))
        records.append(MappingValue(tuple(entries)))
    return SequenceValue(tuple(records))


class CsvSourceReader(SourceReaderPort):
    source_format = DocumentFormat.CSV

    def read(self, text: str) -> Value:
        return read_csv(text)
