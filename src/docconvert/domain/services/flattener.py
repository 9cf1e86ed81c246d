"""Flatten nested mappings into dot-path keyed records.

The output of these functions is the column contract for the CSV, HTML
and PDF tables:

* nested mappings are walked, only their leaves produce keys;
* sequences are *not* expanded, they are stored in their compact JSON form;
* null becomes an empty string and other scalars are stringified.
"""

from __future__ import annotations

from typing import Iterable

from docconvert.domain.models.value import (
    MappingValue,
    NullValue,
    SequenceValue,
    Value,
    compact_json,
    scalar_text,
)

FlatRecord = dict[str, str]

# Key used when a non-mapping item has to be placed in a record
RECORD_SCALAR_KEY = "value"


def flatten(value: MappingValue, prefix: str = "") -> FlatRecord:
    """Project *value* onto an ordered ``path -> scalar string`` record."""
    record: FlatRecord = {}
    for key, child in value.entries:
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(child, NullValue):
            record[path] = ""
        elif isinstance(child, MappingValue):
            record.update(flatten(child, path))
        elif isinstance(child, SequenceValue):
            record[path] = compact_json(child)
        else:
            record[path] = scalar_text(child)
    return record


def to_record(value: Value) -> FlatRecord:
    """Flatten a mapping, or wrap any other value as ``{"value": ...}``."""
    if isinstance(value, MappingValue):
        return flatten(value)
    return {RECORD_SCALAR_KEY: scalar_text(value)}


def records_from(value: Value) -> list[FlatRecord]:
    """One record per sequence element, or a single record for anything else."""
    if isinstance(value, SequenceValue):
        return [to_record(item) for item in value.items]
    return [to_record(value)]


def collect_headers(records: Iterable[FlatRecord]) -> list[str]:
    """Ordered union of record keys, first-seen order, no duplicates."""
    headers: dict[str, None] = {}
    for record in records:
        for key in record:
            headers.setdefault(key, None)
    return list(headers)


def record_rows(records: list[FlatRecord], headers: list[str]) -> list[list[str]]:
    """Align records to *headers*, using ``""`` for missing keys."""
    return [[record.get(header, "") for header in headers] for record in records]
