"""Domain services: pure functions over the Value model."""

from docconvert.domain.services.classifier import classify, data_shape
from docconvert.domain.services.flattener import (
    FlatRecord,
    collect_headers,
    flatten,
    record_rows,
    records_from,
    to_record,
)

__all__ = [
    "FlatRecord",
    "classify",
    "collect_headers",
    "data_shape",
    "flatten",
    "record_rows",
    "records_from",
    "to_record",
]
