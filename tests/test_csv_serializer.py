"""Tests for the CSV serializer."""

from __future__ import annotations

import csv
import io

import pytest

from docconvert.config.models import CsvConfig
from docconvert.domain.errors import EmptyInputError
from docconvert.domain.models.value import from_python
from docconvert.infrastructure.serializers.csv_serializer import CsvSerializer, to_csv


def _rows(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


class TestToCsv:
    def test_nested_records(self):
        assert to_csv(from_python([{"a": 1, "b": {"c": 2}}])) == '"a","b.c"\n"1","2"\n'

    def test_bare_scalar(self):
        assert to_csv(from_python(42)) == '"Value"\n"42"\n'

    def test_bare_null_scalar(self):
        assert to_csv(from_python(None)) == '"Value"\n"null"\n'

    def test_empty_sequence_is_rejected(self):
        with pytest.raises(EmptyInputError):
            to_csv(from_python([]))

    def test_single_mapping_is_one_row(self):
        assert _rows(to_csv(from_python({"a": 1, "b": [1, 2]}))) == [["a", "b"], ["1", "[1,2]"]]

    def test_scalar_items_use_value_column(self):
        assert _rows(to_csv(from_python([1, "x", None]))) == [["value"], ["1"], ["x"], [""]]

    def test_union_headers_and_padding(self):
        text = to_csv(from_python([{"a": 1}, {"b": 2, "a": 3}, {"c": None}]))
        rows = _rows(text)
        assert rows[0] == ["a", "b", "c"]
        assert rows[1:] == [["1", "", ""], ["3", "2", ""], ["", "", ""]]
        assert all(len(row) == len(rows[0]) for row in rows)

    def test_every_field_is_quoted(self):
        text = to_csv(from_python([{"plain": "abc", "num": 5}]))
        for line in text.splitlines():
            for field in line.split(","):
                assert field.startswith('"') and field.endswith('"')

    def test_embedded_quotes_are_doubled(self):
        text = to_csv(from_python([{"q": 'say "hi"'}]))
        assert text.splitlines()[1] == '"say ""hi"""'

    def test_commas_and_newlines_stay_inside_quotes(self):
        text = to_csv(from_python([{"a": "x,y", "b": "line1\nline2"}]))
        assert _rows(text)[1] == ["x,y", "line1\nline2"]

    def test_configured_scalar_header(self, context):
        data = CsvSerializer(CsvConfig(scalar_header="Amount")).serialize(from_python(3), context)
        assert data == b'"Amount"\n"3"\n'
