"""Tests for the Value model and its text forms."""

from __future__ import annotations

import pytest

from docconvert.domain.models.value import (
    BoolValue,
    MappingValue,
    NullValue,
    NumberValue,
    SequenceValue,
    TextValue,
    compact_json,
    display_text,
    from_python,
    number_text,
    scalar_text,
    to_python,
    type_name,
)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestFromPython:
    def test_scalars(self):
        assert from_python(None) == NullValue()
        assert from_python(True) == BoolValue(True)
        assert from_python(3) == NumberValue(3)
        assert from_python("x") == TextValue("x")

    def test_bool_is_not_a_number(self):
        assert isinstance(from_python(False), BoolValue)

    def test_nested_preserves_order(self):
        value = from_python({"b": 1, "a": [1, {"c": None}]})
        assert isinstance(value, MappingValue)
        assert value.keys() == ["b", "a"]
        items = value.get("a")
        assert isinstance(items, SequenceValue)
        assert len(items) == 2

    def test_round_trip(self):
        data = {"name": "Ada", "tags": ["x", "y"], "meta": {"n": 1.5, "ok": False, "none": None}}
        assert to_python(from_python(data)) == data

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            from_python(object())


class TestMappingValue:
    def test_duplicate_keys_rejected(self):
        with pytest.raises(ValueError):
            MappingValue((("a", NullValue()), ("a", NullValue())))

    def test_lookup(self):
        value = MappingValue((("a", NumberValue(1)),))
        assert "a" in value
        assert "b" not in value
        assert value.get("b") is None
        assert len(value) == 1


# ---------------------------------------------------------------------------
# Text forms
# ---------------------------------------------------------------------------


class TestTextForms:
    @pytest.mark.parametrize(
        "number, expected",
        [(1, "1"), (1.0, "1"), (1.5, "1.5"), (-0.25, "-0.25"), (10**21, "1000000000000000000000")],
    )
    def test_number_text(self, number, expected):
        assert number_text(number) == expected

    def test_scalar_text(self):
        assert scalar_text(NullValue()) == ""
        assert scalar_text(BoolValue(True)) == "true"
        assert scalar_text(BoolValue(False)) == "false"
        assert scalar_text(NumberValue(2.0)) == "2"
        assert scalar_text(TextValue("hi")) == "hi"

    def test_containers_use_compact_json(self):
        assert scalar_text(from_python([1, 2, 3])) == "[1,2,3]"
        assert scalar_text(from_python({"a": "é"})) == '{"a":"é"}'

    def test_compact_json_integral_floats(self):
        assert compact_json(from_python([1.0, 2.5])) == "[1,2.5]"

    def test_display_text_shows_null(self):
        assert display_text(NullValue()) == "null"
        assert display_text(NumberValue(4)) == "4"

    @pytest.mark.parametrize(
        "data, name",
        [([], "array"), ({}, "object"), ("s", "string"), (1, "number"), (True, "boolean"), (None, "null")],
    )
    def test_type_name(self, data, name):
        assert type_name(from_python(data)) == name
