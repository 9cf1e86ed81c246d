"""Tests for the XML serializer."""

from __future__ import annotations

from datetime import datetime, timezone

from lxml import etree

from docconvert.domain.models.value import from_python
from docconvert.infrastructure.serializers.xml_serializer import to_xml, xml_name, xml_text

FIXED_NOW = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)


def _root(data) -> etree._Element:
    return etree.fromstring(to_xml(from_python(data), FIXED_NOW))


class TestXmlDocument:
    def test_declaration(self):
        assert to_xml(from_python(1), FIXED_NOW).startswith(b"<?xml version='1.0' encoding='UTF-8'?>")

    def test_root_attributes(self):
        root = _root([1])
        assert root.tag == "root"
        assert root.get("generated") == "2024-05-01T10:00:00.000Z"
        assert root.get("type") == "array"
        assert root[0].tag == "data"

    def test_type_attribute_for_scalars(self):
        assert _root("x").get("type") == "string"
        assert _root(None).get("type") == "null"
        assert _root({}).get("type") == "object"

    def test_sequence_items_keep_order(self):
        data = _root([3, 1, 2]).find("data")
        assert [item.tag for item in data] == ["item", "item", "item"]
        assert [item.text for item in data] == ["3", "1", "2"]

    def test_mapping_keys_keep_order(self):
        data = _root({"b": 1, "a": {"c": True}}).find("data")
        assert [child.tag for child in data] == ["b", "a"]
        assert data.find("a/c").text == "true"

    def test_nested_sequences_use_item(self):
        data = _root({"rows": [[1, 2]]}).find("data")
        assert data.find("rows/item/item").text == "1"

    def test_null_is_empty_element(self):
        data = _root({"a": None}).find("data")
        assert data.find("a").text is None

    def test_control_characters_are_stripped(self):
        data = _root({"a": "x\x01y\x0bz"}).find("data")
        assert data.find("a").text == "xyz"


class TestXmlNames:
    def test_non_name_characters_replaced(self):
        assert xml_name("m²") == "m_"
        assert xml_name("½") == "_"
        assert xml_name("a•b") == "a_b"

    def test_unicode_letters_kept(self):
        assert xml_name("été") == "été"
        assert xml_name("名前") == "名前"

    def test_sanitized_keys_are_accepted_by_lxml(self):
        data = _root({"m²": 1, "½": 2, "é": 3, "9lives": 4}).find("data")
        assert [child.tag for child in data] == ["m_", "_", "é", "_9lives"]

    def test_valid_names_unchanged(self):
        assert xml_name("name") == "name"
        assert xml_name("a.b-c_d") == "a.b-c_d"

    def test_invalid_characters_replaced(self):
        assert xml_name("first name") == "first_name"
        assert xml_name("a:b") == "a_b"

    def test_invalid_start(self):
        assert xml_name("1abc") == "_1abc"
        assert xml_name("") == "_"
        assert xml_name("-x") == "_-x"

    def test_xml_text_keeps_whitespace(self):
        assert xml_text("a\tb\nc") == "a\tb\nc"
