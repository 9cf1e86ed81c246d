"""XML source reader.

The root element becomes a mapping of its children:

* attributes are collected under ``@attributes``;
* leaf elements become their trimmed text, or ``{"@attributes", "#text"}``
  when they carry attributes;
* repeated sibling tags collapse into a sequence, in document order.

Entity expansion and network access are disabled on the parser.
"""

from __future__ import annotations

import logging
import re

from lxml import etree

from docconvert.domain.errors import ParseError
from docconvert.domain.models.formats import DocumentFormat
from docconvert.domain.models.value import MappingValue, SequenceValue, TextValue, Value
from docconvert.domain.ports.source_reader import SourceReaderPort

logger = logging.getLogger(__name__)

ATTRIBUTES_KEY = "@attributes"
TEXT_KEY = "#text"

# lxml refuses str input that still carries an encoding declaration
_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


def _new_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )


def _local_name(tag: str) -> str:
    return etree.QName(tag).localname


def element_to_value(element: etree._Element) -> Value:
    """Convert one element (and its subtree) into a Value."""
    named = {_local_name(name): TextValue(text) for name, text in element.attrib.items()}
    attributes = MappingValue(tuple(named.items()))
    children = [child for child in element if isinstance(child.tag, str)]

    if not children:
        text = "".join(element.itertext()).strip()
        if len(attributes):
            return MappingValue(((ATTRIBUTES_KEY, attributes), (TEXT_KEY, TextValue(text))))
        return TextValue(text)

    grouped: dict[str, list[Value]] = {}
    for child in children:
        grouped.setdefault(_local_name(child.tag), []).append(element_to_value(child))

    entries: list[tuple[str, Value]] = []
    if len(attributes):
        entries.append((ATTRIBUTES_KEY, attributes))
    for name, values in grouped.items():
        entries.append((name, values[0] if len(values) == 1 else SequenceValue(tuple(values))))
    return MappingValue(tuple(entries))


def read_xml(text: str) -> Value:
    """Parse XML text into a Value rooted at the document element."""
    try:
        root = etree.fromstring(_DECLARATION.sub("", text, count=1), _new_parser())
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise ParseError(f"Invalid XML: {exc}") from exc
    logger.debug("XML source rooted at <%s>", _local_name(root.tag))
    return element_to_value(root)


class XmlSourceReader(SourceReaderPort):
    source_format = DocumentFormat.XML

    def read(self, text: str) -> Value:
        return read_xml(text)
