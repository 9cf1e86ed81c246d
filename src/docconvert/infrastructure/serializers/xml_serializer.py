"""XML serializer.

The value is wrapped in a synthetic root carrying ``generated`` and
``type`` attributes::

    <root generated="2024-05-01T10:00:00.000Z" type="array">
      <data>
        <item>...</item>
      </data>
    </root>

Sequence elements always use the fixed item element name; mapping keys
become element names after being coerced into valid XML names.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

from lxml import etree

from docconvert.config.models import XmlConfig
from docconvert.domain.models.formats import DocumentFormat
from docconvert.domain.models.value import (
    MappingValue,
    NullValue,
    SequenceValue,
    Value,
    scalar_text,
    type_name,
)
from docconvert.domain.ports.serializer import RenderContext, SerializerPort

# XML 1.0 (fifth edition) NameStartChar / NameChar ranges, colon excluded
_NAME_START = (
    "A-Z_a-z\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u02ff\u0370-\u037d\u037f-\u1fff\u200c\u200d"
    "\u2070-\u218f\u2c00-\u2fef\u3001-\ud7ff\uf900-\ufdcf\ufdf0-\ufffd\U00010000-\U000effff"
)
_NAME_REST = "\\-.0-9\u00b7\u0300-\u036f\u203f\u2040"
_INVALID_NAME_CHARS = re.compile(f"[^{_NAME_START}{_NAME_REST}]")
_NAME_START_CHAR = re.compile(f"[{_NAME_START}]")
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def xml_name(key: str) -> str:
    """Coerce a mapping key into a valid element name."""
    name = _INVALID_NAME_CHARS.sub("_", key)
    if not _NAME_START_CHAR.match(name):
        name = f"_{name}"
    return name


def xml_text(text: str) -> str:
    """Drop characters XML 1.0 cannot carry."""
    return _INVALID_XML_CHARS.sub("", text)


def iso_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _append(parent: etree._Element, value: Value, item_name: str) -> None:
    if isinstance(value, MappingValue):
        for key, child in value.entries:
            _append(etree.SubElement(parent, xml_name(key)), child, item_name)
    elif isinstance(value, SequenceValue):
        for child in value.items:
            _append(etree.SubElement(parent, item_name), child, item_name)
    elif isinstance(value, NullValue):
        return
    else:
        parent.text = xml_text(scalar_text(value))


def to_xml(value: Value, generated_at: datetime, config: Optional[XmlConfig] = None) -> bytes:
    """Render *value* as a pretty-printed UTF-8 XML document."""
    cfg = config or XmlConfig()
    root = etree.Element(cfg.root_element)
    root.set("generated", iso_timestamp(generated_at))
    root.set("type", type_name(value))
    _append(etree.SubElement(root, cfg.data_element), value, cfg.item_element)
    return etree.tostring(root, xml_declaration=True, encoding="UTF-8", pretty_print=True)


class XmlSerializer(SerializerPort):
    target_format = DocumentFormat.XML

    def __init__(self, config: Optional[XmlConfig] = None) -> None:
        self._config = config or XmlConfig()

    def serialize(self, value: Value, context: RenderContext) -> bytes:
        return to_xml(value, context.generated_at, self._config)
