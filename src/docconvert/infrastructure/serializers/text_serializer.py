"""Plain-text serializer: an indented, human-readable dump of the tree."""

from __future__ import annotations

from typing import Optional

from docconvert.config.models import TextConfig
from docconvert.domain.models.formats import DocumentFormat
from docconvert.domain.models.value import (
    BoolValue,
    MappingValue,
    NullValue,
    NumberValue,
    SequenceValue,
    TextValue,
    Value,
    number_text,
)
from docconvert.domain.ports.serializer import RenderContext, SerializerPort


def format_value(value: Value, indent: int = 0, step: int = 2) -> str:
    """Render *value* with nested containers indented by *step* spaces per level."""
    if isinstance(value, NullValue):
        return "null"
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, NumberValue):
        return number_text(value.value)
    if isinstance(value, TextValue):
        return value.value

    spaces = " " * indent
    pad = " " * step
    if isinstance(value, SequenceValue):
        if not len(value):
            return "[]"
        lines = ["["]
        for index, item in enumerate(value.items):
            lines.append(f"{spaces}{pad}[{index}] {format_value(item, indent + step, step)}")
        lines.append(f"{spaces}]")
        return "\n".join(lines)
    if isinstance(value, MappingValue):
        if not len(value):
            return "{}"
        lines = ["{"]
        for key, item in value.entries:
            lines.append(f"{spaces}{pad}{key}: {format_value(item, indent + step, step)}")
        lines.append(f"{spaces}}}")
        return "\n".join(lines)
    raise TypeError(f"Unsupported value: {value!r}")


class TextSerializer(SerializerPort):
    """Value → banner-framed plain text."""

    target_format = DocumentFormat.TXT

    def __init__(self, config: Optional[TextConfig] = None) -> None:
        self._config = config or TextConfig()

    def serialize(self, value: Value, context: RenderContext) -> bytes:
        cfg = self._config
        rule = "=" * cfg.rule_width

        parts = [f"=== {cfg.title} ===\n"]
        if context.options.include_metadata:
            generated = context.generated_at.strftime("%Y-%m-%d %H:%M:%S")
            parts.append(f"Source: {context.source_name}\n")
            parts.append(f"Generated: {generated}\n")
        parts.append(f"{rule}\n\n")
        parts.append(format_value(value, step=cfg.indent))
        parts.append(f"\n\n{rule}\n")
        parts.append(f"End of {cfg.title}\n")
        return "".join(parts).encode("utf-8")
