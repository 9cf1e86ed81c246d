"""JSON serializer: re-emits the Value tree."""

from __future__ import annotations

import json

from docconvert.domain.models.formats import DocumentFormat
from docconvert.domain.models.value import Value, to_python
from docconvert.domain.ports.serializer import RenderContext, SerializerPort


def to_json(value: Value, *, pretty: bool = True) -> str:
    if pretty:
        return json.dumps(to_python(value), indent=2, ensure_ascii=False)
    return json.dumps(to_python(value), separators=(",", ":"), ensure_ascii=False)


class JsonSerializer(SerializerPort):
    target_format = DocumentFormat.JSON

    def serialize(self, value: Value, context: RenderContext) -> bytes:
        return to_json(value, pretty=context.options.preserve_formatting).encode("utf-8")
