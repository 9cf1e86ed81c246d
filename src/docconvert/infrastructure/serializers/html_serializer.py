"""HTML serializer.

Renders a self-contained, styled page from ``templates/data_view.html.j2``.
The page body depends on the data shape: a record table, a property table,
an indexed listing or a single value.

Values are inserted verbatim unless ``HtmlConfig.escape_values`` is set,
in which case Jinja2 autoescaping is switched on for the whole page.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, Template

from docconvert.config.models import HtmlConfig
from docconvert.domain.models.classification import DataShape
from docconvert.domain.models.formats import DocumentFormat
from docconvert.domain.models.value import Value, display_text
from docconvert.domain.ports.serializer import RenderContext, SerializerPort
from docconvert.domain.services.classifier import data_shape
from docconvert.domain.services.flattener import (
    collect_headers,
    flatten,
    record_rows,
    records_from,
)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "data_view.html.j2"


def load_template(escape_values: bool, templates_dir: Path = TEMPLATES_DIR) -> Template:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=escape_values,
        trim_blocks=True,
        lstrip_blocks=False,
        keep_trailing_newline=False,
    )
    return env.get_template(TEMPLATE_NAME)


def _body_context(value: Value) -> dict[str, Any]:
    shape = data_shape(value)
    context: dict[str, Any] = {"shape": shape.value}

    if shape is DataShape.RECORDS:
        records = records_from(value)
        headers = collect_headers(records)
        context["headers"] = headers
        context["rows"] = record_rows(records, headers)
    elif shape is DataShape.OBJECT:
        context["properties"] = list(flatten(value).items())
    elif shape is DataShape.SCALAR_LIST:
        context["items"] = [display_text(item) for item in value.items]
    else:
        context["scalar"] = display_text(value)
    return context


class HtmlSerializer(SerializerPort):
    """Value → styled standalone HTML page."""

    target_format = DocumentFormat.HTML

    def __init__(self, config: Optional[HtmlConfig] = None) -> None:
        self._config = config or HtmlConfig()
        self._template = load_template(self._config.escape_values)

    def render(self, value: Value, context: RenderContext) -> str:
        cfg = self._config
        return self._template.render(
            title_prefix=cfg.title_prefix,
            heading=cfg.heading,
            footer_text=cfg.footer_text,
            source_name=context.source_name,
            generated=context.generated_at.strftime("%Y-%m-%d %H:%M:%S"),
            include_metadata=context.options.include_metadata,
            **_body_context(value),
        )

    def serialize(self, value: Value, context: RenderContext) -> bytes:
        return self.render(value, context).encode("utf-8")
