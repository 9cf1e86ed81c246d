"""Data Mode layout: record tables, property tables and listings."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from fpdf import FPDF
from fpdf.enums import TableCellFillMode
from fpdf.fonts import FontFace

from docconvert.config.models import DataTableConfig
from docconvert.domain.models.classification import DataShape
from docconvert.domain.models.value import SequenceValue, Value, display_text
from docconvert.domain.ports.serializer import RenderContext
from docconvert.domain.services.classifier import data_shape
from docconvert.domain.services.flattener import (
    collect_headers,
    flatten,
    record_rows,
    records_from,
)
from docconvert.infrastructure.renderers.canvas import (
    PT_TO_MM,
    FinalDocument,
    RenderedDocument,
    draw_centered,
    finish,
    new_pdf,
    use_font,
)
from docconvert.infrastructure.renderers.text_layout import sanitize, wrap

logger = logging.getLogger(__name__)


def column_groups(count: int, width: float, min_width: float) -> list[tuple[int, int]]:
    """Split *count* columns into ``(start, stop)`` slices no narrower than *min_width*."""
    per_table = max(1, int(width // min_width))
    return [(start, min(start + per_table, count)) for start in range(0, count, per_table)]


class DataTableLayout:
    """Two-phase PDF layout for Data Mode values."""

    def __init__(self, config: Optional[DataTableConfig] = None) -> None:
        self._config = config or DataTableConfig()

    def render(self, value: Value, context: RenderContext) -> RenderedDocument:
        cfg = self._config
        pdf = new_pdf(context, cfg.title)
        pdf.set_auto_page_break(False)
        pdf.add_page()
        rendered = RenderedDocument(pdf=pdf, pages=[[]])

        margin = pdf.l_margin
        pdf.set_font(cfg.font_family, "B", cfg.title_font_size)
        pdf.set_text_color(0)
        pdf.text(margin, cfg.title_y_mm, sanitize(cfg.title))
        pdf.set_font(cfg.font_family, "", cfg.source_font_size)
        if context.options.include_metadata:
            pdf.text(margin, cfg.source_y_mm, sanitize(f"Source: {context.source_name}"))

        shape = data_shape(value)
        logger.debug("Data layout: %s", shape.value)
        if shape is DataShape.RECORDS:
            self._records(pdf, value)
        elif shape is DataShape.OBJECT:
            rows = [[key, cell] for key, cell in flatten(value).items()]
            pdf.set_y(cfg.content_top_mm)
            self._table(
                pdf,
                ["Property", "Value"],
                rows,
                cfg.object_font_size,
                col_widths=cfg.object_column_ratio,
                bold_first_column=True,
            )
        elif shape is DataShape.SCALAR_LIST:
            self._listing(pdf, value)
        else:
            pdf.text(margin, cfg.content_top_mm, sanitize(f"Value: {display_text(value)}"))
        return rendered

    def _bottom(self, pdf: FPDF) -> float:
        """Lowest baseline that keeps clear of the stamped footer."""
        return pdf.h - max(pdf.l_margin, self._config.footer_offset_mm + 5)

    def _records(self, pdf: FPDF, value: Value) -> None:
        """Tabulate records, splitting the columns over several tables when too wide."""
        cfg = self._config
        records = records_from(value)
        headers = collect_headers(records)
        rows = record_rows(records, headers)
        if not headers:
            # Only empty mappings: nothing to tabulate
            pdf.set_font(cfg.font_family, "", cfg.records_font_size)
            pdf.text(pdf.l_margin, cfg.content_top_mm, f"{len(rows)} records without fields")
            return

        groups = column_groups(len(headers), pdf.epw, cfg.min_column_width_mm)
        if len(groups) > 1:
            logger.debug("Splitting %d columns into %d tables", len(headers), len(groups))
        pdf.set_y(cfg.content_top_mm)
        for index, (start, stop) in enumerate(groups):
            if index:
                pdf.set_y(pdf.get_y() + cfg.table_gap_mm)
            self._table(
                pdf,
                headers[start:stop],
                [row[start:stop] for row in rows],
                cfg.records_font_size,
            )

    def _table(
        self,
        pdf: FPDF,
        headers: list[str],
        rows: list[list[str]],
        font_size: int,
        col_widths: Optional[Sequence[float]] = None,
        bold_first_column: bool = False,
    ) -> None:
        cfg = self._config
        pdf.set_font(cfg.font_family, "", font_size)
        pdf.set_auto_page_break(True, margin=pdf.h - self._bottom(pdf))
        bold = FontFace(emphasis="BOLD")
        with pdf.table(
            col_widths=tuple(col_widths) if col_widths else None,
            headings_style=FontFace(emphasis="BOLD", color=cfg.header_text, fill_color=cfg.header_fill),
            cell_fill_color=cfg.stripe_fill,
            cell_fill_mode=TableCellFillMode.ROWS,
            line_height=font_size * PT_TO_MM * cfg.cell_line_height_factor,
            text_align="LEFT",
        ) as table:
            heading = table.row()
            for header in headers:
                heading.cell(sanitize(header))
            for data_row in rows:
                row = table.row()
                for index, cell in enumerate(data_row):
                    row.cell(sanitize(cell), style=bold if bold_first_column and index == 0 else None)
        pdf.set_auto_page_break(False)

    def _listing(self, pdf: FPDF, value: SequenceValue) -> None:
        cfg = self._config
        x = pdf.l_margin + cfg.list_indent_mm
        width = pdf.w - pdf.r_margin - x
        line_height = cfg.list_line_height_mm
        top = max(pdf.t_margin, line_height)
        bottom = self._bottom(pdf)

        y = cfg.content_top_mm
        pdf.set_font(cfg.font_family, "", cfg.list_heading_font_size)
        pdf.text(pdf.l_margin, y, sanitize(cfg.list_heading))
        y += 10

        pdf.set_font(cfg.font_family, "", cfg.list_font_size)
        for index, item in enumerate(value.items):
            for line in wrap(pdf, sanitize(f"[{index}]: {display_text(item)}"), width):
                if y + line_height > bottom:
                    pdf.add_page()
                    y = top
                pdf.text(x, y, line)
                y += line_height

    def stamp_footers(self, rendered: RenderedDocument) -> FinalDocument:
        """Stamp a centred ``Page i of N`` on every physical page."""
        cfg = self._config
        pdf = rendered.pdf
        total = pdf.pages_count
        y = pdf.h - cfg.footer_offset_mm
        for number in range(1, total + 1):
            pdf.page = number
            use_font(pdf, cfg.font_family, "", cfg.footer_font_size)
            pdf.set_text_color(cfg.footer_gray)
            draw_centered(pdf, f"Page {number} of {total}", pdf.w / 2, y)
        return finish(rendered)
