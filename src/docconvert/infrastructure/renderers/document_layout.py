"""Document Mode layout: paged prose with numeric-grid boxes.

Each source page starts a new physical page. Prose is word-wrapped to the
usable width and a page break is inserted *before* any line that would
cross the bottom limit, so a paragraph can continue on the next page
without losing or repeating text. Paragraphs that are mostly digits are
drawn as a centred Courier block inside a filled, bordered box.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from fpdf import FPDF

from docconvert.config.models import DocumentLayoutConfig, NumericGridConfig
from docconvert.domain.errors import RenderError
from docconvert.domain.models.classification import DocumentMetadata, DocumentMode, Page
from docconvert.domain.ports.serializer import RenderContext
from docconvert.infrastructure.renderers.canvas import (
    PT_TO_MM,
    FinalDocument,
    RenderedDocument,
    draw_centered,
    draw_right,
    finish,
    new_pdf,
    use_font,
)
from docconvert.infrastructure.renderers.text_layout import (
    grid_lines,
    is_numeric_grid,
    sanitize,
    split_lines,
    split_paragraphs,
    wrap,
)

logger = logging.getLogger(__name__)


@dataclass
class _Flow:
    """Mutable cursor state for one render call."""

    pdf: FPDF
    rendered: RenderedDocument
    margin: float
    width: float
    top: float
    bottom: float
    font_size: float
    line_height: float
    y: float = 0.0

    def log(self, line: str) -> None:
        self.rendered.pages[-1].append(line)


class DocumentLayout:
    """Two-phase PDF layout for :class:`DocumentMode` values."""

    def __init__(
        self,
        layout: Optional[DocumentLayoutConfig] = None,
        grid: Optional[NumericGridConfig] = None,
    ) -> None:
        self._layout = layout or DocumentLayoutConfig()
        self._grid = grid or NumericGridConfig()

    # ------------------------------------------------------------------
    # Phase 1: layout
    # ------------------------------------------------------------------

    def render(self, document: DocumentMode, context: RenderContext) -> RenderedDocument:
        cfg = self._layout
        options = context.options
        pdf = new_pdf(context, "Document")
        pdf.set_auto_page_break(False)

        line_height = options.font_size * PT_TO_MM * cfg.line_height_factor
        flow = _Flow(
            pdf=pdf,
            rendered=RenderedDocument(pdf=pdf, metadata=document.metadata),
            margin=options.margin,
            width=pdf.w - 2 * options.margin,
            top=max(float(options.margin), line_height),
            bottom=pdf.h - options.margin - cfg.footer_reserve_mm,
            font_size=options.font_size,
            line_height=line_height,
        )
        if flow.bottom - max(flow.top, cfg.content_top_mm) < line_height:
            raise RenderError(
                f"Page geometry leaves no room for a {options.font_size} pt line "
                f"(margin {options.margin} mm on {options.page_size.value})"
            )

        self._new_page(flow)
        if document.metadata is not None and options.include_metadata:
            self._draw_source_header(flow, document.metadata, context)

        if document.pages:
            for index, page in enumerate(document.pages):
                if index:
                    self._new_page(flow)
                self._draw_page(flow, page)
        elif document.full_text is not None:
            flow.y = cfg.content_top_mm
            for paragraph in split_paragraphs(document.full_text):
                self._draw_prose(flow, split_lines(paragraph), line_gap=0.0)

        logger.debug(
            "Document layout: %d source pages on %d physical pages",
            len(document.pages),
            pdf.pages_count,
        )
        return flow.rendered

    def _new_page(self, flow: _Flow) -> None:
        flow.pdf.add_page()
        flow.rendered.pages.append([])
        flow.y = flow.top

    def _body_font(self, flow: _Flow) -> None:
        flow.pdf.set_font(self._layout.font_family, "", flow.font_size)
        flow.pdf.set_text_color(0)

    def _draw_source_header(
        self, flow: _Flow, metadata: DocumentMetadata, context: RenderContext
    ) -> None:
        cfg = self._layout
        pdf = flow.pdf
        pdf.set_font(cfg.font_family, "I", cfg.header_font_size)
        pdf.set_text_color(cfg.header_gray)
        converted = _converted_date(metadata, context.generated_at)
        pdf.text(flow.margin, cfg.header_y_mm, sanitize(f"Source: {context.source_name} | Converted: {converted}"))

    def _draw_page(self, flow: _Flow, page: Page) -> None:
        cfg = self._layout
        grid = self._grid
        pdf = flow.pdf

        flow.y = cfg.content_top_mm
        pdf.set_font(cfg.font_family, "", cfg.page_marker_font_size)
        pdf.set_text_color(cfg.muted_gray)
        draw_right(pdf, f"Page {page.page_number}", pdf.w - flow.margin, cfg.header_y_mm)

        for paragraph in page.paragraphs:
            if is_numeric_grid(paragraph, grid.threshold, grid.min_lines):
                self._draw_grid(flow, grid_lines(paragraph))
            else:
                self._draw_prose(flow, split_lines(paragraph), line_gap=cfg.line_gap_mm)

        if page.word_count:
            pdf.set_font(cfg.font_family, "", cfg.footer_font_size)
            pdf.set_text_color(cfg.word_count_gray)
            pdf.text(flow.margin, pdf.h - cfg.word_count_offset_mm, f"Word count: {page.word_count}")

    def _draw_prose(self, flow: _Flow, lines: list[str], line_gap: float) -> None:
        pdf = flow.pdf
        self._body_font(flow)
        for index, line in enumerate(lines):
            if line.strip():
                for wrapped in wrap(pdf, sanitize(line), flow.width):
                    if flow.y + flow.line_height > flow.bottom:
                        self._new_page(flow)
                    pdf.text(flow.margin, flow.y, wrapped)
                    flow.log(wrapped)
                    flow.y += flow.line_height
            if index < len(lines) - 1:
                flow.y += line_gap
        flow.y += self._layout.paragraph_spacing_mm

    def _draw_grid(self, flow: _Flow, lines: list[str]) -> None:
        grid = self._grid
        pdf = flow.pdf
        capacity = int((flow.bottom - flow.top - 2 * grid.padding_mm) // grid.line_height_mm)
        if capacity < 1:
            raise RenderError("Page geometry leaves no room for a numeric grid box")

        for start in range(0, len(lines), capacity):
            chunk = lines[start : start + capacity]
            height = len(chunk) * grid.line_height_mm + 2 * grid.padding_mm
            if flow.y + height > flow.bottom:
                self._new_page(flow)

            pdf.set_fill_color(*grid.fill_color)
            pdf.set_draw_color(*grid.border_color)
            pdf.set_line_width(grid.border_width_mm)
            pdf.rect(flow.margin, flow.y, flow.width, height, style="DF")

            pdf.set_font(grid.font_family, "", grid.font_size)
            pdf.set_text_color(grid.text_gray)
            center = flow.margin + flow.width / 2
            for index, line in enumerate(chunk):
                baseline = flow.y + grid.padding_mm + index * grid.line_height_mm + grid.baseline_offset_mm
                draw_centered(pdf, line, center, baseline)
                flow.log(line)
            flow.y += height + grid.spacing_after_mm

        self._body_font(flow)

    # ------------------------------------------------------------------
    # Phase 2: footers
    # ------------------------------------------------------------------

    def stamp_footers(self, rendered: RenderedDocument) -> FinalDocument:
        """Stamp the document footer and ``i / N`` on every physical page."""
        cfg = self._layout
        pdf = rendered.pdf
        total = pdf.pages_count
        label = footer_label(rendered.metadata, total)
        y = pdf.h - cfg.footer_offset_mm

        for number in range(1, total + 1):
            pdf.page = number
            use_font(pdf, cfg.font_family, "", cfg.footer_font_size)
            pdf.set_text_color(cfg.muted_gray)
            pdf.text(pdf.l_margin, y, sanitize(label))
            draw_centered(pdf, f"{number} / {total}", pdf.w / 2, y)

        return finish(rendered)


def footer_label(metadata: Optional[DocumentMetadata], physical_pages: int) -> str:
    meta = metadata or DocumentMetadata()
    return (
        f"{meta.type or 'Document'} | {meta.total_pages or physical_pages} pages | "
        f"{meta.total_characters or 0} chars"
    )


def _converted_date(metadata: DocumentMetadata, fallback: datetime) -> str:
    if metadata.converted_at:
        try:
            return datetime.fromisoformat(metadata.converted_at.replace("Z", "+00:00")).date().isoformat()
        except ValueError:
            return metadata.converted_at
    return fallback.date().isoformat()
