"""fpdf2 plumbing shared by the Document Mode and Data Mode layouts.

Both layouts run in two phases. ``render`` lays out every page and returns
a :class:`RenderedDocument`; ``stamp_footers`` then revisits each physical
page, now that the total page count is known, and returns the
:class:`FinalDocument` bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from fpdf import FPDF

from docconvert.domain.errors import RenderError
from docconvert.domain.models.classification import DocumentMetadata
from docconvert.domain.models.conversion import ConversionOptions
from docconvert.domain.ports.serializer import RenderContext
from docconvert.infrastructure.renderers.text_layout import sanitize

# Smallest usable text column, in millimetres
MIN_TEXT_WIDTH_MM = 20.0

PT_TO_MM = 25.4 / 72


@dataclass
class RenderedDocument:
    """A laid-out document whose pages have not been stamped yet.

    ``pages`` holds, per physical page, the prose and grid lines drawn on it
    in order (headers, footers and tables excluded). ``metadata`` feeds the
    Document Mode footer.
    """

    pdf: FPDF
    pages: list[list[str]] = field(default_factory=list)
    metadata: Optional[DocumentMetadata] = None

    @property
    def page_count(self) -> int:
        return self.pdf.pages_count


@dataclass(frozen=True)
class FinalDocument:
    data: bytes
    page_count: int
    pages: tuple[tuple[str, ...], ...] = ()


def new_pdf(context: RenderContext, title: str) -> FPDF:
    """Create a portrait document sized and configured from the options."""
    options: ConversionOptions = context.options
    pdf = FPDF(orientation="P", unit="mm", format=options.page_size.value)
    usable_width = pdf.w - 2 * options.margin
    if usable_width < MIN_TEXT_WIDTH_MM:
        raise RenderError(
            f"Margin of {options.margin} mm leaves {usable_width:.1f} mm of usable width "
            f"on a {options.page_size.value} page"
        )
    pdf.set_margins(options.margin, options.margin, options.margin)
    pdf.set_compression(options.compression)
    if options.include_metadata:
        pdf.set_title(sanitize(f"{title} - {context.source_name}"))
        pdf.set_creator("docconvert")
        pdf.set_creation_date(context.generated_at)
    return pdf


def use_font(pdf: FPDF, family: str, style: str, size: float) -> None:
    """Select a font, re-emitting it even if fpdf2 thinks it is current.

    fpdf2 skips ``set_font`` calls that match its cached state, which is
    document-wide; a revisited page needs the operator written again.
    """
    pdf.set_font(family, style, size + 1)
    pdf.set_font(family, style, size)


def draw_centered(pdf: FPDF, text: str, center_x: float, y: float) -> None:
    text = sanitize(text)
    pdf.text(center_x - pdf.get_string_width(text) / 2, y, text)


def draw_right(pdf: FPDF, text: str, right_x: float, y: float) -> None:
    text = sanitize(text)
    pdf.text(right_x - pdf.get_string_width(text), y, text)


def finish(rendered: RenderedDocument) -> FinalDocument:
    pdf = rendered.pdf
    pdf.page = pdf.pages_count
    return FinalDocument(
        data=bytes(pdf.output()),
        page_count=pdf.pages_count,
        pages=tuple(tuple(lines) for lines in rendered.pages),
    )
