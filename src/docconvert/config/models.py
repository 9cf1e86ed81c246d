"""Pydantic models for the docconvert engine configuration.

These models validate and type the JSON configuration file that holds the
layout and presentation constants of every renderer. Per-call choices
(font size, page size, margin, ...) live in ``ConversionOptions`` instead.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

RGB = tuple[int, int, int]


# ---------------------------------------------------------------------------
# PDF: Document Mode
# ---------------------------------------------------------------------------


class DocumentLayoutConfig(BaseModel):
    """Vertical rhythm of paged prose (all distances in millimetres)."""

    font_family: str = "helvetica"
    line_height_factor: float = Field(
        default=1.55,
        gt=0,
        description="Line height as a multiple of the font size (pt converted to mm).",
    )
    line_gap_mm: float = Field(default=2.0, ge=0, description="Gap between source lines.")
    paragraph_spacing_mm: float = Field(default=8.0, ge=0)
    content_top_mm: float = Field(default=20.0, ge=0, description="Cursor start on a source page.")
    header_y_mm: float = Field(default=10.0, ge=0, description="Baseline of page headers.")
    footer_reserve_mm: float = Field(
        default=10.0, ge=0, description="Space kept free above the bottom margin for footers."
    )
    footer_offset_mm: float = Field(
        default=5.0, ge=0, description="Distance of the stamped footer from the page bottom."
    )
    word_count_offset_mm: float = Field(default=10.0, ge=0)
    header_font_size: int = 10
    page_marker_font_size: int = 9
    footer_font_size: int = 8
    muted_gray: int = Field(default=150, ge=0, le=255)
    header_gray: int = Field(default=100, ge=0, le=255)
    word_count_gray: int = Field(default=120, ge=0, le=255)


class NumericGridConfig(BaseModel):
    """Boxed rendering of digit-only paragraphs."""

    threshold: float = Field(
        default=0.8,
        gt=0,
        le=1,
        description="Share of non-empty lines that must be digits/whitespace.",
    )
    min_lines: int = Field(default=2, ge=1)
    padding_mm: float = Field(default=10.0, ge=0)
    line_height_mm: float = Field(default=8.0, gt=0)
    baseline_offset_mm: float = Field(default=5.0, ge=0)
    spacing_after_mm: float = Field(default=12.0, ge=0)
    font_family: str = "courier"
    font_size: int = 10
    text_gray: int = Field(default=50, ge=0, le=255)
    fill_color: RGB = (245, 245, 250)
    border_color: RGB = (100, 100, 200)
    border_width_mm: float = Field(default=0.5, gt=0)


# ---------------------------------------------------------------------------
# PDF: Data Mode
# ---------------------------------------------------------------------------


class DataTableConfig(BaseModel):
    """Tables and listings for record-shaped data."""

    title: str = "JSON Data"
    font_family: str = "helvetica"
    title_font_size: int = 16
    source_font_size: int = 10
    title_y_mm: float = 15.0
    source_y_mm: float = 22.0
    content_top_mm: float = 30.0
    records_font_size: int = 8
    object_font_size: int = 9
    list_heading: str = "Array Data:"
    list_heading_font_size: int = 12
    list_font_size: int = 10
    list_line_height_mm: float = 7.0
    list_indent_mm: float = 6.0
    object_column_ratio: tuple[float, float] = (1.0, 2.0)
    header_fill: RGB = (66, 139, 202)
    header_text: RGB = (255, 255, 255)
    stripe_fill: RGB = (245, 245, 245)
    cell_line_height_factor: float = Field(default=1.6, gt=0)
    min_column_width_mm: float = Field(
        default=18.0,
        gt=0,
        description="Narrowest record column; wider record sets are split into several tables.",
    )
    table_gap_mm: float = Field(default=6.0, ge=0)
    footer_offset_mm: float = 10.0
    footer_font_size: int = 8
    footer_gray: int = Field(default=150, ge=0, le=255)


class PdfConfig(BaseModel):
    document: DocumentLayoutConfig = Field(default_factory=DocumentLayoutConfig)
    grid: NumericGridConfig = Field(default_factory=NumericGridConfig)
    table: DataTableConfig = Field(default_factory=DataTableConfig)


# ---------------------------------------------------------------------------
# Text formats
# ---------------------------------------------------------------------------


class HtmlConfig(BaseModel):
    title_prefix: str = "JSON Data"
    heading: str = "JSON Data Visualization"
    footer_text: str = "Generated by DocConverter Pro | JSON to HTML Conversion"
    escape_values: bool = Field(
        default=False,
        description="Escape record values; off by default to keep the historical output.",
    )


class TextConfig(BaseModel):
    title: str = "JSON Data"
    rule_width: int = Field(default=60, ge=1)
    indent: int = Field(default=2, ge=0)


class XmlConfig(BaseModel):
    root_element: str = "root"
    data_element: str = "data"
    item_element: str = "item"


class CsvConfig(BaseModel):
    scalar_header: str = "Value"


# ---------------------------------------------------------------------------
# Root Config
# ---------------------------------------------------------------------------


class EngineConfig(BaseModel):
    """Root configuration model for the conversion engine."""

    pdf: PdfConfig = Field(default_factory=PdfConfig)
    html: HtmlConfig = Field(default_factory=HtmlConfig)
    text: TextConfig = Field(default_factory=TextConfig)
    xml: XmlConfig = Field(default_factory=XmlConfig)
    csv: CsvConfig = Field(default_factory=CsvConfig)
