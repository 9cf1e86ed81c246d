"""PDF layout renderer (Document Mode and Data Mode)."""

from docconvert.infrastructure.renderers.canvas import FinalDocument, RenderedDocument
from docconvert.infrastructure.renderers.data_layout import DataTableLayout
from docconvert.infrastructure.renderers.document_layout import DocumentLayout
from docconvert.infrastructure.renderers.pdf_renderer import PdfRenderer
from docconvert.infrastructure.renderers.text_layout import is_numeric_grid

__all__ = [
    "DataTableLayout",
    "DocumentLayout",
    "FinalDocument",
    "PdfRenderer",
    "RenderedDocument",
    "is_numeric_grid",
]
