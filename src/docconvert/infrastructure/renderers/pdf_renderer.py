"""PDF serializer: classifies the value, then runs the matching layout."""

from __future__ import annotations

import logging
from typing import Optional

from fpdf.errors import FPDFException

from docconvert.config.models import PdfConfig
from docconvert.domain.errors import RenderError
from docconvert.domain.models.classification import DocumentMode
from docconvert.domain.models.formats import DocumentFormat
from docconvert.domain.models.value import Value
from docconvert.domain.ports.serializer import RenderContext, SerializerPort
from docconvert.domain.services.classifier import classify
from docconvert.infrastructure.renderers.canvas import FinalDocument
from docconvert.infrastructure.renderers.data_layout import DataTableLayout
from docconvert.infrastructure.renderers.document_layout import DocumentLayout

logger = logging.getLogger(__name__)


class PdfRenderer(SerializerPort):
    target_format = DocumentFormat.PDF

    def __init__(self, config: Optional[PdfConfig] = None) -> None:
        config = config or PdfConfig()
        self._document = DocumentLayout(config.document, config.grid)
        self._data = DataTableLayout(config.table)

    def render(self, value: Value, context: RenderContext) -> FinalDocument:
        """Lay out and stamp *value*.

        Raises
        ------
        RenderError
            For degenerate page geometry or any failure inside fpdf2.
        """
        classification = classify(value)
        logger.debug("PDF for %s in %s mode", context.source_name, classification.kind.value)
        try:
            if isinstance(classification, DocumentMode):
                rendered = self._document.render(classification, context)
                return self._document.stamp_footers(rendered)
            rendered = self._data.render(classification.value, context)
            return self._data.stamp_footers(rendered)
        except RenderError:
            raise
        except (FPDFException, ValueError) as exc:
            raise RenderError(f"PDF rendering failed: {exc}") from exc

    def serialize(self, value: Value, context: RenderContext) -> bytes:
        return self.render(value, context).data
