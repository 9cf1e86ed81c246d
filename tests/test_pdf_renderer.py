"""Tests for the PDF layout renderer (Document Mode and Data Mode).

Rendered files are read back with pdfplumber; body text placement is
checked through the per-page line log the layouts keep.
"""

from __future__ import annotations

import io

import pdfplumber
import pytest

from docconvert.domain.errors import RenderError
from docconvert.domain.models.classification import DocumentMode
from docconvert.domain.models.value import from_python
from docconvert.domain.services.classifier import classify
from docconvert.infrastructure.renderers import DocumentLayout, PdfRenderer, is_numeric_grid
from docconvert.infrastructure.renderers.data_layout import column_groups
from docconvert.infrastructure.renderers.document_layout import footer_label
from docconvert.infrastructure.renderers.text_layout import sanitize, split_lines, split_paragraphs


def _pages(data: bytes) -> list[pdfplumber.page.Page]:
    return pdfplumber.open(io.BytesIO(data)).pages


def _texts(data: bytes) -> list[str]:
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        return [page.extract_text() or "" for page in pdf.pages]


def _words(count: int, prefix: str = "word") -> str:
    return " ".join(f"{prefix}{i}" for i in range(count))


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


class TestNumericGridDetector:
    def test_all_numeric(self):
        assert is_numeric_grid("123 456\n789 012")

    def test_escaped_newlines(self):
        assert is_numeric_grid("123 456\\n789 012")

    def test_single_line_is_prose(self):
        assert not is_numeric_grid("123 456")

    def test_four_of_five(self):
        assert is_numeric_grid("1 2\n3 4\n5 6\n7 8\nabc")

    def test_exactly_eighty_percent(self):
        assert is_numeric_grid("\n".join(["12 34"] * 80 + ["row"] * 20))

    def test_seventy_nine_percent(self):
        assert not is_numeric_grid("\n".join(["12 34"] * 79 + ["row"] * 21))

    def test_blank_lines_do_not_count(self):
        assert is_numeric_grid("1\n\n\n2\n  \n")

    def test_non_ascii_digits_are_not_numeric(self):
        assert not is_numeric_grid("١٢\n٣٤")


class TestTextHelpers:
    def test_split_lines_both_forms(self):
        assert split_lines("a\\nb\nc\r\nd") == ["a", "b", "c", "d"]

    def test_split_paragraphs(self):
        assert split_paragraphs("a\\n\\nb\n\nc\n \nd\n\n\n") == ["a", "b", "c", "d"]

    def test_sanitize(self):
        assert sanitize("“x” – y…") == '"x" - y...'
        assert sanitize("café") == "café"
        assert sanitize("日本") == "??"


# ---------------------------------------------------------------------------
# Document Mode
# ---------------------------------------------------------------------------


class TestDocumentLayout:
    def test_numeric_paragraph_is_boxed(self, context):
        value = from_python({"pages": [{"pageNumber": 1, "paragraphs": ["123 456\n789 012"]}]})
        final = PdfRenderer().render(value, context)
        page = _pages(final.data)[0]
        assert len(page.rects) >= 1
        assert final.pages[0] == ("123 456", "789 012")

    def test_prose_paragraph_is_not_boxed(self, context):
        value = from_python({"pages": [{"paragraphs": ["Hello world"]}]})
        final = PdfRenderer().render(value, context)
        assert _pages(final.data)[0].rects == []
        assert final.pages == (("Hello world",),)

    def test_two_phase_protocol(self, context):
        document = classify(from_python({"pages": [{"paragraphs": ["a"]}, {"paragraphs": ["b"]}]}))
        assert isinstance(document, DocumentMode)
        layout = DocumentLayout()
        rendered = layout.render(document, context)
        assert rendered.page_count == 2
        final = layout.stamp_footers(rendered)
        assert final.page_count == 2
        assert final.data.startswith(b"%PDF")

    def test_each_source_page_starts_a_physical_page(self, context):
        value = from_python({"pages": [{"paragraphs": ["first"]}, {"paragraphs": ["second"]}]})
        final = PdfRenderer().render(value, context)
        assert final.pages == (("first",), ("second",))

    def test_pagination_conserves_text(self, context):
        paragraphs = [_words(400, f"p{n}w") for n in range(4)]
        value = from_python({"pages": [{"pageNumber": 1, "paragraphs": paragraphs}]})
        final = PdfRenderer().render(value, context)

        assert final.page_count > 1
        assert len(final.pages) == final.page_count
        assert all(final.pages)
        emitted = " ".join(line for page in final.pages for line in page).split()
        assert emitted == " ".join(paragraphs).split()

    def test_footer_on_every_page(self, context):
        value = from_python(
            {
                "pages": [{"paragraphs": [_words(1500)]}],
                "metadata": {"type": "Report", "totalPages": 7, "totalCharacters": 1234},
            }
        )
        final = PdfRenderer().render(value, context)
        texts = _texts(final.data)
        assert len(texts) == final.page_count > 1
        for number, text in enumerate(texts, start=1):
            assert "Report | 7 pages | 1234 chars" in text
            assert f"{number} / {final.page_count}" in text

    def test_default_footer_label(self):
        assert footer_label(None, 3) == "Document | 3 pages | 0 chars"

    def test_page_marker_and_word_count(self, context):
        value = from_python({"pages": [{"pageNumber": 5, "paragraphs": ["x"], "wordCount": 12}]})
        text = _texts(PdfRenderer().render(value, context).data)[0]
        assert "Page 5" in text
        assert "Word count: 12" in text

    def test_source_header(self, make_context):
        value = from_python(
            {"pages": [{"paragraphs": ["x"]}], "metadata": {"convertedAt": "2024-01-15T08:00:00Z"}}
        )
        text = _texts(PdfRenderer().render(value, make_context(source_name="report.json")).data)[0]
        assert "Source: report.json | Converted: 2024-01-15" in text

    def test_source_header_can_be_disabled(self, make_context):
        value = from_python({"pages": [{"paragraphs": ["x"]}], "metadata": {}})
        text = _texts(PdfRenderer().render(value, make_context(include_metadata=False)).data)[0]
        assert "Source:" not in text

    def test_full_text_fallback(self, context):
        value = from_python({"fullText": "First para.\n\nSecond para.\\n\\nThird.", "metadata": {}})
        final = PdfRenderer().render(value, context)
        assert final.pages == (("First para.", "Second para.", "Third."),)

    def test_degenerate_margin(self, make_context):
        value = from_python({"pages": [{"paragraphs": ["x"]}]})
        with pytest.raises(RenderError):
            PdfRenderer().render(value, make_context(margin=100))

    def test_page_size(self, make_context):
        value = from_python({"pages": [{"paragraphs": ["x"]}]})
        final = PdfRenderer().render(value, make_context(page_size="Letter"))
        assert _pages(final.data)[0].width == pytest.approx(612, abs=1)

    def test_compression(self, make_context):
        value = from_python({"pages": [{"paragraphs": ["x"]}]})
        compressed = PdfRenderer().render(value, make_context(compression=True)).data
        plain = PdfRenderer().render(value, make_context(compression=False)).data
        assert b"/FlateDecode" in compressed
        assert b"/FlateDecode" not in plain


# ---------------------------------------------------------------------------
# Data Mode
# ---------------------------------------------------------------------------


class TestDataTableLayout:
    def test_records_table(self, context):
        final = PdfRenderer().render(from_python([{"a": 1, "b": {"c": 2}}]), context)
        text = _texts(final.data)[0]
        assert "JSON Data" in text
        assert "Source: data.json" in text
        assert "b.c" in text
        assert "Page 1 of 1" in text

    def test_long_table_paginates(self, context):
        records = [{"id": i, "name": f"name{i}"} for i in range(150)]
        final = PdfRenderer().render(from_python(records), context)
        texts = _texts(final.data)
        assert final.page_count > 1
        for number, text in enumerate(texts, start=1):
            assert f"Page {number} of {final.page_count}" in text
        assert "name149" in texts[-1]

    def test_object_table(self, context):
        final = PdfRenderer().render(from_python({"name": "Ada", "meta": {"age": 36}}), context)
        text = _texts(final.data)[0]
        assert "Property" in text
        assert "meta.age" in text
        assert "36" in text

    def test_scalar_list(self, context):
        final = PdfRenderer().render(from_python([1, None, "x"]), context)
        text = _texts(final.data)[0]
        assert "Array Data:" in text
        assert "[0]: 1" in text
        assert "[1]: null" in text

    def test_long_scalar_list_paginates(self, context):
        final = PdfRenderer().render(from_python(list(range(120))), context)
        texts = _texts(final.data)
        assert final.page_count > 1
        assert "[119]: 119" in texts[-1]

    def test_bare_scalar(self, context):
        text = _texts(PdfRenderer().render(from_python(42), context).data)[0]
        assert "Value: 42" in text

    def test_records_without_fields(self, context):
        text = _texts(PdfRenderer().render(from_python([{}, {}]), context).data)[0]
        assert "2 records without fields" in text

    def test_column_groups(self):
        assert column_groups(3, 180, 18) == [(0, 3)]
        groups = column_groups(60, 180, 18)
        assert len(groups) == 6
        assert groups[0] == (0, 10)
        assert groups[-1] == (50, 60)
        assert column_groups(2, 20, 30) == [(0, 1), (1, 2)]

    def test_wide_records_are_split_into_tables(self, context):
        records = [{f"c{col:02d}": f"r{row}v{col}" for col in range(60)} for row in range(3)]
        final = PdfRenderer().render(from_python(records), context)
        text = "\n".join(_texts(final.data))
        assert "c00" in text
        assert "c59" in text
        assert "r2v59" in text
