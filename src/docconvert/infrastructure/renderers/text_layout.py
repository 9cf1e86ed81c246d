"""Text helpers shared by the PDF layouts.

Source paragraphs come from documents that were exported by other tools,
and those frequently carry line breaks as the two-character sequence
``\\n`` instead of a real newline. Both forms count as a line break here.
"""

from __future__ import annotations

import re

from fpdf import FPDF
from fpdf.enums import MethodReturnValue

_LINE_BREAK = re.compile(r"\\n|\r\n|\n|\r")
_BLANK_LINE = re.compile(r"(?:\\n|\r?\n)[ \t]*(?:\\n|\r?\n)")
_NUMERIC_LINE = re.compile(r"[\d\s]+", re.ASCII)

# Smart punctuation the core PDF fonts cannot encode
_REPLACEMENTS = {
    "\u2013": "-",
    "\u2014": "--",
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2026": "...",
    "\u00a0": " ",
    "\t": "    ",
}


def split_lines(text: str) -> list[str]:
    return _LINE_BREAK.split(text)


def split_paragraphs(text: str) -> list[str]:
    """Split *text* on blank lines, dropping whitespace-only paragraphs."""
    return [part for part in _BLANK_LINE.split(text) if part.strip()]


def grid_lines(paragraph: str) -> list[str]:
    """Trimmed non-empty lines of *paragraph*."""
    return [line.strip() for line in split_lines(paragraph) if line.strip()]


def is_numeric_grid(paragraph: str, threshold: float = 0.8, min_lines: int = 2) -> bool:
    """True when at least *threshold* of the non-empty lines are digits/whitespace.

    ``numeric / non_empty`` is compared directly so that a ratio of exactly
    4/5 meets a threshold of 0.8.
    """
    lines = grid_lines(paragraph)
    if len(lines) < min_lines:
        return False
    numeric = sum(1 for line in lines if _NUMERIC_LINE.fullmatch(line))
    return numeric / len(lines) >= threshold


def sanitize(text: str) -> str:
    """Replace characters not supported by the standard PDF fonts (Latin-1)."""
    if not text:
        return ""
    for char, repl in _REPLACEMENTS.items():
        text = text.replace(char, repl)
    return text.encode("latin-1", "replace").decode("latin-1")


def wrap(pdf: FPDF, text: str, width: float) -> list[str]:
    """Word-wrap *text* to *width* using the current font, without drawing."""
    lines = pdf.multi_cell(
        width,
        text=text,
        align="L",
        dry_run=True,
        output=MethodReturnValue.LINES,
    )
    return [line for line in lines if line.strip()]
