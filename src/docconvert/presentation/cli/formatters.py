"""Rich formatting utilities for the CLI.

All Rich rendering (tables, panels, syntax, progress) lives here; this
module knows nothing about how conversions are carried out.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Mapping, Optional

from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from docconvert.application.use_cases.batch_convert import BatchReport
    from docconvert.domain.models.classification import StructuralClassification
    from docconvert.domain.models.conversion import ConversionResult
    from docconvert.domain.models.formats import DocumentFormat

console = Console()


# ---------------------------------------------------------------------------
# Success / error panels
# ---------------------------------------------------------------------------


def success_panel(message: str, title: str = "docconvert") -> None:
    """Print a green success panel."""
    console.print(Panel(message, title=title, border_style="green"))


def error_message(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]❌ {message}[/]")


def json_panel(raw_json: str, title: str = "⚙️  Engine configuration") -> None:
    """Render JSON inside a syntax-highlighted panel."""
    console.print(
        Panel(
            Syntax(raw_json, "json", theme="monokai", line_numbers=True),
            title=title,
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# Conversion results
# ---------------------------------------------------------------------------


def _size(num_bytes: int) -> str:
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def conversion_panel(source: Path, output: Path, result: ConversionResult) -> None:
    meta = result.metadata
    success_panel(
        f"✅ Converted successfully:\n"
        f"  📥 Source: [cyan]{source}[/] ({_size(meta.original_size)})\n"
        f"  📤 Output: [bold green]{output}[/] ({_size(meta.converted_size)})\n"
        f"  🏷️  Type: {result.mime_type}\n"
        f"  ⏱️  Rendered in {meta.processing_time_ms:.1f} ms",
        title="🔄 docconvert",
    )


def progress_bar() -> Progress:
    return Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
    )


def batch_table(
    report: BatchReport,
    outputs: Mapping[str, Path],
    unreadable: Optional[Mapping[str, str]] = None,
) -> None:
    """Per-item outcome table plus a success/failure summary.

    *unreadable* maps sources that could not be read to the reason; they
    count as failures.
    """
    unreadable = unreadable or {}
    table = Table(title="📦 Batch conversion", show_header=True, border_style="blue")
    table.add_column("", width=3)
    table.add_column("Source", style="cyan")
    table.add_column("Result")

    for outcome in report:
        if outcome.ok:
            table.add_row("✅", outcome.item.name, f"[green]{outputs.get(outcome.item.name, '')}[/]")
        else:
            error = outcome.error
            detail = f"{error.kind.value}: {error.message}" if error else "failed"
            table.add_row("❌", outcome.item.name, f"[red]{detail}[/]")
    for name, reason in unreadable.items():
        table.add_row("❌", name, f"[red]unreadable: {reason}[/]")

    console.print(table)
    failed = report.failure_count + len(unreadable)
    color = "green" if failed == 0 else "red"
    console.print(
        Panel(
            f"  ✅ Converted: {report.success_count}  |  ❌ Failed: {failed}",
            title="📊 Summary",
            border_style=color,
        )
    )


# ---------------------------------------------------------------------------
# Formats / inspection
# ---------------------------------------------------------------------------


def formats_table(
    matrix: Mapping[DocumentFormat, frozenset],
    descriptions: Mapping[DocumentFormat, str],
) -> None:
    table = Table(title="📐 Supported conversions", show_header=True, border_style="blue")
    table.add_column("Source", style="cyan", width=8)
    table.add_column("Description")
    table.add_column("Targets", style="green")

    for source, targets in matrix.items():
        ordered = sorted(target.value for target in targets)
        table.add_row(source.value, descriptions.get(source, ""), ", ".join(ordered))
    console.print(table)


def classification_panel(name: str, classification: StructuralClassification, details: Mapping[str, str]) -> None:
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Mode", classification.kind.value)
    for key, value in details.items():
        table.add_row(key, value)
    console.print(Panel(table, title=f"🔍 {name}", border_style="blue"))
