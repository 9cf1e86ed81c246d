"""Thin CLI wrapper: Typer commands that delegate to Use Cases.

All engine functionality is accessed through the Container (bootstrap.py).
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, Optional

import typer

from docconvert.presentation.cli.formatters import (
    batch_table,
    classification_panel,
    console,
    conversion_panel,
    error_message,
    formats_table,
    json_panel,
    progress_bar,
    success_panel,
)

if TYPE_CHECKING:
    from docconvert.bootstrap import Container

app = typer.Typer(
    name="docconvert",
    help="🔄 Convert JSON, CSV and XML into PDF, CSV, HTML, XML, text or JSON",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

config_app = typer.Typer(
    name="config",
    help="⚙️  Manage the engine configuration",
    rich_markup_mode="rich",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

settings_app = typer.Typer(
    name="settings",
    help="🧩 Manage persisted default conversion options",
    rich_markup_mode="rich",
    no_args_is_help=True,
)
app.add_typer(settings_app, name="settings")

logger = logging.getLogger(__name__)

state: dict[str, Any] = {"settings_dir": None}

ConfigOption = Annotated[
    Optional[str],
    typer.Option("--config", "-c", help="Path to an engine configuration JSON file"),
]
FromOption = Annotated[
    Optional[str],
    typer.Option("--from", "-f", help="Source format (defaults to the file extension)"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Enable debug logging")] = False,
    settings_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--settings-dir",
            envvar="DOCCONVERT_SETTINGS_DIR",
            help="Directory holding user_settings.json",
            hidden=True,
        ),
    ] = None,
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    state["settings_dir"] = settings_dir


def _container(config: Optional[str] = None) -> Container:
    from docconvert.bootstrap import Container
    from docconvert.domain.errors import ConfigurationError

    try:
        return Container(config_path=config, settings_dir=state["settings_dir"])
    except ConfigurationError as exc:
        error_message(str(exc))
        raise typer.Exit(code=1)


def _read_source(path: Path) -> bytes:
    if not path.is_file():
        error_message(f"File not found: {path}")
        raise typer.Exit(code=1)
    return path.read_bytes()


def _output_name(source: Path, extension: str, directory: Optional[Path]) -> Path:
    return (directory or source.parent) / f"{source.stem}.{extension}"


# ---------------------------------------------------------------------------
# docconvert convert
# ---------------------------------------------------------------------------


@app.command()
def convert(
    source: Annotated[Path, typer.Argument(help="Source file (.json, .csv, .xml)")],
    to: Annotated[
        Optional[str], typer.Option("--to", "-t", help="Target format (pdf, csv, html, xml, txt, json)")
    ] = None,
    from_: FromOption = None,
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output file")] = None,
    font_size: Annotated[Optional[int], typer.Option("--font-size", help="PDF body font size (pt)")] = None,
    page_size: Annotated[
        Optional[str], typer.Option("--page-size", help="PDF paper size (A3, A4, Letter, Legal)")
    ] = None,
    margin: Annotated[Optional[int], typer.Option("--margin", help="PDF margin (mm)")] = None,
    compress: Annotated[
        Optional[bool], typer.Option("--compress/--no-compress", help="Compress PDF streams")
    ] = None,
    metadata: Annotated[
        Optional[bool], typer.Option("--metadata/--no-metadata", help="Emit source/generated banners")
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Convert a single file."""
    from docconvert.domain.errors import ConversionError

    container = _container(config)
    settings = container.user_settings
    target = to or (settings.default_target.value if settings.default_target else None)
    if target is None:
        error_message("No target format: pass --to or set settings default_target")
        raise typer.Exit(code=1)

    overrides = {
        "font_size": font_size,
        "page_size": page_size,
        "margin": margin,
        "compression": compress,
        "include_metadata": metadata,
    }
    options = settings.options.model_dump()
    options.update({key: value for key, value in overrides.items() if value is not None})

    raw = _read_source(source)
    try:
        result = container.convert_content().execute(
            raw, from_ or source.suffix, target, options, source_name=source.name
        )
    except ConversionError as exc:
        error_message(f"{exc.kind.value}: {exc.message}")
        raise typer.Exit(code=1)

    extension = "zip" if result.metadata.is_zip else result.metadata.target_format.value
    out_dir = Path(settings.output_dir) if settings.output_dir else None
    out_path = output or _output_name(source, extension, out_dir)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(result.data)
    conversion_panel(source, out_path, result)


# ---------------------------------------------------------------------------
# docconvert batch
# ---------------------------------------------------------------------------


@app.command()
def batch(
    sources: Annotated[list[Path], typer.Argument(help="Source files")],
    to: Annotated[str, typer.Option("--to", "-t", help="Target format")],
    output_dir: Annotated[
        Optional[Path], typer.Option("--output-dir", "-d", help="Directory for converted files")
    ] = None,
    from_: FromOption = None,
    config: ConfigOption = None,
) -> None:
    """Convert several files one after another; failures do not stop the run."""
    from docconvert.application.use_cases.batch_convert import BatchItem

    container = _container(config)
    settings = container.user_settings
    items: list[BatchItem] = []
    readable: list[Path] = []
    unreadable: dict[str, str] = {}
    for path in sources:
        try:
            content = path.read_bytes()
        except OSError as exc:
            logger.warning("Skipping unreadable batch source %s: %s", path, exc)
            unreadable[path.name] = exc.strerror or str(exc)
            continue
        readable.append(path)
        items.append(BatchItem(name=path.name, content=content, source_format=from_ or path.suffix))

    with progress_bar() as progress:
        task = progress.add_task("Converting", total=len(items))
        report = container.batch_convert().execute(
            items,
            to,
            settings.options,
            on_progress=lambda done, total, outcome: progress.advance(task),
        )

    default_dir = output_dir or (Path(settings.output_dir) if settings.output_dir else None)
    written: dict[str, Path] = {}
    for path, outcome in zip(readable, report):
        if outcome.ok and outcome.result is not None:
            meta = outcome.result.metadata
            extension = "zip" if meta.is_zip else meta.target_format.value
            out_path = _output_name(path, extension, default_dir)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_bytes(outcome.result.data)
            written[outcome.item.name] = out_path

    batch_table(report, written, unreadable)
    if report.failure_count or unreadable:
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# docconvert inspect / formats
# ---------------------------------------------------------------------------


@app.command()
def inspect(
    source: Annotated[Path, typer.Argument(help="Source file to classify")],
    from_: FromOption = None,
) -> None:
    """Show how a source would be classified and laid out."""
    from docconvert.domain.errors import DocConvertError
    from docconvert.domain.models.classification import DocumentMode
    from docconvert.domain.models.formats import coerce_format
    from docconvert.domain.services import classify, collect_headers, data_shape, records_from

    container = _container()
    raw = _read_source(source)
    try:
        fmt = coerce_format(from_ or source.suffix)
        reader = container.get_reader(fmt)
        if reader is None:
            error_message(f"No reader for {fmt.value} sources")
            raise typer.Exit(code=1)
        value = reader.read(raw.decode("utf-8-sig"))
    except (DocConvertError, UnicodeDecodeError) as exc:
        error_message(str(exc))
        raise typer.Exit(code=1)

    classification = classify(value)
    details: dict[str, str] = {}
    if isinstance(classification, DocumentMode):
        details["Pages"] = str(len(classification.pages))
        details["Paragraphs"] = str(sum(len(page.paragraphs) for page in classification.pages))
        if classification.full_text is not None:
            details["Full text"] = f"{len(classification.full_text)} chars"
        if classification.metadata is not None and classification.metadata.type:
            details["Type"] = classification.metadata.type
    else:
        shape = data_shape(value)
        records = records_from(value)
        details["Shape"] = shape.value
        details["Records"] = str(len(records))
        details["Headers"] = ", ".join(collect_headers(records))
    classification_panel(source.name, classification, details)


@app.command()
def formats() -> None:
    """List the supported source → target conversions."""
    from docconvert.domain.models.formats import DESCRIPTIONS, SUPPORT_MATRIX

    formats_table(SUPPORT_MATRIX, DESCRIPTIONS)


# ---------------------------------------------------------------------------
# docconvert config show / init / validate
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(config: ConfigOption = None) -> None:
    """Show the active engine configuration."""
    json_panel(_container(config).config.model_dump_json(indent=2))


@config_app.command("init")
def config_init(
    output: Annotated[str, typer.Option("--output", "-o", help="Destination file")] = "docconvert_config.json",
) -> None:
    """Copy the default configuration to the current directory for editing."""
    from docconvert.config.loader import DEFAULT_CONFIG_PATH

    dest = Path(output)
    if dest.exists():
        console.print(f"[bold yellow]⚠️  File already exists:[/] {dest}")
        if not typer.confirm("Overwrite it?"):
            raise typer.Abort()

    shutil.copy2(DEFAULT_CONFIG_PATH, dest)
    success_panel(
        f"✅ Configuration copied to: [bold green]{dest}[/]\n\n"
        "Edit it and pass it with [bold]--config[/]:\n"
        f'  docconvert convert data.json --to pdf --config "{dest}"',
        title="⚙️  Config Init",
    )


@config_app.command("validate")
def config_validate(
    config_file: Annotated[str, typer.Argument(help="Configuration JSON file to validate")],
) -> None:
    """Validate an engine configuration file."""
    from docconvert.domain.errors import ConfigurationError
    from docconvert.infrastructure.config.json_config_provider import JsonConfigProvider

    path = Path(config_file)
    if not path.exists():
        error_message(f"File not found: {path}")
        raise typer.Exit(code=1)

    try:
        cfg = JsonConfigProvider(path).get_config()
    except ConfigurationError as exc:
        console.print(f"[bold red]❌ Validation error:[/]\n\n{exc}")
        raise typer.Exit(code=1)

    success_panel(
        f"✅ Valid configuration\n\n"
        f"  PDF body font: [cyan]{cfg.pdf.document.font_family}[/]\n"
        f"  Numeric grid threshold: [cyan]{cfg.pdf.grid.threshold:.0%}[/]\n"
        f"  HTML escaping: [cyan]{'on' if cfg.html.escape_values else 'off'}[/]",
        title="✅ Validation",
    )


# ---------------------------------------------------------------------------
# docconvert settings show / set / reset
# ---------------------------------------------------------------------------

_TOP_LEVEL_SETTINGS = ("default_target", "output_dir")


@settings_app.command("show")
def settings_show() -> None:
    """Show the persisted default options."""
    manager = _container().settings_manager
    json_panel(manager.load().model_dump_json(indent=2), title=f"🧩 {manager.settings_path}")


@settings_app.command("set")
def settings_set(
    key: Annotated[str, typer.Argument(help="Option name, e.g. font_size or default_target")],
    value: Annotated[str, typer.Argument(help="New value ('none' clears default_target/output_dir)")],
) -> None:
    """Change one persisted default."""
    from pydantic import ValidationError
    from pydantic.alias_generators import to_snake

    from docconvert.domain.models.conversion import ConversionOptions
    from docconvert.domain.models.settings import UserSettings

    manager = _container().settings_manager
    data = manager.load().model_dump(mode="json")
    name = to_snake(key.replace("-", "_"))

    if name in _TOP_LEVEL_SETTINGS:
        data[name] = None if value.lower() in ("", "none") else value
    elif name in ConversionOptions.model_fields:
        data["options"][name] = value
    else:
        error_message(f"Unknown setting: {key}")
        raise typer.Exit(code=1)

    try:
        updated = UserSettings.model_validate(data)
    except ValidationError as exc:
        error_message(f"Invalid value for {key}: {exc.errors()[0]['msg']}")
        raise typer.Exit(code=1)

    manager.save(updated)
    success_panel(f"✅ {name} = [bold green]{value}[/]", title="🧩 Settings")


@settings_app.command("reset")
def settings_reset() -> None:
    """Restore factory defaults."""
    _container().settings_manager.reset_to_defaults()
    success_panel("✅ Settings reset to defaults", title="🧩 Settings")


if __name__ == "__main__":
    app()
