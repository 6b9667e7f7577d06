"""Command line interface for the fileproc project."""

from __future__ import annotations

import time
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Iterator

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from fileproc.config import ConfigError, ConfigManager, FileprocConfig
from fileproc.detection import FileType
from fileproc.logging_setup import configure_logging
from fileproc.processors import (
    CSVProcessor,
    EmptySourceError,
    ExcelProcessor,
    ProcessingError,
    ProcessorValidation,
    SourceNotFoundError,
    XmlProcessor,
)
from fileproc.processors.base import ensure_source
from fileproc.serialization import to_json, write_json
from fileproc.validation import FailureKind, FileValidator, ValidationResult

console = Console()
error_console = Console(stderr=True)

SAMPLES_DIR = Path("data/samples")
_SAMPLE_PATTERNS = {
    FileType.CSV: ("csv", ("*.csv",)),
    FileType.EXCEL: ("xls", ("*.xlsx", "*.xls")),
    FileType.XML: ("xml", ("*.xml",)),
}

output_option = click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=str),
    help="Output JSON file path.",
)


class ExitCode(IntEnum):
    """Process exit statuses returned by fileproc commands."""

    OK = 0
    INTERNAL = 1
    USAGE = 2
    NOT_FOUND = 3
    EMPTY_FILE = 4
    UNSUPPORTED = 5
    PROCESSING = 6
    CONFIG = 7


_FAILURE_EXIT_CODES = {
    FailureKind.NOT_FOUND: ExitCode.NOT_FOUND,
    FailureKind.EMPTY_FILE: ExitCode.EMPTY_FILE,
    FailureKind.UNDETECTED_TYPE: ExitCode.UNSUPPORTED,
    FailureKind.VALIDATION_ERROR: ExitCode.INTERNAL,
}


class CommandError(click.ClickException):
    """Click exception carrying a fileproc-specific exit status."""

    def __init__(self, message: str, exit_code: int = ExitCode.INTERNAL) -> None:
        super().__init__(message)
        self.exit_code = int(exit_code)

    def show(self, file: Any = None) -> None:
        error_console.print(f"[bold red]Error:[/bold red] {escape(self.format_message())}")


def _handle_cli_error(
    message: str,
    *,
    code: str,
    exit_code: ExitCode,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command with ``exit_code``.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        exit_code: Process exit status to use.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        CommandError: For non-JSON flows to surface the error.
    """

    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        console.print_json(data=payload)
        raise SystemExit(int(exit_code))

    raise CommandError(message, exit_code) from original


@contextmanager
def _reporting_errors(action: str, *, json_output: bool = False) -> Iterator[None]:
    """Translate exceptions raised inside a command into exit statuses."""
    try:
        yield
    except SourceNotFoundError as exc:
        _handle_cli_error(
            str(exc),
            code="not_found",
            exit_code=ExitCode.NOT_FOUND,
            json_output=json_output,
            original=exc,
        )
    except EmptySourceError as exc:
        _handle_cli_error(
            str(exc),
            code="empty_file",
            exit_code=ExitCode.EMPTY_FILE,
            json_output=json_output,
            original=exc,
        )
    except ProcessingError as exc:
        _handle_cli_error(
            str(exc),
            code="processing_error",
            exit_code=ExitCode.PROCESSING,
            json_output=json_output,
            original=exc,
        )
    except ConfigError as exc:
        _handle_cli_error(
            str(exc),
            code="config_error",
            exit_code=ExitCode.CONFIG,
            json_output=json_output,
            original=exc,
        )
    except (click.ClickException, click.exceptions.Exit, click.Abort):
        raise
    except Exception as exc:
        _handle_cli_error(
            f"Unexpected error while {action}: {exc}",
            code="internal_error",
            exit_code=ExitCode.INTERNAL,
            json_output=json_output,
            details={"exception": type(exc).__name__},
            original=exc,
        )


def _load_config(ctx: click.Context) -> FileprocConfig:
    """Load configuration once per invocation and configure logging from it."""
    state = ctx.find_root().ensure_object(dict)
    config = state.get("config")
    if config is None:
        overrides = {"logging.level": "DEBUG"} if state.get("verbose") else None
        config = ConfigManager().load(cli_overrides=overrides)
        configure_logging(config.logging)
        state["config"] = config
    return config


def _resolve_output(config: FileprocConfig, output: str | None) -> Path | None:
    if not output:
        return None
    path = Path(output).expanduser()
    if not path.is_absolute() and config.cli.default_output_dir:
        path = Path(config.cli.default_output_dir).expanduser() / path
    return path


def _default_sample(file_type: FileType) -> str:
    """Return the first bundled sample file for ``file_type``."""
    folder, patterns = _SAMPLE_PATTERNS[file_type]
    directory = SAMPLES_DIR / folder
    for pattern in patterns:
        matches = sorted(directory.rglob(pattern)) if directory.is_dir() else []
        if matches:
            return str(matches[0])
    raise click.UsageError(f"No FILE given and no {file_type.label} samples found in {directory}.")


def _kb(size: int) -> str:
    return f"{size / 1024:.2f} KB"


def _print_list(title: str, items: list[str], *, style: str) -> None:
    if not items:
        return
    console.print(f"[{style}]{title}[/{style}]")
    for item in items:
        console.print(f"  - {escape(item)}")


def _print_json(payload: Any) -> None:
    console.print_json(to_json(payload))


def _require_valid(validation: ProcessorValidation) -> None:
    """Print processor warnings, or errors and abort when validation failed."""
    if not validation.is_valid:
        _print_list("Validation errors:", validation.errors, style="red")
        raise CommandError("File failed validation.", ExitCode.PROCESSING)
    _print_list("Warnings:", validation.warnings, style="yellow")


def _exit_for(validation: ValidationResult) -> ExitCode:
    if validation.is_valid:
        return ExitCode.OK
    return _FAILURE_EXIT_CODES.get(validation.failure, ExitCode.INTERNAL)  # type: ignore[arg-type]


def _csv_processor(config: FileprocConfig) -> CSVProcessor:
    return CSVProcessor(delimiter=config.csv.delimiter, encoding=config.csv.encoding)


def _excel_processor(config: FileprocConfig, sheet: str | None = None) -> ExcelProcessor:
    return ExcelProcessor(sheet_index=config.excel.sheet_index, sheet_name=sheet)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="fileproc")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Detect, validate, and convert CSV, Excel, and XML files to JSON."""
    ctx.ensure_object(dict)["verbose"] = verbose


@cli.command()
@click.argument("file", type=click.Path(path_type=str))
@click.option("--json", "json_output", is_flag=True, help="Emit detection results as JSON.")
@click.pass_context
def detect(ctx: click.Context, file: str, json_output: bool) -> None:
    """Auto-detect the type of FILE and show processing options."""
    with _reporting_errors("detecting file type", json_output=json_output):
        _load_config(ctx)
        validator = FileValidator()
        validation = validator.validate_file(file)
        detection = validator.detect_file_type(file)
        processor = validator.get_processor_for_file(file) if validation.is_valid else None
        extensions = validator.get_supported_extensions()

        if json_output:
            console.print_json(
                data={
                    "detection": detection.model_dump(mode="json"),
                    "validation": validation.model_dump(mode="json"),
                    "processor": processor,
                    "supportedExtensions": {
                        file_type.value: list(values) for file_type, values in extensions.items()
                    },
                }
            )
            ctx.exit(int(_exit_for(validation)))

        info = validation.file_info
        console.print(f"Analyzing file: {escape(file)}")
        console.print("\n[bold]File Information:[/bold]")
        console.print(f"  - Path: {escape(info.path)}")
        console.print(f"  - Size: {_kb(info.size)}")
        console.print(f"  - Extension: {info.extension or '(none)'}")

        detected = detection.detected_type.value if detection.detected_type else "Unknown"
        console.print("\n[bold]Detection Results:[/bold]")
        console.print(f"  - Detected Type: {detected}")
        console.print(f"  - Confidence: {detection.confidence * 100:.1f}%")
        console.print(f"  - Reasons: {escape(', '.join(detection.reasons))}")

        _print_list("\nValidation Errors:", validation.errors, style="red")
        _print_list("\nWarnings:", validation.warnings, style="yellow")

        if validation.is_valid and validation.file_type is not None:
            command = validation.file_type.value
            console.print("\n[bold]Processing Options:[/bold]")
            console.print(f"  - Recommended Processor: {processor}")
            console.print(f'  - Test Command: fileproc test-{command} "{escape(file)}"')
            console.print(
                f'  - Convert Command: fileproc convert-{command} "{escape(file)}" -o output.json'
            )
            console.print("\n[bold]Supported Extensions:[/bold]")
            for file_type, values in extensions.items():
                console.print(f"  - {file_type.label}: {', '.join(values)}")

        ctx.exit(int(_exit_for(validation)))


@cli.command()
@click.argument("file", type=click.Path(path_type=str))
@output_option
@click.option("-p", "--preview", "preview_rows", type=int, help="Preview rows for CSV/Excel.")
@click.option("-d", "--depth", type=int, help="Preview depth for XML.")
@click.option("-s", "--sheet", type=str, help="Sheet name for Excel files.")
@click.option("--all-sheets", is_flag=True, help="Process all sheets for Excel files.")
@click.pass_context
def process(
    ctx: click.Context,
    file: str,
    output: str | None,
    preview_rows: int | None,
    depth: int | None,
    sheet: str | None,
    all_sheets: bool,
) -> None:
    """Auto-detect FILE's type and convert it with the matching processor."""
    with _reporting_errors("processing file"):
        config = _load_config(ctx)
        console.print(f"Auto-processing file: {escape(file)}")

        validation = FileValidator().validate_file(file)
        if not validation.is_valid:
            _print_list("File validation failed:", validation.errors, style="red")
            raise CommandError(validation.errors[0], _exit_for(validation))
        _print_list("Warnings:", validation.warnings, style="yellow")

        file_type = validation.file_type
        if file_type is None:
            raise CommandError("Unable to determine file type.", ExitCode.UNSUPPORTED)
        console.print(f"Detected file type: {file_type.value.upper()}")
        target = _resolve_output(config, output)
        started = time.perf_counter()

        if file_type is FileType.CSV:
            csv_processor = _csv_processor(config)
            _require_valid(csv_processor.validate_csv(file))
            stats = csv_processor.get_statistics(file)
            console.print("\n[bold]CSV Statistics:[/bold]")
            console.print(f"  - Rows: {stats.total_rows}, Columns: {stats.total_columns}")
            rows = config.csv.preview_rows if preview_rows is None else preview_rows
            _show_preview(csv_processor.get_preview(file, rows).data, f"first {rows} rows")
            result = csv_processor.convert_to_json(file, target)
        elif file_type is FileType.EXCEL:
            excel_processor = _excel_processor(config, sheet)
            excel_stats = excel_processor.get_statistics(file)
            console.print("\n[bold]Excel Statistics:[/bold]")
            console.print(f"  - Sheets: {excel_stats.total_sheets}, Rows: {excel_stats.total_rows}")
            if all_sheets:
                sheets = excel_processor.get_all_sheets(file)
                result = str(write_json(sheets, target)) if target else to_json(sheets)
            else:
                result = excel_processor.convert_to_json(file, target)
        else:
            xml_processor = XmlProcessor()
            xml_stats = xml_processor.get_statistics(file)
            console.print("\n[bold]XML Statistics:[/bold]")
            console.print(
                f"  - Elements: {xml_stats.total_elements}, Max Depth: {xml_stats.max_depth}"
            )
            max_depth = config.xml.preview_depth if depth is None else depth
            _show_preview(xml_processor.get_preview(file, max_depth).data, f"max depth {max_depth}")
            result = xml_processor.convert_to_json(file, target)

        _emit_result(result, target, label=file_type.label)
        console.print(f"\nProcessing completed in {(time.perf_counter() - started) * 1000:.0f}ms")


def _show_preview(data: Any, description: str) -> None:
    console.print(f"\n[bold]Preview ({description}):[/bold]")
    _print_json(data)


def _emit_result(result: str, target: Path | None, *, label: str) -> None:
    if target:
        console.print(f"[green]{label} converted and saved to: {escape(result)}[/green]")
    else:
        console.print("\n[bold]JSON output:[/bold]")
        console.print_json(result)


@cli.command("test-csv")
@click.argument("file", required=False, type=click.Path(path_type=str))
@click.pass_context
def test_csv(ctx: click.Context, file: str | None) -> None:
    """Exercise CSV processing against FILE (defaults to a bundled sample)."""
    with _reporting_errors("testing CSV processing"):
        config = _load_config(ctx)
        file = file or _default_sample(FileType.CSV)
        console.print(f"Testing CSV file: {escape(file)}")
        processor = _csv_processor(config)

        stats = processor.get_statistics(file)
        console.print("\n[bold]File Statistics:[/bold]")
        console.print(f"  - Total rows: {stats.total_rows}")
        console.print(f"  - Total columns: {stats.total_columns}")
        console.print(f"  - File size: {_kb(stats.file_size)}")

        _show_preview(processor.get_preview(file, 3).data, "first 3 rows")

        console.print("\nProcessing full file...")
        started = time.perf_counter()
        result = processor.process_file(file)
        console.print(f"Processing completed in {(time.perf_counter() - started) * 1000:.0f}ms")
        console.print(f"Total rows processed: {result.row_count}")


@cli.command("convert-csv")
@click.argument("input_path", metavar="INPUT", type=click.Path(path_type=str))
@output_option
@click.option("-p", "--preview", "preview_rows", type=int, help="Show a preview of the first N rows.")
@click.pass_context
def convert_csv(
    ctx: click.Context, input_path: str, output: str | None, preview_rows: int | None
) -> None:
    """Convert the CSV file INPUT to JSON."""
    with _reporting_errors("converting CSV"):
        config = _load_config(ctx)
        console.print(f"Converting CSV to JSON: {escape(input_path)}")
        ensure_source(Path(input_path))
        processor = _csv_processor(config)
        _require_valid(processor.validate_csv(input_path))

        rows = config.csv.preview_rows if preview_rows is None else preview_rows
        _show_preview(processor.get_preview(input_path, rows).data, f"first {rows} rows")

        console.print("\nConverting to JSON...")
        started = time.perf_counter()
        target = _resolve_output(config, output)
        _emit_result(processor.convert_to_json(input_path, target), target, label="CSV")
        console.print(f"\nConversion completed in {(time.perf_counter() - started) * 1000:.0f}ms")

        stats = processor.get_statistics(input_path)
        console.print("\n[bold]File Statistics:[/bold]")
        console.print(f"  - Total rows: {stats.total_rows}")
        console.print(f"  - Total columns: {stats.total_columns}")
        console.print(f"  - File size: {_kb(stats.file_size)}")


@cli.command("test-excel")
@click.argument("file", required=False, type=click.Path(path_type=str))
@click.option("-s", "--sheet", type=str, help="Sheet name to process.")
@click.pass_context
def test_excel(ctx: click.Context, file: str | None, sheet: str | None) -> None:
    """Exercise Excel processing against FILE (defaults to a bundled sample)."""
    with _reporting_errors("testing Excel processing"):
        config = _load_config(ctx)
        file = file or _default_sample(FileType.EXCEL)
        console.print(f"Testing Excel file: {escape(file)}")
        processor = _excel_processor(config)

        sheet_names = processor.get_sheet_names(file)
        console.print(f"\nAvailable sheets: {escape(', '.join(sheet_names))}")

        stats = processor.get_statistics(file)
        console.print("\n[bold]File Statistics:[/bold]")
        console.print(f"  - Total sheets: {stats.total_sheets}")
        console.print(f"  - Total rows: {stats.total_rows}")
        console.print(f"  - Total cells: {stats.total_cells}")
        console.print(f"  - File size: {_kb(stats.file_size)}")
        console.print("\n[bold]Sheet details:[/bold]")
        for info in stats.sheets:
            console.print(
                f"  - {escape(info.name)}: {info.row_count} rows x {info.column_count} columns"
            )

        target_sheet = sheet or (sheet_names[0] if sheet_names else None)
        preview = processor.get_preview(file, 3, target_sheet)
        _show_preview(preview.data, f'sheet "{target_sheet}", first 3 rows')

        console.print(f'\nProcessing sheet "{escape(str(target_sheet))}"...')
        started = time.perf_counter()
        result = processor.process_sheet(file, sheet) if sheet else processor.process_file(file)
        console.print(f"Processing completed in {(time.perf_counter() - started) * 1000:.0f}ms")
        console.print(f"Total rows processed: {len(result.data)}")


@cli.command("convert-excel")
@click.argument("input_path", metavar="INPUT", type=click.Path(path_type=str))
@output_option
@click.option("-s", "--sheet", type=str, help="Sheet name to process (default: first sheet).")
@click.option("-p", "--preview", "preview_rows", type=int, help="Show a preview of the first N rows.")
@click.option("--all-sheets", is_flag=True, help="Process all sheets.")
@click.pass_context
def convert_excel(
    ctx: click.Context,
    input_path: str,
    output: str | None,
    sheet: str | None,
    preview_rows: int | None,
    all_sheets: bool,
) -> None:
    """Convert the Excel workbook INPUT to JSON."""
    with _reporting_errors("converting Excel"):
        config = _load_config(ctx)
        console.print(f"Converting Excel to JSON: {escape(input_path)}")
        ensure_source(Path(input_path))
        processor = _excel_processor(config, sheet)
        _require_valid(processor.validate_excel(input_path))

        sheet_names = processor.get_sheet_names(input_path)
        console.print(f"\nAvailable sheets: {escape(', '.join(sheet_names))}")
        rows = config.excel.preview_rows if preview_rows is None else preview_rows
        target = _resolve_output(config, output)
        started = time.perf_counter()

        if all_sheets:
            console.print("\nProcessing all sheets...")
            results = processor.get_all_sheets(input_path)
            for name, sheet_result in results.items():
                console.print(f"\n[bold]Sheet: {escape(name)}[/bold]")
                console.print(f"  - Rows: {len(sheet_result.data)}")
                console.print(f"  - Processing time: {sheet_result.processing_time:.0f}ms")
                _show_preview(sheet_result.data[:rows], f"first {rows} rows")
            result = str(write_json(results, target)) if target else to_json(results)
        else:
            console.print(f"\nProcessing sheet: {escape(sheet or sheet_names[0])}")
            preview = processor.get_preview(input_path, rows)
            _show_preview(preview.data, f"first {rows} rows")
            console.print("\nConverting to JSON...")
            result = processor.convert_to_json(input_path, target)

        _emit_result(result, target, label="Excel")
        console.print(f"\nConversion completed in {(time.perf_counter() - started) * 1000:.0f}ms")

        stats = processor.get_statistics(input_path)
        console.print("\n[bold]File Statistics:[/bold]")
        console.print(f"  - Total sheets: {stats.total_sheets}")
        console.print(f"  - Total rows: {stats.total_rows}")
        console.print(f"  - File size: {_kb(stats.file_size)}")


def _print_xml_statistics(processor: XmlProcessor, file: str, *, detailed: bool) -> None:
    stats = processor.get_statistics(file)
    console.print("\n[bold]File Statistics:[/bold]")
    console.print(f"  - Root element: {escape(stats.root_element)}")
    console.print(f"  - Total elements: {stats.total_elements}")
    console.print(f"  - Total attributes: {stats.total_attributes}")
    if detailed:
        console.print(f"  - Max depth: {stats.max_depth}")
        console.print(f"  - Unique elements: {stats.unique_elements}")
        console.print(f"  - Unique attributes: {stats.unique_attributes}")
        console.print(f"  - Has namespaces: {'Yes' if stats.has_namespaces else 'No'}")
    console.print(f"  - File size: {_kb(stats.file_size)}")


@cli.command("test-xml")
@click.argument("file", required=False, type=click.Path(path_type=str))
@click.option("-d", "--depth", type=int, help="Maximum depth for preview.")
@click.pass_context
def test_xml(ctx: click.Context, file: str | None, depth: int | None) -> None:
    """Exercise XML processing against FILE (defaults to a bundled sample)."""
    with _reporting_errors("testing XML processing"):
        config = _load_config(ctx)
        file = file or _default_sample(FileType.XML)
        console.print(f"Testing XML file: {escape(file)}")
        ensure_source(Path(file))
        processor = XmlProcessor()
        _require_valid(processor.validate_xml(file))
        _print_xml_statistics(processor, file, detailed=True)

        max_depth = config.xml.preview_depth if depth is None else depth
        _show_preview(processor.get_preview(file, max_depth).data, f"max depth {max_depth}")

        paths = processor.get_elements_paths(file)
        console.print("\n[bold]Element Paths (first 10):[/bold]")
        for element_path in paths[:10]:
            console.print(f"  - {escape(element_path)}")
        if len(paths) > 10:
            console.print(f"  ... and {len(paths) - 10} more")

        console.print("\nProcessing full file...")
        started = time.perf_counter()
        result = processor.process_file(file)
        console.print(f"Processing completed in {(time.perf_counter() - started) * 1000:.0f}ms")
        console.print(
            f"Structure analyzed: {result.structure.total_elements} elements, "
            f"{result.structure.max_depth} max depth"
        )


@cli.command("convert-xml")
@click.argument("input_path", metavar="INPUT", type=click.Path(path_type=str))
@output_option
@click.option("-d", "--depth", type=int, help="Maximum depth for preview.")
@click.pass_context
def convert_xml(ctx: click.Context, input_path: str, output: str | None, depth: int | None) -> None:
    """Convert the XML document INPUT to JSON."""
    with _reporting_errors("converting XML"):
        config = _load_config(ctx)
        console.print(f"Converting XML to JSON: {escape(input_path)}")
        ensure_source(Path(input_path))
        processor = XmlProcessor()
        _require_valid(processor.validate_xml(input_path))

        max_depth = config.xml.preview_depth if depth is None else depth
        preview = processor.get_preview(input_path, max_depth)
        _show_preview(preview.data, f"max depth {max_depth}")

        console.print("\nConverting to JSON...")
        started = time.perf_counter()
        target = _resolve_output(config, output)
        _emit_result(processor.convert_to_json(input_path, target), target, label="XML")
        console.print(f"\nConversion completed in {(time.perf_counter() - started) * 1000:.0f}ms")

        _print_xml_statistics(processor, input_path, detailed=False)


@cli.group()
def config() -> None:
    """Manage fileproc configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore FILEPROC__ environment overrides.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules."""
    manager = ConfigManager()
    try:
        loaded = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise CommandError(str(exc), ExitCode.CONFIG) from exc

    console.print(f"[dim]# {escape(str(manager.config_path))}[/dim]")
    yaml_text = yaml.safe_dump(loaded.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="YAML value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Store VALUE for KEY, written as SECTION.FIELD (e.g. csv.delimiter)."""
    try:
        previous, current = ConfigManager().set_value(key, value)
    except ConfigError as exc:
        raise CommandError(str(exc), ExitCode.CONFIG) from exc

    if previous == current:
        unchanged = escape(f"{key} is already {current!r}")
        console.print(f"[yellow]No changes applied; {unchanged}.[/yellow]")
        return
    change = escape(f"{key}: {previous!r} -> {current!r}")
    console.print(f"[green]Updated {change}[/green]")


@config.command("edit")
def config_edit() -> None:
    """Open the configuration file in an editor and save it if it validates."""
    manager = ConfigManager()
    manager.ensure_exists()

    original = manager.read_text()
    edited = click.edit(original, extension=".yaml")

    if edited is None:
        console.print("[yellow]Edit cancelled; no changes applied.[/yellow]")
        return

    if edited == original:
        console.print("[yellow]No changes detected.[/yellow]")
        return

    try:
        manager.replace_text(edited)
    except ConfigError as exc:
        raise CommandError(str(exc), ExitCode.CONFIG) from exc

    console.print("[green]Configuration updated successfully.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
