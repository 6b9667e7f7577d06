"""CSV reading, validation, and JSON conversion."""

from __future__ import annotations

import csv
import io
import logging
import time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from fileproc.serialization import to_json, write_json

from .base import (
    ProcessorModel,
    ProcessorValidation,
    check_source,
    elapsed_ms,
    ensure_source,
    extension_of,
)
from .errors import ProcessingError

LOGGER = logging.getLogger(__name__)

LARGE_CSV_BYTES = 100 * 1024 * 1024


class CSVProcessorOptions(BaseModel):
    """Reader settings for delimited text.

    Attributes:
        delimiter: Field separator.
        headers: Whether the first record names the columns.
        skip_empty_lines: Whether records with only blank cells are dropped.
        encoding: Text encoding used to open files.
    """

    delimiter: str = Field(default=",", min_length=1, max_length=1)
    headers: bool = True
    skip_empty_lines: bool = True
    encoding: str = "utf-8"


class CSVProcessorResult(ProcessorModel):
    """Rows parsed from a CSV source."""

    data: List[Dict[str, Any]] = Field(default_factory=list)
    row_count: int = 0
    headers: List[str] = Field(default_factory=list)
    processing_time: float = 0.0
    file_name: Optional[str] = None


class CSVStatistics(ProcessorModel):
    """Summary counts for a CSV file."""

    total_rows: int
    total_columns: int
    headers: List[str]
    file_size: int
    encoding: str


class CSVProcessor:
    """Parse CSV files into row dictionaries keyed by header."""

    def __init__(self, options: CSVProcessorOptions | None = None, **overrides: Any) -> None:
        self._options = options or CSVProcessorOptions()
        if overrides:
            self.set_options(**overrides)

    @property
    def options(self) -> CSVProcessorOptions:
        """Return a copy of the current reader settings."""
        return self._options.model_copy()

    def set_options(self, **changes: Any) -> None:
        """Merge ``changes`` into the current settings."""
        self._options = CSVProcessorOptions.model_validate(
            {**self._options.model_dump(), **changes}
        )

    def process_file(self, path: Path | str) -> CSVProcessorResult:
        """Parse a CSV file from disk.

        Args:
            path: CSV file to read.

        Returns:
            CSVProcessorResult: Parsed rows, headers, and timing.

        Raises:
            SourceNotFoundError: If the file does not exist.
            EmptySourceError: If the file has no content.
            ProcessingError: If the content cannot be decoded or parsed.
        """
        started = time.perf_counter()
        file_path = Path(path)
        ensure_source(file_path)

        try:
            with file_path.open("r", encoding=self._options.encoding, newline="") as fh:
                headers, rows = self._parse(fh)
        except (csv.Error, UnicodeDecodeError, OSError) as exc:
            raise ProcessingError(f"CSV processing error: {exc}") from exc

        LOGGER.debug("Parsed %d rows from %s", len(rows), file_path)
        return CSVProcessorResult(
            data=rows,
            row_count=len(rows),
            headers=headers,
            processing_time=elapsed_ms(started),
            file_name=file_path.name,
        )

    def process_string(self, text: str) -> CSVProcessorResult:
        """Parse CSV content held in memory."""
        started = time.perf_counter()
        if not text.strip():
            raise ProcessingError("CSV string is empty")

        try:
            headers, rows = self._parse(io.StringIO(text, newline=""))
        except csv.Error as exc:
            raise ProcessingError(f"CSV processing error: {exc}") from exc

        return CSVProcessorResult(
            data=rows,
            row_count=len(rows),
            headers=headers,
            processing_time=elapsed_ms(started),
        )

    def validate_csv(self, path: Path | str) -> ProcessorValidation:
        """Check a CSV file before processing it.

        Args:
            path: CSV file to check.

        Returns:
            ProcessorValidation: Errors and warnings found.
        """
        result = ProcessorValidation()
        file_path = Path(path)
        try:
            stats = check_source(file_path, result)
            if stats is None:
                return result

            if stats.st_size > LARGE_CSV_BYTES:
                result.warnings.append("File size is very large (>100MB), processing might be slow")

            extension = extension_of(file_path)
            if extension != "csv":
                result.warnings.append(f"File extension is '{extension}', expected 'csv'")

            content = file_path.read_text(encoding=self._options.encoding)
            lines = [line for line in content.splitlines() if line.strip()]
            if not lines:
                result.add_error("No content lines found")
                return result

            if len(lines) == 1 and self._options.headers:
                result.warnings.append("Only header row found, no data rows")

            widths = [len(record) for record in csv.reader(lines, delimiter=self._options.delimiter)]
            inconsistent = sum(1 for width in widths[1:] if width != widths[0])
            if inconsistent:
                result.warnings.append(f"{inconsistent} rows have inconsistent column counts")
            result.file_info = {"size": stats.st_size, "lines": len(lines)}
        except Exception as exc:
            result.add_error(f"Validation error: {exc}")

        return result

    def convert_to_json(self, path: Path | str, output_path: Path | str | None = None) -> str:
        """Convert a CSV file to a JSON array of rows.

        Returns:
            str: The written file path when ``output_path`` is given, otherwise the JSON text.
        """
        result = self.process_file(path)
        if output_path:
            return str(write_json(result.data, output_path))
        return to_json(result.data)

    def get_preview(self, path: Path | str, rows: int = 5) -> CSVProcessorResult:
        """Return the first ``rows`` rows of a CSV file."""
        full = self.process_file(path)
        return full.model_copy(
            update={"data": full.data[:rows], "row_count": min(rows, full.row_count)}
        )

    def get_statistics(self, path: Path | str) -> CSVStatistics:
        """Return row and column counts plus file facts."""
        result = self.process_file(path)
        return CSVStatistics(
            total_rows=result.row_count,
            total_columns=len(result.headers),
            headers=result.headers,
            file_size=Path(path).stat().st_size,
            encoding=self._options.encoding,
        )

    def _parse(self, source: Iterable[str]) -> tuple[List[str], List[Dict[str, Any]]]:
        reader = csv.reader(source, delimiter=self._options.delimiter)
        headers: List[str] = []
        records: List[List[str]] = []
        for record in reader:
            if self._options.skip_empty_lines and not any(cell.strip() for cell in record):
                continue
            if self._options.headers and not headers:
                headers = [cell.strip() for cell in record]
                continue
            records.append(record)

        if not self._options.headers:
            width = max((len(record) for record in records), default=0)
            headers = [str(index) for index in range(width)]

        return headers, [_to_row(headers, record) for record in records]


def _to_row(headers: List[str], record: List[str]) -> Dict[str, Any]:
    row: Dict[str, Any] = {}
    for index, header in enumerate(headers):
        row[header] = record[index] if index < len(record) else None
    for index in range(len(headers), len(record)):
        row[f"_{index}"] = record[index]
    return row


__all__ = ["CSVProcessor", "CSVProcessorOptions", "CSVProcessorResult", "CSVStatistics"]
