"""Excel workbook reading, validation, and JSON conversion.

Workbooks are opened with openpyxl when they are ZIP containers (.xlsx,
.xlsm) and with xlrd when they are legacy OLE compound files (.xls). The
reader is chosen from the file's leading bytes rather than its extension.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import openpyxl
import xlrd
from openpyxl.utils import get_column_letter
from openpyxl.utils.cell import range_boundaries
from pydantic import BaseModel, Field

from fileproc.detection.sampler import read_sample
from fileproc.detection.scoring import EXCEL_EXTENSIONS, OLE_MAGIC, ZIP_MAGIC
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

LARGE_WORKBOOK_BYTES = 50 * 1024 * 1024
MANY_SHEETS = 10
EMPTY_HEADER = "__EMPTY"


class ExcelProcessorOptions(BaseModel):
    """Reader settings for workbooks.

    Attributes:
        sheet_index: Sheet used when ``sheet_name`` is not set.
        sheet_name: Explicit sheet to read.
        cell_range: Optional A1-style range limiting the cells read.
        header: Whether the first row names the columns; otherwise rows are
            keyed by column letter.
    """

    sheet_index: int = Field(default=0, ge=0)
    sheet_name: Optional[str] = None
    cell_range: Optional[str] = None
    header: bool = True


class ExcelSheetInfo(ProcessorModel):
    """Dimensions of a worksheet."""

    name: str
    row_count: int
    column_count: int
    range: str


class ExcelProcessorResult(ProcessorModel):
    """Rows read from one worksheet plus workbook metadata."""

    data: List[Dict[str, Any]] = Field(default_factory=list)
    sheet_info: ExcelSheetInfo
    all_sheets: List[ExcelSheetInfo] = Field(default_factory=list)
    processing_time: float = 0.0
    file_name: Optional[str] = None


class ExcelStatistics(ProcessorModel):
    """Summary counts for a workbook."""

    total_sheets: int
    total_rows: int
    total_cells: int
    file_size: int
    sheets: List[ExcelSheetInfo]


@dataclass
class _SheetGrid:
    name: str
    rows: List[List[Any]] = field(default_factory=list)
    row_count: int = 1
    column_count: int = 1
    ref: str = "A1:A1"

    @property
    def info(self) -> ExcelSheetInfo:
        return ExcelSheetInfo(
            name=self.name,
            row_count=self.row_count,
            column_count=self.column_count,
            range=self.ref,
        )


@dataclass
class _Workbook:
    sheet_names: List[str]
    sheets: Dict[str, _SheetGrid]

    def all_info(self) -> List[ExcelSheetInfo]:
        return [self.sheets[name].info for name in self.sheet_names]


class ExcelProcessor:
    """Read worksheets into row dictionaries keyed by their header row."""

    def __init__(self, options: ExcelProcessorOptions | None = None, **overrides: Any) -> None:
        self._options = options or ExcelProcessorOptions()
        if overrides:
            self.set_options(**overrides)

    @property
    def options(self) -> ExcelProcessorOptions:
        """Return a copy of the current reader settings."""
        return self._options.model_copy()

    def set_options(self, **changes: Any) -> None:
        """Merge ``changes`` into the current settings."""
        self._options = ExcelProcessorOptions.model_validate(
            {**self._options.model_dump(), **changes}
        )

    def process_file(self, path: Path | str) -> ExcelProcessorResult:
        """Read the configured worksheet of a workbook.

        Args:
            path: Workbook to read.

        Returns:
            ExcelProcessorResult: Rows of the selected sheet and sheet metadata.

        Raises:
            SourceNotFoundError: If the file does not exist.
            EmptySourceError: If the file has no content.
            ProcessingError: If the workbook or sheet cannot be read.
        """
        return self._process(Path(path), self._options.sheet_name)

    def process_sheet(self, path: Path | str, sheet_name: str) -> ExcelProcessorResult:
        """Read a named worksheet without changing the configured options."""
        return self._process(Path(path), sheet_name)

    def get_all_sheets(self, path: Path | str) -> Dict[str, ExcelProcessorResult]:
        """Read every worksheet; sheets that fail are logged and skipped."""
        file_path = Path(path)
        ensure_source(file_path)
        workbook = self._load(file_path)
        all_sheets = workbook.all_info()

        results: Dict[str, ExcelProcessorResult] = {}
        for name in workbook.sheet_names:
            started = time.perf_counter()
            try:
                grid = workbook.sheets[name]
                results[name] = ExcelProcessorResult(
                    data=self._rows(grid),
                    sheet_info=grid.info,
                    all_sheets=all_sheets,
                    processing_time=elapsed_ms(started),
                    file_name=file_path.name,
                )
            except ProcessingError as exc:
                LOGGER.warning("Could not process sheet %r: %s", name, exc)
        return results

    def validate_excel(self, path: Path | str) -> ProcessorValidation:
        """Check a workbook before processing it.

        Args:
            path: Workbook to check.

        Returns:
            ProcessorValidation: Errors, warnings, and the sheet list.
        """
        result = ProcessorValidation()
        file_path = Path(path)
        try:
            stats = check_source(file_path, result)
            if stats is None:
                return result

            extension = extension_of(file_path)
            if f".{extension}" not in EXCEL_EXTENSIONS:
                result.warnings.append(
                    f"File extension is '{extension}', expected Excel format "
                    "(.xlsx, .xls, .xlsm, .xlsb)"
                )

            if stats.st_size > LARGE_WORKBOOK_BYTES:
                result.warnings.append("File size is very large (>50MB), processing might be slow")

            workbook = self._load(file_path)
            if not workbook.sheet_names:
                result.add_error("No sheets found in the Excel file")
                return result

            result.file_info = {"size": stats.st_size, "sheets": list(workbook.sheet_names)}
            if len(workbook.sheet_names) > MANY_SHEETS:
                result.warnings.append(
                    f"File contains many sheets ({len(workbook.sheet_names)}), "
                    "processing might take time"
                )
        except Exception as exc:
            result.add_error(f"Validation error: {exc}")

        return result

    def convert_to_json(self, path: Path | str, output_path: Path | str | None = None) -> str:
        """Convert the configured worksheet to JSON.

        Returns:
            str: The written file path when ``output_path`` is given, otherwise the JSON text.
        """
        result = self.process_file(path)
        if output_path:
            return str(write_json(result, output_path))
        return to_json(result)

    def get_statistics(self, path: Path | str) -> ExcelStatistics:
        """Return sheet, row, and cell counts for a workbook."""
        file_path = Path(path)
        stats = ensure_source(file_path)
        sheets = self._load(file_path).all_info()
        return ExcelStatistics(
            total_sheets=len(sheets),
            total_rows=sum(sheet.row_count for sheet in sheets),
            total_cells=sum(sheet.row_count * sheet.column_count for sheet in sheets),
            file_size=stats.st_size,
            sheets=sheets,
        )

    def get_preview(
        self, path: Path | str, rows: int = 5, sheet_name: str | None = None
    ) -> ExcelProcessorResult:
        """Return the first ``rows`` rows of a worksheet."""
        full = self._process(Path(path), sheet_name or self._options.sheet_name)
        return full.model_copy(update={"data": full.data[:rows]})

    def get_sheet_names(self, path: Path | str) -> List[str]:
        """Return the workbook's sheet names in order."""
        file_path = Path(path)
        ensure_source(file_path)
        return list(self._load(file_path).sheet_names)

    # Internal helpers -------------------------------------------------

    def _process(self, path: Path, sheet_name: Optional[str]) -> ExcelProcessorResult:
        started = time.perf_counter()
        ensure_source(path)
        workbook = self._load(path)

        if sheet_name is not None:
            if sheet_name not in workbook.sheets:
                raise ProcessingError(f'Excel processing error: Sheet "{sheet_name}" not found')
            target = sheet_name
        else:
            index = self._options.sheet_index
            if index >= len(workbook.sheet_names):
                raise ProcessingError(f"Excel processing error: Sheet index {index} not found")
            target = workbook.sheet_names[index]

        grid = workbook.sheets[target]
        return ExcelProcessorResult(
            data=self._rows(grid),
            sheet_info=grid.info,
            all_sheets=workbook.all_info(),
            processing_time=elapsed_ms(started),
            file_name=path.name,
        )

    def _load(self, path: Path) -> _Workbook:
        sample = read_sample(path, 8)
        if sample.error:
            raise ProcessingError(f"Excel processing error: {sample.error}")
        try:
            if sample.raw.startswith(ZIP_MAGIC):
                return _load_openpyxl(path)
            if sample.raw.startswith(OLE_MAGIC):
                return _load_xlrd(path)
        except Exception as exc:
            raise ProcessingError(f"Excel processing error: {exc}") from exc
        raise ProcessingError("Excel processing error: File is not a recognized Excel workbook")

    def _rows(self, grid: _SheetGrid) -> List[Dict[str, Any]]:
        rows = grid.rows
        first_column = 1
        if self._options.cell_range:
            try:
                min_col, min_row, max_col, max_row = range_boundaries(self._options.cell_range)
            except (TypeError, ValueError) as exc:
                raise ProcessingError(
                    f"Excel processing error: Invalid range {self._options.cell_range!r}"
                ) from exc
            first_column = min_col or 1
            rows = [
                row[first_column - 1 : max_col]
                for row in rows[(min_row or 1) - 1 : max_row]
            ]

        rows = [row for row in rows if not _is_blank(row)]
        if not rows:
            return []

        if self._options.header:
            keys = _unique_headers(rows[0])
            body = rows[1:]
        else:
            width = max(len(row) for row in rows)
            keys = [get_column_letter(first_column + offset) for offset in range(width)]
            body = rows

        return [
            {key: (row[index] if index < len(row) else None) for index, key in enumerate(keys)}
            for row in body
        ]


def _is_blank(row: List[Any]) -> bool:
    return all(value is None or (isinstance(value, str) and not value.strip()) for value in row)


def _unique_headers(values: List[Any]) -> List[str]:
    used: set[str] = set()
    headers: List[str] = []
    for value in values:
        base = EMPTY_HEADER if value is None or not str(value).strip() else str(value).strip()
        candidate, suffix = base, 0
        while candidate in used:
            suffix += 1
            candidate = f"{base}_{suffix}"
        used.add(candidate)
        headers.append(candidate)
    return headers


def _load_openpyxl(path: Path) -> _Workbook:
    with path.open("rb") as fh:
        workbook = openpyxl.load_workbook(fh, data_only=True)
    try:
        sheets: Dict[str, _SheetGrid] = {}
        for worksheet in workbook.worksheets:
            rows = [list(row) for row in worksheet.iter_rows(values_only=True)]
            sheets[worksheet.title] = _SheetGrid(
                name=worksheet.title,
                rows=rows,
                row_count=worksheet.max_row,
                column_count=worksheet.max_column,
                ref=worksheet.dimensions or "A1:A1",
            )
        return _Workbook(sheet_names=list(sheets), sheets=sheets)
    finally:
        workbook.close()


def _load_xlrd(path: Path) -> _Workbook:
    book = xlrd.open_workbook(str(path))
    try:
        sheets: Dict[str, _SheetGrid] = {}
        for sheet in book.sheets():
            rows = [
                [_xlrd_value(cell, book.datemode) for cell in sheet.row(index)]
                for index in range(sheet.nrows)
            ]
            row_count = max(sheet.nrows, 1)
            column_count = max(sheet.ncols, 1)
            sheets[sheet.name] = _SheetGrid(
                name=sheet.name,
                rows=rows,
                row_count=row_count,
                column_count=column_count,
                ref=f"A1:{get_column_letter(column_count)}{row_count}",
            )
        return _Workbook(sheet_names=list(book.sheet_names()), sheets=sheets)
    finally:
        book.release_resources()


def _xlrd_value(cell: Any, datemode: int) -> Any:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_ERROR:
        return xlrd.error_text_from_code.get(cell.value)
    if cell.ctype == xlrd.XL_CELL_NUMBER and float(cell.value).is_integer():
        return int(cell.value)
    return cell.value


__all__ = [
    "ExcelProcessor",
    "ExcelProcessorOptions",
    "ExcelProcessorResult",
    "ExcelSheetInfo",
    "ExcelStatistics",
]
