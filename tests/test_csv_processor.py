"""Tests for the CSV processor."""

import json
from pathlib import Path

import pytest

from fileproc.processors import (
    CSVProcessor,
    EmptySourceError,
    ProcessingError,
    SourceNotFoundError,
)


@pytest.fixture
def people_csv(tmp_path: Path) -> Path:
    path = tmp_path / "people.csv"
    path.write_text("name, age ,city\nAda,36,London\n\nGrace,85,Arlington\n", encoding="utf-8")
    return path


def test_process_file_keys_rows_by_trimmed_header(people_csv: Path) -> None:
    result = CSVProcessor().process_file(people_csv)

    assert result.headers == ["name", "age", "city"]
    assert result.row_count == 2
    assert result.data[0] == {"name": "Ada", "age": "36", "city": "London"}
    assert result.file_name == "people.csv"
    assert result.processing_time >= 0


def test_process_file_without_headers_uses_column_indexes(people_csv: Path) -> None:
    result = CSVProcessor(headers=False).process_file(people_csv)

    assert result.headers == ["0", "1", "2"]
    assert result.row_count == 3
    assert result.data[0] == {"0": "name", "1": " age ", "2": "city"}


def test_short_and_long_rows(tmp_path: Path) -> None:
    path = tmp_path / "ragged.csv"
    path.write_text("a,b\n1\n2,3,4\n", encoding="utf-8")

    result = CSVProcessor().process_file(path)

    assert result.data == [{"a": "1", "b": None}, {"a": "2", "b": "3", "_2": "4"}]


def test_custom_delimiter_and_option_updates() -> None:
    processor = CSVProcessor(delimiter=";")
    processor.set_options(skip_empty_lines=False)

    result = processor.process_string("x;y\n1;2\n;\n")

    assert processor.options.delimiter == ";"
    assert result.data == [{"x": "1", "y": "2"}, {"x": "", "y": ""}]


def test_invalid_option_is_rejected() -> None:
    with pytest.raises(ValueError):
        CSVProcessor(delimiter="::")


def test_process_string_rejects_blank_input() -> None:
    with pytest.raises(ProcessingError, match="CSV string is empty"):
        CSVProcessor().process_string("  \n")


def test_missing_and_empty_sources(tmp_path: Path) -> None:
    empty = tmp_path / "empty.csv"
    empty.touch()

    with pytest.raises(SourceNotFoundError, match="File not found"):
        CSVProcessor().process_file(tmp_path / "missing.csv")
    with pytest.raises(EmptySourceError, match="File is empty"):
        CSVProcessor().process_file(empty)


def test_undecodable_content_is_a_processing_error(tmp_path: Path) -> None:
    path = tmp_path / "latin.csv"
    path.write_bytes("name\nJos\xe9\n".encode("latin-1"))

    with pytest.raises(ProcessingError, match="CSV processing error"):
        CSVProcessor().process_file(path)

    assert CSVProcessor(encoding="latin-1").process_file(path).data == [{"name": "José"}]


def test_validate_csv_reports_warnings(tmp_path: Path) -> None:
    path = tmp_path / "export.txt"
    path.write_text("a,b\n1,2\n3\n4,5,6\n", encoding="utf-8")

    result = CSVProcessor().validate_csv(path)

    assert result.is_valid
    assert result.warnings == [
        "File extension is 'txt', expected 'csv'",
        "2 rows have inconsistent column counts",
    ]
    assert result.file_info == {"size": path.stat().st_size, "lines": 4}


def test_validate_csv_header_only(tmp_path: Path) -> None:
    path = tmp_path / "headers.csv"
    path.write_text("a,b,c\n", encoding="utf-8")

    result = CSVProcessor().validate_csv(path)

    assert result.is_valid
    assert result.warnings == ["Only header row found, no data rows"]


def test_validate_csv_errors(tmp_path: Path) -> None:
    blank = tmp_path / "blank.csv"
    blank.write_text("\n  \n", encoding="utf-8")
    empty = tmp_path / "empty.csv"
    empty.touch()

    assert CSVProcessor().validate_csv(blank).errors == ["No content lines found"]
    assert CSVProcessor().validate_csv(empty).errors == ["File is empty"]
    missing = CSVProcessor().validate_csv(tmp_path / "missing.csv")
    assert not missing.is_valid
    assert missing.errors[0].startswith("File not found")


def test_convert_to_json_returns_text_or_writes_file(people_csv: Path, tmp_path: Path) -> None:
    processor = CSVProcessor()

    text = processor.convert_to_json(people_csv)
    assert json.loads(text)[1]["city"] == "Arlington"

    target = tmp_path / "out" / "people.json"
    written = processor.convert_to_json(people_csv, target)
    assert written == str(target)
    assert json.loads(target.read_text(encoding="utf-8")) == json.loads(text)


def test_preview_and_statistics(people_csv: Path) -> None:
    processor = CSVProcessor()

    preview = processor.get_preview(people_csv, rows=1)
    stats = processor.get_statistics(people_csv)

    assert preview.row_count == 1
    assert preview.data == [{"name": "Ada", "age": "36", "city": "London"}]
    assert stats.total_rows == 2
    assert stats.total_columns == 3
    assert stats.file_size == people_csv.stat().st_size
    assert stats.model_dump(by_alias=True)["totalRows"] == 2
