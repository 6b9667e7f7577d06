"""Tests for file validation built on type detection."""

from pathlib import Path

import pytest

from fileproc.detection import FileType
from fileproc.validation import FailureKind, FileValidator


@pytest.fixture
def validator() -> FileValidator:
    return FileValidator()


def test_valid_csv_file(tmp_path: Path, validator: FileValidator) -> None:
    path = tmp_path / "customers_export.csv"
    path.write_text("id,name\n1,Ada\n2,Grace\n", encoding="utf-8")

    result = validator.validate_file(path)

    assert result.is_valid
    assert result.errors == []
    assert result.file_type is FileType.CSV
    assert result.file_info.size == path.stat().st_size
    assert result.file_info.extension == ".csv"
    assert result.file_info.mime_type is not None
    # extension + content + "export" keyword clears the low-confidence threshold
    assert result.warnings == []


def test_empty_file_short_circuits(
    tmp_path: Path, validator: FileValidator, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "empty.csv"
    path.touch()

    def _unexpected(*_: object) -> None:
        raise AssertionError("detection should not run")

    monkeypatch.setattr(validator.detector, "detect", _unexpected)

    result = validator.validate_file(path)

    assert not result.is_valid
    assert result.errors == ["File is empty"]
    assert result.file_type is None
    assert result.failure is FailureKind.EMPTY_FILE


def test_missing_file(tmp_path: Path, validator: FileValidator) -> None:
    path = tmp_path / "nope.xml"

    result = validator.validate_file(path)

    assert not result.is_valid
    assert result.errors == [f"File not found: {path}"]
    assert result.failure is FailureKind.NOT_FOUND


def test_low_confidence_warning(tmp_path: Path, validator: FileValidator) -> None:
    path = tmp_path / "ambiguous.unknown"
    path.write_text("some,data\nother,info", encoding="utf-8")

    result = validator.validate_file(path)

    assert result.is_valid
    assert result.file_type is FileType.CSV
    assert result.warnings == [
        "File type detection confidence is low (33.3%)",
        "Detection reasons: CSV indicators found, File content matches CSV format",
    ]


def test_undetected_type_is_an_error(tmp_path: Path, validator: FileValidator) -> None:
    path = tmp_path / "notes.md"
    path.write_text("plain prose only", encoding="utf-8")

    result = validator.validate_file(path)

    assert not result.is_valid
    assert result.failure is FailureKind.UNDETECTED_TYPE
    assert result.errors == [
        "Unable to determine file type. Supported types: CSV, Excel (.xlsx, .xls), XML"
    ]


@pytest.mark.parametrize(("extra", "warned"), [(0, False), (1, True)])
def test_large_file_threshold(
    tmp_path: Path,
    validator: FileValidator,
    monkeypatch: pytest.MonkeyPatch,
    extra: int,
    warned: bool,
) -> None:
    path = tmp_path / "big.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")
    monkeypatch.setattr(
        "fileproc.validation.validator.LARGE_FILE_BYTES", path.stat().st_size - extra
    )

    result = validator.validate_file(path)

    assert ("File is very large (>100MB), processing might be slow" in result.warnings) is warned


def test_unexpected_failure_becomes_validation_error(
    tmp_path: Path, validator: FileValidator, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "report.csv"
    path.write_text("a,b\n", encoding="utf-8")

    def _boom(*_: object) -> None:
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(validator.detector, "detect", _boom)

    result = validator.validate_file(path)

    assert not result.is_valid
    assert result.errors == ["Validation error: disk on fire"]
    assert result.failure is FailureKind.VALIDATION_ERROR


def test_processor_lookup(tmp_path: Path, validator: FileValidator) -> None:
    xml = tmp_path / "catalog.xml"
    xml.write_text("<catalog><item/></catalog>", encoding="utf-8")

    assert validator.get_processor_for_file(xml) == "XmlProcessor"
    assert validator.is_file_type_supported(xml)
    assert validator.get_processor_for_file(tmp_path / "missing.xml") is None
    assert not validator.is_file_type_supported(tmp_path / "missing.xml")


def test_supported_extensions() -> None:
    extensions = FileValidator.get_supported_extensions()

    assert extensions[FileType.CSV] == (".csv", ".tsv", ".txt")
    assert ".xlsm" in extensions[FileType.EXCEL]
    assert ".atom" in extensions[FileType.XML]


def test_errors_imply_invalid(tmp_path: Path, validator: FileValidator) -> None:
    samples = {
        "a.csv": "x,y\n",
        "b.xml": "<a></a>",
        "c.bin": "no signal here",
        "d.txt": "",
    }
    for name, content in samples.items():
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        result = validator.validate_file(path)
        assert result.is_valid == (not result.errors)
