"""CLI tests for detection and conversion commands."""

import json
import os
from pathlib import Path
from typing import Any

import openpyxl
import pytest
from click.testing import CliRunner

from fileproc.cli import ExitCode, cli
from fileproc.validation import FileValidator, ValidationResult


def _env_with_home(tmp_path: Path) -> dict[str, Any]:
    env = dict(os.environ)
    env["HOME"] = str(tmp_path)
    return env


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def env(tmp_path: Path) -> dict[str, Any]:
    return _env_with_home(tmp_path / "home")


@pytest.fixture
def report_csv(tmp_path: Path) -> Path:
    path = tmp_path / "report.csv"
    path.write_text("name,age\nJohn,30\nJane,25\n", encoding="utf-8")
    return path


@pytest.fixture
def catalog_xml(tmp_path: Path) -> Path:
    path = tmp_path / "catalog.xml"
    path.write_text(
        '<?xml version="1.0"?><catalog><book id="1"><title>Dune</title></book></catalog>',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def budget_xlsx(tmp_path: Path) -> Path:
    workbook = openpyxl.Workbook()
    first = workbook.active
    first.title = "Q1"
    first.append(["item", "cost"])
    first.append(["rent", 1200])
    second = workbook.create_sheet("Q2")
    second.append(["item", "cost"])
    second.append(["power", 90])
    path = tmp_path / "budget.xlsx"
    workbook.save(path)
    return path


def test_cli_help_displays_commands(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "Detect, validate, and convert" in result.output
    for command in ("detect", "process", "convert-csv", "test-xml", "config"):
        assert command in result.output


def test_detect_reports_type_and_processor(
    runner: CliRunner, env: dict[str, Any], report_csv: Path
) -> None:
    result = runner.invoke(cli, ["detect", str(report_csv)], env=env)

    assert result.exit_code == ExitCode.OK
    assert "Detected Type: csv" in result.output
    assert "Confidence: 66.7%" in result.output
    assert "Recommended Processor: CSVProcessor" in result.output
    assert "fileproc test-csv" in result.output
    assert "Excel: .xlsx, .xls, .xlsm, .xlsb" in result.output


def test_detect_json_output(runner: CliRunner, env: dict[str, Any], report_csv: Path) -> None:
    result = runner.invoke(cli, ["detect", str(report_csv), "--json"], env=env)

    assert result.exit_code == ExitCode.OK
    payload = json.loads(result.stdout)
    assert payload["detection"]["detected_type"] == "csv"
    assert payload["validation"]["is_valid"] is True
    assert payload["processor"] == "CSVProcessor"
    assert payload["supportedExtensions"]["xml"][0] == ".xml"


@pytest.mark.parametrize(
    ("name", "content", "expected"),
    [
        ("missing.csv", None, ExitCode.NOT_FOUND),
        ("empty.csv", "", ExitCode.EMPTY_FILE),
        ("notes.md", "nothing to see", ExitCode.UNSUPPORTED),
    ],
)
def test_detect_exit_codes(
    runner: CliRunner,
    env: dict[str, Any],
    tmp_path: Path,
    name: str,
    content: str | None,
    expected: ExitCode,
) -> None:
    path = tmp_path / name
    if content is not None:
        path.write_text(content, encoding="utf-8")

    result = runner.invoke(cli, ["detect", str(path)], env=env)

    assert result.exit_code == expected
    assert "Recommended Processor" not in result.output


def test_process_csv_writes_output(
    runner: CliRunner, env: dict[str, Any], report_csv: Path, tmp_path: Path
) -> None:
    target = tmp_path / "out" / "report.json"

    result = runner.invoke(cli, ["process", str(report_csv), "-o", str(target), "-p", "1"], env=env)

    assert result.exit_code == ExitCode.OK
    assert "Detected file type: CSV" in result.output
    assert json.loads(target.read_text(encoding="utf-8")) == [
        {"name": "John", "age": "30"},
        {"name": "Jane", "age": "25"},
    ]


def test_process_uses_default_output_dir(
    runner: CliRunner, tmp_path: Path, budget_xlsx: Path
) -> None:
    home = tmp_path / "home"
    config_dir = home / ".fileproc"
    config_dir.mkdir(parents=True)
    output_dir = tmp_path / "exports"
    (config_dir / "config.yaml").write_text(
        f"cli:\n  default_output_dir: {output_dir}\n", encoding="utf-8"
    )

    result = runner.invoke(
        cli, ["process", str(budget_xlsx), "-o", "budget.json"], env=_env_with_home(home)
    )

    assert result.exit_code == ExitCode.OK
    payload = json.loads((output_dir / "budget.json").read_text(encoding="utf-8"))
    assert payload["data"] == [{"item": "rent", "cost": 1200}]
    assert payload["sheetInfo"]["name"] == "Q1"


def test_process_xml_prints_json(
    runner: CliRunner, env: dict[str, Any], catalog_xml: Path
) -> None:
    result = runner.invoke(cli, ["process", str(catalog_xml)], env=env)

    assert result.exit_code == ExitCode.OK
    assert "XML Statistics" in result.output
    assert '"rootElement": "catalog"' in result.output


def test_process_rejects_invalid_file(
    runner: CliRunner, env: dict[str, Any], tmp_path: Path
) -> None:
    result = runner.invoke(cli, ["process", str(tmp_path / "missing.xml")], env=env)

    assert result.exit_code == ExitCode.NOT_FOUND


def test_process_without_detected_type_exits_unsupported(
    runner: CliRunner, env: dict[str, Any], report_csv: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        FileValidator, "validate_file", lambda self, path: ValidationResult(file_type=None)
    )

    result = runner.invoke(cli, ["process", str(report_csv)], env=env)

    assert result.exit_code == ExitCode.UNSUPPORTED
    assert "Detected file type" not in result.output


def test_convert_csv(runner: CliRunner, env: dict[str, Any], report_csv: Path, tmp_path: Path) -> None:
    target = tmp_path / "converted.json"

    result = runner.invoke(cli, ["convert-csv", str(report_csv), "-o", str(target)], env=env)

    assert result.exit_code == ExitCode.OK
    assert "Total rows: 2" in result.output
    assert json.loads(target.read_text(encoding="utf-8"))[0]["name"] == "John"


def test_convert_csv_missing_file(runner: CliRunner, env: dict[str, Any], tmp_path: Path) -> None:
    result = runner.invoke(cli, ["convert-csv", str(tmp_path / "nope.csv")], env=env)

    assert result.exit_code == ExitCode.NOT_FOUND


def test_convert_excel_all_sheets(
    runner: CliRunner, env: dict[str, Any], budget_xlsx: Path, tmp_path: Path
) -> None:
    target = tmp_path / "budget.json"

    result = runner.invoke(
        cli, ["convert-excel", str(budget_xlsx), "-o", str(target), "--all-sheets"], env=env
    )

    assert result.exit_code == ExitCode.OK
    payload = json.loads(target.read_text(encoding="utf-8"))
    assert list(payload) == ["Q1", "Q2"]
    assert payload["Q2"]["data"] == [{"item": "power", "cost": 90}]


def test_convert_excel_named_sheet(
    runner: CliRunner, env: dict[str, Any], budget_xlsx: Path, tmp_path: Path
) -> None:
    target = tmp_path / "q2.json"

    result = runner.invoke(
        cli, ["convert-excel", str(budget_xlsx), "-o", str(target), "-s", "Q2"], env=env
    )

    assert result.exit_code == ExitCode.OK
    assert json.loads(target.read_text(encoding="utf-8"))["sheetInfo"]["name"] == "Q2"


def test_convert_excel_unknown_sheet(
    runner: CliRunner, env: dict[str, Any], budget_xlsx: Path
) -> None:
    result = runner.invoke(cli, ["convert-excel", str(budget_xlsx), "-s", "Q9"], env=env)

    assert result.exit_code == ExitCode.PROCESSING


def test_convert_xml_rejects_malformed(
    runner: CliRunner, env: dict[str, Any], tmp_path: Path
) -> None:
    path = tmp_path / "broken.xml"
    path.write_text("<a><b></a>", encoding="utf-8")

    result = runner.invoke(cli, ["convert-xml", str(path)], env=env)

    assert result.exit_code == ExitCode.PROCESSING
    assert "XML syntax error" in result.output


def test_convert_xml(runner: CliRunner, env: dict[str, Any], catalog_xml: Path, tmp_path: Path) -> None:
    target = tmp_path / "catalog.json"

    result = runner.invoke(cli, ["convert-xml", str(catalog_xml), "-o", str(target), "-d", "1"], env=env)

    assert result.exit_code == ExitCode.OK
    assert json.loads(target.read_text(encoding="utf-8"))["structure"]["totalElements"] == 3


def test_test_commands_use_bundled_samples(
    runner: CliRunner,
    env: dict[str, Any],
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    report_csv: Path,
    catalog_xml: Path,
    budget_xlsx: Path,
) -> None:
    monkeypatch.chdir(tmp_path)

    missing = runner.invoke(cli, ["test-csv"], env=env)
    assert missing.exit_code == ExitCode.USAGE

    samples = tmp_path / "data" / "samples"
    for folder, source in (("csv", report_csv), ("xml", catalog_xml), ("xls", budget_xlsx)):
        (samples / folder).mkdir(parents=True)
        (samples / folder / source.name).write_bytes(source.read_bytes())

    csv_result = runner.invoke(cli, ["test-csv"], env=env)
    xml_result = runner.invoke(cli, ["test-xml"], env=env)
    excel_result = runner.invoke(cli, ["test-excel", "-s", "Q2"], env=env)

    assert csv_result.exit_code == ExitCode.OK
    assert "Total rows processed: 2" in csv_result.output
    assert xml_result.exit_code == ExitCode.OK
    assert "Element Paths" in xml_result.output
    assert excel_result.exit_code == ExitCode.OK
    assert "Available sheets: Q1, Q2" in excel_result.output
    assert "Total rows processed: 1" in excel_result.output


def test_broken_config_exits_with_config_code(
    runner: CliRunner, tmp_path: Path, report_csv: Path
) -> None:
    home = tmp_path / "home"
    (home / ".fileproc").mkdir(parents=True)
    (home / ".fileproc" / "config.yaml").write_text("csv: [unclosed", encoding="utf-8")

    result = runner.invoke(cli, ["detect", str(report_csv)], env=_env_with_home(home))

    assert result.exit_code == ExitCode.CONFIG
