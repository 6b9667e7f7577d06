"""Tests for JSON rendering helpers."""

import json
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest

from fileproc.processors import ExcelSheetInfo
from fileproc.serialization import to_json, write_json


def test_to_json_handles_models_and_special_values() -> None:
    payload = {
        "sheet": ExcelSheetInfo(name="S", row_count=2, column_count=1, range="A1:A2"),
        "when": datetime(2024, 1, 2, 3, 4, 5),
        "day": date(2024, 1, 2),
        "amount": Decimal("1.25"),
        "tags": {"b", "a"},
        "path": Path("out/x.json"),
        "text": "Zürich",
    }

    rendered = to_json(payload)
    data = json.loads(rendered)

    assert data["sheet"] == {"name": "S", "rowCount": 2, "columnCount": 1, "range": "A1:A2"}
    assert data["when"] == "2024-01-02T03:04:05"
    assert data["day"] == "2024-01-02"
    assert data["amount"] == 1.25
    assert data["tags"] == ["a", "b"]
    assert data["path"] == str(Path("out/x.json"))
    assert "Zürich" in rendered
    assert rendered.startswith('{\n  "sheet"')


def test_to_json_rejects_unknown_objects() -> None:
    with pytest.raises(TypeError):
        to_json({"value": object()})


def test_write_json_creates_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "dir" / "rows.json"

    written = write_json([{"a": 1}], target)

    assert written == target
    assert json.loads(target.read_text(encoding="utf-8")) == [{"a": 1}]
