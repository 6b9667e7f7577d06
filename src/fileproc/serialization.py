"""JSON rendering for processor output."""

from __future__ import annotations

import json
from datetime import date, datetime, time
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel


def _default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Path):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(payload: Any) -> str:
    """Render ``payload`` as indented JSON."""
    return json.dumps(payload, indent=2, ensure_ascii=False, default=_default)


def write_json(payload: Any, path: Path | str) -> Path:
    """Write ``payload`` as JSON to ``path`` and return the resolved path."""
    target = Path(path).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(to_json(payload), encoding="utf-8")
    return target


__all__ = ["to_json", "write_json"]
