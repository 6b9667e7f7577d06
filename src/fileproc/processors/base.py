"""Shared models and helpers for format processors."""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .errors import EmptySourceError, SourceNotFoundError


class ProcessorModel(BaseModel):
    """Base for processor results; serializes with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProcessorValidation(ProcessorModel):
    """Format-specific pre-flight check outcome.

    Attributes:
        is_valid: False once any error has been recorded.
        errors: Hard failures.
        warnings: Non-fatal observations.
        file_info: Optional facts gathered while validating.
    """

    is_valid: bool = True
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    file_info: Optional[Dict[str, Any]] = None

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.is_valid = False


def ensure_source(path: Path) -> os.stat_result:
    """Return stat data for ``path`` or raise when it is missing or empty."""
    if not path.exists():
        raise SourceNotFoundError(f"File not found: {path}")
    stats = path.stat()
    if stats.st_size == 0:
        raise EmptySourceError(f"File is empty: {path}")
    return stats


def check_source(path: Path, result: ProcessorValidation) -> Optional[os.stat_result]:
    """Record missing/empty errors on ``result``; return stat data when usable."""
    if not path.exists():
        result.add_error(f"File not found: {path}")
        return None
    stats = path.stat()
    if stats.st_size == 0:
        result.add_error("File is empty")
        return None
    return stats


def extension_of(path: Path) -> str:
    """Return the lower-cased extension without its leading dot."""
    return path.suffix.lower().lstrip(".")


def elapsed_ms(started: float) -> float:
    """Return milliseconds elapsed since ``started`` (a ``perf_counter`` value)."""
    return round((time.perf_counter() - started) * 1000, 3)


__all__ = [
    "ProcessorModel",
    "ProcessorValidation",
    "check_source",
    "elapsed_ms",
    "ensure_source",
    "extension_of",
]
