"""Validation result models."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from fileproc.detection.models import FileType


class FailureKind(str, Enum):
    """Category of the first hard error recorded during validation."""

    NOT_FOUND = "not_found"
    EMPTY_FILE = "empty_file"
    UNDETECTED_TYPE = "undetected_type"
    VALIDATION_ERROR = "validation_error"


class FileInfo(BaseModel):
    """Basic facts about the validated file."""

    path: str = ""
    size: int = 0
    extension: str = ""
    mime_type: Optional[str] = None


class ValidationResult(BaseModel):
    """Outcome of validating a single file.

    Attributes:
        is_valid: False as soon as any error has been recorded.
        file_type: Detected type, if detection ran and succeeded.
        errors: Hard failures.
        warnings: Non-fatal observations such as low detection confidence.
        file_info: Path, size, and extension of the file.
        failure: Kind of the first error, used to pick CLI exit codes.
    """

    is_valid: bool = True
    file_type: Optional[FileType] = None
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    file_info: FileInfo = Field(default_factory=FileInfo)
    failure: Optional[FailureKind] = None

    def add_error(self, message: str, kind: FailureKind) -> None:
        """Record an error and mark the result invalid."""
        self.errors.append(message)
        self.is_valid = False
        if self.failure is None:
            self.failure = kind


__all__ = ["FailureKind", "FileInfo", "ValidationResult"]
