"""File validation entry points."""

from .models import FailureKind, FileInfo, ValidationResult
from .validator import LARGE_FILE_BYTES, LOW_CONFIDENCE_THRESHOLD, PROCESSOR_NAMES, FileValidator

__all__ = [
    "FailureKind",
    "FileInfo",
    "FileValidator",
    "LARGE_FILE_BYTES",
    "LOW_CONFIDENCE_THRESHOLD",
    "PROCESSOR_NAMES",
    "ValidationResult",
]
