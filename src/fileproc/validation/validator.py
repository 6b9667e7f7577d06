"""File validation built on top of type detection."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Optional

from fileproc.detection import (
    CSV_EXTENSIONS,
    EXCEL_EXTENSIONS,
    XML_EXTENSIONS,
    DetectionResult,
    FileType,
    TypeDetector,
)

from .models import FailureKind, FileInfo, ValidationResult

LOGGER = logging.getLogger(__name__)

LOW_CONFIDENCE_THRESHOLD = 0.7
LARGE_FILE_BYTES = 100 * 1024 * 1024

PROCESSOR_NAMES = {
    FileType.CSV: "CSVProcessor",
    FileType.EXCEL: "ExcelProcessor",
    FileType.XML: "XmlProcessor",
}


class FileValidator:
    """Check that a file exists, is non-empty, and has a recognizable type."""

    def __init__(self, detector: TypeDetector | None = None) -> None:
        self.detector = detector or TypeDetector()

    def validate_file(self, path: Path | str) -> ValidationResult:
        """Return a validation report for ``path``.

        Missing and empty files short-circuit before detection runs. Never
        raises; unexpected failures become a ``Validation error`` entry.

        Args:
            path: File to validate.

        Returns:
            ValidationResult: Errors, warnings, and detected type.
        """
        result = ValidationResult(file_info=FileInfo(path=str(path)))
        try:
            file_path = Path(path)
            if not file_path.exists():
                result.add_error(f"File not found: {path}", FailureKind.NOT_FOUND)
                return result

            size = file_path.stat().st_size
            extension = file_path.suffix.lower()
            result.file_info = FileInfo(
                path=str(path),
                size=size,
                extension=extension,
                mime_type=mimetypes.guess_type(file_path.name)[0],
            )

            if size == 0:
                result.add_error("File is empty", FailureKind.EMPTY_FILE)
                return result

            detection = self.detector.detect(file_path)
            result.file_type = detection.detected_type

            if detection.confidence < LOW_CONFIDENCE_THRESHOLD:
                result.warnings.append(
                    f"File type detection confidence is low ({detection.confidence * 100:.1f}%)"
                )
                result.warnings.append(f"Detection reasons: {', '.join(detection.reasons)}")

            if size > LARGE_FILE_BYTES:
                result.warnings.append("File is very large (>100MB), processing might be slow")

            if result.file_type is None:
                result.add_error(
                    "Unable to determine file type. Supported types: CSV, Excel (.xlsx, .xls), XML",
                    FailureKind.UNDETECTED_TYPE,
                )
        except Exception as exc:
            LOGGER.debug("Validation failed for %s", path, exc_info=True)
            result.add_error(f"Validation error: {exc}", FailureKind.VALIDATION_ERROR)

        return result

    def detect_file_type(self, path: Path | str) -> DetectionResult:
        """Run type detection without the surrounding validation checks."""
        return self.detector.detect(path)

    def get_processor_for_file(self, path: Path | str) -> Optional[str]:
        """Return the processor name for a valid file, otherwise None."""
        validation = self.validate_file(path)
        if not validation.is_valid or validation.file_type is None:
            return None
        return PROCESSOR_NAMES[validation.file_type]

    @staticmethod
    def get_supported_extensions() -> dict[FileType, tuple[str, ...]]:
        """Return the recognized extensions for each file type."""
        return {
            FileType.CSV: CSV_EXTENSIONS,
            FileType.EXCEL: EXCEL_EXTENSIONS,
            FileType.XML: XML_EXTENSIONS,
        }

    def is_file_type_supported(self, path: Path | str) -> bool:
        """Return True when ``path`` validates and has a detected type."""
        validation = self.validate_file(path)
        return validation.is_valid and validation.file_type is not None


__all__ = ["FileValidator", "LARGE_FILE_BYTES", "LOW_CONFIDENCE_THRESHOLD", "PROCESSOR_NAMES"]
