"""File type detection combining extension, content, and filename signals."""

from __future__ import annotations

import logging
from pathlib import Path

from .models import DetectionResult, FileType, ScoreTriple
from .sampler import MAX_SAMPLE_SIZE, read_sample
from .scoring import score_content, score_extension, score_filename

LOGGER = logging.getLogger(__name__)

# Extension (1) + content (1) + filename (0.3) tops out at 2.3; the divisor stays 3.
CONFIDENCE_DIVISOR = 3


class TypeDetector:
    """Classify a file as CSV, Excel, or XML from heuristic signals."""

    def __init__(self, sample_size: int = MAX_SAMPLE_SIZE) -> None:
        self.sample_size = sample_size

    def detect(self, path: Path | str) -> DetectionResult:
        """Return the best-guess type, its confidence, and the reasons behind it.

        Never raises; failures are reported as reasons on the result.

        Args:
            path: File to inspect.

        Returns:
            DetectionResult: Detection outcome for the file.
        """
        reasons: list[str] = []
        detected: FileType | None = None
        confidence = 0.0

        try:
            file_path = Path(path)
            extension = file_path.suffix.lower()
            stem = file_path.stem.lower()

            sample = read_sample(file_path, self.sample_size)
            if sample.error:
                reasons.append(f"Content analysis failed: {sample.error}")

            by_extension = score_extension(extension)
            by_content = score_content(sample.text, sample.raw)
            by_filename = score_filename(stem)
            combined = by_extension + by_content + by_filename
            LOGGER.debug(
                "Scores for %s: extension=%s content=%s filename=%s",
                file_path,
                by_extension,
                by_content,
                by_filename,
            )

            detected, max_score = combined.best()
            if detected is not None:
                confidence = min(max_score / CONFIDENCE_DIVISOR, 1.0)
                reasons.extend(_explain(detected, by_extension, by_content, by_filename))
        except Exception as exc:
            LOGGER.debug("Detection failed for %s", path, exc_info=True)
            reasons.append(f"Detection error: {exc}")

        return DetectionResult(detected_type=detected, confidence=confidence, reasons=reasons)


def _explain(
    file_type: FileType,
    by_extension: ScoreTriple,
    by_content: ScoreTriple,
    by_filename: ScoreTriple,
) -> list[str]:
    tag = file_type.value.upper()
    reasons = [f"{file_type.label} indicators found"]
    if by_extension[file_type] > 0:
        reasons.append(f"File extension matches {tag}")
    if by_content[file_type] > 0:
        reasons.append(f"File content matches {tag} format")
    if by_filename[file_type] > 0:
        reasons.append(f"Filename suggests {tag} format")
    return reasons


def detect_file_type(path: Path | str) -> DetectionResult:
    """Detect the type of ``path`` with default settings."""
    return TypeDetector().detect(path)


__all__ = ["CONFIDENCE_DIVISOR", "TypeDetector", "detect_file_type"]
