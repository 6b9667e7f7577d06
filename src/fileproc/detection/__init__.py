"""File type detection heuristics."""

from .detector import CONFIDENCE_DIVISOR, TypeDetector, detect_file_type
from .models import DetectionResult, FileType, ScoreTriple
from .sampler import MAX_SAMPLE_SIZE, ContentSample, read_sample
from .scoring import (
    CSV_EXTENSIONS,
    EXCEL_EXTENSIONS,
    XML_EXTENSIONS,
    score_content,
    score_extension,
    score_filename,
)

__all__ = [
    "CONFIDENCE_DIVISOR",
    "CSV_EXTENSIONS",
    "EXCEL_EXTENSIONS",
    "XML_EXTENSIONS",
    "MAX_SAMPLE_SIZE",
    "ContentSample",
    "DetectionResult",
    "FileType",
    "ScoreTriple",
    "TypeDetector",
    "detect_file_type",
    "read_sample",
    "score_content",
    "score_extension",
    "score_filename",
]
