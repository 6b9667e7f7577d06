"""Data models produced during file-type detection."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileType(str, Enum):
    """Supported file types."""

    CSV = "csv"
    EXCEL = "excel"
    XML = "xml"

    @property
    def label(self) -> str:
        """Return the human-facing name used in generic messages."""
        return _LABELS[self]


_LABELS = {FileType.CSV: "CSV", FileType.EXCEL: "Excel", FileType.XML: "XML"}


class ScoreTriple(BaseModel):
    """Points accumulated per file type from a single scoring source.

    Attributes:
        csv: Points attributed to CSV.
        excel: Points attributed to Excel.
        xml: Points attributed to XML.
    """

    model_config = ConfigDict(frozen=True)

    csv: float = Field(default=0.0, ge=0)
    excel: float = Field(default=0.0, ge=0)
    xml: float = Field(default=0.0, ge=0)

    def __getitem__(self, file_type: FileType) -> float:
        return getattr(self, file_type.value)

    def __add__(self, other: "ScoreTriple") -> "ScoreTriple":
        if not isinstance(other, ScoreTriple):
            return NotImplemented
        return ScoreTriple(
            csv=self.csv + other.csv,
            excel=self.excel + other.excel,
            xml=self.xml + other.xml,
        )

    def best(self) -> tuple[Optional[FileType], float]:
        """Return the highest-scoring type, breaking ties CSV, then Excel, then XML."""
        max_score = max(self.csv, self.excel, self.xml)
        if max_score <= 0:
            return None, 0.0
        for file_type in (FileType.CSV, FileType.EXCEL, FileType.XML):
            if self[file_type] == max_score:
                return file_type, max_score
        return None, 0.0  # pragma: no cover - unreachable


class DetectionResult(BaseModel):
    """Best-guess file type with its confidence and supporting reasons.

    Attributes:
        detected_type: Winning file type, or None when nothing matched.
        confidence: Normalized score in [0, 1].
        reasons: Ordered, human-readable explanations.
    """

    model_config = ConfigDict(frozen=True)

    detected_type: Optional[FileType] = None
    confidence: float = Field(default=0.0, ge=0, le=1)
    reasons: List[str] = Field(default_factory=list)


__all__ = ["FileType", "ScoreTriple", "DetectionResult"]
