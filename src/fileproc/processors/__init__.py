"""Format-specific processors that reshape parser output for JSON conversion."""

from .base import ProcessorValidation
from .csv_processor import CSVProcessor, CSVProcessorOptions, CSVProcessorResult, CSVStatistics
from .errors import EmptySourceError, ProcessingError, SourceNotFoundError
from .excel_processor import (
    ExcelProcessor,
    ExcelProcessorOptions,
    ExcelProcessorResult,
    ExcelSheetInfo,
    ExcelStatistics,
)
from .xml_processor import (
    XmlElement,
    XmlProcessor,
    XmlProcessorOptions,
    XmlProcessorResult,
    XmlStatistics,
    XmlStructureInfo,
)

__all__ = [
    "CSVProcessor",
    "CSVProcessorOptions",
    "CSVProcessorResult",
    "CSVStatistics",
    "EmptySourceError",
    "ExcelProcessor",
    "ExcelProcessorOptions",
    "ExcelProcessorResult",
    "ExcelSheetInfo",
    "ExcelStatistics",
    "ProcessingError",
    "ProcessorValidation",
    "SourceNotFoundError",
    "XmlElement",
    "XmlProcessor",
    "XmlProcessorOptions",
    "XmlProcessorResult",
    "XmlStatistics",
    "XmlStructureInfo",
]
