"""Configuration models describing fileproc settings."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileprocBaseModel(BaseModel):
    """Shared configuration for fileproc Pydantic settings models."""

    model_config = ConfigDict(extra="forbid")


class CSVSettings(FileprocBaseModel):
    """Defaults applied when reading delimited text files.

    Attributes:
        delimiter: Field separator passed to the CSV reader.
        encoding: Text encoding used to open CSV files.
        preview_rows: Number of rows shown by preview output.
    """

    delimiter: str = ","
    encoding: str = "utf-8"
    preview_rows: int = Field(default=5, ge=0)


class ExcelSettings(FileprocBaseModel):
    """Defaults applied when reading workbooks.

    Attributes:
        sheet_index: Sheet processed when no sheet name is given.
        preview_rows: Number of rows shown by preview output.
    """

    sheet_index: int = Field(default=0, ge=0)
    preview_rows: int = Field(default=5, ge=0)


class XMLSettings(FileprocBaseModel):
    """Defaults applied when reading XML documents.

    Attributes:
        preview_depth: Maximum nesting depth rendered by previews.
    """

    preview_depth: int = Field(default=3, ge=1)


class LoggingSettings(FileprocBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
        file: Optional log file path; enables a rotating file handler.
        max_size_mb: Maximum log size before rotation.
        backup_count: Number of historical log files to retain.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file: Optional[str] = None
    max_size_mb: int = 10
    backup_count: int = 3


class CLIOptions(FileprocBaseModel):
    """CLI behavior defaults.

    Attributes:
        default_output_dir: Directory used for relative `--output` paths.
    """

    default_output_dir: Optional[str] = None


class FileprocConfig(FileprocBaseModel):
    """Top-level configuration struct for fileproc.

    Attributes:
        csv: CSV processing defaults.
        excel: Excel processing defaults.
        xml: XML processing defaults.
        logging: Logging configuration.
        cli: CLI defaults.
    """

    csv: CSVSettings = Field(default_factory=CSVSettings)
    excel: ExcelSettings = Field(default_factory=ExcelSettings)
    xml: XMLSettings = Field(default_factory=XMLSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "FileprocBaseModel",
    "CSVSettings",
    "ExcelSettings",
    "XMLSettings",
    "LoggingSettings",
    "CLIOptions",
    "FileprocConfig",
]
