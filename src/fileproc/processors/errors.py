"""Processor exceptions."""


class ProcessingError(Exception):
    """Raised when a file cannot be parsed or converted."""


class SourceNotFoundError(ProcessingError):
    """Raised when the input file does not exist."""


class EmptySourceError(ProcessingError):
    """Raised when the input file has no content."""
