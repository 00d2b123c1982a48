class IngestionError(Exception):
    """Base exception for all upload ingestion errors."""


class InvalidFileTypeError(IngestionError):
    """Raised when the declared MIME type is not an image type."""


class FileReadError(IngestionError):
    """Raised when the uploaded file cannot be read or is empty."""


class FileTooLargeError(IngestionError):
    """Raised when the uploaded file exceeds the configured size limit."""
