import base64
from typing import Protocol

from legallyclear.ingestion.exceptions import (
    FileReadError,
    FileTooLargeError,
    InvalidFileTypeError,
)
from legallyclear.ingestion.models import UploadedDocument
from legallyclear.logging.logger import Log

INVALID_TYPE_MESSAGE = "Please upload an image file (JPEG, PNG, WEBP)."


class UploadSource(Protocol):
    """Anything that looks like an uploaded file (FastAPI's UploadFile does)."""

    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes: ...


def to_data_url(raw_bytes: bytes, mime_type: str) -> str:
    """Encode bytes as a data URL: data:{mime};base64,{payload}"""
    encoded = base64.b64encode(raw_bytes).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def split_base64_payload(data_url: str) -> str:
    """Return the part of a data URL after the first comma."""
    _, sep, payload = data_url.partition(",")
    if not sep:
        raise FileReadError("Malformed data URL: missing ',' delimiter")
    return payload


class FileIngestor:
    """Validates an uploaded file and turns it into an UploadedDocument."""

    def __init__(self, max_upload_bytes: int) -> None:
        self._max_upload_bytes = max_upload_bytes

    async def ingest(self, upload: UploadSource) -> UploadedDocument:
        """Read and encode an image upload.

        Raises:
            InvalidFileTypeError: if the declared type does not start with 'image/'.
            FileReadError: if the content cannot be read or is empty.
            FileTooLargeError: if the content exceeds max_upload_bytes.
        """
        filename = upload.filename or "document"
        mime_type = (upload.content_type or "").strip()
        if not mime_type.startswith("image/"):
            Log.warning(f"Rejected upload '{filename}' with type '{mime_type or 'unknown'}'")
            raise InvalidFileTypeError(INVALID_TYPE_MESSAGE)

        try:
            raw_bytes = await upload.read(self._max_upload_bytes + 1)
        except OSError as exc:
            raise FileReadError(f"Failed to read '{filename}': {exc}") from exc

        if not raw_bytes:
            raise FileReadError(f"Uploaded file '{filename}' is empty")
        if len(raw_bytes) > self._max_upload_bytes:
            raise FileTooLargeError(
                f"Uploaded file '{filename}' is larger than the upload limit "
                f"(max {self._max_upload_bytes} bytes)"
            )

        preview_data_url = to_data_url(raw_bytes, mime_type)
        document = UploadedDocument(
            filename=filename,
            mime_type=mime_type,
            preview_data_url=preview_data_url,
            base64_payload=split_base64_payload(preview_data_url),
            raw_bytes=raw_bytes,
        )
        Log.info(f"Accepted upload '{filename}' ({mime_type}, {document.size_bytes} bytes)")
        return document
