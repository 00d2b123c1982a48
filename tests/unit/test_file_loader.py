import asyncio
import base64

import pytest

from legallyclear.ingestion.exceptions import (
    FileReadError,
    FileTooLargeError,
    InvalidFileTypeError,
)
from legallyclear.ingestion.file_loader import (
    FileIngestor,
    split_base64_payload,
    to_data_url,
)
from legallyclear.ingestion.models import UploadedDocument
from tests.helpers import FakeUpload


def _ingest(upload: FakeUpload, max_upload_bytes: int = 1024) -> UploadedDocument:
    return asyncio.run(FileIngestor(max_upload_bytes).ingest(upload))


class TestIngestAcceptsImages:
    def test_payload_decodes_to_original_bytes(self, png_bytes: bytes) -> None:
        doc = _ingest(FakeUpload("bill.png", "image/png", png_bytes))
        assert base64.b64decode(doc.base64_payload) == png_bytes

    def test_keeps_declared_mime_type(self, png_bytes: bytes) -> None:
        doc = _ingest(FakeUpload("bill.webp", "image/webp", png_bytes))
        assert doc.mime_type == "image/webp"

    def test_preview_is_data_url(self, png_bytes: bytes) -> None:
        doc = _ingest(FakeUpload("bill.png", "image/png", png_bytes))
        assert doc.preview_data_url == f"data:image/png;base64,{doc.base64_payload}"

    def test_keeps_filename_and_bytes(self, png_bytes: bytes) -> None:
        doc = _ingest(FakeUpload("lease.jpg", "image/jpeg", png_bytes))
        assert doc.filename == "lease.jpg"
        assert doc.raw_bytes == png_bytes
        assert doc.size_bytes == len(png_bytes)

    def test_missing_filename_gets_default(self, png_bytes: bytes) -> None:
        doc = _ingest(FakeUpload(None, "image/png", png_bytes))
        assert doc.filename == "document"

    def test_arbitrary_binary_round_trips(self) -> None:
        content = bytes(range(256)) * 3
        doc = _ingest(FakeUpload("scan.png", "image/png", content))
        assert base64.b64decode(doc.base64_payload) == content


class TestIngestRejects:
    @pytest.mark.parametrize(
        "content_type",
        ["application/pdf", "text/plain", "", None, "video/mp4", "imagex/png"],
    )
    def test_non_image_types(self, content_type: str | None, png_bytes: bytes) -> None:
        with pytest.raises(InvalidFileTypeError, match="Please upload an image file"):
            _ingest(FakeUpload("contract.pdf", content_type, png_bytes))

    def test_non_image_is_not_read(self) -> None:
        upload = FakeUpload("contract.pdf", "application/pdf", error=OSError("should not read"))
        with pytest.raises(InvalidFileTypeError):
            _ingest(upload)

    def test_empty_file(self) -> None:
        with pytest.raises(FileReadError, match="empty"):
            _ingest(FakeUpload("blank.png", "image/png", b""))

    def test_read_failure_is_chained(self) -> None:
        cause = OSError("disk gone")
        with pytest.raises(FileReadError, match="disk gone") as exc_info:
            _ingest(FakeUpload("bill.png", "image/png", error=cause))
        assert exc_info.value.__cause__ is cause

    def test_too_large(self) -> None:
        with pytest.raises(FileTooLargeError, match="max 8"):
            _ingest(FakeUpload("big.png", "image/png", b"x" * 9), max_upload_bytes=8)

    def test_reads_at_most_one_byte_past_limit(self) -> None:
        upload = FakeUpload("huge.png", "image/png", b"x" * 4096)
        with pytest.raises(FileTooLargeError):
            _ingest(upload, max_upload_bytes=8)
        assert upload.read_sizes == [9]

    def test_exactly_at_limit_is_accepted(self) -> None:
        doc = _ingest(FakeUpload("ok.png", "image/png", b"x" * 8), max_upload_bytes=8)
        assert doc.size_bytes == 8


class TestDataUrlHelpers:
    def test_split_takes_text_after_first_comma(self) -> None:
        assert split_base64_payload("data:image/png;base64,QUJD") == "QUJD"

    def test_split_rejects_url_without_comma(self) -> None:
        with pytest.raises(FileReadError, match="Malformed"):
            split_base64_payload("data:image/png;base64")

    def test_to_data_url(self) -> None:
        assert to_data_url(b"ABC", "image/gif") == "data:image/gif;base64,QUJD"
