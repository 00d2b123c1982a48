import pytest

from legallyclear.ingestion.models import UploadedDocument
from tests.helpers import PNG_BYTES, make_document


@pytest.fixture()
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture()
def document() -> UploadedDocument:
    return make_document()
