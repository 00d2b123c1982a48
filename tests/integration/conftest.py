from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from legallyclear.config.settings import Settings
from legallyclear.web.app import create_app
from tests.helpers import FakeModelClient


@pytest.fixture
def model_client() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        model_provider="example",
        model_name="test-model",
        min_scan_seconds=0,
        max_upload_bytes=1024,
    )


@pytest.fixture
def client(
    test_settings: Settings, model_client: FakeModelClient
) -> Generator[TestClient, None, None]:
    # Background analyses run on the client's portal loop between requests.
    with TestClient(create_app(test_settings, client=model_client)) as test_client:
        yield test_client
