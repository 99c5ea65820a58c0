"""Shared test fixtures."""

from collections.abc import Callable, Iterator
from unittest.mock import MagicMock

import pytest
import requests

from elevation_lookup.config import Settings
from elevation_lookup.elevation.service import ElevationLookupService

API_URL = "https://elevation.test/elevation/v1/ele/"


@pytest.fixture
def settings() -> Settings:
    """Create test settings pointing at a fake endpoint."""
    return Settings(
        api_url=API_URL,
        connect_timeout=10.0,
        read_timeout=10.0,
        max_workers=2,
    )


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Factory for fake ``requests.Response`` objects."""

    def _make(body: str | bytes, status_code: int = 200) -> MagicMock:
        response = MagicMock(spec=requests.Response)
        response.status_code = status_code
        response.content = body.encode("utf-8") if isinstance(body, str) else body
        return response

    return _make


@pytest.fixture
def session() -> MagicMock:
    """A mocked HTTP session; tests configure ``session.get``."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def service(settings: Settings, session: MagicMock) -> Iterator[ElevationLookupService]:
    """Create an ElevationLookupService backed by the mocked session."""
    service = ElevationLookupService(settings, session=session)
    yield service
    service.shutdown()
