"""Functional tests for the elevation API routes."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from elevation_lookup.elevation.schemas import Coordinate, ElevationResult
from elevation_lookup.elevation.service import ElevationLookupService
from elevation_lookup.exceptions import (
    ElevationLookupError,
    EmptyDataError,
    HttpStatusError,
    MalformedResponseError,
    NetworkError,
)
from elevation_lookup.main import app


@pytest.fixture
def mock_service() -> MagicMock:
    """Create a mock ElevationLookupService."""
    return MagicMock(spec=ElevationLookupService)


@pytest.fixture
def client(mock_service: MagicMock) -> TestClient:
    """Create a TestClient with the mocked service injected."""
    app.state.elevation_service = mock_service
    return TestClient(app, raise_server_exceptions=False)


class TestElevationEndpoint:
    def test_returns_elevation(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.lookup_async.return_value = ElevationResult(
            coordinate=Coordinate(latitude=47.5, longitude=-10.25),
            elevation_meters=273.0,
        )

        response = client.get("/api/v1/elevation", params={"lat": 47.5, "lng": -10.25})

        assert response.status_code == 200
        assert response.json() == {
            "latitude": 47.5,
            "longitude": -10.25,
            "elevation": 273.0,
            "label": "273m",
        }
        mock_service.lookup_async.assert_awaited_once_with(
            Coordinate(latitude=47.5, longitude=-10.25)
        )

    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (NetworkError("Connection refused"), 503),
            (HttpStatusError(500), 502),
            (MalformedResponseError("Response is not valid JSON"), 502),
            (EmptyDataError(), 404),
            (ElevationLookupError("Unexpected lookup failure", code="UNEXPECTED_ERROR"), 502),
        ],
    )
    def test_maps_lookup_errors(
        self,
        client: TestClient,
        mock_service: MagicMock,
        error: ElevationLookupError,
        status_code: int,
    ) -> None:
        mock_service.lookup_async.return_value = error

        response = client.get("/api/v1/elevation", params={"lat": 0.0, "lng": 0.0})

        assert response.status_code == status_code
        assert response.json()["detail"] == error.user_message

    def test_network_error_detail(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.lookup_async.return_value = NetworkError("Connection refused")

        response = client.get("/api/v1/elevation", params={"lat": 0.0, "lng": 0.0})

        assert response.json()["detail"] == "Error getting data: Connection refused"

    @pytest.mark.parametrize(
        "params",
        [
            {"lat": 91.0, "lng": 0.0},
            {"lat": 0.0, "lng": -180.5},
            {"lat": "nan", "lng": 0.0},
            {"lat": "47,5", "lng": "-10,25"},
            {"lat": 1.0},
            {},
        ],
    )
    def test_rejects_invalid_parameters(
        self, client: TestClient, mock_service: MagicMock, params: dict[str, object]
    ) -> None:
        response = client.get("/api/v1/elevation", params=params)

        assert response.status_code == 422
        mock_service.lookup_async.assert_not_called()
