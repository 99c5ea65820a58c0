"""API routes for elevation lookups."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from elevation_lookup.elevation.schemas import Coordinate, ElevationResponse
from elevation_lookup.elevation.service import ElevationLookupService
from elevation_lookup.exceptions import (
    ElevationLookupError,
    EmptyDataError,
    HttpStatusError,
    MalformedResponseError,
    NetworkError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["elevation"])

ERROR_STATUS_CODES: dict[type[ElevationLookupError], int] = {
    NetworkError: status.HTTP_503_SERVICE_UNAVAILABLE,
    HttpStatusError: status.HTTP_502_BAD_GATEWAY,
    MalformedResponseError: status.HTTP_502_BAD_GATEWAY,
    EmptyDataError: status.HTTP_404_NOT_FOUND,
}


def get_elevation_service(request: Request) -> ElevationLookupService:
    """FastAPI dependency that retrieves the ElevationLookupService from app state."""
    service: ElevationLookupService = request.app.state.elevation_service
    return service


@router.get("/elevation", response_model=ElevationResponse, summary="Look up elevation")
async def get_elevation(
    lat: Annotated[float, Query(ge=-90, le=90, allow_inf_nan=False)],
    lng: Annotated[float, Query(ge=-180, le=180, allow_inf_nan=False)],
    service: Annotated[ElevationLookupService, Depends(get_elevation_service)],
) -> ElevationResponse:
    """Look up the elevation of a single coordinate.

    Args:
        lat: Latitude in decimal degrees.
        lng: Longitude in decimal degrees.
        service: Injected ElevationLookupService instance.

    Returns:
        The elevation together with its map label.
    """
    coordinate = Coordinate(latitude=lat, longitude=lng)
    outcome = await service.lookup_async(coordinate)

    if isinstance(outcome, ElevationLookupError):
        status_code = ERROR_STATUS_CODES.get(
            type(outcome), status.HTTP_502_BAD_GATEWAY
        )
        logger.info(
            "Elevation lookup answered with error",
            extra={"error_code": outcome.code, "status_code": status_code},
        )
        raise HTTPException(status_code=status_code, detail=outcome.user_message)

    return ElevationResponse.from_result(outcome)
