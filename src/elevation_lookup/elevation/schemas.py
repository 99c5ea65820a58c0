"""Pydantic schemas for coordinates, lookup results and API responses."""

from pydantic import BaseModel, ConfigDict, Field

from elevation_lookup.elevation.formatting import format_elevation


class Coordinate(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class ElevationResult(BaseModel):
    """Elevation resolved for a single coordinate."""

    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    elevation_meters: float

    @property
    def label(self) -> str:
        """Map annotation text, e.g. '273m'."""
        return f"{format_elevation(self.elevation_meters)}m"


class ElevationResponse(BaseModel):
    """Response schema for the elevation endpoint."""

    latitude: float
    longitude: float
    elevation: float
    label: str

    @classmethod
    def from_result(cls, result: ElevationResult) -> "ElevationResponse":
        return cls(
            latitude=result.coordinate.latitude,
            longitude=result.coordinate.longitude,
            elevation=result.elevation_meters,
            label=result.label,
        )
