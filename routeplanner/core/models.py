"""
Core data models for route planning and incident annotation
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .formatting import format_distance, format_duration


def swap_order(pair: Sequence[float]) -> List[float]:
    """Swap a two-element coordinate pair between (lat, lon) and (lon, lat)"""
    if len(pair) != 2:
        raise ValueError(f"Coordinate pair must have exactly 2 values, got {len(pair)}")
    first, second = pair
    return [second, first]


class Coordinate(BaseModel):
    """
    Geographic position in (lat, lon) order

    Routing APIs exchange positions as [lon, lat]; use to_lonlat()
    and from_lonlat() at that boundary only.
    """

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lon: float = Field(..., ge=-180, le=180, description="Longitude")

    @classmethod
    def from_lonlat(cls, pair: Sequence[float]) -> "Coordinate":
        """Build from an API [lon, lat] pair"""
        lat, lon = swap_order(pair)
        return cls(lat=lat, lon=lon)

    def to_lonlat(self) -> List[float]:
        """API [lon, lat] representation"""
        return swap_order([self.lat, self.lon])

    def as_latlon(self) -> List[float]:
        """[lat, lon] list as used by map widgets"""
        return [self.lat, self.lon]


class RouteSummary(BaseModel):
    """Aggregate distance and duration of a route"""

    model_config = ConfigDict(frozen=True)

    distance: float = Field(..., ge=0, description="Distance in metres")
    duration: float = Field(..., ge=0, description="Duration in seconds")

    @property
    def distance_km(self) -> float:
        return self.distance / 1000

    @property
    def distance_text(self) -> str:
        return format_distance(self.distance)

    @property
    def duration_text(self) -> str:
        return format_duration(self.duration)


class Route(BaseModel):
    """Computed driving route"""

    model_config = ConfigDict(frozen=True)

    geometry: List[Coordinate] = Field(..., min_length=1, description="Path in (lat, lon) order")
    summary: RouteSummary = Field(..., description="Distance and duration")


class Suggestion(BaseModel):
    """Address suggestion shown while the user types"""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Display string")
    key: str = Field(..., description="Stable key for list rendering")
    is_location: bool = Field(False, description="Synthetic 'use my location' option")


LOCATION_OPTION = Suggestion(label="My location", key="my-location", is_location=True)


class IncidentType(str, Enum):
    """Closed set of incident categories"""

    ACCIDENT = "accident"
    TRAFFIC = "traffic"
    POLICE = "police"
    CLOSURE = "closure"

    @property
    def label(self) -> str:
        return _INCIDENT_LABELS[self]


_INCIDENT_LABELS = {
    IncidentType.ACCIDENT: "Accident",
    IncidentType.TRAFFIC: "Traffic jam",
    IncidentType.POLICE: "Police check",
    IncidentType.CLOSURE: "Road closed",
}


class Incident(BaseModel):
    """User-reported incident, kept for the session only"""

    model_config = ConfigDict(frozen=True)

    type: IncidentType = Field(..., description="Incident category")
    position: Coordinate = Field(..., description="User position when reported")
    reported_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="When reported")


class GeocodingResult(BaseModel):
    """Result of resolving an address"""

    address: str = Field(description="Original address")
    position: Coordinate = Field(description="Resolved position")
    label: Optional[str] = Field(None, description="Formatted address from API")
    confidence: Optional[float] = Field(None, description="Confidence score")
