"""
OpenRouteService request models
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from routeplanner.core.models import Coordinate

TOLLWAYS = "tollways"


class DirectionsOptions(BaseModel):
    """Routing options for the directions endpoint"""

    avoid_features: List[str] = Field(default_factory=list, description="Road features to avoid")


class DirectionsRequest(BaseModel):
    """Body of a directions request; coordinates are [lon, lat] pairs"""

    coordinates: List[List[float]] = Field(..., min_length=2, description="[lon, lat] waypoints")
    options: Optional[DirectionsOptions] = Field(None, description="Omitted when no option is set")

    @classmethod
    def between(cls, start: Coordinate, end: Coordinate, avoid_tolls: bool = False) -> "DirectionsRequest":
        options = DirectionsOptions(avoid_features=[TOLLWAYS]) if avoid_tolls else None
        return cls(coordinates=[start.to_lonlat(), end.to_lonlat()], options=options)

    def to_body(self) -> dict:
        """JSON body without unset options"""
        return self.model_dump(exclude_none=True)
