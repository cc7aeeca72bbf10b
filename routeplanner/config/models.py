"""
Settings models for the route planner
Covers the routing service connection and the static map styling
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from routeplanner.core.models import Coordinate, IncidentType

_SHADOW_URL = "https://unpkg.com/leaflet@1.7.1/dist/images/marker-shadow.png"


class ConfigFormat(str, Enum):
    """Supported settings file formats"""

    YAML = "yaml"
    JSON = "json"


class IconSpec(BaseModel):
    """Static description of a map marker icon"""

    url: str = Field(..., description="Icon image URL")
    size: Tuple[int, int] = Field((25, 41), description="Icon size in pixels")
    anchor: Tuple[int, int] = Field((12, 41), description="Point of the icon placed on the position")
    popup_anchor: Optional[Tuple[int, int]] = Field(None, description="Popup offset from the anchor")
    shadow_url: Optional[str] = Field(None, description="Shadow image URL")


def _pin(url: str) -> IconSpec:
    return IconSpec(url=url, popup_anchor=(1, -34), shadow_url=_SHADOW_URL)


def _badge(url: str) -> IconSpec:
    return IconSpec(url=url, size=(32, 32), anchor=(16, 32))


def _default_incident_icons() -> Dict[IncidentType, IconSpec]:
    return {
        IncidentType.ACCIDENT: _badge("https://cdn-icons-png.flaticon.com/512/565/565547.png"),
        IncidentType.TRAFFIC: _badge("https://cdn-icons-png.flaticon.com/512/2331/2331970.png"),
        IncidentType.POLICE: _badge("https://cdn-icons-png.flaticon.com/512/684/684908.png"),
        IncidentType.CLOSURE: _badge("https://cdn-icons-png.flaticon.com/512/565/565486.png"),
    }


_USER_ICON_URL = "https://unpkg.com/leaflet@1.9.4/dist/images/marker-icon.png"
_DESTINATION_ICON_URL = (
    "https://raw.githubusercontent.com/pointhi/leaflet-color-markers/master/img/marker-icon-red.png"
)


class MapStyle(BaseModel):
    """Static configuration injected into the map renderer"""

    default_center: Coordinate = Field(
        Coordinate(lat=46.603354, lon=1.888334),
        description="Map center when the user position is unknown"
    )
    zoom: int = Field(13, ge=1, le=20, description="Initial zoom level")
    tiles_url: str = Field(
        "https://{s}.tile.openstreetmap.fr/osmfr/{z}/{x}/{y}.png",
        description="Base tile URL template"
    )
    attribution: str = Field("&copy; OpenStreetMap", description="Tile attribution")
    route_color: str = Field("blue", description="Route polyline color")

    user_icon: IconSpec = Field(default_factory=lambda: _pin(_USER_ICON_URL))
    start_icon: IconSpec = Field(default_factory=lambda: _pin(_USER_ICON_URL))
    destination_icon: IconSpec = Field(default_factory=lambda: _pin(_DESTINATION_ICON_URL))
    incident_icons: Dict[IncidentType, IconSpec] = Field(default_factory=_default_incident_icons)

    user_label: str = Field("You are here", description="Popup of the user marker")
    start_label: str = Field("Start", description="Popup of the start marker")
    destination_label: str = Field("Destination", description="Popup of the destination marker")

    @field_validator("incident_icons")
    @classmethod
    def validate_incident_icons(cls, v):
        """Every incident category needs an icon"""
        missing = [t.value for t in IncidentType if t not in v]
        if missing:
            raise ValueError(f"Missing incident icons for: {', '.join(missing)}")
        return v


class Settings(BaseModel):
    """Route planner settings"""

    api_key: Optional[str] = Field(None, description="OpenRouteService API key")
    base_url: str = Field("https://api.openrouteservice.org", description="Routing service base URL")
    country: str = Field("FR", min_length=2, max_length=3, description="Country filter for geocoding")
    profile: str = Field("driving-car", description="Directions profile")
    autocomplete_size: int = Field(5, ge=1, le=40, description="Maximum suggestions per query")
    min_query_length: int = Field(3, ge=1, description="Shortest text sent to autocomplete")
    timeout: int = Field(30, ge=1, description="HTTP timeout in seconds")

    fallback_position: Coordinate = Field(
        Coordinate(lat=48.8566, lon=2.3522),
        description="User position when geolocation is unavailable"
    )
    map: MapStyle = Field(default_factory=MapStyle)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @field_validator("country")
    @classmethod
    def normalize_country(cls, v):
        return v.upper()
