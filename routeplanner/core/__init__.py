"""
Core data models, formatting and application state
"""

from .exceptions import (
    ConfigError,
    GeocodeNoMatchError,
    GeolocationUnavailableError,
    MalformedResponseError,
    RoutePlannerError,
    ServiceError,
)
from .formatting import format_distance, format_duration
from .models import (
    LOCATION_OPTION,
    Coordinate,
    GeocodingResult,
    Incident,
    IncidentType,
    Route,
    RouteSummary,
    Suggestion,
    swap_order,
)
from .state import AppState

__all__ = [
    # Models
    "Coordinate",
    "GeocodingResult",
    "Incident",
    "IncidentType",
    "LOCATION_OPTION",
    "Route",
    "RouteSummary",
    "Suggestion",
    "swap_order",
    "AppState",
    # Formatting
    "format_distance",
    "format_duration",
    # Errors
    "RoutePlannerError",
    "GeolocationUnavailableError",
    "GeocodeNoMatchError",
    "ServiceError",
    "MalformedResponseError",
    "ConfigError",
]
