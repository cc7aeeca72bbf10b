"""
Route planner: driving directions with transient incident annotations

Geocodes start and destination addresses, requests driving routes from
OpenRouteService and renders them with user-reported incidents on an
interactive map.
"""

__version__ = "0.1.0"

from .core.models import Coordinate, Incident, IncidentType, Route, RouteSummary, Suggestion
from .core.state import AppState
from .planner.service import RoutePlannerService

__all__ = [
    "AppState",
    "Coordinate",
    "Incident",
    "IncidentType",
    "Route",
    "RouteSummary",
    "Suggestion",
    "RoutePlannerService",
]
