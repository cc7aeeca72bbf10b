"""
Planning session orchestration
"""

from .geolocation import Locator, StaticLocator, parse_position
from .requests import RequestTracker
from .service import RoutePlannerService

__all__ = ["Locator", "StaticLocator", "parse_position", "RequestTracker", "RoutePlannerService"]
