"""
Provider port for geocoding and routing services
"""

from abc import ABC, abstractmethod
from typing import List

from routeplanner.core.models import Coordinate, GeocodingResult, Route, Suggestion


class RoutingProvider(ABC):
    """
    Narrow interface to a geocoding/routing provider
    Every implementation raises RoutePlannerError subclasses on failure
    """

    @abstractmethod
    async def resolve_address(self, address: str) -> GeocodingResult:
        """Resolve a free-text address to its first candidate position"""

    @abstractmethod
    async def suggest(self, text: str) -> List[Suggestion]:
        """Address suggestions for partial text"""

    @abstractmethod
    async def compute_route(self, start: Coordinate, end: Coordinate, avoid_tolls: bool = False) -> Route:
        """Driving route between two positions"""
