"""
Device position lookup
"""

from abc import ABC, abstractmethod
from typing import Optional

from routeplanner.core.exceptions import GeolocationUnavailableError
from routeplanner.core.models import Coordinate


class Locator(ABC):
    """Source of the current device position"""

    @abstractmethod
    async def locate(self) -> Coordinate:
        """
        Read the current position once

        Raises:
            GeolocationUnavailableError: If the position cannot be read
        """


class StaticLocator(Locator):
    """Locator reporting a fixed position, or unavailable when none is given"""

    def __init__(self, position: Optional[Coordinate] = None):
        self.position = position

    async def locate(self) -> Coordinate:
        if self.position is None:
            raise GeolocationUnavailableError("No device position available")
        return self.position


def parse_position(text: str) -> Coordinate:
    """Parse a "lat,lon" string such as "48.8566,2.3522" """
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2:
        raise ValueError(f"Position must be 'lat,lon', got: {text}")
    lat, lon = (float(part) for part in parts)
    return Coordinate(lat=lat, lon=lon)
