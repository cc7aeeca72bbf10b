"""
Error taxonomy for the route planner
"""

from typing import Optional


class RoutePlannerError(Exception):
    """Base error for every failure of an external lookup"""
    pass


class GeolocationUnavailableError(RoutePlannerError):
    """Device position could not be read (denied, unsupported or timed out)"""
    pass


class GeocodeNoMatchError(RoutePlannerError):
    """Geocoding returned zero candidates"""

    def __init__(self, address: str):
        super().__init__(f"No match found for address: {address}")
        self.address = address


class ServiceError(RoutePlannerError):
    """Network failure or error status from the routing service"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(RoutePlannerError):
    """Routing service answered with an unexpected payload"""
    pass


class ConfigError(Exception):
    """Settings file could not be read, parsed or written"""
    pass
