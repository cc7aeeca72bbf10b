"""
OpenRouteService integration for geocoding and directions
"""

from .client import OpenRouteServiceClient
from .models import DirectionsRequest
from .ports import RoutingProvider

__all__ = ["OpenRouteServiceClient", "DirectionsRequest", "RoutingProvider"]
