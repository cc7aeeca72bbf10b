"""
Map rendering
"""

from .map import MapRenderer, build_icon

__all__ = ["MapRenderer", "build_icon"]
