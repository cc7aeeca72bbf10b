"""
Folium map rendering of a planning session
"""

import logging
from pathlib import Path
from typing import Optional, Union

import folium

from routeplanner.config.models import IconSpec, MapStyle
from routeplanner.core.models import Coordinate
from routeplanner.core.state import AppState


def build_icon(spec: IconSpec) -> folium.CustomIcon:
    """New folium icon from its static spec; icons cannot be shared between markers"""
    return folium.CustomIcon(
        icon_image=spec.url,
        icon_size=spec.size,
        icon_anchor=spec.anchor,
        popup_anchor=spec.popup_anchor,
        shadow_image=spec.shadow_url,
    )


class MapRenderer:
    """Draws tiles, markers, route and incidents from an AppState"""

    def __init__(self, style: Optional[MapStyle] = None):
        self.style = style or MapStyle()
        self.logger = logging.getLogger(__name__)

    def _marker(self, position: Coordinate, icon: IconSpec, label: str) -> folium.Marker:
        return folium.Marker(
            location=position.as_latlon(),
            icon=build_icon(icon),
            popup=folium.Popup(label),
        )

    def render(self, state: AppState) -> folium.Map:
        """
        Build the map for the given state

        Args:
            state: Current session state; never modified

        Returns:
            folium.Map with one layer per element present in the state
        """
        center = state.user_position or self.style.default_center

        fmap = folium.Map(
            location=center.as_latlon(),
            zoom_start=self.style.zoom,
            tiles=None,
            scrollWheelZoom=True,
        )
        folium.TileLayer(tiles=self.style.tiles_url, attr=self.style.attribution).add_to(fmap)

        if state.user_position:
            self._marker(state.user_position, self.style.user_icon, self.style.user_label).add_to(fmap)
        if state.destination_position:
            self._marker(
                state.destination_position, self.style.destination_icon, self.style.destination_label
            ).add_to(fmap)
        if state.start_position:
            self._marker(state.start_position, self.style.start_icon, self.style.start_label).add_to(fmap)

        if state.route:
            folium.PolyLine(
                locations=[point.as_latlon() for point in state.route.geometry],
                color=self.style.route_color,
            ).add_to(fmap)

        for incident in state.incidents:
            self._marker(
                incident.position,
                self.style.incident_icons[incident.type],
                incident.type.label,
            ).add_to(fmap)

        return fmap

    def save(self, state: AppState, path: Union[str, Path]) -> Path:
        """Render and write the map as a standalone HTML page"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.render(state).save(str(path))
        self.logger.info(f"Map written to {path}")
        return path
