"""
Route planner service
Drives the application state from user actions and provider responses
"""

import logging
from typing import Callable, List, Optional

from routeplanner.config.models import Settings
from routeplanner.core import state as reducers
from routeplanner.core.exceptions import GeolocationUnavailableError, RoutePlannerError
from routeplanner.core.models import IncidentType, Suggestion
from routeplanner.core.state import AppState
from routeplanner.ors.ports import RoutingProvider

from .geolocation import Locator
from .requests import RequestTracker

START_SUGGEST = "start-suggest"
DESTINATION_SUGGEST = "destination-suggest"
START_RESOLVE = "start-resolve"
ROUTE = "route"


class RoutePlannerService:
    """
    Session controller for route planning
    Every remote call is guarded on its own: a failure is logged and
    recorded as a notice, leaving the rest of the state untouched.
    """

    def __init__(
        self,
        provider: RoutingProvider,
        settings: Optional[Settings] = None,
        state: Optional[AppState] = None,
    ):
        self.provider = provider
        self.settings = settings or Settings()
        self.state = state or AppState()
        self.requests = RequestTracker()
        self.logger = logging.getLogger(__name__)

    def _fail(self, message: str) -> None:
        self.logger.error(message)
        self.state = reducers.report_failure(self.state, message)

    async def bootstrap(self, locator: Locator) -> bool:
        """
        Read the device position once

        On success the position becomes both user and start position.
        Otherwise the user position falls back to the configured default
        and the start stays unset. No retries.
        """
        try:
            position = await locator.locate()
        except GeolocationUnavailableError as e:
            self.logger.warning(f"Geolocation unavailable, using fallback position: {e}")
            self.state = reducers.geolocation_failed(self.state, self.settings.fallback_position)
            return False

        self.logger.debug(f"Located user at {position.lat}, {position.lon}")
        self.state = reducers.geolocation_succeeded(self.state, position)
        return True

    async def _refresh_suggestions(
        self,
        channel: str,
        text: str,
        apply: Callable[[AppState, List[Suggestion]], AppState],
    ) -> None:
        token = self.requests.issue(channel)

        if len(text.strip()) < self.settings.min_query_length:
            self.state = apply(self.state, [])
            return

        try:
            suggestions = await self.provider.suggest(text)
        except RoutePlannerError as e:
            self.logger.error(f"Autocomplete failed for '{text}': {e}")
            return

        if not self.requests.is_current(channel, token):
            self.logger.debug(f"Discarding stale suggestions for '{text}'")
            return

        self.state = apply(self.state, suggestions)

    async def update_start_input(self, text: str) -> List[Suggestion]:
        """Record start field text and refresh its suggestions"""
        self.state = reducers.set_start_input(self.state, text)
        await self._refresh_suggestions(START_SUGGEST, text, reducers.set_start_suggestions)
        return reducers.start_options(self.state)

    async def update_destination_input(self, text: str) -> List[Suggestion]:
        """Record destination field text and refresh its suggestions"""
        self.state = reducers.set_destination_input(self.state, text)
        await self._refresh_suggestions(DESTINATION_SUGGEST, text, reducers.set_destination_suggestions)
        return self.state.destination_suggestions

    async def select_start(self, option: Suggestion) -> bool:
        """
        Set the start from a chosen option

        The location option copies the user position; any other option
        is resolved through the provider.
        """
        token = self.requests.issue(START_RESOLVE)

        if option.is_location:
            if self.state.user_position is None:
                self.logger.warning("User position unknown, cannot start from current location")
                return False
            self.state = reducers.use_current_location(self.state)
            return True

        try:
            result = await self.provider.resolve_address(option.label)
        except RoutePlannerError as e:
            if not self.requests.is_current(START_RESOLVE, token):
                self.logger.debug(f"Ignoring failure of superseded start resolution for '{option.label}': {e}")
                return False
            self._fail(f"Geocoding failed for start '{option.label}': {e}")
            return False

        if not self.requests.is_current(START_RESOLVE, token):
            self.logger.debug(f"Discarding stale start resolution for '{option.label}'")
            return False

        self.state = reducers.set_start_position(self.state, result.position)
        return True

    def select_destination(self, option: Suggestion) -> None:
        if option.label:
            self.state = reducers.select_destination(self.state, option.label)

    def set_avoid_tolls(self, avoid_tolls: bool) -> None:
        self.state = reducers.set_avoid_tolls(self.state, avoid_tolls)

    async def calculate_route(self) -> bool:
        """
        Resolve the destination and compute the route from the start

        Does nothing without a start position or destination text. On
        failure the previously displayed route and destination remain.

        Returns:
            True if a new route was applied
        """
        start = self.state.start_position
        destination = self.state.destination
        if start is None or not destination.strip():
            self.logger.info("Route requested without start position or destination")
            return False

        token = self.requests.issue(ROUTE)
        avoid_tolls = self.state.avoid_tolls

        try:
            result = await self.provider.resolve_address(destination)
            route = await self.provider.compute_route(start, result.position, avoid_tolls=avoid_tolls)
        except RoutePlannerError as e:
            if not self.requests.is_current(ROUTE, token):
                self.logger.debug(f"Ignoring failure of superseded route to '{destination}': {e}")
                return False
            self._fail(f"Route calculation failed for '{destination}': {e}")
            return False

        if not self.requests.is_current(ROUTE, token):
            self.logger.debug(f"Discarding stale route to '{destination}'")
            return False

        self.state = reducers.route_calculated(self.state, result.position, route)
        self.logger.info(
            f"Route to {destination}: {route.summary.distance_text}, {route.summary.duration_text}"
        )
        return True

    def open_incident_dialog(self) -> None:
        self.state = reducers.open_incident_dialog(self.state)

    def close_incident_dialog(self) -> None:
        self.state = reducers.close_incident_dialog(self.state)

    def select_incident(self, incident_type: Optional[IncidentType]) -> None:
        self.state = reducers.select_incident(self.state, incident_type)

    def report_incident(self) -> bool:
        """Confirm the selected incident; True if one was added"""
        count = len(self.state.incidents)
        self.state = reducers.report_incident(self.state)
        added = len(self.state.incidents) > count
        if not added:
            self.logger.debug("Incident not reported: missing position or category")
        return added
