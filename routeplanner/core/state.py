"""
Application state record and the reducers that transition it

Every reducer is a pure function: it takes the current state plus the
action payload and returns a new state, leaving its input untouched.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import (
    LOCATION_OPTION,
    Coordinate,
    Incident,
    IncidentType,
    Route,
    Suggestion,
)


class AppState(BaseModel):
    """Complete state of a planning session"""

    model_config = ConfigDict(frozen=True)

    # Positions
    user_position: Optional[Coordinate] = Field(None, description="Device position or fallback")
    start_position: Optional[Coordinate] = Field(None, description="Resolved start")
    destination_position: Optional[Coordinate] = Field(None, description="Resolved destination")

    # Text inputs
    start_input: str = Field("", description="Start field text")
    destination_input: str = Field("", description="Destination field text")
    destination: str = Field("", description="Selected destination address")

    # Suggestions, replaced wholesale per keystroke
    start_suggestions: List[Suggestion] = Field(default_factory=list)
    destination_suggestions: List[Suggestion] = Field(default_factory=list)

    # Routing
    route: Optional[Route] = Field(None, description="Last successfully computed route")
    avoid_tolls: bool = Field(False, description="Exclude toll roads")

    # Incidents
    incident_dialog_open: bool = Field(False)
    selected_incident: Optional[IncidentType] = Field(None)
    incidents: List[Incident] = Field(default_factory=list, description="Append-only session list")

    notice: Optional[str] = Field(None, description="Last failure shown to the user")


def _update(state: AppState, **changes) -> AppState:
    return state.model_copy(update=changes)


def geolocation_succeeded(state: AppState, position: Coordinate) -> AppState:
    return _update(state, user_position=position, start_position=position)


def geolocation_failed(state: AppState, fallback: Coordinate) -> AppState:
    """Use the fallback as user position; the start stays unset"""
    return _update(state, user_position=fallback)


def set_start_input(state: AppState, text: str) -> AppState:
    return _update(state, start_input=text)


def set_destination_input(state: AppState, text: str) -> AppState:
    return _update(state, destination_input=text)


def set_start_suggestions(state: AppState, suggestions: List[Suggestion]) -> AppState:
    return _update(state, start_suggestions=list(suggestions))


def set_destination_suggestions(state: AppState, suggestions: List[Suggestion]) -> AppState:
    return _update(state, destination_suggestions=list(suggestions))


def start_options(state: AppState) -> List[Suggestion]:
    """Options offered for the start field, 'my location' first"""
    return [LOCATION_OPTION, *state.start_suggestions]


def use_current_location(state: AppState) -> AppState:
    return _update(state, start_position=state.user_position)


def set_start_position(state: AppState, position: Coordinate) -> AppState:
    return _update(state, start_position=position, notice=None)


def select_destination(state: AppState, address: str) -> AppState:
    return _update(state, destination=address)


def set_avoid_tolls(state: AppState, avoid_tolls: bool) -> AppState:
    return _update(state, avoid_tolls=avoid_tolls)


def route_calculated(state: AppState, destination_position: Coordinate, route: Route) -> AppState:
    """Replace destination marker and route together"""
    return _update(
        state,
        destination_position=destination_position,
        route=route,
        notice=None,
    )


def report_failure(state: AppState, message: str) -> AppState:
    """Record a failure notice; all displayed data stays as it was"""
    return _update(state, notice=message)


def open_incident_dialog(state: AppState) -> AppState:
    return _update(state, incident_dialog_open=True)


def close_incident_dialog(state: AppState) -> AppState:
    return _update(state, incident_dialog_open=False)


def select_incident(state: AppState, incident_type: Optional[IncidentType]) -> AppState:
    return _update(state, selected_incident=incident_type)


def report_incident(state: AppState) -> AppState:
    """
    Drop an incident of the selected category at the user position

    No-op when the user position is unknown or no category is selected.
    On success the dialog is closed and the selection cleared.
    """
    if state.user_position is None or state.selected_incident is None:
        return state

    incident = Incident(type=state.selected_incident, position=state.user_position)
    return _update(
        state,
        incidents=[*state.incidents, incident],
        incident_dialog_open=False,
        selected_incident=None,
    )
