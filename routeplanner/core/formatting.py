"""
Display formatting for route summaries
"""

import math


def format_duration(seconds: float) -> str:
    """
    Format a duration as hours and minutes

    Seconds are rounded half-up to the nearest minute, so 59.6s gives
    "1min" and 5400s gives "1h 30min".

    Args:
        seconds: Duration in seconds

    Returns:
        "{h}h {m}min" when at least one hour, else "{m}min"
    """
    if seconds < 0:
        raise ValueError(f"Duration must be non-negative, got {seconds}")

    minutes = math.floor(seconds / 60 + 0.5)
    hours, remaining_minutes = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {remaining_minutes}min"
    return f"{remaining_minutes}min"


def format_distance(meters: float) -> str:
    """Format a distance in metres as kilometres with two decimals"""
    return f"{meters / 1000:.2f} km"
