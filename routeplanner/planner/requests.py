"""
Request tokens that keep superseded responses from overwriting newer state
"""

from typing import Dict


class RequestTracker:
    """Issues increasing tokens per channel; only the latest token is current"""

    def __init__(self):
        self._latest: Dict[str, int] = {}

    def issue(self, channel: str) -> int:
        token = self._latest.get(channel, 0) + 1
        self._latest[channel] = token
        return token

    def is_current(self, channel: str, token: int) -> bool:
        return self._latest.get(channel) == token
