"""
Tests for route summary formatting
"""

import pytest

from routeplanner.core.formatting import format_distance, format_duration


class TestFormatDuration:
    """Test duration formatting"""

    @pytest.mark.parametrize("seconds,expected", [
        (0, "0min"),
        (59, "1min"),
        (59.6, "1min"),
        (29, "0min"),
        (30, "1min"),
        (3600, "1h 0min"),
        (5400, "1h 30min"),
        (3599, "1h 0min"),
        (7260, "2h 1min"),
    ])
    def test_format_duration(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_rounds_instead_of_truncating(self):
        """89.5 minutes rounds up to 1h 30min"""
        assert format_duration(89.5 * 60) == "1h 30min"

    def test_negative_duration_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            format_duration(-1)


class TestFormatDistance:
    """Test distance formatting"""

    def test_two_decimals(self):
        assert format_distance(465123.4) == "465.12 km"

    def test_zero(self):
        assert format_distance(0) == "0.00 km"

