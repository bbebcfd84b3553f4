"""
Display Helper Tests
====================

Tests for maneuver classification and distance/time formatting.
"""

import pytest

from navigation.guidance.instructions import (
    Maneuver, classify_maneuver, format_distance, format_duration, route_summary, step_progress,
)
from navigation.guidance.models import RouteStep


class TestClassifyManeuver:

    @pytest.mark.parametrize("text, expected", [
        ("Turn left onto Main St", Maneuver.TURN_LEFT),
        ("Turn RIGHT onto 5th Ave", Maneuver.TURN_RIGHT),
        ("Continue onto Elm St", Maneuver.STRAIGHT),
        ("Merge onto I-80 W", Maneuver.MERGE),
        ("Take exit 12", Maneuver.EXIT),
        ("Enter the roundabout", Maneuver.ROUNDABOUT),
        ("Make a U-turn", Maneuver.U_TURN),
        ("The destination is on your", Maneuver.ARRIVE),
        ("Depart from the parking lot", Maneuver.DEPART),
        ("Proceed to the route", Maneuver.STRAIGHT),
    ])
    def test_keywords(self, text, expected):
        assert classify_maneuver(text) is expected

    def test_direction_wins_over_later_keywords(self):
        """'left' is checked before 'destination'."""
        assert classify_maneuver("The destination is on your left") is Maneuver.TURN_LEFT


class TestFormatting:

    def test_distance(self):
        assert format_distance(0) == "0 m"
        assert format_distance(849.6) == "850 m"
        assert format_distance(1234) == "1.2 km"

    def test_duration(self):
        assert format_duration(59) == "0 min"
        assert format_duration(12 * 60 + 30) == "12 min"
        assert format_duration(65 * 60) == "1h 5m"

    def test_route_summary(self, three_step_route):
        assert route_summary(three_step_route) == "300 m · 0 min"


class TestStepProgress:

    def test_fraction(self):
        assert step_progress(RouteStep("Go", 200.0), 50.0) == pytest.approx(0.75)

    def test_clamped(self):
        step = RouteStep("Go", 100.0)
        assert step_progress(step, 250.0) == 0.0
        assert step_progress(step, -5.0) == 1.0

    def test_zero_length_step(self):
        assert step_progress(RouteStep("Arrive", 0.0), 10.0) == 0.0
