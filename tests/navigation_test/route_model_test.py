"""
Route Model Tests
=================

Unit tests for Route construction, validation and step boundaries.
"""

import dataclasses

import pytest

from navigation.guidance.models import Coord, RouteStep
from navigation.guidance.nav_errors import EmptyRouteError, InvalidRouteGeometry
from navigation.guidance.route_model import Route


class TestFromRaw:
    """Test Route.from_raw validation."""

    def test_empty_steps_rejected(self, at):
        with pytest.raises(EmptyRouteError):
            Route.from_raw(steps=[], polyline=[at(0), at(300)])

    def test_single_point_polyline_rejected(self, at):
        with pytest.raises(EmptyRouteError):
            Route.from_raw(steps=[("Go", 10.0)], polyline=[at(0)])

    def test_negative_step_length_rejected(self, at):
        with pytest.raises(InvalidRouteGeometry):
            Route.from_raw(steps=[("Go", -5.0)], polyline=[at(0), at(300)])

    def test_accepts_tuples_and_steps(self, at):
        route = Route.from_raw(
            steps=[RouteStep("Head north", 100.0), ("Arrive", 200.0)],
            polyline=[at(0), at(300)],
        )
        assert route.steps == (RouteStep("Head north", 100.0), RouteStep("Arrive", 200.0))

    def test_total_distance_defaults_to_polyline_length(self, three_step_route):
        assert three_step_route.total_distance_m == pytest.approx(300.0, abs=1e-6)
        assert three_step_route.total_duration_s == 0.0

    def test_provider_totals_kept(self, at):
        route = Route.from_raw([("Go", 300.0)], [at(0), at(300)], total_distance_m=320.0, total_duration_s=240.0)
        assert route.total_distance_m == 320.0
        assert route.total_duration_s == 240.0


class TestRouteGeometry:
    """Test derived step end coordinates."""

    def test_destination_and_last_index(self, three_step_route, destination):
        assert three_step_route.destination == destination
        assert three_step_route.last_step_index == 2

    def test_step_boundaries(self, three_step_route):
        assert list(three_step_route.step_boundaries_m) == [100.0, 250.0, 300.0]

    def test_step_end_coordinates(self, three_step_route, at):
        assert three_step_route.step_end_coordinate(0) == at(100)
        assert three_step_route.step_end_coordinate(1) == at(250)
        assert three_step_route.step_end_coordinate(2) == at(300)

    def test_step_end_memoized(self, three_step_route):
        first = three_step_route.step_end_coordinate(1)
        assert three_step_route.step_end_coordinate(1) is first
        assert 1 in three_step_route._step_ends

    def test_step_index_out_of_range(self, three_step_route):
        with pytest.raises(IndexError):
            three_step_route.step_end_coordinate(3)
        with pytest.raises(IndexError):
            three_step_route.step_end_coordinate(-1)

    def test_immutable(self, three_step_route):
        with pytest.raises(dataclasses.FrozenInstanceError):
            three_step_route.steps = ()

    def test_linestring_is_lon_lat(self, three_step_route, destination):
        line = three_step_route.as_linestring()
        assert len(line.coords) == 4
        assert line.coords[-1] == (destination.lon, destination.lat)

    def test_dict_round_trip(self, three_step_route):
        assert Route.from_dict(three_step_route.to_dict()) == three_step_route

    def test_memo_does_not_affect_equality(self, three_step_route):
        clone = Route.from_dict(three_step_route.to_dict())
        three_step_route.step_end_coordinate(0)
        assert clone == three_step_route
        assert hash(clone) == hash(three_step_route)
