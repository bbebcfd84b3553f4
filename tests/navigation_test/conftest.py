"""
Pytest configuration for the navigation core tests.

Routes are laid out on the 20°E meridian ending at (10.0, 20.0), so that
distances along them are exact multiples of METERS_PER_DEG_LAT.
"""

import asyncio
import math

import pytest

from navigation.guidance.geo_utils import EARTH_RADIUS_M
from navigation.guidance.models import Coord
from navigation.guidance.nav_config import NavConfig
from navigation.guidance.nav_errors import RoutingError
from navigation.guidance.route_model import Route
from navigation.guidance.route_requester import RouteRequester


METERS_PER_DEG_LAT = EARTH_RADIUS_M * math.pi / 180
DESTINATION = Coord(10.0, 20.0)


def north_of(origin: Coord, meters: float) -> Coord:
    return Coord(origin.lat + meters / METERS_PER_DEG_LAT, origin.lon)


def along_route(distance_m: float, route_length_m: float = 300.0) -> Coord:
    """Point distance_m from the start of a route that ends at DESTINATION."""
    return north_of(DESTINATION, distance_m - route_length_m)


@pytest.fixture
def destination():
    return DESTINATION


@pytest.fixture
def at():
    """at(d) → coordinate d metres along the three-step test route."""
    return along_route


@pytest.fixture
def north():
    return north_of


@pytest.fixture
def three_step_route():
    """Steps of 100 m, 150 m and 50 m ending at DESTINATION."""
    return Route.from_raw(
        steps=[("Head north", 100.0), ("Continue straight", 150.0), ("Arrive at your car", 50.0)],
        polyline=[along_route(d) for d in (0.0, 100.0, 250.0, 300.0)],
    )


@pytest.fixture
def config(tmp_path):
    return NavConfig(log_dir=str(tmp_path))


# ---------------------------------------------------------------------------
# Fake routing providers
# ---------------------------------------------------------------------------

class RecordingRequester(RouteRequester):
    """Returns a fixed route and records every request."""

    def __init__(self, route: Route) -> None:
        self.route = route
        self.calls = []

    async def request_route(self, origin, destination, mode):
        self.calls.append((origin, destination, mode))
        return self.route


class GatedRequester(RecordingRequester):
    """Blocks every request until release() is called."""

    def __init__(self, route: Route) -> None:
        super().__init__(route)
        self._gate = None

    @property
    def gate(self) -> asyncio.Event:
        # Created lazily so it binds to the test's event loop
        if self._gate is None:
            self._gate = asyncio.Event()
        return self._gate

    def release(self) -> None:
        self.gate.set()

    async def request_route(self, origin, destination, mode):
        self.calls.append((origin, destination, mode))
        await self.gate.wait()
        return self.route


class FailingRequester(RecordingRequester):
    """Raises RoutingError until succeed is set."""

    def __init__(self, route: Route) -> None:
        super().__init__(route)
        self.succeed = False

    async def request_route(self, origin, destination, mode):
        self.calls.append((origin, destination, mode))
        if not self.succeed:
            raise RoutingError("The network connection was lost.")
        return self.route


class EmptyRouteRequester(RecordingRequester):
    """Provider answering with a route that has no steps."""

    async def request_route(self, origin, destination, mode):
        self.calls.append((origin, destination, mode))
        return Route.from_raw(steps=[], polyline=[origin, destination])


class SlowRequester(RecordingRequester):
    async def request_route(self, origin, destination, mode):
        self.calls.append((origin, destination, mode))
        await asyncio.sleep(5)
        return self.route


class DisconnectedRequester(RecordingRequester):
    """Transport failure outside the routing error hierarchy."""

    async def request_route(self, origin, destination, mode):
        self.calls.append((origin, destination, mode))
        raise ConnectionError("socket closed")


@pytest.fixture
def recording_requester(three_step_route):
    return RecordingRequester(three_step_route)


@pytest.fixture
def gated_requester(three_step_route):
    return GatedRequester(three_step_route)


@pytest.fixture
def failing_requester(three_step_route):
    return FailingRequester(three_step_route)


@pytest.fixture
def empty_route_requester(three_step_route):
    return EmptyRouteRequester(three_step_route)


@pytest.fixture
def slow_requester(three_step_route):
    return SlowRequester(three_step_route)


@pytest.fixture
def disconnected_requester(three_step_route):
    return DisconnectedRequester(three_step_route)
