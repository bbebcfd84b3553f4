# route_requester.py
# Routing provider interface consumed by NavigationSession, plus a
# straight-line provider for simulation and tests.

import logging
from abc import ABC, abstractmethod
from typing import List

from .models import Coord, RouteStep, TransportMode
from .geo_utils import distance_meters
from .nav_config import DRIVING_SPEED_KMH, WALKING_SPEED_KMH
from .nav_errors import RoutingError
from .route_model import Route

logger = logging.getLogger(__name__)


class RouteRequester(ABC):
    """Async origin → destination → Route provider."""

    @abstractmethod
    async def request_route(self, origin: Coord, destination: Coord, mode: TransportMode) -> Route:
        """
        Compute a route.

        Raises:
            RoutingError:         provider or network failure.
            EmptyRouteError:      provider answered with an unusable route.
        """


class StraightLineRouteRequester(RouteRequester):
    """
    Straight line from origin to destination, split into equal steps.

    Args:
        step_count: Number of steps the line is divided into.
    """

    SPEEDS_KMH = {
        TransportMode.WALKING: WALKING_SPEED_KMH,
        TransportMode.AUTOMOBILE: DRIVING_SPEED_KMH,
    }

    def __init__(self, step_count: int = 3) -> None:
        if step_count < 1:
            raise ValueError("step_count must be at least 1.")
        self.step_count = step_count
        self.request_count = 0

    async def request_route(self, origin: Coord, destination: Coord, mode: TransportMode) -> Route:
        self.request_count += 1
        total = distance_meters(origin, destination)
        if total == 0.0:
            raise RoutingError("No route found")

        polyline: List[Coord] = [origin]
        polyline += [
            Coord(
                origin.lat + (destination.lat - origin.lat) * i / self.step_count,
                origin.lon + (destination.lon - origin.lon) * i / self.step_count,
            )
            for i in range(1, self.step_count)
        ]
        polyline.append(destination)
        steps = [
            RouteStep(f"Continue straight for {int(total / self.step_count)} m", total / self.step_count)
            for _ in range(self.step_count - 1)
        ]
        steps.append(RouteStep("Arrive at your car", total / self.step_count))

        speed_ms = self.SPEEDS_KMH[mode] * 1000 / 3600
        logger.debug(f"Straight-line route {origin} → {destination} ({mode.value}, {total:.0f} m).")
        return Route.from_raw(steps, polyline, total_distance_m=total, total_duration_s=total / speed_ms)
