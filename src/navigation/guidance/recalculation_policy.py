# recalculation_policy.py
# Decides, from accumulated movement, when a new route must be requested
# and which transport mode that request should use.

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import Coord, LocationFix, TransportMode
from .geo_utils import distance_meters
from .nav_config import NavConfig

logger = logging.getLogger(__name__)


class RequestKind(Enum):
    INITIAL   = "initial"
    RECOMPUTE = "recompute"


@dataclass(frozen=True)
class RouteRequest:
    """Signal emitted by RecalculationPolicy: fetch a route starting at origin."""
    kind: RequestKind
    origin: Coord


def select_transport_mode(origin: Coord, destination: Coord, walking_threshold_m: float) -> TransportMode:
    """Walk when the car is within walking_threshold_m in a straight line, else drive."""
    if distance_meters(origin, destination) <= walking_threshold_m:
        return TransportMode.WALKING
    return TransportMode.AUTOMOBILE


class RecalculationPolicy:
    """
    Tracks where the last route was requested from.

    The first fix yields an INITIAL request; afterwards a RECOMPUTE request is
    emitted each time the user drifts more than route_update_threshold_m from
    the last request coordinate.
    """

    def __init__(self, config: Optional[NavConfig] = None) -> None:
        self.config = config or NavConfig()
        self._last_request_coord: Optional[Coord] = None

    @property
    def last_route_request_coordinate(self) -> Optional[Coord]:
        return self._last_request_coord

    def reset(self) -> None:
        self._last_request_coord = None

    def mark_requested(self, coord: Coord) -> None:
        """Record an explicitly requested route origin."""
        self._last_request_coord = coord

    def on_location_fix(self, fix: LocationFix) -> Optional[RouteRequest]:
        if self._last_request_coord is None:
            self._last_request_coord = fix.coord
            logger.info(f"First fix {fix.coord} — requesting initial route.")
            return RouteRequest(RequestKind.INITIAL, fix.coord)

        moved = distance_meters(fix.coord, self._last_request_coord)
        if moved > self.config.route_update_threshold_m:
            self._last_request_coord = fix.coord
            logger.info(f"Moved {moved:.0f} m since last route request — recomputing.")
            return RouteRequest(RequestKind.RECOMPUTE, fix.coord)

        return None

    def transport_mode_for(self, origin: Coord, destination: Coord) -> TransportMode:
        return select_transport_mode(origin, destination, self.config.walking_threshold_m)
