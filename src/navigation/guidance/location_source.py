# location_source.py
# Push interface for location fixes. NavigationSession pulls fixes from
# fixes() in arrival order and controls the start()/stop() lifecycle.

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import AsyncIterator, List, Optional, Sequence

from .models import Coord, LocationFix
from .geo_utils import distance_meters

logger = logging.getLogger(__name__)


class LocationFixSource(ABC):
    """Serialized stream of already-authorized location fixes."""

    @abstractmethod
    def start(self) -> None:
        ...

    @abstractmethod
    def stop(self) -> None:
        ...

    @abstractmethod
    def fixes(self) -> AsyncIterator[LocationFix]:
        ...


class ReplayLocationSource(LocationFixSource):
    """
    Replays recorded coordinates as live fixes.

    Fixes closer than min_distance_m to the previously emitted one are
    dropped, like a platform distance filter.

    Args:
        coords:         Coordinates to replay, in order.
        interval_s:     Delay between emitted fixes.
        min_distance_m: Distance filter; 0 disables it.
    """

    def __init__(
        self,
        coords: Sequence[Coord],
        interval_s: float = 0.0,
        min_distance_m: float = 20.0,
    ) -> None:
        self._coords: List[Coord] = list(coords)
        self.interval_s = interval_s
        self.min_distance_m = min_distance_m
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True
        logger.info(f"Replay source started ({len(self._coords)} points).")

    def stop(self) -> None:
        if self._running:
            self._running = False
            logger.info("Replay source stopped.")

    async def fixes(self) -> AsyncIterator[LocationFix]:
        last: Optional[Coord] = None
        for coord in self._coords:
            if not self._running:
                break
            if last is not None and distance_meters(coord, last) < self.min_distance_m:
                continue
            last = coord
            yield LocationFix(coord=coord, timestamp=time.time())
            if self.interval_s > 0:
                await asyncio.sleep(self.interval_s)
            else:
                await asyncio.sleep(0)
