# progress_tracker.py
# State machine that tracks the user's position against the active route.
# Call start_navigation() once, then on_location_fix() on every GPS update.

import logging
from typing import Optional

from .models import Coord, LocationFix, NavigationState, RouteStep, TrackerStatus
from .geo_utils import distance_meters
from .nav_config import NavConfig
from .nav_errors import InvalidRouteGeometry
from .route_model import Route

logger = logging.getLogger(__name__)


class ProgressTracker:
    """
    Stateful progress tracker for one navigation episode at a time.

    States: IDLE → NAVIGATING → {ARRIVED, STOPPED}

    Usage:
        tracker = ProgressTracker(config)
        tracker.start_navigation(route)

        # Inside GPS loop:
        state = tracker.on_location_fix(fix)
    """

    def __init__(self, config: Optional[NavConfig] = None) -> None:
        self.config = config or NavConfig()
        self._route: Optional[Route] = None
        self._status: TrackerStatus = TrackerStatus.IDLE
        self._step_index: int = 0
        self._distance_to_next: float = 0.0
        self._has_arrived: bool = False

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start_navigation(self, route: Route) -> None:
        """Begin a new episode on route; always resets progress."""
        self._route = route
        self._step_index = 0
        self._distance_to_next = route.steps[0].length_m
        self._has_arrived = False
        self._status = TrackerStatus.NAVIGATING
        logger.info(f"Navigation started — {len(route.steps)} steps.")

    def stop_navigation(self) -> None:
        """Freeze progress. No-op unless navigating."""
        if self._status is TrackerStatus.NAVIGATING:
            self._status = TrackerStatus.STOPPED
            logger.info(f"Navigation stopped at step {self._step_index}.")

    def on_route_replaced(self, route: Route) -> None:
        """
        Adopt a recomputed route; the step index always goes back to 0.

        An active episode keeps navigating on the new route. A stopped or
        arrived episode keeps its status and arrival flag.
        """
        self._route = route
        self._step_index = 0
        if not self._has_arrived:
            self._distance_to_next = route.steps[0].length_m
        if self._status is TrackerStatus.NAVIGATING:
            logger.info(f"Route replaced mid-navigation — {len(route.steps)} steps, back to step 0.")

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def status(self) -> TrackerStatus:
        return self._status

    @property
    def route(self) -> Optional[Route]:
        return self._route

    @property
    def state(self) -> NavigationState:
        return NavigationState(
            current_step_index=self._step_index,
            distance_to_next_step_m=self._distance_to_next,
            is_navigating=self._status is TrackerStatus.NAVIGATING,
            has_arrived=self._has_arrived,
            status=self._status,
        )

    @property
    def current_step(self) -> Optional[RouteStep]:
        if self._route is None:
            return None
        return self._route.steps[self._step_index]

    @property
    def next_step(self) -> Optional[RouteStep]:
        if self._route is None or self._step_index >= self._route.last_step_index:
            return None
        return self._route.steps[self._step_index + 1]

    # ------------------------------------------------------------------
    # Core method — call on every GPS update
    # ------------------------------------------------------------------

    def on_location_fix(self, fix: LocationFix) -> NavigationState:
        """
        Compare a GPS fix to the active route and update progress.

        Args:
            fix: Current location sample.

        Returns:
            NavigationState snapshot after processing the fix.
        """
        if self._status is not TrackerStatus.NAVIGATING or self._route is None:
            return self.state

        route = self._route
        position = fix.coord
        last_index = route.last_step_index

        # 1. Arrival — terminal for this episode, skips step logic
        to_destination = distance_meters(position, route.destination)
        if to_destination < self.config.arrival_threshold_m:
            self._has_arrived = True
            self._distance_to_next = 0.0
            self._status = TrackerStatus.ARRIVED
            logger.info(f"Arrived — {to_destination:.1f} m from destination.")
            return self.state

        # 2. Lookahead: closest step end among the current step and the next few
        window_end = min(self._step_index + self.config.lookahead_steps, last_index)
        candidate_index = self._step_index
        candidate_distance = float("inf")
        for idx in range(self._step_index, window_end + 1):
            d = self._distance_to_step_end(position, idx)
            if d is None:
                continue
            if d < candidate_distance:
                candidate_index, candidate_distance = idx, d

        # 3. Jump ahead, never back
        if (candidate_index > self._step_index
                and candidate_distance < self.config.step_completion_threshold_m):
            logger.debug(f"Step {self._step_index} → {candidate_index} (lookahead, {candidate_distance:.1f} m).")
            self._step_index = candidate_index

        # 4. Distance to the end of the current step
        d = self._distance_to_step_end(position, self._step_index)
        if d is not None:
            self._distance_to_next = d

        # 5. Single auto-advance when the current step end is close
        if (self._distance_to_next < self.config.step_completion_threshold_m
                and self._step_index < last_index):
            self._step_index += 1
            logger.debug(f"Step {self._step_index - 1} complete → step {self._step_index}.")
            d = self._distance_to_step_end(position, self._step_index)
            if d is not None:
                self._distance_to_next = d

        return self.state

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _distance_to_step_end(self, position: Coord, step_index: int) -> Optional[float]:
        """Distance to a step end, or None if its geometry cannot be resolved."""
        try:
            end = self._route.step_end_coordinate(step_index)
        except (InvalidRouteGeometry, IndexError) as e:
            logger.warning(f"Step {step_index} end lookup failed: {e}")
            return None
        return distance_meters(position, end)
