# navigator.py
# Public entry point for the navigation core.
# Owns no geometry — wires fixes into RecalculationPolicy and ProgressTracker
# and publishes the result to the NavigationStateStore.

import asyncio
import logging
from typing import Optional, Tuple

from .models import Coord, LocationFix, NavigationState, RouteStep
from .nav_config import NavConfig
from .nav_errors import EmptyRouteError, InvalidRouteGeometry, RoutingError
from .nav_logger import NavLogger
from .location_source import LocationFixSource
from .progress_tracker import ProgressTracker
from .recalculation_policy import RecalculationPolicy
from .route_model import Route
from .route_requester import RouteRequester
from .state_store import NavigationStateStore

logger = logging.getLogger(__name__)


class NavigationSession:
    """
    Guidance back to one fixed destination.

    Must be driven from a single asyncio event loop: fixes are handled
    synchronously in arrival order, route requests run as tasks on the
    same loop. At most one request is in flight; signals raised meanwhile
    collapse into one follow-up request from the latest origin.

    Typical lifecycle:
        session = NavigationSession(car_coord, requester)
        await session.run(location_source)      # or on_location_fix() per fix
        ok, msg = session.start_navigation()    # once store.route is set
        await session.close()

    Args:
        destination: Where the user is heading (the parked car).
        requester:   Async routing provider.
        config:      Optional NavConfig; defaults to NavConfig().
        store:       Observable state container; a new one if omitted.
        nav_logger:  Optional NavLogger for route/event persistence.
    """

    def __init__(
        self,
        destination: Coord,
        requester: RouteRequester,
        config: Optional[NavConfig] = None,
        store: Optional[NavigationStateStore] = None,
        nav_logger: Optional[NavLogger] = None,
    ) -> None:
        self.config = config or NavConfig()
        self.store = store or NavigationStateStore()
        self._destination = destination
        self._requester = requester
        self._nav_logger = nav_logger

        # Specialist modules
        self._tracker = ProgressTracker(self.config)
        self._policy = RecalculationPolicy(self.config)

        self._route: Optional[Route] = None
        self._request_task: Optional[asyncio.Task] = None
        self._pending_origin: Optional[Coord] = None
        self._last_failed_origin: Optional[Coord] = None
        self._closed = False

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def destination(self) -> Coord:
        return self._destination

    @property
    def route(self) -> Optional[Route]:
        return self._route

    @property
    def state(self) -> NavigationState:
        return self._tracker.state

    @property
    def current_step(self) -> Optional[RouteStep]:
        return self._tracker.current_step

    @property
    def is_request_pending(self) -> bool:
        return self._request_task is not None and not self._request_task.done()

    # ------------------------------------------------------------------
    # User commands
    # ------------------------------------------------------------------

    def start_navigation(self) -> Tuple[bool, str]:
        """
        Begin (or restart) following the current route.

        Returns:
            (success, message)
        """
        if self._route is None:
            logger.warning("Start requested before a route is available.")
            return False, "No route available yet."
        self._tracker.start_navigation(self._route)
        self.store.set_state(self._tracker.state)
        return True, f"Route ready. {len(self._route.steps)} steps."

    def stop_navigation(self) -> None:
        """End the episode immediately. In-flight route requests are not cancelled."""
        self._tracker.stop_navigation()
        self.store.set_state(self._tracker.state)

    def request_initial_route(self, origin: Coord, destination: Coord) -> None:
        """Explicitly request a route, optionally to a new destination."""
        if destination != self._destination:
            logger.info(f"Destination changed: {self._destination} → {destination}")
            self._destination = destination
        self._policy.mark_requested(origin)
        self._schedule_route_request(origin)

    def retry_after_error(self) -> bool:
        """
        Re-issue the request that last failed.

        Returns:
            False if there is no error to retry.
        """
        if self.store.error_message is None:
            return False
        origin = self._last_failed_origin or self._policy.last_route_request_coordinate
        if origin is None:
            return False
        logger.info(f"Retrying route request from {origin}.")
        self.store.set_error(None)
        self._policy.mark_requested(origin)
        self._schedule_route_request(origin)
        return True

    # ------------------------------------------------------------------
    # GPS update — call this on every position fix
    # ------------------------------------------------------------------

    def on_location_fix(self, fix: LocationFix) -> NavigationState:
        """
        Process a new fix: maybe request a route, then update progress.

        Args:
            fix: Current location sample.

        Returns:
            NavigationState after the fix.
        """
        request = self._policy.on_location_fix(fix)
        if request is not None:
            self._schedule_route_request(request.origin)

        # Progress keeps running against the current route while a request is pending
        state = self._tracker.on_location_fix(fix)
        self.store.set_state(state)
        if self._nav_logger is not None:
            self._nav_logger.log_event(state, fix)
        return state

    async def run(self, source: LocationFixSource) -> None:
        """Consume fixes from source until it ends or the user arrives."""
        source.start()
        try:
            async for fix in source.fixes():
                state = self.on_location_fix(fix)
                if state.has_arrived:
                    logger.info("Destination reached — stopping location updates.")
                    break
        finally:
            source.stop()

    async def wait_until_idle(self) -> None:
        """Wait for the in-flight route request, and any follow-up, to settle."""
        while self.is_request_pending:
            await asyncio.wait({self._request_task})

    async def close(self) -> None:
        """Stop accepting route requests and wait for the in-flight one to finish."""
        self._closed = True
        await self.wait_until_idle()
        logger.info("Navigation session closed.")

    # ------------------------------------------------------------------
    # Route adoption
    # ------------------------------------------------------------------

    def adopt_route(self, route: Route) -> bool:
        """
        Replace the current route wholesale.

        Geometry is resolved for every step first; a route that fails is
        rejected and the previous route stays in place.

        Returns:
            True if adopted.
        """
        try:
            for idx in range(len(route.steps)):
                route.step_end_coordinate(idx)
        except InvalidRouteGeometry as e:
            logger.warning(f"Rejected route with invalid geometry: {e}")
            self.store.set_error("No route found")
            return False

        self._route = route
        self._tracker.on_route_replaced(route)
        self.store.set_route(route)
        self.store.set_error(None)
        self.store.set_state(self._tracker.state)
        logger.info(f"Route adopted — {len(route.steps)} steps, {route.total_distance_m:.0f} m.")
        if self._nav_logger is not None:
            self._nav_logger.save_route(route)
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _schedule_route_request(self, origin: Coord) -> None:
        if self._closed:
            logger.debug(f"Session closed — ignoring route request from {origin}.")
            return
        if self.is_request_pending:
            logger.debug(f"Route request in flight — queued origin {origin}.")
            self._pending_origin = origin
            return
        self.store.set_loading(True)
        self._request_task = asyncio.get_running_loop().create_task(self._request_route(origin))

    async def _request_route(self, origin: Coord) -> None:
        destination = self._destination
        mode = self._policy.transport_mode_for(origin, destination)
        logger.info(f"Requesting {mode.value} route: {origin} → {destination}")
        try:
            route = await asyncio.wait_for(
                self._requester.request_route(origin, destination, mode),
                timeout=self.config.route_request_timeout_s,
            )
        except asyncio.TimeoutError:
            self._request_failed(origin, "Unable to get directions: request timed out")
        except RoutingError as e:
            self._request_failed(origin, f"Unable to get directions: {e}")
        except (EmptyRouteError, InvalidRouteGeometry) as e:
            logger.warning(f"Provider returned an unusable route: {e}")
            self._request_failed(origin, "No route found")
        except Exception as e:
            logger.exception(f"Route provider raised {type(e).__name__}")
            self._request_failed(origin, f"Unable to get directions: {e}")
        else:
            if destination != self._destination:
                logger.info("Discarding route to a previous destination.")
            else:
                self.adopt_route(route)
        finally:
            self._request_finished()

    def _request_failed(self, origin: Coord, message: str) -> None:
        logger.warning(f"Route request failed: {message}")
        self._last_failed_origin = origin
        self.store.set_error(message)

    def _request_finished(self) -> None:
        if self._pending_origin is not None:
            origin, self._pending_origin = self._pending_origin, None
            self._request_task = asyncio.get_running_loop().create_task(self._request_route(origin))
            return
        self.store.set_loading(False)
