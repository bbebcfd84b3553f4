# main.py
# Entry point — simulates a walk back to the car feeding fixes into NavigationSession.
# In production, replace ReplayLocationSource with the device's location stream
# and StraightLineRouteRequester with a real routing provider.

import asyncio
import logging

from .models import Coord, TrackerStatus
from .nav_config import NavConfig
from .nav_logger import NavLogger
from .navigator import NavigationSession
from .location_source import ReplayLocationSource
from .route_requester import StraightLineRouteRequester
from .state_store import StoreEvent, StoreTopic
from .instructions import classify_maneuver, format_distance, route_summary

# ------------------------------------------------------------------
# Logging setup — configure once here, all modules inherit
# ------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)

# ------------------------------------------------------------------
# Config — tweak thresholds or paths here, not inside the modules
# ------------------------------------------------------------------
config = NavConfig(
    arrival_threshold_m=20.0,
    step_completion_threshold_m=30.0,
    route_update_threshold_m=50.0,
    log_dir="logs",
)

# ------------------------------------------------------------------
# Simulation coordinates — walking north-east back to the car
# ------------------------------------------------------------------
CAR = Coord(39.92700, 32.84800)

test_locations = [
    Coord(39.92400, 32.84500),   # Start
    Coord(39.92450, 32.84550),
    Coord(39.92500, 32.84600),
    Coord(39.92550, 32.84650),
    Coord(39.92600, 32.84700),
    Coord(39.92650, 32.84750),
    Coord(39.92690, 32.84790),   # Arrival
]


def _print_event(event: StoreEvent) -> None:
    if event.topic is StoreTopic.ROUTE and event.value is not None:
        print(f"[Nav] New route: {route_summary(event.value)}")
    elif event.topic is StoreTopic.ERROR and event.value:
        print(f"[Nav] Error: {event.value}")


async def simulate() -> None:
    # 1. Boot the session
    session = NavigationSession(
        destination=CAR,
        requester=StraightLineRouteRequester(step_count=3),
        config=config,
        nav_logger=NavLogger(config),
    )
    session.store.subscribe(_print_event)

    # 2. Request a route and wait for it
    session.request_initial_route(test_locations[0], CAR)
    await session.wait_until_idle()

    success, msg = session.start_navigation()
    if not success:
        print(f"[Main] Could not start navigation: {msg}")
        return
    print(f"[Main] {msg}")

    print("\n--- GPS Loop Active ---")

    # 3. GPS loop — replace with real GPS feed in production
    source = ReplayLocationSource(
        test_locations,
        interval_s=0.05,
        min_distance_m=config.location_distance_filter_m,
    )
    await session.run(source)
    await session.close()

    state = session.state
    step = session.current_step
    if state.status is TrackerStatus.ARRIVED:
        print("  ✓  Destination reached. Navigation ended.")
    elif step is not None:
        print(f"  [{classify_maneuver(step.instruction).value}] {step.instruction} "
              f"— {format_distance(state.distance_to_next_step_m)}")

    print("\n--- Session complete ---")
    print(f"    Log files written to: {config.log_dir}/")


def main() -> None:
    asyncio.run(simulate())


if __name__ == "__main__":
    main()
