# nav_config.py
# All tuneable constants in one place.
# Pass a NavConfig instance to every module that needs settings.

import os
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Travel speeds (used by the simulated route requester)
# ---------------------------------------------------------------------------

WALKING_SPEED_KMH: float = 5.0    # km/h
DRIVING_SPEED_KMH: float = 40.0   # km/h, urban average


# ---------------------------------------------------------------------------
# Main config
# ---------------------------------------------------------------------------

@dataclass
class NavConfig:
    # Progress tracking
    arrival_threshold_m: float = 20.0          # closer than this to the car → arrived
    step_completion_threshold_m: float = 30.0  # closer than this to a step end → step done
    lookahead_steps: int = 2                   # how many steps ahead a fix may jump

    # Recalculation
    route_update_threshold_m: float = 50.0     # movement that triggers a new route
    walking_threshold_m: float = 900.0         # straight-line distance ≤ this → walking
    route_request_timeout_s: float = 15.0

    # Location source
    location_distance_filter_m: float = 20.0

    # Logging
    log_dir: str = "."                         # directory for saved JSON files
    route_filename: str = "active_route.json"
    event_filename: str = "nav_session.jsonl"

    @property
    def route_filepath(self) -> str:
        return os.path.join(self.log_dir, self.route_filename)

    @property
    def event_filepath(self) -> str:
        return os.path.join(self.log_dir, self.event_filename)
