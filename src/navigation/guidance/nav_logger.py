# nav_logger.py
# Handles all file I/O for the navigation core.
# Saves the adopted route and per-fix navigation events as JSON.

import json
import os
import logging
from datetime import datetime
from typing import Optional

from shapely import wkt
from shapely.errors import ShapelyError

from .models import Coord, LocationFix, NavigationState, RouteStep
from .nav_config import NavConfig
from .nav_errors import NavigationError
from .route_model import Route

# Standard Python logger — configure at app entry point if needed
logger = logging.getLogger(__name__)


class NavLogger:
    """
    Persists route data and navigation events to JSON files.

    Args:
        config: NavConfig instance for file paths and directories.
    """

    def __init__(self, config: Optional[NavConfig] = None) -> None:
        self.config = config or NavConfig()
        os.makedirs(self.config.log_dir, exist_ok=True)

    # ------------------------------------------------------------------
    # Route persistence
    # ------------------------------------------------------------------

    def save_route(self, route: Route) -> bool:
        """
        Serialize a route to JSON; the polyline is stored as WKT.

        Args:
            route: Route to save.

        Returns:
            True on success, False on failure.
        """
        filepath = self.config.route_filepath
        try:
            data = {
                "saved_at": datetime.now().isoformat(),
                "step_count": len(route.steps),
                "total_distance_m": route.total_distance_m,
                "total_duration_s": route.total_duration_s,
                "steps": [s.to_dict() for s in route.steps],
                "polyline_wkt": route.as_linestring().wkt,
            }
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            logger.info(f"Route saved to {filepath} ({len(route.steps)} steps).")
            return True
        except IOError as e:
            logger.error(f"Failed to save route to {filepath}: {e}")
            return False

    def load_route(self, filepath: Optional[str] = None) -> Optional[Route]:
        """
        Load a previously saved route from JSON.

        Args:
            filepath: Path override; uses config default if omitted.

        Returns:
            Route, or None if loading failed.
        """
        path = filepath or self.config.route_filepath
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            line = wkt.loads(data["polyline_wkt"])
            route = Route.from_raw(
                steps=[RouteStep.from_dict(s) for s in data["steps"]],
                polyline=[Coord(lat, lon) for lon, lat in line.coords],
                total_distance_m=data.get("total_distance_m"),
                total_duration_s=data.get("total_duration_s", 0.0),
            )
            logger.info(f"Route loaded from {path} ({len(route.steps)} steps).")
            return route
        except (IOError, KeyError, ValueError, ShapelyError, NavigationError) as e:
            logger.error(f"Failed to load route from {path}: {e}")
            return None

    # ------------------------------------------------------------------
    # Session event logging
    # ------------------------------------------------------------------

    def log_event(self, state: NavigationState, fix: LocationFix) -> None:
        """
        Append a single navigation event to the session log file.

        Args:
            state: NavigationState after processing the fix.
            fix:   The fix that produced it.
        """
        entry = {
            "timestamp": datetime.now().isoformat(),
            "fix_timestamp": fix.timestamp,
            "lat": fix.coord.lat,
            "lon": fix.coord.lon,
            **state.to_dict(),
        }
        try:
            with open(self.config.event_filepath, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False) + "\n")
        except IOError as e:
            logger.error(f"Failed to write event log: {e}")
