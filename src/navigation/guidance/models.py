# models.py
# Shared data structures and enums used across all modules.

from dataclasses import dataclass
from enum import Enum


# ---------------------------------------------------------------------------
# Coordinate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coord:
    """Immutable geographic coordinate."""
    lat: float
    lon: float

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lon": self.lon}

    @staticmethod
    def from_dict(d: dict) -> "Coord":
        return Coord(float(d["lat"]), float(d["lon"]))


@dataclass(frozen=True)
class LocationFix:
    """A single timestamped location sample."""
    coord: Coord
    timestamp: float             # Unix timestamp


# ---------------------------------------------------------------------------
# Route step
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RouteStep:
    """One instruction-bearing segment of a route."""
    instruction: str
    length_m: float

    def to_dict(self) -> dict:
        return {"instruction": self.instruction, "length_m": self.length_m}

    @staticmethod
    def from_dict(d: dict) -> "RouteStep":
        return RouteStep(instruction=d["instruction"], length_m=float(d["length_m"]))


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TransportMode(Enum):
    WALKING    = "walking"
    AUTOMOBILE = "automobile"


class TrackerStatus(Enum):
    IDLE       = "idle"
    NAVIGATING = "navigating"
    ARRIVED    = "arrived"
    STOPPED    = "stopped"


# ---------------------------------------------------------------------------
# Navigation state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NavigationState:
    """Snapshot published to the UI after every fix or command."""
    current_step_index: int = 0
    distance_to_next_step_m: float = 0.0
    is_navigating: bool = False
    has_arrived: bool = False
    status: TrackerStatus = TrackerStatus.IDLE

    def to_dict(self) -> dict:
        return {
            "current_step_index": self.current_step_index,
            "distance_to_next_step_m": self.distance_to_next_step_m,
            "is_navigating": self.is_navigating,
            "has_arrived": self.has_arrived,
            "status": self.status.value,
        }
