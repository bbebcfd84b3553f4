# instructions.py
# Presentation helpers: maneuver icons, distance/time text, per-step progress.
# Pure functions, no state.

from enum import Enum

from .models import RouteStep
from .route_model import Route


class Maneuver(Enum):
    TURN_LEFT  = "turn_left"
    TURN_RIGHT = "turn_right"
    STRAIGHT   = "straight"
    MERGE      = "merge"
    EXIT       = "exit"
    ROUNDABOUT = "roundabout"
    U_TURN     = "u_turn"
    ARRIVE     = "arrive"
    DEPART     = "depart"


# Checked in order; first match wins.
_MANEUVER_KEYWORDS = (
    (("left",), Maneuver.TURN_LEFT),
    (("right",), Maneuver.TURN_RIGHT),
    (("straight", "continue"), Maneuver.STRAIGHT),
    (("merge",), Maneuver.MERGE),
    (("exit", "ramp"), Maneuver.EXIT),
    (("roundabout", "rotary"), Maneuver.ROUNDABOUT),
    (("u-turn", "u turn"), Maneuver.U_TURN),
    (("destination", "arrive"), Maneuver.ARRIVE),
    (("depart", "start"), Maneuver.DEPART),
)


def classify_maneuver(instruction: str) -> Maneuver:
    """
    Icon category for a free-text routing instruction.

    Args:
        instruction: Provider instruction, e.g. "Turn left onto Main St".

    Returns:
        Maneuver; STRAIGHT when no keyword matches.
    """
    text = instruction.lower()
    for keywords, maneuver in _MANEUVER_KEYWORDS:
        if any(k in text for k in keywords):
            return maneuver
    return Maneuver.STRAIGHT


def format_distance(distance_m: float) -> str:
    """'850 m' below one kilometre, '1.2 km' above."""
    if distance_m < 1000:
        return f"{int(round(distance_m))} m"
    return f"{distance_m / 1000:.1f} km"


def format_duration(seconds: float) -> str:
    """'12 min' below one hour, '1h 5m' above."""
    minutes = int(seconds // 60)
    if minutes < 60:
        return f"{minutes} min"
    return f"{minutes // 60}h {minutes % 60}m"


def step_progress(step: RouteStep, distance_to_next_m: float) -> float:
    """Fraction of the step already covered, clamped to [0, 1]."""
    if step.length_m <= 0:
        return 0.0
    return max(0.0, min(1.0, 1 - distance_to_next_m / step.length_m))


def route_summary(route: Route) -> str:
    return f"{format_distance(route.total_distance_m)} · {format_duration(route.total_duration_s)}"
