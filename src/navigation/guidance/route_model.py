# route_model.py
# Immutable wrapper around one computed route (steps + polyline).
# Step boundary coordinates are derived lazily and memoized per instance.

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence, Tuple, Union

import numpy as np
from shapely.geometry import LineString

from .models import Coord, RouteStep
from .geo_utils import point_at_cumulative_distance, polyline_length
from .nav_errors import EmptyRouteError, InvalidRouteGeometry


RawStep = Union[RouteStep, Tuple[str, float]]


@dataclass(frozen=True)
class Route:
    """
    An ordered plan from origin to destination.

    Never mutated after construction; a recomputed route is a new instance.
    Use Route.from_raw() to build one from provider output.
    """
    steps: Tuple[RouteStep, ...]
    polyline: Tuple[Coord, ...]
    total_distance_m: float = 0.0
    total_duration_s: float = 0.0
    _step_ends: Dict[int, Coord] = field(
        default_factory=dict, init=False, repr=False, compare=False,
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))
        object.__setattr__(self, "polyline", tuple(self.polyline))
        if not self.steps:
            raise EmptyRouteError("Route has no steps.")
        if len(self.polyline) < 2:
            raise EmptyRouteError(
                f"Route polyline needs at least 2 points, got {len(self.polyline)}."
            )
        for step in self.steps:
            if step.length_m < 0:
                raise InvalidRouteGeometry(
                    f"Step '{step.instruction}' has negative length {step.length_m}."
                )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_raw(
        cls,
        steps: Iterable[RawStep],
        polyline: Sequence[Coord],
        total_distance_m: Optional[float] = None,
        total_duration_s: float = 0.0,
    ) -> "Route":
        """
        Build a Route from routing-provider output.

        Args:
            steps:            RouteStep objects or (instruction, length_m) pairs.
            polyline:         Ordered coordinates, at least two.
            total_distance_m: Provider distance; polyline length if omitted.
            total_duration_s: Provider expected travel time.

        Raises:
            EmptyRouteError:      no steps, or fewer than 2 polyline points.
            InvalidRouteGeometry: a step has a negative length.
        """
        parsed = tuple(
            s if isinstance(s, RouteStep) else RouteStep(s[0], float(s[1]))
            for s in steps
        )
        points = tuple(polyline)
        if total_distance_m is None:
            total_distance_m = polyline_length(points)
        return cls(
            steps=parsed,
            polyline=points,
            total_distance_m=float(total_distance_m),
            total_duration_s=float(total_duration_s),
        )

    # ------------------------------------------------------------------
    # Derived geometry
    # ------------------------------------------------------------------

    @property
    def last_step_index(self) -> int:
        return len(self.steps) - 1

    @property
    def destination(self) -> Coord:
        return self.polyline[-1]

    @property
    def step_boundaries_m(self) -> np.ndarray:
        """Cumulative distance (m) from the route start to the end of each step."""
        return np.cumsum([s.length_m for s in self.steps])

    def step_end_coordinate(self, step_index: int) -> Coord:
        """
        Polyline point where the given step ends.

        Raises:
            IndexError:           step_index outside [0, last_step_index].
            InvalidRouteGeometry: polyline lookup failed.
        """
        if not 0 <= step_index < len(self.steps):
            raise IndexError(f"Step index {step_index} out of range [0, {self.last_step_index}].")

        cached = self._step_ends.get(step_index)
        if cached is None:
            boundary = float(self.step_boundaries_m[step_index])
            cached = point_at_cumulative_distance(self.polyline, boundary)
            self._step_ends[step_index] = cached
        return cached

    def as_linestring(self) -> LineString:
        """Polyline as a shapely LineString in (lon, lat) order."""
        return LineString([(p.lon, p.lat) for p in self.polyline])

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "steps": [s.to_dict() for s in self.steps],
            "polyline": [p.to_dict() for p in self.polyline],
            "total_distance_m": self.total_distance_m,
            "total_duration_s": self.total_duration_s,
        }

    @staticmethod
    def from_dict(d: dict) -> "Route":
        return Route.from_raw(
            steps=[RouteStep.from_dict(s) for s in d["steps"]],
            polyline=[Coord.from_dict(p) for p in d["polyline"]],
            total_distance_m=d.get("total_distance_m"),
            total_duration_s=d.get("total_duration_s", 0.0),
        )
