# nav_errors.py
# Error taxonomy for route construction, geometry lookups and routing providers.


class NavigationError(Exception):
    """Base class for all navigation core errors."""


class EmptyRouteError(NavigationError):
    """Route has no steps or fewer than two polyline points."""


class InvalidRouteGeometry(NavigationError):
    """Degenerate polyline or step data encountered during a point lookup."""


class RoutingError(NavigationError):
    """The routing provider failed to produce a route (network, no result, ...)."""
