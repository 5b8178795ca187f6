class TollPlannerError(Exception):
    """Base exception for toll planning errors."""


class InvalidInputError(TollPlannerError):
    """Raised when a route, coordinate, vehicle class or setting is malformed."""


class InvalidLocationError(InvalidInputError):
    """Raised when an input location cannot be resolved."""


class UpstreamUnavailableError(TollPlannerError):
    """Raised when an upstream API call fails."""


class NoRouteFoundError(UpstreamUnavailableError):
    """Raised when a drivable route cannot be generated."""


class CatalogUnavailableError(TollPlannerError):
    """Raised when the toll gate catalog cannot be read."""
