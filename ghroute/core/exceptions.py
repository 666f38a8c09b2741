"""Exception hierarchy shared by the request encoding and navigation layers."""


class RequestError(ValueError):
    """Base class for errors in the caller's request construction."""
    pass


class ConfigurationError(RequestError):
    """Request cannot be sent with the selected transport mode."""
    pass


class StateConflictError(RequestError):
    """Two request hints contradict each other."""
    pass


class FormatError(RequestError):
    """A parameter uses an unsupported or malformed format."""
    pass


class CountMismatchError(RequestError):
    """Per-waypoint parameters do not line up with the waypoints."""
    pass


class RouteMismatchError(RequestError):
    """The request URL disagrees with the supplied parameters."""
    pass


class UnsupportedOptionError(RequestError):
    """A navigation option is switched off that the service requires."""
    pass


class RoutingServiceError(Exception):
    """Base class for errors reported by the remote routing service."""
    pass


class RoutingServiceUnavailableError(RoutingServiceError):
    """The remote routing service could not be reached."""
    pass
