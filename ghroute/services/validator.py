import logging

from ghroute.core.exceptions import ConfigurationError, StateConflictError
from ghroute.models.route import RouteRequest, TransportMode

logger = logging.getLogger(__name__)


class RequestValidator:
    """Cross-field checks that must pass before a request is encoded."""

    def validate(self, request: RouteRequest, mode: TransportMode) -> RouteRequest:
        if request.custom_model is not None and mode == TransportMode.GET:
            raise ConfigurationError(
                "Custom models cannot be used for GET requests. Use setPostRequest(true)"
            )

        if request.hints.instructions and not request.hints.calc_points:
            raise StateConflictError(
                "Cannot calculate instructions without points (only points without instructions). "
                "Use calc_points=false and instructions=false to disable point and instruction calculation"
            )

        logger.debug(f"Route request for profile '{request.profile}' is valid for {mode.value}")
        return request
