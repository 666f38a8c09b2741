from abc import ABC, abstractmethod

from ghroute.models.route import RouteRequest, RouteResponse


class BaseRoutingRepository(ABC):
    """Capability of computing routes on a remote routing engine."""

    @abstractmethod
    async def route(self, request: RouteRequest) -> RouteResponse:
        """Compute the route described by the request."""
        pass


class BaseTranslationRepository(ABC):
    """Capability of looking up instruction translations."""

    @abstractmethod
    def resolve_locale(self, language: str) -> str:
        """Return the closest supported locale for a language tag."""
        pass

    @abstractmethod
    def is_supported(self, locale: str) -> bool:
        """Whether translations exist for exactly this locale."""
        pass
