from functools import lru_cache
from fastapi import Depends

from ghroute.core.settings import Settings, get_settings
from ghroute.repositories.base import BaseRoutingRepository, BaseTranslationRepository
from ghroute.repositories.routing.graphhopper_web import GraphHopperWebRepository
from ghroute.repositories.translation.static import StaticTranslationRepository
from ghroute.services.encoder import RequestEncoder
from ghroute.services.navigation import NavigateService


@lru_cache()
def get_routing_repository() -> BaseRoutingRepository:
    """Get GraphHopperWebRepository instance."""
    settings = get_settings()
    return GraphHopperWebRepository(
        service_url=settings.GRAPHHOPPER_URL,
        key=settings.GRAPHHOPPER_API_KEY or "",
        post_request=settings.POST_REQUEST,
        connect_timeout_ms=settings.CONNECT_TIMEOUT_MS,
    )


@lru_cache()
def get_translation_repository() -> BaseTranslationRepository:
    """Get StaticTranslationRepository instance."""
    return StaticTranslationRepository(get_settings().SUPPORTED_LOCALES)


def get_request_encoder(settings: Settings = Depends(get_settings)) -> RequestEncoder:
    return RequestEncoder(settings.GRAPHHOPPER_URL, key=settings.GRAPHHOPPER_API_KEY or "")


def get_navigate_service(
    translation_repository: BaseTranslationRepository = Depends(get_translation_repository),
    settings: Settings = Depends(get_settings),
) -> NavigateService:
    """Get NavigateService instance."""
    return NavigateService(
        translation_repository=translation_repository,
        profiles=settings.NAVIGATION_PROFILES,
    )
