from typing import Optional
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ghroute.api.dependencies import get_navigate_service, get_routing_repository
from ghroute.core.exceptions import RequestError, RoutingServiceError
from ghroute.models.navigation import NavigateQuery
from ghroute.models.route import RouteResponse
from ghroute.repositories.base import BaseRoutingRepository
from ghroute.services.navigation import NavigateService


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/directions/v5/gh/{url_profile}/{coordinates}", response_model=RouteResponse)
async def navigate_api(
    request: Request,
    url_profile: str,
    coordinates: str,
    steps: bool = Query(False, description="Return turn-by-turn steps"),
    voice_instructions: bool = Query(False),
    banner_instructions: bool = Query(False),
    roundabout_exits: bool = Query(False),
    voice_units: str = Query("metric", description="metric or imperial"),
    overview: str = Query("simplified", description="simplified or full"),
    geometries: str = Query("polyline", description="Only polyline6 is supported"),
    bearings: str = Query("", description="angle,tolerance;angle,tolerance;..."),
    language: str = Query("en"),
    profile: Optional[str] = Query(None, description="Defaults to the profile in the URL"),
    navigate_service: NavigateService = Depends(get_navigate_service),
    routing_repository: BaseRoutingRepository = Depends(get_routing_repository),
):
    """Mapbox style directions backed by the routing service."""
    query = NavigateQuery(
        steps=steps,
        voice_instructions=voice_instructions,
        banner_instructions=banner_instructions,
        roundabout_exits=roundabout_exits,
        voice_units=voice_units,
        overview=overview,
        geometries=geometries,
        bearings=bearings,
        language=language,
        profile=profile if profile is not None else url_profile,
    )
    try:
        logger.info(f"Received navigate request: {request.url.path}")
        route_request = navigate_service.build_route_request(query, request.url.path)
        return await routing_repository.route(route_request)
    except RequestError as e:
        logger.warning(f"Invalid navigate request '{request.url.path}': {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except RoutingServiceError as e:
        logger.error(f"Routing service error for navigate request: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=f"Routing service error: {e}")
