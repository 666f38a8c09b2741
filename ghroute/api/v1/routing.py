import logging
from fastapi import APIRouter, Depends, HTTPException

from ghroute.api.dependencies import get_request_encoder, get_routing_repository
from ghroute.api.v1.models import RouteRequestBody
from ghroute.core.exceptions import RequestError, RoutingServiceError
from ghroute.models.route import RouteResponse
from ghroute.repositories.base import BaseRoutingRepository
from ghroute.services.encoder import EncodedRequest, RequestEncoder


logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/route", response_model=RouteResponse)
async def route_api(
    body: RouteRequestBody,
    routing_repository: BaseRoutingRepository = Depends(get_routing_repository),
):
    """Compute a route on the remote routing service."""
    try:
        request = body.to_route_request()
        logger.info(f"Received route request: profile='{request.profile}', points={len(request.points)}")
        result = await routing_repository.route(request)
        logger.info(f"Successfully computed route for profile '{request.profile}'")
        return result
    except RequestError as e:
        logger.warning(f"Invalid route request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except RoutingServiceError as e:
        logger.error(f"Routing service error: {e}", exc_info=True)
        if "not found" in str(e).lower():
            raise HTTPException(status_code=404, detail=f"Could not find route: {e}")
        raise HTTPException(status_code=503, detail=f"Routing service error: {e}")


@router.post("/route/encode", response_model=EncodedRequest)
async def encode_route_api(
    body: RouteRequestBody,
    encoder: RequestEncoder = Depends(get_request_encoder),
):
    """Show the request that would be sent to the routing service."""
    try:
        return encoder.encode(body.to_route_request())
    except RequestError as e:
        logger.warning(f"Invalid route request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
