import asyncio
import logging
import math
from typing import Any, Dict, List

import aiohttp
import polyline

from ghroute.core.exceptions import RoutingServiceError, RoutingServiceUnavailableError
from ghroute.models.route import RoutePath, RouteRequest, RouteResponse, TransportMode
from ghroute.repositories.base import BaseRoutingRepository
from ghroute.services.encoder import POINTS_ENCODED_MULTIPLIER, EncodedRequest, RequestEncoder

logger = logging.getLogger(__name__)


class GraphHopperWebRepository(BaseRoutingRepository):
    """Routing engine reached over HTTP through the GraphHopper route API."""

    def __init__(
        self,
        service_url: str,
        key: str = "",
        post_request: bool = True,
        connect_timeout_ms: int = 5000,
    ):
        logger.info(f"Initializing GraphHopper web client for {service_url}")
        self.encoder = RequestEncoder(service_url, key=key)
        self.post_request = post_request
        self.connect_timeout_ms = connect_timeout_ms

    def connect_timeout_for(self, request: RouteRequest) -> int:
        """Connect timeout in milliseconds; the ``timeout`` hint wins over the default."""
        if request.hints.timeout is not None:
            return request.hints.timeout
        return self.connect_timeout_ms

    def prepare(self, request: RouteRequest) -> EncodedRequest:
        if self.post_request or request.transport_mode == TransportMode.POST:
            return self.encoder.create_post_request(request)
        return self.encoder.create_get_request(request)

    async def route(self, request: RouteRequest) -> RouteResponse:
        encoded = self.prepare(request)
        timeout = aiohttp.ClientTimeout(sock_connect=self.connect_timeout_for(request) / 1000)
        logger.info(
            f"Requesting route via {encoded.method.value} for profile '{request.profile}' "
            f"with {len(request.points)} points"
        )

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                if encoded.method == TransportMode.POST:
                    response_ctx = session.post(encoded.url, json=encoded.body)
                else:
                    response_ctx = session.get(encoded.url)
                async with response_ctx as response:
                    status = response.status
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Routing service unreachable: {e}", exc_info=True)
            raise RoutingServiceUnavailableError(f"Routing service unreachable: {e}") from e
        except ValueError as e:
            logger.error(f"Routing service returned invalid JSON: {e}", exc_info=True)
            raise RoutingServiceError(f"Invalid response from routing service: {e}") from e

        if not isinstance(data, dict):
            raise RoutingServiceError(f"Unexpected routing response with status {status}")
        if status >= 400 or "message" in data:
            message = self.error_message(data)
            logger.warning(f"Routing service returned status {status}: {message}")
            raise RoutingServiceError(message)

        return self.parse_response(data, elevation=request.hints.elevation)

    @staticmethod
    def error_message(data: Dict[str, Any]) -> str:
        message = data.get("message", "Unknown routing error")
        details = [h.get("details") for h in data.get("hints", []) if isinstance(h, dict) and h.get("details")]
        if details:
            message += f" ({'; '.join(details)})"
        return message

    @staticmethod
    def decode_points(path: Dict[str, Any], elevation: bool) -> Dict[str, Any]:
        points = path.get("points")
        if points is None:
            return {}
        if isinstance(points, str):
            # the polyline codec only handles 2D points
            if elevation:
                return {"encoded_points": points}
            multiplier = path.get("points_encoded_multiplier", POINTS_ENCODED_MULTIPLIER)
            precision = int(round(math.log10(multiplier)))
            return {"points": [list(p) for p in polyline.decode(points, precision)]}
        coordinates: List[List[float]] = points.get("coordinates", [])
        return {"points": [[c[1], c[0]] for c in coordinates]}

    @classmethod
    def parse_response(cls, data: Dict[str, Any], elevation: bool = False) -> RouteResponse:
        paths = []
        for path in data.get("paths", []):
            paths.append(RoutePath(
                distance=path.get("distance", 0.0),
                time=path.get("time", 0),
                weight=path.get("weight", 0.0),
                ascend=path.get("ascend", 0.0),
                descend=path.get("descend", 0.0),
                bbox=path.get("bbox", []),
                instructions=path.get("instructions", []),
                details=path.get("details", {}),
                **cls.decode_points(path, elevation),
            ))
        hints = data.get("hints")
        return RouteResponse(
            paths=paths,
            info=data.get("info", {}),
            hints=hints if isinstance(hints, dict) else {},
        )
