import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote_plus

from pydantic import BaseModel, Field

from ghroute.models.route import RouteRequest, TransportMode
from ghroute.services.custom_model import CustomModelCodec
from ghroute.services.validator import RequestValidator

logger = logging.getLogger(__name__)

POINTS_ENCODED_MULTIPLIER = 1000000

# Keys emitted from request fields or only meant for the client
ALREADY_EMITTED = {
    "profile", "locale", "algorithm", "point", "points", "heading", "headings",
    "point_hint", "point_hints", "curbside", "curbsides", "snap_prevention",
    "snap_preventions", "details", "custom_model", "instructions", "calc_points",
    "elevation", "optimize", "points_encoded", "points_encoded_multiplier",
}
IGNORED_HINTS = ALREADY_EMITTED | {"type", "key", "service_url", "timeout"}


class EncodedRequest(BaseModel):
    method: TransportMode
    url: str
    body: Optional[Dict[str, Any]] = Field(None, description="JSON body for POST requests")


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "NaN"
    return str(value)


def _param(key: str, value: Any) -> str:
    return f"{quote_plus(key)}={quote_plus(_format_value(value))}"


class RequestEncoder:
    """Turns route requests into GET urls or POST bodies for the routing service."""

    def __init__(self, service_url: str, key: str = "", validator: Optional[RequestValidator] = None):
        self.service_url = service_url
        self.key = key or ""
        self.validator = validator or RequestValidator()

    def _with_query(self, query: str) -> str:
        separator = "&" if "?" in self.service_url else "?"
        return f"{self.service_url}{separator}{query}"

    def create_get_request(self, request: RouteRequest) -> EncodedRequest:
        self.validator.validate(request, TransportMode.GET)
        hints = request.hints

        params: List[str] = [_param("profile", request.profile)]
        for point in request.points:
            params.append(f"point={round(point.latitude, 6)},{round(point.longitude, 6)}")
        params.extend([
            _param("type", "json"),
            _param("instructions", hints.instructions),
            _param("points_encoded", hints.points_encoded),
            _param("points_encoded_multiplier", POINTS_ENCODED_MULTIPLIER),
            _param("calc_points", hints.calc_points),
            _param("algorithm", request.algorithm),
            _param("locale", request.locale),
            _param("elevation", hints.elevation),
            _param("optimize", hints.optimize),
        ])
        params.extend(_param("heading", heading) for heading in request.headings)
        params.extend(_param("point_hint", hint) for hint in request.point_hints)
        params.extend(_param("curbside", curbside) for curbside in request.curbsides)
        params.extend(_param("snap_prevention", snap) for snap in request.snap_preventions)
        params.extend(_param("details", detail) for detail in request.path_details)
        if self.key:
            params.append(_param("key", self.key))

        for hint_key, hint_value in hints.residual.items():
            if hint_key.lower() in IGNORED_HINTS:
                continue
            if hint_value is not None and _format_value(hint_value) != "":
                params.append(_param(hint_key, hint_value))

        url = self._with_query("&".join(params))
        logger.debug(f"Encoded GET route request: {url}")
        return EncodedRequest(method=TransportMode.GET, url=url)

    def request_to_json(self, request: RouteRequest) -> Dict[str, Any]:
        self.validator.validate(request, TransportMode.POST)
        hints = request.hints

        body: Dict[str, Any] = {
            "profile": request.profile,
            "points": [point.to_lon_lat() for point in request.points],
        }
        # Empty lists are left out instead of being sent as []
        if request.point_hints:
            body["point_hints"] = list(request.point_hints)
        if request.headings:
            body["headings"] = list(request.headings)
        if request.curbsides:
            body["curbsides"] = list(request.curbsides)
        if request.snap_preventions:
            body["snap_preventions"] = list(request.snap_preventions)
        if request.path_details:
            body["details"] = list(request.path_details)

        body["locale"] = request.locale
        if request.algorithm:
            body["algorithm"] = request.algorithm
        body["points_encoded"] = hints.points_encoded
        body["points_encoded_multiplier"] = POINTS_ENCODED_MULTIPLIER
        body["instructions"] = hints.instructions
        body["calc_points"] = hints.calc_points
        body["elevation"] = hints.elevation
        body["optimize"] = hints.optimize

        if request.custom_model is not None:
            body["custom_model"] = CustomModelCodec.to_json(request.custom_model)

        for hint_key, hint_value in hints.residual.items():
            if hint_key.lower() in IGNORED_HINTS:
                continue
            body[hint_key] = hint_value
        return body

    def create_post_request(self, request: RouteRequest) -> EncodedRequest:
        body = self.request_to_json(request)
        url = self._with_query(_param("key", self.key)) if self.key else self.service_url
        logger.debug(f"Encoded POST route request for {url} with {len(request.points)} points")
        return EncodedRequest(method=TransportMode.POST, url=url, body=body)

    def encode(self, request: RouteRequest) -> EncodedRequest:
        if request.transport_mode == TransportMode.POST:
            return self.create_post_request(request)
        return self.create_get_request(request)
