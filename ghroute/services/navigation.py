import logging
from typing import Dict, List, NamedTuple, Optional

from ghroute.core.exceptions import (
    CountMismatchError,
    FormatError,
    RouteMismatchError,
    UnsupportedOptionError,
)
from ghroute.models.base import GeoPoint
from ghroute.models.navigation import NavigateQuery
from ghroute.models.route import RouteHints, RouteRequest, TransportMode
from ghroute.repositories.base import BaseTranslationRepository
from ghroute.services.bearings import parse_bearings

logger = logging.getLogger(__name__)

NAVIGATE_PATH_PREFIX = "/navigate/directions/v5/gh/"
REQUIRED_GEOMETRIES = "polyline6"
VOICE_UNITS = ("metric", "imperial")


class NavigatePath(NamedTuple):
    profile: str
    waypoints: List[str]


def parse_navigate_path(request_uri: Optional[str]) -> NavigatePath:
    """Split ``/navigate/directions/v5/gh/{profile}/{lon,lat;...}``.

    A URI without the expected prefix yields an empty profile and no
    waypoints so that validation reports it as an incorrect URL.
    """
    path = (request_uri or "").split("?", 1)[0]
    if not path.startswith(NAVIGATE_PATH_PREFIX):
        return NavigatePath(profile="", waypoints=[])
    remainder = path[len(NAVIGATE_PATH_PREFIX):]
    profile, _, coordinates = remainder.partition("/")
    waypoints = coordinates.split(";") if coordinates else []
    return NavigatePath(profile=profile, waypoints=waypoints)


class NavigationRequestValidator:
    """Checks navigate parameters against each other and against the URL."""

    def validate(
        self,
        geometries: str,
        bearings: Optional[str],
        waypoint_count: int,
        url_profile: str,
        profile: str,
        request_uri: str = "",
    ) -> None:
        if geometries != REQUIRED_GEOMETRIES:
            raise FormatError(f"Currently, we only support {REQUIRED_GEOMETRIES}")

        headings = parse_bearings(bearings)
        if headings and len(headings) != waypoint_count:
            raise CountMismatchError(
                f"Number of bearings and waypoints did not match: "
                f"{len(headings)} bearings, {waypoint_count} waypoints"
            )

        if url_profile != profile:
            raise RouteMismatchError(
                f"Incorrect URL {request_uri or url_profile}, expected profile '{profile}'"
            )

    def validate_uri(
        self, geometries: str, bearings: Optional[str], request_uri: Optional[str], profile: str
    ) -> NavigatePath:
        navigate_path = parse_navigate_path(request_uri)
        self.validate(
            geometries,
            bearings,
            len(navigate_path.waypoints),
            navigate_path.profile,
            profile,
            request_uri=request_uri or "",
        )
        return navigate_path


class NavigateService:
    """Translates a validated navigate query into a route request."""

    def __init__(
        self,
        translation_repository: BaseTranslationRepository,
        profiles: Dict[str, str],
        validator: Optional[NavigationRequestValidator] = None,
    ):
        self.translation_repository = translation_repository
        self.profiles = profiles
        self.validator = validator or NavigationRequestValidator()

    def check_options(self, query: NavigateQuery) -> None:
        if not query.steps:
            raise UnsupportedOptionError("Currently, you need to enable steps")
        if not query.roundabout_exits:
            raise UnsupportedOptionError("Roundabout exits have to be enabled right now")
        if not query.voice_instructions:
            raise UnsupportedOptionError("You need to enable voice instructions right now")
        if not query.banner_instructions:
            raise UnsupportedOptionError("You need to enable banner instructions right now")
        if query.voice_units not in VOICE_UNITS:
            raise UnsupportedOptionError(
                f"Voice units must be one of {', '.join(VOICE_UNITS)}, got '{query.voice_units}'"
            )

    def resolve_profile(self, mapbox_profile: str) -> str:
        try:
            return self.profiles[mapbox_profile]
        except KeyError:
            raise FormatError(
                f"Unknown profile '{mapbox_profile}', use one of {', '.join(self.profiles)}"
            ) from None

    def build_route_request(self, query: NavigateQuery, request_uri: Optional[str]) -> RouteRequest:
        navigate_path = parse_navigate_path(request_uri)
        profile = query.profile if query.profile is not None else navigate_path.profile
        self.validator.validate(
            query.geometries,
            query.bearings,
            len(navigate_path.waypoints),
            navigate_path.profile,
            profile,
            request_uri=request_uri or "",
        )
        self.check_options(query)

        points = [GeoPoint.from_lon_lat_string(w) for w in navigate_path.waypoints]
        hints = RouteHints(instructions=True, calc_points=True, points_encoded=True)
        hints.put("way_point_max_distance", 0 if query.overview == "full" else 1)

        request = RouteRequest(
            points=points,
            profile=self.resolve_profile(profile),
            locale=self.translation_repository.resolve_locale(query.language),
            headings=parse_bearings(query.bearings),
            path_details=["intersection"],
            hints=hints,
            transport_mode=TransportMode.POST,
        )
        logger.info(
            f"Navigate request for '{profile}' mapped to profile '{request.profile}' "
            f"with {len(points)} waypoints"
        )
        return request
