from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ghroute.core.exceptions import FormatError
from ghroute.models.base import GeoPoint
from ghroute.models.custom_model import CustomModel


class TransportMode(str, Enum):
    GET = "GET"
    POST = "POST"


class RouteHints(BaseModel):
    """Typed hints for the recognized keys; anything else is kept as extra."""

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    instructions: bool = True
    calc_points: bool = True
    elevation: bool = False
    optimize: bool = False
    points_encoded: bool = True
    timeout: Optional[int] = Field(None, description="Connect timeout in milliseconds")

    def put(self, key: str, value: Any) -> "RouteHints":
        try:
            setattr(self, key, value)
        except ValidationError as e:
            raise FormatError(f"Invalid value {value!r} for hint '{key}'") from e
        return self

    @property
    def residual(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


REQUEST_FIELD_HINTS = ("profile", "locale", "algorithm")


class RouteRequest(BaseModel):
    points: List[GeoPoint] = Field(default_factory=list)
    profile: str = ""
    locale: str = "en_US"
    algorithm: str = ""
    headings: List[Optional[float]] = Field(default_factory=list)
    point_hints: List[str] = Field(default_factory=list)
    curbsides: List[str] = Field(default_factory=list)
    snap_preventions: List[str] = Field(default_factory=list)
    path_details: List[str] = Field(default_factory=list)
    custom_model: Optional[CustomModel] = None
    hints: RouteHints = Field(default_factory=RouteHints)
    transport_mode: TransportMode = TransportMode.GET

    def add_point(self, latitude: float, longitude: float) -> "RouteRequest":
        self.points.append(GeoPoint(latitude=latitude, longitude=longitude))
        return self

    def put_hint(self, key: str, value: Any) -> "RouteRequest":
        # profile, locale and algorithm are request fields, not hints
        if key in REQUEST_FIELD_HINTS:
            setattr(self, key, str(value))
        else:
            self.hints.put(key, value)
        return self


class Instruction(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: str = ""
    distance: float = 0.0
    time: int = 0
    sign: int = 0
    interval: List[int] = Field(default_factory=list)
    street_name: str = ""


class RoutePath(BaseModel):
    distance: float = Field(0.0, description="Distance in meters")
    time: int = Field(0, description="Duration in milliseconds")
    weight: float = 0.0
    ascend: float = 0.0
    descend: float = 0.0
    bbox: List[float] = Field(default_factory=list)
    points: List[List[float]] = Field(
        default_factory=list, description="Decoded points as [lat, lon] pairs"
    )
    encoded_points: Optional[str] = Field(
        None, description="Raw encoded points when they could not be decoded"
    )
    instructions: List[Instruction] = Field(default_factory=list)
    details: Dict[str, Any] = Field(default_factory=dict)


class RouteResponse(BaseModel):
    paths: List[RoutePath] = Field(default_factory=list)
    info: Dict[str, Any] = Field(default_factory=dict)
    hints: Dict[str, Any] = Field(default_factory=dict)

    @property
    def best(self) -> Optional[RoutePath]:
        return self.paths[0] if self.paths else None
