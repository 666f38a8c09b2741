from typing import Any, Dict, List, Tuple, Union
from pydantic import BaseModel, Field, ValidationError

from ghroute.core.exceptions import FormatError

# Plain JSON values as produced by json.loads
JsonValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


class GeoPoint(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    @classmethod
    def from_lat_lon_string(cls, value: str) -> "GeoPoint":
        """Parse a ``lat,lon`` pair."""
        lat, lon = cls._split_pair(value)
        return cls._build(value, lat, lon)

    @classmethod
    def from_lon_lat_string(cls, value: str) -> "GeoPoint":
        """Parse a ``lon,lat`` pair as used by GeoJSON and Mapbox URLs."""
        lon, lat = cls._split_pair(value)
        return cls._build(value, lat, lon)

    @classmethod
    def _build(cls, value: str, lat: float, lon: float) -> "GeoPoint":
        try:
            return cls(latitude=lat, longitude=lon)
        except ValidationError as e:
            raise FormatError(f"Point '{value}' is out of range") from e

    @staticmethod
    def _split_pair(value: str) -> Tuple[float, float]:
        parts = value.split(",")
        if len(parts) < 2:
            raise FormatError(f"Cannot parse point '{value}'")
        try:
            return float(parts[0]), float(parts[1])
        except ValueError as e:
            raise FormatError(f"Cannot parse point '{value}'") from e

    def to_lon_lat(self) -> List[float]:
        return [self.longitude, self.latitude]
