from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Sequence
from pydantic import BaseModel, Field, field_validator


class Op(str, Enum):
    LIMIT = "limit_to"
    MULTIPLY = "multiply_by"
    ADD = "add"


class Statement(BaseModel):
    """One conditional rule of a custom model."""

    condition: str = Field(..., description="Boolean expression on road attributes")
    op: Op
    value: str = Field(..., description="Numeric or symbolic value expression")

    @field_validator("value", mode="before")
    @classmethod
    def stringify_value(cls, v: Any) -> str:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @classmethod
    def if_(cls, condition: str, op: Op, value: Any) -> "Statement":
        return cls(condition=condition, op=op, value=value)


class Polygon(BaseModel):
    type: Literal["Polygon"] = "Polygon"
    coordinates: List[List[List[float]]]

    @field_validator("coordinates")
    @classmethod
    def close_rings(cls, rings: List[List[List[float]]]) -> List[List[List[float]]]:
        closed = []
        for ring in rings:
            if len(ring) < 3:
                raise ValueError("A polygon ring needs at least three points")
            if ring[0] != ring[-1]:
                ring = ring + [list(ring[0])]
            closed.append(ring)
        return closed


class Feature(BaseModel):
    id: str
    type: Literal["Feature"] = "Feature"
    geometry: Polygon
    properties: Dict[str, Any] = Field(default_factory=dict)


class FeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[Feature] = Field(default_factory=list)

    def get(self, area_id: str) -> Optional[Feature]:
        for feature in self.features:
            if feature.id == area_id:
                return feature
        return None


class CustomModel(BaseModel):
    """Client supplied adjustments of the routing cost function.

    ``distance_influence`` and ``heading_penalty`` may be explicitly set to
    ``None``; that differs from leaving them unset and is tracked through
    ``model_fields_set``.
    """

    distance_influence: Optional[float] = None
    heading_penalty: Optional[float] = None
    areas: FeatureCollection = Field(default_factory=FeatureCollection)
    priority: List[Statement] = Field(default_factory=list)
    speed: List[Statement] = Field(default_factory=list)

    def is_set(self, field_name: str) -> bool:
        return field_name in self.model_fields_set

    def add_to_priority(self, statement: Statement) -> "CustomModel":
        self.priority.append(statement)
        return self

    def add_to_speed(self, statement: Statement) -> "CustomModel":
        self.speed.append(statement)
        return self

    def add_area(self, area_id: str, ring: Sequence[Sequence[float]]) -> "CustomModel":
        if self.areas.get(area_id) is not None:
            raise ValueError(f"Area '{area_id}' already exists")
        self.areas.features.append(
            Feature(id=area_id, geometry=Polygon(coordinates=[[list(p) for p in ring]]))
        )
        return self

    def set_distance_influence(self, value: Optional[float]) -> "CustomModel":
        self.distance_influence = value
        return self

    def set_heading_penalty(self, value: Optional[float]) -> "CustomModel":
        self.heading_penalty = value
        return self
