from typing import Optional
from pydantic import BaseModel, Field


class NavigateQuery(BaseModel):
    """Query parameters of the Mapbox compatible navigate endpoint."""

    steps: bool = False
    voice_instructions: bool = False
    banner_instructions: bool = False
    roundabout_exits: bool = False
    voice_units: str = "metric"
    overview: str = "simplified"
    geometries: str = "polyline"
    bearings: str = ""
    language: str = "en"
    profile: Optional[str] = Field(None, description="Must match the profile segment of the URL")
