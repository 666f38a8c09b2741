from typing import Any, Dict, Optional
from pydantic import Field

from ghroute.models.route import RouteRequest
from ghroute.services.custom_model import CustomModelCodec


class RouteRequestBody(RouteRequest):
    """Route request as accepted by the API, custom model in its wire format."""

    custom_model: Optional[Dict[str, Any]] = Field(
        None, description="Custom model using the distance_influence/priority/speed vocabulary"
    )

    def to_route_request(self) -> RouteRequest:
        values = self.model_dump(exclude={"custom_model"})
        custom_model = None
        if self.custom_model is not None:
            custom_model = CustomModelCodec.from_json(self.custom_model)
        return RouteRequest(**values, custom_model=custom_model)
