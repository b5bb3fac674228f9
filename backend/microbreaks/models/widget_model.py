from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime, timezone

from microbreaks.models.places_model import Place
from microbreaks.models.route_model import RoutePoint

class WidgetPayload(BaseModel):
    """What the map widget renders: markers for places, a polyline for the route."""
    places: List[Place] = []
    route: Optional[List[RoutePoint]] = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
