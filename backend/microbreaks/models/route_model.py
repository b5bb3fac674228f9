from pydantic import BaseModel
from typing import List, Literal

WalkPreference = Literal["más verde", "más ciudad", "mixto"]

class RoutePoint(BaseModel):
    lat: float
    lng: float

class WalkRoute(BaseModel):
    route_points: List[RoutePoint]
    estimated_duration: str
    description: str
