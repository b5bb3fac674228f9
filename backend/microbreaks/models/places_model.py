from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, List, Optional
from enum import Enum

from microbreaks.core.config import settings

# Strict floats: ints are accepted, numeric strings and booleans are not
Latitude = Annotated[float, Field(strict=True, ge=-90, le=90, description="Latitud del usuario")]
Longitude = Annotated[float, Field(strict=True, ge=-180, le=180, description="Longitud del usuario")]
RadiusMeters = Annotated[float, Field(strict=True, gt=0, description="Radio de búsqueda en metros")]
Minutes = Annotated[float, Field(strict=True, description="Tiempo disponible en minutos")]

class PlaceType(str, Enum):
    PARK = "park"
    QUIET_CAFE = "quiet_cafe"

class Location(BaseModel):
    lat: float
    lng: float

class Place(BaseModel):
    place_id: str
    name: str
    type: PlaceType
    location: Location
    address: str
    # OpenStreetMap has no ratings or walking times; both are fixed placeholders
    rating: float = 4.5
    estimated_walk_time: str = "5-10 min"

# --- API input ---
class FindBreakSpotsArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lat: Latitude
    lng: Longitude
    max_distance_meters: RadiusMeters = Field(settings.DEFAULT_RADIUS_METERS, alias="maxDistanceMeters")
    time_window_minutes: Minutes = Field(30, alias="timeWindowMinutes")
    mood: Optional[str] = Field(None, description="Estado de ánimo (ej: calmado, creativo)")

class BreakSpotsResponse(BaseModel):
    places: List[Place]
    summary: str
