from fastapi import APIRouter, Depends

from microbreaks.models.places_model import FindBreakSpotsArgs, BreakSpotsResponse
from microbreaks.services.Places_service import PlacesService
from microbreaks.repos.widget_repo import WidgetStateRepository, get_widget_state

router = APIRouter()

def get_places_service(widget_state: WidgetStateRepository = Depends(get_widget_state)) -> PlacesService:
    return PlacesService(widget_state)

@router.post("/places", response_model=BreakSpotsResponse)
async def get_places_endpoint(
    request: FindBreakSpotsArgs,
    service: PlacesService = Depends(get_places_service)
):
    return await service.find_break_spots(
        request.lat, request.lng, radius=request.max_distance_meters, mood=request.mood
    )
