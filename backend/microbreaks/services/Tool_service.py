import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from microbreaks.core.config import settings
from microbreaks.core.logger import logs
from microbreaks.models.places_model import BreakSpotsResponse, Latitude, Longitude, RadiusMeters, Minutes
from microbreaks.models.route_model import WalkRoute, WalkPreference
from microbreaks.models.coach_model import SoundtrackSuggestion
from microbreaks.repos.widget_repo import WidgetStateRepository, widget_state
from microbreaks.services.Places_service import PlacesService
from microbreaks.services.Route_service import RouteService
from microbreaks.services.Soundtrack_service import SoundtrackService
from microbreaks.services.Coach_service import CoachService

INSTRUCTIONS = (
    "Sugiere micro pausas cerca del usuario: parques y cafés tranquilos, "
    "una ruta corta a pie, música según el mood y un mensaje de ánimo."
)


def build_tool_server(
    widget_state: WidgetStateRepository,
    places_service: Optional[PlacesService] = None,
) -> FastMCP:
    """
    Declares the four break tools on a FastMCP server. Argument names
    are the camelCase ones the chat assistant sends.
    """
    places_service = places_service or PlacesService(widget_state)
    route_service = RouteService(widget_state)
    soundtrack_service = SoundtrackService()
    coach_service = CoachService()

    mcp = FastMCP(
        settings.SERVER_NAME,
        instructions=INSTRUCTIONS,
        stateless_http=True,
        json_response=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=logging.getLevelName(settings.LOGGER),
    )

    @mcp.tool(description="Encuentra parques, cafés y lugares tranquilos cerca usando OpenStreetMap.")
    async def find_break_spots(
        lat: Latitude,
        lng: Longitude,
        maxDistanceMeters: RadiusMeters = settings.DEFAULT_RADIUS_METERS,
        timeWindowMinutes: Minutes = 30,
        mood: Optional[str] = None,
    ) -> BreakSpotsResponse:
        logs.log(logging.INFO, "Calling tool find_break_spots", extra={"minutes": timeWindowMinutes})
        return await places_service.find_break_spots(lat, lng, radius=maxDistanceMeters, mood=mood)

    @mcp.tool(description="Genera una ruta de paseo circular o de ida y vuelta.")
    def generate_walk_route(
        lat: Latitude,
        lng: Longitude,
        timeWindowMinutes: Minutes,
        preference: Optional[WalkPreference] = None,
    ) -> WalkRoute:
        return route_service.generate_walk_route(lat, lng, timeWindowMinutes, preference=preference)

    @mcp.tool(description="Sugiere música o sonidos basados en el mood.")
    def suggest_soundtrack(mood: str) -> list[SoundtrackSuggestion]:
        return soundtrack_service.suggest_soundtrack(mood)

    @mcp.tool(description="Genera un mensaje corto y amable de coaching.")
    def generate_coach_message(mood: str, experience_info: str, name: Optional[str] = None) -> str:
        return coach_service.generate_coach_message(mood, experience_info, name=name)

    return mcp


# Shared server behind /mcp and /sse
tool_server = build_tool_server(widget_state)
