import logging
from typing import Optional

from microbreaks.repos.widget_repo import WidgetStateRepository
from microbreaks.models.route_model import RoutePoint, WalkRoute
from microbreaks.core.logger import logs

# Roughly 300-400 m per side at mid latitudes
LOOP_OFFSET_DEGREES = 0.003


class RouteService:
    """
    Placeholder walk generator: a fixed square loop around the user.
    Neither the time budget nor the preference shape the geometry yet;
    a real router (e.g. OSRM foot profile) would replace `_square_loop`.
    """

    def __init__(self, widget_state: WidgetStateRepository):
        self.widget_state = widget_state

    def generate_walk_route(
        self, lat: float, lng: float, time_window_minutes: float, preference: Optional[str] = None
    ) -> WalkRoute:
        logs.log(logging.INFO, f"Generating walk route around {lat}, {lng}",
                 extra={"minutes": time_window_minutes, "preference": preference})

        route_points = self._square_loop(lat, lng)
        self.widget_state.publish_route(route_points)

        return WalkRoute(
            route_points=route_points,
            estimated_duration=f"{_echo_minutes(time_window_minutes)} min",
            description="Ruta circular por el barrio",
        )

    def _square_loop(self, lat: float, lng: float) -> list[RoutePoint]:
        d = LOOP_OFFSET_DEGREES
        return [
            RoutePoint(lat=lat, lng=lng),
            RoutePoint(lat=lat + d, lng=lng),
            RoutePoint(lat=lat + d, lng=lng + d),
            RoutePoint(lat=lat, lng=lng + d),
            RoutePoint(lat=lat, lng=lng),
        ]


def _echo_minutes(minutes: float):
    """25.0 reads as 25; fractional values are kept as given."""
    return int(minutes) if float(minutes).is_integer() else minutes
