"""
In-memory, single-slot store for the last widget payload.
There is no key and no expiry: every write replaces the slot and the
last writer wins. Concurrent requests are not serialized.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, List

from microbreaks.models.widget_model import WidgetPayload
from microbreaks.models.places_model import Place
from microbreaks.models.route_model import RoutePoint
from microbreaks.core.logger import logs


class WidgetStateRepository:
    """Holds the most recent places/route so the widget can re-display them."""

    def __init__(self):
        self._payload: Optional[WidgetPayload] = None

    def get(self) -> Optional[WidgetPayload]:
        return self._payload

    def publish_places(self, places: List[Place]) -> WidgetPayload:
        """Replace the slot with a fresh lookup. Any previous route is dropped."""
        self._payload = WidgetPayload(places=places)
        logs.log(logging.DEBUG, "Widget slot replaced", extra={"places": len(places)})
        return self._payload

    def publish_route(self, route: List[RoutePoint]) -> WidgetPayload:
        """Attach a route, keeping the places of the last lookup."""
        places = self._payload.places if self._payload else []
        self._payload = WidgetPayload(places=places, route=route)
        logs.log(logging.DEBUG, "Widget route updated", extra={"points": len(route)})
        return self._payload

    def clear(self):
        self._payload = None

    def age_seconds(self) -> Optional[float]:
        if self._payload is None:
            return None
        return (datetime.now(timezone.utc) - self._payload.updated_at).total_seconds()


# Process-wide slot shared by the tool endpoint and the widget route
widget_state = WidgetStateRepository()


def get_widget_state() -> WidgetStateRepository:
    return widget_state
