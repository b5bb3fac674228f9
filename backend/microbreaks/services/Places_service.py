import asyncio
import httpx
import logging
from typing import Optional

from microbreaks.repos.widget_repo import WidgetStateRepository
from microbreaks.models.places_model import Place, PlaceType, Location, BreakSpotsResponse
from microbreaks.core.config import settings
from microbreaks.core.logger import logs

# Overpass filters per category. Cafés are never mapped as relations.
CATEGORY_FILTERS = {
    PlaceType.PARK: ('["leisure"="park"]', ("node", "way", "relation")),
    PlaceType.QUIET_CAFE: ('["amenity"="cafe"]', ("node", "way")),
}

DEFAULT_NAMES = {
    PlaceType.PARK: "Parque sin nombre",
    PlaceType.QUIET_CAFE: "Café",
}

DEFAULT_ADDRESS = "Cerca de ti"


class PlacesService:
    def __init__(
        self,
        widget_state: WidgetStateRepository,
        overpass_url: str = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.widget_state = widget_state
        self.overpass_url = overpass_url or settings.OVERPASS_URL
        self.timeout = settings.OVERPASS_TIMEOUT
        self.limit = settings.PLACES_PER_CATEGORY
        # Only set in tests, to route requests to a fake Overpass
        self.transport = transport

    async def find_break_spots(
        self, lat: float, lng: float, radius: float = None, mood: str = None
    ) -> BreakSpotsResponse:
        radius = radius or settings.DEFAULT_RADIUS_METERS
        logs.log(logging.INFO, f"Looking for break spots around {lat}, {lng}", extra={"radius": radius, "mood": mood})

        # 1. Query both categories at the same time
        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            raw_parks, raw_cafes = await asyncio.gather(
                self._fetch_from_overpass(client, lat, lng, radius, PlaceType.PARK),
                self._fetch_from_overpass(client, lat, lng, radius, PlaceType.QUIET_CAFE),
            )

        # 2. Map and cap each category, parks first
        parks = self._to_places(raw_parks, PlaceType.PARK)
        cafes = self._to_places(raw_cafes, PlaceType.QUIET_CAFE)
        places = parks + cafes

        # 3. Hand the result to the widget
        self.widget_state.publish_places(places)

        logs.log(logging.INFO, f"Break spots found: {len(places)} (parks: {len(parks)}, cafes: {len(cafes)})")
        return BreakSpotsResponse(places=places, summary=self._summary(len(parks), len(cafes), radius))

    def build_query(self, lat: float, lng: float, radius: float, place_type: PlaceType) -> str:
        """Builds the Overpass QL query for one category."""
        tag_filter, element_types = CATEGORY_FILTERS[place_type]
        around = f"(around:{format_number(radius)},{format_number(lat)},{format_number(lng)})"
        statements = "\n".join(f"  {kind}{tag_filter}{around};" for kind in element_types)
        return f"[out:json][timeout:{int(self.timeout)}];\n(\n{statements}\n);\nout center;"

    async def _fetch_from_overpass(
        self, client: httpx.AsyncClient, lat: float, lng: float, radius: float, place_type: PlaceType
    ) -> list[dict]:
        """Returns raw Overpass elements, or an empty list if the query fails."""
        query = self.build_query(lat, lng, radius, place_type)
        try:
            response = await client.post(self.overpass_url, data={"data": query})
            response.raise_for_status()
            return response.json().get("elements", [])
        except Exception as e:
            logs.log(logging.ERROR, f"Overpass API failed for {place_type.value}: {str(e)}")
            return []

    def _to_places(self, elements: list[dict], place_type: PlaceType) -> list[Place]:
        places = []
        for element in elements:
            place = self._to_place(element, place_type)
            if place is None:
                logs.log(logging.WARNING, f"Skipping {place_type.value} without position", extra={"id": element.get("id")})
                continue
            places.append(place)
            if len(places) == self.limit:
                break
        return places

    def _to_place(self, element: dict, place_type: PlaceType) -> Optional[Place]:
        tags = element.get("tags") or {}

        # Ways and relations come with a computed center; nodes carry their own position
        position = element.get("center") or element
        if position.get("lat") is None or position.get("lon") is None:
            return None

        return Place(
            place_id=str(element.get("id")),
            name=tags.get("name") or DEFAULT_NAMES[place_type],
            type=place_type,
            location=Location(lat=position["lat"], lng=position["lon"]),
            address=self._get_address(tags),
        )

    def _get_address(self, tags: dict) -> str:
        street = tags.get("addr:street")
        if not street:
            return DEFAULT_ADDRESS
        return f"{street} {tags.get('addr:housenumber', '')}".strip()

    def _summary(self, parks: int, cafes: int, radius: float) -> str:
        total = parks + cafes
        distance = f"a menos de {format_number(radius)} m"
        if total == 0:
            return f"No encontré parques ni cafés {distance}."
        return (
            f"Encontré {_count(total, 'lugar', 'lugares')} {distance}: "
            f"{_count(parks, 'parque', 'parques')} y {_count(cafes, 'café tranquilo', 'cafés tranquilos')}."
        )


def format_number(value: float) -> str:
    """Plain decimal text for Overpass QL, which rejects exponent notation."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.7f}".rstrip("0").rstrip(".")


def _count(n: int, singular: str, plural: str) -> str:
    return f"{n} {singular if n == 1 else plural}"
