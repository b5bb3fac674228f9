import os
from urllib.parse import parse_qs

# Keep test runs from writing log files
os.environ.setdefault("LOG_TO_FILE", "false")

import httpx
import pytest

from microbreaks.repos.widget_repo import WidgetStateRepository, widget_state as shared_widget_state


def park_way(element_id, name=None, lat=40.41, lon=-3.68):
    tags = {"leisure": "park"}
    if name:
        tags["name"] = name
    return {"type": "way", "id": element_id, "center": {"lat": lat, "lon": lon}, "tags": tags}


def cafe_node(element_id, name=None, lat=40.42, lon=-3.69, street=None, housenumber=None):
    tags = {"amenity": "cafe"}
    if name:
        tags["name"] = name
    if street:
        tags["addr:street"] = street
    if housenumber:
        tags["addr:housenumber"] = housenumber
    return {"type": "node", "id": element_id, "lat": lat, "lon": lon, "tags": tags}


def overpass_transport(parks=None, cafes=None, fail=()):
    """
    Fake Overpass interpreter. `fail` lists the categories ("park", "cafe")
    that answer with HTTP 504. Every received query is kept in `.queries`.
    """
    queries = []

    def handler(request: httpx.Request) -> httpx.Response:
        query = parse_qs(request.content.decode())["data"][0]
        queries.append(query)
        category = "park" if '"leisure"="park"' in query else "cafe"
        if category in fail:
            return httpx.Response(504, text="Gateway Timeout")
        elements = parks if category == "park" else cafes
        return httpx.Response(200, json={"elements": elements or []})

    transport = httpx.MockTransport(handler)
    transport.queries = queries
    return transport


@pytest.fixture
def widget_state():
    return WidgetStateRepository()


@pytest.fixture(autouse=True)
def reset_shared_widget_state():
    shared_widget_state.clear()
    yield
    shared_widget_state.clear()


@pytest.fixture
def fake_overpass():
    return overpass_transport


@pytest.fixture
def make_park():
    return park_way


@pytest.fixture
def make_cafe():
    return cafe_node
