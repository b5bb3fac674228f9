import pytest

from microbreaks.models.places_model import PlaceType
from microbreaks.services.Places_service import PlacesService


@pytest.mark.asyncio
async def test_caps_each_category_at_five(widget_state, fake_overpass, make_park, make_cafe):
    transport = fake_overpass(
        parks=[make_park(i, f"Parque {i}") for i in range(8)],
        cafes=[make_cafe(100 + i, f"Café {i}") for i in range(7)],
    )
    svc = PlacesService(widget_state, transport=transport)

    result = await svc.find_break_spots(40.4152, -3.6845, radius=900)

    types = [p.type for p in result.places]
    assert types.count(PlaceType.PARK) == 5
    assert types.count(PlaceType.QUIET_CAFE) == 5
    # Parks come first, in Overpass order
    assert [p.name for p in result.places[:5]] == [f"Parque {i}" for i in range(5)]
    assert len(transport.queries) == 2


@pytest.mark.asyncio
async def test_untagged_elements_get_default_names(widget_state, fake_overpass, make_park, make_cafe):
    svc = PlacesService(widget_state, transport=fake_overpass(parks=[make_park(1)], cafes=[make_cafe(2)]))

    result = await svc.find_break_spots(40.0, -3.0)

    assert [p.name for p in result.places] == ["Parque sin nombre", "Café"]


@pytest.mark.asyncio
async def test_area_uses_center_and_node_uses_own_position(widget_state, fake_overpass, make_park, make_cafe):
    park = make_park(11, "Retiro", lat=40.4153, lon=-3.6845)
    cafe = make_cafe(22, "Murillo", lat=40.4143, lon=-3.6895)
    svc = PlacesService(widget_state, transport=fake_overpass(parks=[park], cafes=[cafe]))

    result = await svc.find_break_spots(40.4152, -3.6845)

    retiro, murillo = result.places
    assert (retiro.location.lat, retiro.location.lng) == (40.4153, -3.6845)
    assert (murillo.location.lat, murillo.location.lng) == (40.4143, -3.6895)
    assert retiro.place_id == "11"
    assert murillo.place_id == "22"


@pytest.mark.asyncio
async def test_address_from_street_tags(widget_state, fake_overpass, make_cafe):
    cafes = [
        make_cafe(1, "A", street="Calle Ruiz de Alarcón", housenumber="27"),
        make_cafe(2, "B", street="Calle Mayor"),
        make_cafe(3, "C"),
    ]
    svc = PlacesService(widget_state, transport=fake_overpass(cafes=cafes))

    result = await svc.find_break_spots(40.0, -3.0)

    assert [p.address for p in result.places] == [
        "Calle Ruiz de Alarcón 27",
        "Calle Mayor",
        "Cerca de ti",
    ]


@pytest.mark.asyncio
async def test_placeholder_rating_and_walk_time(widget_state, fake_overpass, make_park):
    svc = PlacesService(widget_state, transport=fake_overpass(parks=[make_park(1, "P")]))

    place = (await svc.find_break_spots(40.0, -3.0)).places[0]

    assert place.rating == 4.5
    assert place.estimated_walk_time == "5-10 min"


@pytest.mark.asyncio
async def test_failed_category_counts_as_empty(widget_state, fake_overpass, make_park, make_cafe):
    transport = fake_overpass(
        parks=[make_park(1, "P")],
        cafes=[make_cafe(2, "C")],
        fail=("park",),
    )
    svc = PlacesService(widget_state, transport=transport)

    result = await svc.find_break_spots(40.0, -3.0)

    assert [p.type for p in result.places] == [PlaceType.QUIET_CAFE]
    assert result.summary == "Encontré 1 lugar a menos de 900 m: 0 parques y 1 café tranquilo."


@pytest.mark.asyncio
async def test_both_categories_failing_returns_empty_result(widget_state, fake_overpass):
    svc = PlacesService(widget_state, transport=fake_overpass(fail=("park", "cafe")))

    result = await svc.find_break_spots(40.0, -3.0, radius=500)

    assert result.places == []
    assert result.summary == "No encontré parques ni cafés a menos de 500 m."


@pytest.mark.asyncio
async def test_lookup_replaces_widget_slot(widget_state, fake_overpass, make_park):
    svc = PlacesService(widget_state, transport=fake_overpass(parks=[make_park(1, "P")]))

    await svc.find_break_spots(40.0, -3.0)

    payload = widget_state.get()
    assert [p.name for p in payload.places] == ["P"]
    assert payload.route is None


def test_query_is_bounded_by_radius(widget_state):
    svc = PlacesService(widget_state)

    park_query = svc.build_query(40.4152, -3.6845, 900, PlaceType.PARK)
    cafe_query = svc.build_query(40.4152, -3.6845, 900.0, PlaceType.QUIET_CAFE)

    assert park_query.startswith("[out:json]")
    assert park_query.rstrip().endswith("out center;")
    assert 'relation["leisure"="park"](around:900,40.4152,-3.6845);' in park_query
    assert 'way["amenity"="cafe"](around:900,40.4152,-3.6845);' in cafe_query
    assert "relation" not in cafe_query


def test_query_never_uses_exponent_notation(widget_state):
    svc = PlacesService(widget_state)

    wide = svc.build_query(40.4152, -3.6845, 1500000, PlaceType.PARK)
    fractional = svc.build_query(40.4152, -3.6845, 1234.5678, PlaceType.PARK)

    assert "(around:1500000,40.4152,-3.6845);" in wide
    assert "(around:1234.5678,40.4152,-3.6845);" in fractional
    assert "e+" not in wide


@pytest.mark.asyncio
async def test_elements_without_position_are_skipped(widget_state, fake_overpass, make_cafe):
    relation = {"type": "relation", "id": 7, "tags": {"leisure": "park", "name": "Sin centro"}}
    transport = fake_overpass(parks=[relation], cafes=[make_cafe(2, "Murillo")])
    svc = PlacesService(widget_state, transport=transport)

    result = await svc.find_break_spots(40.0, -3.0, radius=500)

    assert [p.name for p in result.places] == ["Murillo"]
    assert result.summary == "Encontré 1 lugar a menos de 500 m: 0 parques y 1 café tranquilo."


@pytest.mark.asyncio
async def test_skipped_elements_do_not_use_up_the_cap(widget_state, fake_overpass, make_park):
    broken = [{"type": "way", "id": i, "tags": {"leisure": "park"}} for i in range(3)]
    parks = broken + [make_park(10 + i, f"Parque {i}") for i in range(6)]
    svc = PlacesService(widget_state, transport=fake_overpass(parks=parks))

    result = await svc.find_break_spots(40.0, -3.0)

    assert [p.place_id for p in result.places] == ["10", "11", "12", "13", "14"]
