import os
import html
import uuid
import json

import pydeck as pdk
import requests
import streamlit as st

# Page configuration
st.set_page_config(
    page_title="Micro Breaks Map",
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-header {
        font-size: 2.2rem;
        font-weight: bold;
        background: linear-gradient(90deg, #9333ea, #db2777);
        -webkit-background-clip: text;
        color: transparent;
        padding: 0.5rem 0;
    }
    .place-card {
        padding: 0.75rem;
        border-radius: 0.5rem;
        margin: 0.4rem 0;
        border-left: 4px solid #9333ea;
        background-color: #f9fafb;
    }
    .coach-box {
        padding: 1rem;
        background-color: #fdf2f8;
        border-radius: 0.5rem;
        border-left: 4px solid #db2777;
        margin: 1rem 0;
    }
</style>
""", unsafe_allow_html=True)

# Backend API configuration
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:3000")
DEFAULT_CENTER = {"lat": 40.4152, "lng": -3.6845}
MARKER_COLORS = {
    "park": [22, 163, 74],
    "quiet_cafe": [180, 83, 9],
}
MOODS = ["calmado", "creativo", "agotado", "con energía"]

if "coach_message" not in st.session_state:
    st.session_state.coach_message = None

if "soundtracks" not in st.session_state:
    st.session_state.soundtracks = []

if "tool_error" not in st.session_state:
    st.session_state.tool_error = None


def call_tool(name: str, arguments: dict) -> dict:
    """Call a tool on the backend over the streamable HTTP transport."""
    try:
        response = requests.post(
            f"{BACKEND_URL}/mcp",
            json={
                "jsonrpc": "2.0",
                "id": str(uuid.uuid4()),
                "method": "tools/call",
                "params": {"name": name, "arguments": arguments}
            },
            # The transport rejects clients that do not accept both
            headers={"Accept": "application/json, text/event-stream"},
            timeout=45
        )
        response.raise_for_status()
        body = response.json()
    except requests.exceptions.ConnectionError:
        return {"error": f"Cannot connect to backend at {BACKEND_URL}."}
    except requests.exceptions.Timeout:
        return {"error": "Request timed out. OpenStreetMap may be busy, try again."}
    except requests.exceptions.RequestException as e:
        return {"error": f"An error occurred: {str(e)}"}

    if "error" in body:
        return {"error": body["error"].get("message", "Unknown error")}
    result = body.get("result", {})
    if result.get("isError"):
        content = result.get("content") or [{}]
        return {"error": content[0].get("text", "Unknown error")}
    return result.get("structuredContent") or {}


def fetch_widget_data() -> dict | None:
    """Latest places/route published by the backend, None if nothing yet."""
    try:
        response = requests.get(f"{BACKEND_URL}/widget/data", timeout=5)
    except requests.exceptions.RequestException:
        return None
    if response.status_code != 200:
        return None
    return response.json()


def check_backend_health() -> bool:
    """Check if backend is running."""
    try:
        response = requests.get(f"{BACKEND_URL}/health", timeout=2)
        return response.status_code == 200
    except requests.exceptions.RequestException:
        return False


def build_map(places: list[dict], route: list[dict] | None, center: dict) -> pdk.Deck:
    """Markers for places, a polyline for the walking loop."""
    markers = [
        {
            "name": p["name"],
            "address": p["address"],
            "position": [p["location"]["lng"], p["location"]["lat"]],
            "color": MARKER_COLORS.get(p["type"], [147, 51, 234]),
        }
        for p in places
    ]
    layers = [
        pdk.Layer(
            "ScatterplotLayer",
            data=markers,
            get_position="position",
            get_fill_color="color",
            get_radius=25,
            pickable=True,
        )
    ]
    if route:
        layers.append(
            pdk.Layer(
                "PathLayer",
                data=[{"path": [[pt["lng"], pt["lat"]] for pt in route]}],
                get_path="path",
                get_color=[147, 51, 234],
                width_min_pixels=4,
            )
        )

    view_state = pdk.ViewState(latitude=center["lat"], longitude=center["lng"], zoom=15)
    return pdk.Deck(
        layers=layers,
        initial_view_state=view_state,
        map_style=None,
        tooltip={"text": "{name}\n{address}"},
    )


def display_place(place: dict):
    icon = "🌳" if place["type"] == "park" else "☕"
    st.markdown(
        f"""<div class="place-card">{icon} <b>{html.escape(place['name'])}</b><br>
        <small>{html.escape(place['address'])} · ⭐ {place['rating']} · 🚶 {place['estimated_walk_time']}</small></div>""",
        unsafe_allow_html=True,
    )


# Header
st.markdown('<div class="main-header">Micro Breaks Map</div>', unsafe_allow_html=True)
st.caption("Desconecta en 20 minutos")

# Sidebar
with st.sidebar:
    backend_status = check_backend_health()
    if backend_status:
        st.success("✅ Backend Connected")
    else:
        st.warning("⚠️ Backend Disconnected")
        st.code("cd backend && python run.py", language="bash")

    st.divider()
    st.subheader("📍 Dónde estás")
    lat = st.number_input("Latitud", value=DEFAULT_CENTER["lat"], format="%.6f")
    lng = st.number_input("Longitud", value=DEFAULT_CENTER["lng"], format="%.6f")

    st.subheader("⏱️ Tiempo disponible")
    time_window = st.slider("Minutos", min_value=5, max_value=60, value=20, step=5)

    st.subheader("💭 Mood")
    mood = st.selectbox("¿Cómo te sientes?", MOODS)
    name = st.text_input("Tu nombre", value="")

    if st.button("🔍 Buscar pausa", use_container_width=True, disabled=not backend_status):
        with st.spinner("Buscando parques y cafés cerca..."):
            spots = call_tool("find_break_spots", {
                "lat": lat, "lng": lng, "timeWindowMinutes": time_window, "mood": mood
            })
            sounds = call_tool("suggest_soundtrack", {"mood": mood})

        if "error" in spots:
            st.session_state.tool_error = spots["error"]
        else:
            st.session_state.tool_error = None
            places = spots.get("places", [])
            experience = places[0]["name"] if places else "Un paseo corto"
            coach = call_tool("generate_coach_message", {
                "name": name or None, "mood": mood, "experience_info": experience
            })
            st.session_state.coach_message = coach.get("result")
        st.session_state.soundtracks = sounds.get("result", [])

    if st.button("🚶 Ruta circular", use_container_width=True, disabled=not backend_status):
        route = call_tool("generate_walk_route", {"lat": lat, "lng": lng, "timeWindowMinutes": time_window})
        st.session_state.tool_error = route.get("error")


if st.session_state.tool_error:
    st.error(f"❌ {st.session_state.tool_error}")


@st.fragment(run_every="5s")
def widget_view():
    """Polls the backend so results requested from the chat assistant show up too."""
    data = fetch_widget_data()
    places = data["places"] if data else []
    route = data.get("route") if data else None

    map_col, list_col = st.columns([2, 1])
    with map_col:
        st.pydeck_chart(build_map(places, route, {"lat": lat, "lng": lng}))
    with list_col:
        st.subheader(f"Lugares ({len(places)})")
        if not places:
            st.info("Todavía no hay resultados. Pulsa «Buscar pausa» o pregunta al asistente.")
        for place in places:
            display_place(place)
        if data:
            with st.expander("🔍 Raw widget data"):
                st.code(json.dumps(data, ensure_ascii=False, indent=2), language="json")


widget_view()

if st.session_state.coach_message:
    st.markdown(f'<div class="coach-box">💬 {html.escape(st.session_state.coach_message)}</div>', unsafe_allow_html=True)

if st.session_state.soundtracks:
    st.subheader("🎵 Banda sonora")
    for track in st.session_state.soundtracks:
        st.write(f"**{track['title']}**: {track['description']}")

st.divider()
st.markdown("""
<div style='text-align: center; color: #999; padding: 1rem;'>
    <small>Powered by FastAPI & OpenStreetMap (Overpass API) | Made with Streamlit</small>
</div>
""", unsafe_allow_html=True)
