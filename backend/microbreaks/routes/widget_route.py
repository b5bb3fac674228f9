from fastapi import APIRouter, Depends
from fastapi.responses import Response

from microbreaks.models.widget_model import WidgetPayload
from microbreaks.repos.widget_repo import WidgetStateRepository, get_widget_state

router = APIRouter(prefix="/widget")

@router.get("/data", response_model=WidgetPayload, responses={204: {"description": "Nothing looked up yet"}})
async def get_widget_data(widget_state: WidgetStateRepository = Depends(get_widget_state)):
    """Last places/route produced by a tool call, polled by the map widget."""
    payload = widget_state.get()
    if payload is None:
        return Response(status_code=204)
    return payload
