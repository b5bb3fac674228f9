import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from microbreaks.core.config import settings
from microbreaks.core.logger import logs
from microbreaks.repos.widget_repo import WidgetStateRepository, get_widget_state
from microbreaks.routes.widget_route import router as widget_router
from microbreaks.routes.places_route import router as places_router
from microbreaks.services.Tool_service import tool_server

# Building the app creates the session manager the lifespan runs
mcp_http_app = tool_server.streamable_http_app()
mcp_sse_app = tool_server.sse_app()


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with tool_server.session_manager.run():
        logs.log(logging.INFO, f"{settings.SERVER_NAME} {settings.SERVER_VERSION} ready")
        yield


app = FastAPI(title="Micro Breaks Map", version=settings.SERVER_VERSION, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["mcp-session-id"],
)
app.include_router(widget_router)
app.include_router(places_router)

# Chat assistant transports: streamable HTTP on /mcp, SSE on /sse + /messages/
app.router.routes.extend(mcp_http_app.routes)
app.router.routes.extend(mcp_sse_app.routes)

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {
        "message": "Micro Breaks MCP Server is running. Use /mcp (or /sse) for the chat assistant connection.",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "mcp": "/mcp",
            "sse": "/sse",
            "widget": "/widget/data",
            "docs": "/docs"
        },
        "version": settings.SERVER_VERSION
    }

# --- Health Check ---
@app.get("/health")
async def health_check(widget_state: WidgetStateRepository = Depends(get_widget_state)):
    return {
        "status": "ok",
        "service": settings.SERVER_NAME,
        "widget_data_age_seconds": widget_state.age_seconds()
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("microbreaks.main:app", host=settings.HOST, port=settings.PORT, reload=True)
