"""Main FastAPI application for the Groove backend."""
from fastapi import FastAPI, Request

from groove.api.routes.calendar import router as calendar_router
from groove.api.routes.habits import router as habits_router
from groove.api.routes.users import router as users_router
from groove.api.routes.work_hours import router as work_hours_router
from groove.core.config import settings
from groove.core.logging import configure_logging
from groove.core.middleware import RequestIDMiddleware
from groove.observability.client import init_opik
from groove.observability.tracing import trace

configure_logging(log_level=settings.log_level, sql_echo=settings.debug)

app = FastAPI(title=settings.app_name, version="0.1.0")
app.add_middleware(RequestIDMiddleware)
app.include_router(users_router)
app.include_router(work_hours_router)
app.include_router(habits_router)
app.include_router(calendar_router)


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()


@app.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    """Return a simple status payload so automation can probe the API."""
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}
