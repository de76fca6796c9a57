"""
Liveness router.

GET / answers with a plain-text banner, GET /health with the
application status and version. No business logic.
"""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from todo_api.interfaces.todo.schemas import HealthResponse

router = APIRouter(tags=["health"])

LIVENESS_TEXT = "ToDo List API is running. See /api-docs for the documentation."


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Liveness",
    description="Plain-text banner confirming the API is up.",
)
def root() -> str:
    return LIVENESS_TEXT


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
def health_check(request: Request) -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(status="ok", version=request.app.state.settings.version)
