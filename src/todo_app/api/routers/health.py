"""Health endpoint."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_class=PlainTextResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def read_health() -> str:
    """Return a plain heartbeat for load balancers."""
    return "OK"
