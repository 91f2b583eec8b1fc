"""Endpoint de liveness."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.api_route("/health", methods=["GET", "HEAD"], response_class=PlainTextResponse)
async def health_check() -> str:
    """Liveness probe — sempre 200 "OK", sem checar headers ou body."""
    return "OK"
