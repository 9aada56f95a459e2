"""Interpretation API."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ..config import ModelerSettings
from ..domain.modeler_service import ModelerService
from .deps import get_app_settings, get_modeler_service
from .payloads import DocumentPayload

router = APIRouter(prefix="/interpretations", tags=["interpretations"])


@router.post("")
async def create_interpretation(
    payload: DocumentPayload,
    settings: ModelerSettings = Depends(get_app_settings),
    service: ModelerService = Depends(get_modeler_service),
) -> dict[str, Any]:
    return service.interpret_payload(payload.require_text(settings))


@router.post("/render", response_class=PlainTextResponse)
async def render_interpretation(
    payload: DocumentPayload,
    settings: ModelerSettings = Depends(get_app_settings),
    service: ModelerService = Depends(get_modeler_service),
) -> PlainTextResponse:
    document = service.render(payload.require_text(settings))
    return PlainTextResponse(document, media_type="text/markdown; charset=utf-8")


__all__ = ["router"]
