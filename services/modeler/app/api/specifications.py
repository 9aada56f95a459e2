"""Scaffold specification API."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from ..config import ModelerSettings
from ..domain.modeler_service import ModelerService
from ..persistence.storage import ArtifactNotFound
from .deps import get_app_settings, get_modeler_service
from .payloads import DocumentPayload

router = APIRouter(prefix="/specifications", tags=["specifications"])


class SpecificationResponse(BaseModel):
    digest: str
    specification_ref: str = Field(alias="specificationRef")
    specification: dict[str, Any]

    model_config = ConfigDict(populate_by_name=True)


@router.post("", response_model=SpecificationResponse, response_model_by_alias=True, status_code=status.HTTP_201_CREATED)
async def create_specification(
    payload: DocumentPayload,
    settings: ModelerSettings = Depends(get_app_settings),
    service: ModelerService = Depends(get_modeler_service),
):
    stored = await service.store_specification(payload.require_text(settings))
    return SpecificationResponse(digest=stored.digest, specificationRef=stored.ref, specification=stored.specification)


@router.get("/{digest}")
async def get_specification(digest: str, service: ModelerService = Depends(get_modeler_service)) -> dict[str, Any]:
    try:
        return await service.load_specification(digest)
    except ArtifactNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Specification {digest} not found") from exc


__all__ = ["router"]
