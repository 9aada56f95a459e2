"""FastAPI dependency helpers."""
from __future__ import annotations

from fastapi import Depends, Request

from ..config import ModelerSettings
from ..domain.modeler_service import ModelerService


def get_app_settings(request: Request) -> ModelerSettings:
    return request.app.state.settings


def get_modeler_service(settings: ModelerSettings = Depends(get_app_settings)) -> ModelerService:
    return ModelerService(settings)


__all__ = ["get_app_settings", "get_modeler_service"]
