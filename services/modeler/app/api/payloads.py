"""Request payloads shared by the modeler routers."""
from __future__ import annotations

import os

from fastapi import HTTPException, status
from pydantic import BaseModel, Field

from ..config import ModelerSettings


class DocumentPayload(BaseModel):
    text: str | None = Field(default=None, description="Raw event-model JSON document")
    ref: str | None = Field(default=None, description="Path to an event-model JSON document")

    def require_text(self, settings: ModelerSettings) -> str:
        if self.text is not None:
            text = self.text
        elif self.ref and os.path.exists(self.ref):
            with open(self.ref, "r", encoding="utf-8") as handle:
                text = handle.read()
        else:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Document text or accessible ref required")
        if len(text.encode("utf-8")) > settings.limits.max_document_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Document exceeds {settings.limits.max_document_bytes} bytes",
            )
        return text


__all__ = ["DocumentPayload"]
