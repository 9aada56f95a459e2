"""Modeler orchestration: interpretation, specification and rendering."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import structlog

from ..config import ModelerSettings
from ..observability.otel import get_meter, get_tracer
from ..persistence.storage import ArtifactStorage
from .interpreter import interpret_json
from .render import render_markdown
from .report import build_interpretation_payload
from .specificator import generate_specification
from .types import Interpretation

logger = structlog.get_logger(__name__)
_interpretations = get_meter().create_counter("modeler.interpretations", description="Documents interpreted")


@dataclass
class StoredSpecification:
    digest: str
    ref: str
    specification: dict[str, Any]


class ModelerService:
    def __init__(self, settings: ModelerSettings, storage: ArtifactStorage | None = None) -> None:
        self._settings = settings
        self._storage = storage or ArtifactStorage(settings)
        self._tracer = get_tracer()

    def interpret(self, text: str) -> Interpretation:
        start = time.perf_counter()
        with self._tracer.start_as_current_span("modeler.interpret") as span:
            interpretation = interpret_json(text)
            span.set_attribute("modeler.slices", len(interpretation.slices))
            span.set_attribute("modeler.warnings", len(interpretation.warnings))
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        if interpretation.summary is None:
            _interpretations.add(1, {"outcome": "rejected"})
            logger.warning("interpretation.rejected", reason=interpretation.warnings[0], elapsed_ms=elapsed_ms)
        else:
            _interpretations.add(1, {"outcome": "completed"})
            logger.info(
                "interpretation.completed",
                slices=interpretation.summary.total_slices,
                rendered_slices=len(interpretation.slices),
                warnings=len(interpretation.warnings),
                elapsed_ms=elapsed_ms,
            )
        return interpretation

    def interpret_payload(self, text: str) -> dict[str, Any]:
        return build_interpretation_payload(self.interpret(text))

    def specify(self, interpretation: Interpretation) -> dict[str, Any]:
        with self._tracer.start_as_current_span("modeler.specify"):
            return generate_specification(interpretation, self._settings.scaffold.file_extension)

    def render(self, text: str) -> str:
        interpretation = self.interpret(text)
        with self._tracer.start_as_current_span("modeler.render"):
            return render_markdown(interpretation, self.specify(interpretation))

    async def store_specification(self, text: str) -> StoredSpecification:
        specification = self.specify(self.interpret(text))
        digest, ref = await self._storage.put_json(specification)
        logger.info("specification.stored", digest=digest, ref=ref)
        return StoredSpecification(digest=digest, ref=ref, specification=specification)

    async def load_specification(self, digest: str) -> dict[str, Any]:
        return await self._storage.get_json(digest)


__all__ = ["ModelerService", "StoredSpecification"]
