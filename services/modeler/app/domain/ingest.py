"""Event-model document ingestion utilities."""
from __future__ import annotations

import json
from typing import Any

from .types import Dependency, Document, Element, Slice, Specification, Step

MISSING_SLICES = "Missing 'slices' array in root object."


class DocumentError(ValueError):
    """Raised when a document cannot be interpreted at all."""


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _objects(value: Any) -> list[dict[str, Any]]:
    return [item for item in _as_list(value) if isinstance(item, dict)]


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _identifier(value: Any) -> str | None:
    """Ids compare by their JSON text, so 1 and "1" name the same element."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, sort_keys=True)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name} in JSON")


def _parse_dependency(raw: dict[str, Any]) -> Dependency:
    return Dependency(
        element_type=raw.get("elementType"),
        direction=raw.get("type"),
        target_id=_identifier(raw.get("id")),
        title=raw.get("title"),
    )


def _parse_element(raw: dict[str, Any]) -> Element:
    return Element(
        id=_identifier(raw.get("id")),
        title=_text(raw.get("title")),
        description=_text(raw.get("description")) or None,
        context=raw.get("context"),
        dependencies=[_parse_dependency(dep) for dep in _objects(raw.get("dependencies"))],
    )


def _parse_step(raw: dict[str, Any]) -> Step:
    return Step(
        title=raw.get("title"),
        type=raw.get("type"),
        fields=raw.get("fields"),
        examples=raw.get("examples"),
    )


def _parse_specification(raw: dict[str, Any]) -> Specification:
    comments = [
        _text(comment.get("description")) if isinstance(comment, dict) else _text(comment)
        for comment in _as_list(raw.get("comments"))
    ]
    return Specification(
        title=raw.get("title"),
        comments=comments,
        given=[_parse_step(step) for step in _objects(raw.get("given"))],
        when=[_parse_step(step) for step in _objects(raw.get("when"))],
        then=[_parse_step(step) for step in _objects(raw.get("then"))],
    )


def _parse_slice(raw: dict[str, Any]) -> Slice:
    return Slice(
        title=_text(raw.get("title")),
        raw_slice_type=raw.get("sliceType"),
        screens=[_parse_element(item) for item in _objects(raw.get("screens"))],
        commands=[_parse_element(item) for item in _objects(raw.get("commands"))],
        events=[_parse_element(item) for item in _objects(raw.get("events"))],
        readmodels=[_parse_element(item) for item in _objects(raw.get("readmodels"))],
        specifications=[_parse_specification(item) for item in _objects(raw.get("specifications"))],
    )


def parse_document(text: str) -> Document:
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise DocumentError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get("slices"), list):
        raise DocumentError(MISSING_SLICES)
    # Non-object entries still occupy a position so slice indexes follow the document.
    return Document(slices=[_parse_slice(item if isinstance(item, dict) else {}) for item in data["slices"]])


__all__ = ["DocumentError", "MISSING_SLICES", "parse_document"]
