"""Cross-slice lookup tables keyed by element id."""
from __future__ import annotations

from typing import Any, Iterable

from .types import Element, Slice


def _index(elements: Iterable[Element], lookup: dict[Any, Element]) -> None:
    for element in elements:
        if element.id is None:
            continue
        # Later declarations overwrite earlier ones with the same id.
        lookup[element.id] = element


def build_event_lookup(slices: Iterable[Slice]) -> dict[Any, Element]:
    lookup: dict[Any, Element] = {}
    for slice_ in slices:
        _index(slice_.events, lookup)
    return lookup


def build_element_lookup(slices: Iterable[Slice]) -> dict[Any, Element]:
    lookup: dict[Any, Element] = {}
    for slice_ in slices:
        for elements in (slice_.commands, slice_.events, slice_.readmodels, slice_.screens):
            _index(elements, lookup)
    return lookup


def resolve(ids: Iterable[Any], events: dict[Any, Element], elements: dict[Any, Element]) -> list[Element]:
    """Resolve ids through the event table first; unknown ids are dropped."""
    resolved: list[Element] = []
    for element_id in ids:
        element = events.get(element_id) or elements.get(element_id)
        if element is not None:
            resolved.append(element)
    return resolved


__all__ = ["build_element_lookup", "build_event_lookup", "resolve"]
