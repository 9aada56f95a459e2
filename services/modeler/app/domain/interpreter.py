"""Interpretation of event-model documents into per-slice flows and summaries."""
from __future__ import annotations

from .bdd import normalize_specification
from .external import append_simulator_slice
from .flow import CrossReferences, display_title, synthesize_flow
from .ingest import DocumentError, parse_document
from .lookup import build_element_lookup, build_event_lookup
from .types import Document, Interpretation, ListedElement, Slice, SliceInterpretation, Summary
from .visual import compose_visual_flow


def _interpret_slice(index: int, slice_: Slice, refs: CrossReferences, warnings: list[str]) -> SliceInterpretation:
    flow = synthesize_flow(slice_, refs, warnings)
    bdd_tests = [normalize_specification(spec, warnings) for spec in slice_.specifications]
    visual_flow = compose_visual_flow(slice_.slice_type, flow)

    return SliceInterpretation(
        index=index,
        title=slice_.title,
        slice_type=slice_.raw_slice_type,
        flow=flow.steps,
        visual_flow=visual_flow,
        commands=[ListedElement(c.title, c.description or "Command executed") for c in slice_.commands],
        events=[
            ListedElement(e.title, e.description or "Event triggered") for e in slice_.events if not e.is_external
        ],
        external_events=[
            ListedElement(display_title(e), e.description or "External event received")
            for e in slice_.events
            if e.is_external
        ],
        screens=[ListedElement(s.title, s.description or "User interface") for s in slice_.screens],
        readmodels=[ListedElement(rm.title, rm.description or "State projection") for rm in slice_.readmodels],
        readmodel_details=flow.readmodel_details,
        bdd_tests=bdd_tests,
    )


def summarize(document: Document, slice_details: list[SliceInterpretation]) -> Summary:
    event_titles: set[str] = set()
    external_titles: set[str] = set()
    screen_ids: set = set()
    for slice_ in document.slices:
        for event in slice_.events:
            (external_titles if event.is_external else event_titles).add(event.title)
        screen_ids.update(screen.id for screen in slice_.screens)

    return Summary(
        total_slices=len(document.slices),
        total_commands=sum(len(s.commands) for s in document.slices),
        total_events=len(event_titles),
        total_external_events=len(external_titles),
        total_screens=len(screen_ids),
        total_read_models=sum(len(s.readmodels) for s in document.slices),
        total_specifications=sum(len(s.specifications) for s in document.slices),
        slice_details=slice_details,
    )


def interpret_document(document: Document) -> Interpretation:
    result = Interpretation()
    refs = CrossReferences(
        events=build_event_lookup(document.slices),
        elements=build_element_lookup(document.slices),
    )

    for position, slice_ in enumerate(document.slices, start=1):
        result.slices.append(_interpret_slice(position, slice_, refs, result.warnings))

    slice_details = list(result.slices)
    append_simulator_slice(result.slices)
    result.summary = summarize(document, slice_details)
    return result


def interpret_json(text: str) -> Interpretation:
    """Interpret a raw JSON document; malformed input yields one warning and no slices."""
    try:
        document = parse_document(text)
    except DocumentError as exc:
        return Interpretation(warnings=[str(exc)])
    return interpret_document(document)


__all__ = ["interpret_document", "interpret_json", "summarize"]
