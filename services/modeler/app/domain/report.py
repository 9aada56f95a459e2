"""JSON payloads for interpretation results."""
from __future__ import annotations

from typing import Any

from .types import BddStep, BddTest, FlowStep, Interpretation, ListedElement, ReadModelDetails, SliceInterpretation, Summary


def _listed(elements: list[ListedElement]) -> list[dict[str, Any]]:
    payload = []
    for element in elements:
        item: dict[str, Any] = {"title": element.title}
        if element.description is not None:
            item["description"] = element.description
        payload.append(item)
    return payload


def _flow_step(step: FlowStep) -> dict[str, Any]:
    return {"type": step.type.value, "title": step.title, "description": step.description}


def _readmodel_details(details: ReadModelDetails | None) -> dict[str, Any] | None:
    if details is None:
        return None
    return {
        "exists": details.exists,
        "inboundEvents": details.inbound_events,
        "outboundEvents": details.outbound_events,
        "eventsSubscribedTo": details.events_subscribed_to,
        "consumer": details.consumer,
        "todoList": details.todo_list,
        "totalInboundEvents": details.total_inbound_events,
        "totalOutboundEvents": details.total_outbound_events,
    }


def _bdd_step(step: BddStep) -> dict[str, Any]:
    return {"title": step.title, "type": step.type, "fields": step.fields}


def _bdd_test(test: BddTest) -> dict[str, Any]:
    return {
        "title": test.title,
        "comments": list(test.comments),
        "given": [_bdd_step(step) for step in test.given],
        "when": [_bdd_step(step) for step in test.when],
        "then": [_bdd_step(step) for step in test.then],
    }


def slice_payload(slice_: SliceInterpretation) -> dict[str, Any]:
    return {
        "index": slice_.index,
        "title": slice_.title,
        "sliceType": slice_.slice_type,
        "flow": [_flow_step(step) for step in slice_.flow],
        "visualFlow": slice_.visual_flow,
        "commands": _listed(slice_.commands),
        "events": _listed(slice_.events),
        "externalEvents": _listed(slice_.external_events),
        "screens": _listed(slice_.screens),
        "readmodels": _listed(slice_.readmodels),
        "readmodelDetails": _readmodel_details(slice_.readmodel_details),
        "bddTests": [_bdd_test(test) for test in slice_.bdd_tests],
    }


def summary_payload(summary: Summary | None) -> dict[str, Any]:
    if summary is None:
        return {}
    return {
        "totalSlices": summary.total_slices,
        "totalCommands": summary.total_commands,
        "totalEvents": summary.total_events,
        "totalExternalEvents": summary.total_external_events,
        "totalScreens": summary.total_screens,
        "totalReadModels": summary.total_read_models,
        "totalSpecifications": summary.total_specifications,
        "sliceDetails": [slice_payload(slice_) for slice_ in summary.slice_details],
    }


def build_interpretation_payload(interpretation: Interpretation) -> dict[str, Any]:
    return {
        "summary": summary_payload(interpretation.summary),
        "slices": [slice_payload(slice_) for slice_ in interpretation.slices],
        "warnings": list(interpretation.warnings),
    }


__all__ = ["build_interpretation_payload", "slice_payload", "summary_payload"]
