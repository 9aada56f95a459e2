"""Scaffold and developer-notes generation from an interpretation."""
from __future__ import annotations

import re
from typing import Any

from .external import SIMULATOR_SLICE_TYPE, SIMULATOR_TITLE, clean_external_title
from .types import Interpretation, SliceInterpretation, StepType

PLACEHOLDER_EVENT = "no-events-defined"

CONSTRAINT_NOTES = {
    "purpose": "AI Constraints & Self-Verification",
    "description": (
        "The following items represent the strict architectural constraints applied to this specification. "
        "The LLM confirms compliance with these points."
    ),
    "recommendations": [
        "Is the proposed architecture and data flow **completely confined to the browser** "
        "(i.e., no server, no database, only in-memory structures)? **(Y/N)**",
        "Does the solution strictly follow the **Event-Command-ReadModel** pattern "
        "(a form of CQRS/Event Sourcing)? **(Y/N)**",
        "Are there **NO** references to backend/server-side code (e.g., Express, databases, REST APIs, etc.) "
        "that contradict the in-browser constraint? **(Y/N)**",
        "Have all slices been correctly categorized as either 'STATE_CHANGE' (Command/Event) "
        "or 'VIEW' (Projection/Read Model)? **(Y/N)**",
    ],
}

ARCHITECTURE_NOTES = {
    "purpose": "Software Architecture Overview",
    "description": (
        "This is an in-browser only one-page app. All slices and events are managed via an in-memory event store. "
        "The UI displays the event stream from latest to first events, and each projection can be rebuilt "
        "independently."
    ),
    "recommendations": [
        "Follow CQRS: commands mutate state, events broadcast changes.",
        "Each slice encapsulates its own logic; avoid placing business logic in app.js.",
        "UI logic specific to a slice should reside inside that slice (e.g., ui.js).",
        "Pure UI components (like global event stream view or projection controls) can be outside slices.",
    ],
}

SLICE_RECOMMENDATIONS = [
    "Use the in-memory event store for testing event replay.",
    "Tag each event with projections that consume it to simplify replay.",
    "Keep slice self-contained: command/event handling and slice-specific UI.",
    "Implement BDD tests per slice: start with provided specifications and expand coverage with additional "
    "scenarios, including edge cases, invalid inputs, and multi-event sequences.",
]

SIMULATION_RECOMMENDATIONS = [
    "**External Event Simulation:** Since this is an in-browser app, the `ui` file MUST implement a basic screen "
    "(e.g., a text area and a button) that simulates receiving the raw external event payload.",
    "**Translation Logic (Copy/Paste):** Clicking the button dispatches the domain command using a simple "
    "translation (map/copy-paste) from the simulated external payload to the internal command structure. "
    "No external APIs or server calls are permitted.",
]

TODO_RECOMMENDATION = (
    "**To-Do List Pattern:** This Read Model must subscribe to **at least two** event types: one that marks the "
    "item as 'to-do' (ADD) and one that marks it as 'done' (REMOVE). The list state is keyed by a **unique ID** "
    "(e.g., `orderId` or `itemId`) found in both event payloads to reconcile the item's state."
)


def to_kebab(title: str) -> str:
    return re.sub(r"\s+", "-", clean_external_title(title)).lower()


def folder_name(title: str) -> str:
    return re.sub(r"\s+", "-", title.replace("slice:", "", 1).strip()).lower()


def _collect_events(slices: list[SliceInterpretation], ext: str) -> tuple[dict[str, Any], dict[str, str]]:
    events: dict[str, Any] = {}
    files: dict[str, str] = {}
    for slice_ in slices:
        for event in slice_.events:
            name = to_kebab(event.title)
            if name in events:
                continue
            file_name = f"{name}.{ext}"
            events[name] = {
                "file": file_name,
                "description": event.description or f"Definition for the {event.title} event.",
            }
            files[file_name] = f"// Schema and definition for {event.title}"

    if not files:
        file_name = f"{PLACEHOLDER_EVENT}.{ext}"
        files[file_name] = "// No events found in interpretation data. This is a placeholder."
        events[PLACEHOLDER_EVENT] = {
            "file": file_name,
            "description": "Placeholder event definition because interpretation data was empty.",
        }
    return events, files


def _subscribed_events(slice_: SliceInterpretation) -> list[str]:
    if slice_.readmodel_details is None:
        return []
    titles: list[str] = []
    for step in slice_.flow:
        if step.type is StepType.readmodel:
            break
        if step.type is StepType.event and step.title not in titles:
            titles.append(step.title)
    return titles


def _view_files(slice_: SliceInterpretation, ext: str) -> dict[str, Any]:
    handlers: dict[str, str] = {
        f"event-handler-registrar.{ext}": "// Subscribes all specific handlers to the event bus.",
    }
    for title in _subscribed_events(slice_):
        handlers[f"handle-{to_kebab(title)}.{ext}"] = f"// Projection handler for {title}."
    return {
        "handlers": handlers,
        f"projection.{ext}": "// Builds a view projection (the list itself)",
        f"ui.{ext}": "// Optional UI specific to this slice",
    }


def _is_state_change(slice_: SliceInterpretation) -> bool:
    return slice_.slice_type in ("STATE_CHANGE", SIMULATOR_SLICE_TYPE)


def _responsibility(slice_: SliceInterpretation) -> str:
    if slice_.slice_type == "AUTOMATION":
        return "automation processor logic"
    if _is_state_change(slice_):
        return "business command/event logic"
    return "read model projection"


def _slice_layout(slice_: SliceInterpretation, ext: str, notes: dict[str, Any]) -> dict[str, Any]:
    is_state_change = _is_state_change(slice_)
    simulated = slice_.title == SIMULATOR_TITLE or (is_state_change and bool(slice_.external_events))

    if simulated:
        notes["recommendations"].extend(SIMULATION_RECOMMENDATIONS)
        return {
            f"command.{ext}": "// Defines command structure for the simulated external event",
            f"commandHandler.{ext}": "// Handles command logic (the copy/paste translation logic)",
            f"ui.{ext}": "// SIMULATION SCREEN: Input fields to generate the external event payload.",
        }
    if slice_.slice_type == "AUTOMATION":
        return {
            f"processor.{ext}": "// Reacts to triggering events and dispatches the slice commands",
            f"command.{ext}": "// Defines command structure",
            f"commandHandler.{ext}": "// Handles command logic",
        }
    if is_state_change:
        return {
            f"command.{ext}": "// Defines command structure",
            f"commandHandler.{ext}": "// Handles command logic",
            f"ui.{ext}": "// Optional UI specific to this slice",
        }

    todo_list = slice_.readmodel_details is not None and slice_.readmodel_details.todo_list
    if "list of" in slice_.title.lower() or todo_list:
        notes["recommendations"].append(TODO_RECOMMENDATION)
    return _view_files(slice_, ext)


def generate_specification(interpretation: Interpretation, file_extension: str = "js") -> dict[str, Any]:
    """Propose a per-slice file layout and developer notes for an interpretation."""
    ext = file_extension.lstrip(".")
    events, event_files = _collect_events(interpretation.slices, ext)

    slices_tree: dict[str, Any] = {}
    developer_notes: list[dict[str, Any]] = [
        {**CONSTRAINT_NOTES, "recommendations": list(CONSTRAINT_NOTES["recommendations"])},
        {**ARCHITECTURE_NOTES, "recommendations": list(ARCHITECTURE_NOTES["recommendations"])},
    ]

    for slice_ in interpretation.slices:
        notes: dict[str, Any] = {
            "slice": slice_.title,
            "type": slice_.slice_type,
            "summary": f"Implements {_responsibility(slice_)}.",
            "recommendations": list(SLICE_RECOMMENDATIONS),
        }
        slices_tree[folder_name(slice_.title)] = _slice_layout(slice_, ext, notes)
        developer_notes.append(notes)

    return {
        "events": events,
        "fileStructure": {
            "src": {
                "slices": slices_tree,
                "events": event_files,
                "infrastructure": {
                    "bus": {f"event-bus.{ext}": "// Event bus logic"},
                    "event-store": {f"in-memory-event-store.{ext}": "// In-memory event store logic"},
                    "mock-db": {f"in-memory-db.{ext}": "// Simple in-memory DB for testing"},
                },
                "shared": {},
            }
        },
        "developerNotes": developer_notes,
    }


__all__ = ["folder_name", "generate_specification", "to_kebab"]
