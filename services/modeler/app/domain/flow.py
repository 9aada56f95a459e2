"""Per-slice flow synthesis."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .lookup import resolve
from .types import Element, FlowStep, ReadModelDetails, Slice, SliceFlow, SliceType, StepType

EXTERNAL_MARKER = "**EXTERNAL:** "
TODO_MARKER = "**TODO:** "
NONE_PLACEHOLDER = "(none)"

_COMPLETION_COMMAND_KEYWORDS = ("prepared", "mark", "complete")
_COMPLETION_EVENT_KEYWORDS = ("prepared", "completed")


@dataclass
class CrossReferences:
    events: dict[Any, Element]
    elements: dict[Any, Element]


def display_title(event: Element) -> str:
    return f"{EXTERNAL_MARKER}{event.title}" if event.is_external else event.title


def _contains_any(title: str, keywords: tuple[str, ...]) -> bool:
    lowered = title.lower()
    return any(keyword in lowered for keyword in keywords)


def _titles(elements: list[Element]) -> str:
    return ", ".join(element.title for element in elements)


def _state_view_flow(slice_: Slice, refs: CrossReferences, warnings: list[str]) -> SliceFlow:
    flow = SliceFlow()
    if not slice_.readmodels:
        warnings.append(f'STATE_VIEW slice "{slice_.title}" has no ReadModel defined.')
        return flow

    readmodel = slice_.readmodels[0]
    used_screen_ids: set[Any] = set()

    inbound_ids = dict.fromkeys(dep.target_id for dep in readmodel.depends_on("EVENT", "INBOUND"))
    outbound_ids = dict.fromkeys(dep.target_id for dep in readmodel.depends_on("EVENT", "OUTBOUND"))
    for event in refs.events.values():
        if any(dep.target_id == readmodel.id for dep in event.depends_on("READMODEL", "OUTBOUND")):
            inbound_ids.setdefault(event.id, None)

    inbound = resolve(inbound_ids, refs.events, refs.elements)
    outbound = resolve(outbound_ids, refs.events, refs.elements)

    consumers = [
        screen
        for screen in slice_.screens
        if screen.id not in used_screen_ids
        and any(
            dep.target_id == readmodel.id or dep.direction == "INBOUND"
            for dep in screen.depends_on("READMODEL")
        )
    ]
    used_screen_ids.update(screen.id for screen in consumers)

    todo_list = bool(inbound) and bool(outbound)
    if todo_list:
        rm_title = f"{TODO_MARKER}{readmodel.title}"
        rm_description = "State projection / **TODO list (Two-event pattern)**"
    else:
        rm_title = readmodel.title
        rm_description = "State projection / User view"

    flow.steps.extend(
        FlowStep(StepType.event, event.title, event.description or "Event that populates the read model")
        for event in inbound
    )
    flow.steps.append(FlowStep(StepType.readmodel, rm_title, rm_description))
    flow.steps.extend(
        FlowStep(StepType.screen, screen.title, screen.description or "User view") for screen in consumers
    )

    if todo_list:
        flow.steps.extend(
            FlowStep(StepType.event, event.title, f"Event that removes/completes items from {readmodel.title}")
            for event in outbound
        )
        warnings.append(
            f'ReadModel "{readmodel.title}" is a **To-Do List Projection** with '
            f"{len(inbound)} ADD event(s): [{_titles(inbound)}] and "
            f"{len(outbound)} REMOVE/DONE event(s): [{_titles(outbound)}]"
        )

    flow.readmodel_details = ReadModelDetails(
        inbound_events=_titles(inbound) or NONE_PLACEHOLDER,
        outbound_events=_titles(outbound) or NONE_PLACEHOLDER,
        events_subscribed_to=_titles(inbound) or NONE_PLACEHOLDER,
        consumer=_titles(consumers) or NONE_PLACEHOLDER,
        todo_list=todo_list,
        total_inbound_events=len(inbound),
        total_outbound_events=len(outbound),
    )
    flow.readmodel_title = readmodel.title
    flow.todo_list = todo_list
    if todo_list:
        flow.completion_titles = [event.title for event in outbound]

    if not inbound:
        warnings.append(
            f'STATE_VIEW slice "{slice_.title}" ReadModel "{readmodel.title}" has no inbound events.'
        )
    return flow


def _state_change_flow(slice_: Slice, refs: CrossReferences, warnings: list[str]) -> SliceFlow:
    event_titles = [display_title(event) for event in slice_.events]
    completion_slice = any(
        _contains_any(command.title, _COMPLETION_COMMAND_KEYWORDS) for command in slice_.commands
    ) or any(_contains_any(title, _COMPLETION_EVENT_KEYWORDS) for title in event_titles)

    flow = SliceFlow()
    flow.steps.extend(
        FlowStep(StepType.screen, screen.title, screen.description or "User interface") for screen in slice_.screens
    )
    flow.steps.extend(
        FlowStep(StepType.command, command.title, command.description or "Command executed")
        for command in slice_.commands
    )
    for event, title in zip(slice_.events, event_titles):
        if completion_slice and _contains_any(title, _COMPLETION_EVENT_KEYWORDS):
            flow.steps.append(
                FlowStep(
                    StepType.event,
                    f"**{title} (Completes To-Do List Item)**",
                    "Completion event - marks item as done",
                )
            )
        else:
            flow.steps.append(FlowStep(StepType.event, title, event.description or "Event triggered"))
    return flow


def _is_externally_triggered(event: Element) -> bool:
    return event.is_external or bool(event.depends_on("EXTERNAL"))


def _automation_flow(slice_: Slice, refs: CrossReferences, warnings: list[str]) -> SliceFlow:
    external = [event for event in slice_.events if _is_externally_triggered(event)]
    internal = [event for event in slice_.events if not _is_externally_triggered(event)]

    flow = SliceFlow()
    flow.steps.extend(
        FlowStep(StepType.event, f"{EXTERNAL_MARKER}{event.title}", event.description or "External event received")
        for event in external
    )
    flow.steps.extend(
        FlowStep(StepType.command, command.title, command.description or "Command executed")
        for command in slice_.commands
    )
    flow.steps.extend(
        FlowStep(StepType.event, event.title, event.description or "Event triggered") for event in internal
    )
    warnings.append(
        f'Slice "{slice_.title}" is an AUTOMATION slice triggered by '
        f"{len(external)} external event(s): [{_titles(external)}]"
    )
    return flow


def _unknown_flow(slice_: Slice, refs: CrossReferences, warnings: list[str]) -> SliceFlow:
    flow = SliceFlow()
    flow.steps.extend(FlowStep(StepType.screen, screen.title, screen.description or "") for screen in slice_.screens)
    flow.steps.extend(
        FlowStep(StepType.command, command.title, command.description or "") for command in slice_.commands
    )
    flow.steps.extend(
        FlowStep(StepType.event, display_title(event), event.description or "") for event in slice_.events
    )
    if slice_.raw_slice_type:
        warnings.append(f'Slice "{slice_.title}" has unhandled sliceType: {slice_.raw_slice_type}')
    return flow


_FlowHandler = Callable[[Slice, CrossReferences, list[str]], SliceFlow]

_HANDLERS: dict[SliceType, _FlowHandler] = {
    SliceType.state_view: _state_view_flow,
    SliceType.state_change: _state_change_flow,
    SliceType.automation: _automation_flow,
    SliceType.unknown: _unknown_flow,
}


def synthesize_flow(slice_: Slice, refs: CrossReferences, warnings: list[str]) -> SliceFlow:
    return _HANDLERS[slice_.slice_type](slice_, refs, warnings)


__all__ = [
    "CrossReferences",
    "EXTERNAL_MARKER",
    "NONE_PLACEHOLDER",
    "TODO_MARKER",
    "display_title",
    "synthesize_flow",
]
