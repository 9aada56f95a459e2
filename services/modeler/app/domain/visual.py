"""Single-line arrow summaries of a slice flow."""
from __future__ import annotations

from .flow import TODO_MARKER
from .types import FlowStep, SliceFlow, SliceType

ARROW = " ➜ "
BACKREF_MARKER = "**⇠** "


def _default_chain(steps: list[FlowStep]) -> str:
    seen: set[str] = set()
    titles: list[str] = []
    for step in steps:
        if not step.title or step.title in seen:
            continue
        seen.add(step.title)
        titles.append(step.title)
    return ARROW.join(titles)


def _pivot_chain(flow: SliceFlow) -> str:
    seen: set[tuple[str, str]] = set()
    forward: list[str] = []
    for step in flow.steps:
        if not step.title or any(title in step.title for title in flow.completion_titles):
            continue
        key = (step.type.value, step.title)
        if key in seen:
            continue
        seen.add(key)
        forward.append(step.title)

    rm_title = flow.readmodel_title or ""
    rm_display_title = f"{TODO_MARKER}{rm_title}"
    position = next(
        (idx for idx, title in enumerate(forward) if rm_display_title in title or rm_title in title),
        None,
    )
    if position is None:
        return ARROW.join(forward)
    backref = f"{BACKREF_MARKER}{', '.join(flow.completion_titles)}"
    return ARROW.join(forward[: position + 1] + [backref] + forward[position + 1 :])


def compose_visual_flow(slice_type: SliceType, flow: SliceFlow) -> str:
    if slice_type is SliceType.state_view and flow.todo_list and flow.completion_titles:
        return _pivot_chain(flow)
    return _default_chain(flow.steps)


__all__ = ["ARROW", "BACKREF_MARKER", "compose_visual_flow"]
