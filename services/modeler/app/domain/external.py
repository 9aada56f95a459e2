"""External event collection and the synthesized simulator slice."""
from __future__ import annotations

from typing import Iterable

from .flow import EXTERNAL_MARKER
from .types import ListedElement, SliceInterpretation

SIMULATOR_TITLE = "SIMULATION OF EXTERNAL EVENTS"
SIMULATOR_SLICE_TYPE = "STATE_CHANGE (Automation)"
SIMULATOR_SCREEN = "External Event Console UI"
SIMULATOR_COMMAND = "SimulateExternalEventCommand"


def clean_external_title(title: str) -> str:
    return title.replace(EXTERNAL_MARKER, "").strip()


def collect_external_titles(slices: Iterable[SliceInterpretation]) -> list[str]:
    # dict keys keep first-seen order across slices
    titles: dict[str, None] = {}
    for slice_ in slices:
        for event in slice_.external_events:
            titles.setdefault(clean_external_title(event.title), None)
    return list(titles)


def build_simulator_slice(index: int, titles: list[str]) -> SliceInterpretation:
    return SliceInterpretation(
        index=index,
        title=SIMULATOR_TITLE,
        slice_type=SIMULATOR_SLICE_TYPE,
        flow=[],
        visual_flow=(
            f"**EXTERNAL EVENT** [{', '.join(titles)}] → **{SIMULATOR_COMMAND}** "
            "→ **Domain Command** → **Domain Event**"
        ),
        commands=[ListedElement(SIMULATOR_COMMAND)],
        events=[],
        external_events=[ListedElement(title) for title in titles],
        screens=[ListedElement(SIMULATOR_SCREEN)],
        readmodels=[],
        readmodel_details=None,
        bdd_tests=[],
    )


def append_simulator_slice(slices: list[SliceInterpretation]) -> SliceInterpretation | None:
    titles = collect_external_titles(slices)
    if not titles:
        return None
    simulator = build_simulator_slice(len(slices) + 1, titles)
    slices.append(simulator)
    return simulator


__all__ = [
    "SIMULATOR_SLICE_TYPE",
    "SIMULATOR_TITLE",
    "append_simulator_slice",
    "build_simulator_slice",
    "clean_external_title",
    "collect_external_titles",
]
