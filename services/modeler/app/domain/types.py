"""Domain-level dataclasses for event-model documents and their interpretation."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class SliceType(enum.Enum):
    state_view = "STATE_VIEW"
    state_change = "STATE_CHANGE"
    automation = "AUTOMATION"
    unknown = "UNKNOWN"

    @classmethod
    def from_raw(cls, value: Any) -> "SliceType":
        """Exact, case-sensitive match; everything else is ``unknown``."""
        for member in (cls.state_view, cls.state_change, cls.automation):
            if value == member.value:
                return member
        return cls.unknown


class StepType(enum.Enum):
    screen = "SCREEN"
    command = "COMMAND"
    event = "EVENT"
    readmodel = "READMODEL"


EXTERNAL_CONTEXT = "EXTERNAL"


@dataclass
class Dependency:
    element_type: str | None
    direction: str | None
    target_id: Any
    title: str | None = None


@dataclass
class Element:
    id: Any
    title: str
    description: str | None = None
    context: str | None = None
    dependencies: list[Dependency] = field(default_factory=list)

    @property
    def is_external(self) -> bool:
        return self.context == EXTERNAL_CONTEXT

    def depends_on(self, element_type: str, direction: str | None = None) -> list[Dependency]:
        return [
            dep
            for dep in self.dependencies
            if dep.element_type == element_type and (direction is None or dep.direction == direction)
        ]


@dataclass
class Step:
    title: Any
    type: Any
    fields: Any = None
    examples: Any = None


@dataclass
class Specification:
    title: Any
    comments: list[str] = field(default_factory=list)
    given: list[Step] = field(default_factory=list)
    when: list[Step] = field(default_factory=list)
    then: list[Step] = field(default_factory=list)


@dataclass
class Slice:
    title: str
    raw_slice_type: Any
    screens: list[Element] = field(default_factory=list)
    commands: list[Element] = field(default_factory=list)
    events: list[Element] = field(default_factory=list)
    readmodels: list[Element] = field(default_factory=list)
    specifications: list[Specification] = field(default_factory=list)

    @property
    def slice_type(self) -> SliceType:
        return SliceType.from_raw(self.raw_slice_type)


@dataclass
class Document:
    slices: list[Slice]


@dataclass
class FlowStep:
    type: StepType
    title: str
    description: str


@dataclass
class ReadModelDetails:
    inbound_events: str
    outbound_events: str
    events_subscribed_to: str
    consumer: str
    todo_list: bool
    total_inbound_events: int
    total_outbound_events: int
    exists: bool = True


@dataclass
class SliceFlow:
    """Ordered flow of one slice plus what the visual composer needs to pivot."""

    steps: list[FlowStep] = field(default_factory=list)
    readmodel_details: ReadModelDetails | None = None
    readmodel_title: str | None = None
    completion_titles: list[str] = field(default_factory=list)
    todo_list: bool = False


@dataclass
class ListedElement:
    title: str
    description: str | None = None


@dataclass
class BddStep:
    title: Any
    type: Any
    fields: str


@dataclass
class BddTest:
    title: Any
    comments: list[str]
    given: list[BddStep]
    when: list[BddStep]
    then: list[BddStep]


@dataclass
class SliceInterpretation:
    index: int
    title: str
    slice_type: str | None
    flow: list[FlowStep]
    visual_flow: str
    commands: list[ListedElement]
    events: list[ListedElement]
    external_events: list[ListedElement]
    screens: list[ListedElement]
    readmodels: list[ListedElement]
    readmodel_details: ReadModelDetails | None
    bdd_tests: list[BddTest]


@dataclass
class Summary:
    total_slices: int = 0
    total_commands: int = 0
    total_events: int = 0
    total_external_events: int = 0
    total_screens: int = 0
    total_read_models: int = 0
    total_specifications: int = 0
    slice_details: list[SliceInterpretation] = field(default_factory=list)


@dataclass
class Interpretation:
    summary: Summary | None = None
    slices: list[SliceInterpretation] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


__all__ = [
    "BddStep",
    "BddTest",
    "Dependency",
    "Document",
    "EXTERNAL_CONTEXT",
    "Element",
    "FlowStep",
    "Interpretation",
    "ListedElement",
    "ReadModelDetails",
    "Slice",
    "SliceFlow",
    "SliceInterpretation",
    "SliceType",
    "Specification",
    "Step",
    "StepType",
    "Summary",
]
