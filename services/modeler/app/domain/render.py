"""Human-facing markdown rendering of an interpretation."""
from __future__ import annotations

import json
from typing import Any

from .report import summary_payload
from .types import BddStep, Interpretation, ListedElement

NONE_TEXT = "(none)"


def list_titles(elements: list[ListedElement]) -> str:
    return ", ".join(element.title for element in elements) or NONE_TEXT


def format_steps(steps: list[BddStep]) -> str:
    return "; ".join(f"{step.title} ({step.fields})" for step in steps)


def format_file_tree(tree: dict[str, Any], indent: int = 0) -> str:
    pad = "  " * indent
    lines: list[str] = []
    for name, value in tree.items():
        if isinstance(value, dict):
            lines.append(f"{pad}📁 {name}\n")
            lines.append(format_file_tree(value, indent + 1))
        else:
            lines.append(f"{pad}📄 {name}\n")
    return "".join(lines)


def _block(title: str, content: Any) -> list[str]:
    text = content if isinstance(content, str) else json.dumps(content, indent=2, ensure_ascii=False)
    return [f"### {title}", "", "```", text, "```", "", "---", ""]


def render_markdown(interpretation: Interpretation, specification: dict[str, Any] | None = None) -> str:
    lines: list[str] = []
    lines.extend(_block("Global Summary", summary_payload(interpretation.summary)))

    slices = sorted(interpretation.slices, key=lambda s: s.index)
    if len(slices) > 1:
        flow_titles = " → ".join(f"{s.title} ({s.slice_type})" for s in slices)
        lines.extend(["### System Flow", "", flow_titles, "", "---", ""])

    for slice_ in slices:
        lines.append(f"### Slice {slice_.index}: {slice_.title} ({slice_.slice_type})")
        lines.append("")
        lines.append(f"Internal Flow: {slice_.visual_flow}")
        lines.append("")
        lines.append(f"- Screens: {list_titles(slice_.screens)}")
        lines.append(f"- Commands: {list_titles(slice_.commands)}")
        lines.append(f"- Events: {list_titles(slice_.events)}")
        lines.append(f"- External Events: {list_titles(slice_.external_events)}")
        lines.append(f"- Read Models: {list_titles(slice_.readmodels)}")
        lines.append("")
        lines.append(f"#### BDD Specifications ({len(slice_.bdd_tests)})")
        lines.append("")
        if not slice_.bdd_tests:
            lines.extend(["No BDD specifications for this slice.", ""])
        for test in slice_.bdd_tests:
            lines.append(f"##### {test.title}")
            lines.append("")
            if test.comments:
                lines.extend([" / ".join(test.comments), ""])
            lines.append(f"- Given: {format_steps(test.given)}")
            lines.append(f"- When: {format_steps(test.when)}")
            lines.append(f"- Then: {format_steps(test.then)}")
            lines.append("")
        lines.extend(["---", ""])

    if interpretation.warnings:
        lines.extend(["### Warnings", ""])
        lines.extend(f"- {warning}" for warning in interpretation.warnings)
        lines.append("")

    if specification is not None:
        notes = list(specification.get("developerNotes", []))
        if notes:
            lines.extend(_block("🤖 AI Constraints & Self-Verification", notes.pop(0)))
        lines.extend(
            [
                "### 🔧 Generated Project Specification",
                "",
                "This is the proposed browser event-sourced architecture.",
                "",
                "```",
                format_file_tree(specification.get("fileStructure", {})).rstrip("\n"),
                "```",
                "",
            ]
        )
        lines.extend(_block("Other Developer Notes", notes))

    return "\n".join(lines).rstrip("\n") + "\n"


__all__ = ["format_file_tree", "format_steps", "list_titles", "render_markdown"]
