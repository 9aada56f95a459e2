"""Given/when/then step rendering for behavioral specifications."""
from __future__ import annotations

import json
from typing import Any

from .flow import NONE_PLACEHOLDER
from .types import BddStep, BddTest, Specification, Step


def _stringify(value: Any) -> str:
    """Render a JSON value the way it reads in the source document, minus quotes."""
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif value is None:
        text = "null"
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    elif isinstance(value, (dict, list)):
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    else:
        text = str(value)
    return text.replace('"', "")


def format_fields(fields: Any) -> str:
    if not isinstance(fields, list) or not fields:
        return NONE_PLACEHOLDER
    rendered: list[str] = []
    for field in fields:
        if not isinstance(field, dict):
            continue
        name = field.get("name")
        if not name:
            continue
        example = field.get("example")
        value = _stringify(example) if example is not None else ""
        rendered.append(f"{_stringify(name)}={value}")
    return ", ".join(rendered) or NONE_PLACEHOLDER


def format_examples(examples: Any) -> str:
    if not isinstance(examples, list) or not examples:
        return NONE_PLACEHOLDER
    groups: list[str] = []
    for example in examples:
        if isinstance(example, dict):
            pairs = ", ".join(f"{key}={_stringify(value)}" for key, value in example.items())
            groups.append(f"({pairs})")
        else:
            groups.append(f"({_stringify(example)})")
    return "; ".join(groups)


def _render_step(spec: Specification, step: Step, warnings: list[str]) -> BddStep:
    if isinstance(step.examples, list) and step.examples:
        fields = format_examples(step.examples)
        if isinstance(step.fields, list) and step.fields:
            warnings.append(
                f"BDD Specification \"{spec.title}\" step '{step.title}' has both 'fields' and 'examples'. "
                "Using 'examples' only."
            )
    else:
        fields = format_fields(step.fields)
    return BddStep(title=step.title, type=step.type, fields=fields)


def normalize_specification(spec: Specification, warnings: list[str]) -> BddTest:
    return BddTest(
        title=spec.title,
        comments=list(spec.comments),
        given=[_render_step(spec, step, warnings) for step in spec.given],
        when=[_render_step(spec, step, warnings) for step in spec.when],
        then=[_render_step(spec, step, warnings) for step in spec.then],
    )


__all__ = ["format_examples", "format_fields", "normalize_specification"]
