"""Authoring-time inspection of a form's branching.

The runtime resolver is lenient: dangling destinations fall back to default
flow and self-references re-display the same field.  These helpers surface
such cases to form authors without ever rejecting the form.

  - ``lint_form`` returns a list of non-fatal ``FormIssue`` entries
  - ``build_flow_graph`` returns ``{nodes, edges}`` for visual inspection
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel

from formflow.constants import SUBMIT_SENTINEL
from formflow.models.field import Form

IssueKind = Literal[
    "dangling-destination",
    "self-reference",
    "unknown-trigger",
    "rules-ignored",
]


class FormIssue(BaseModel):
    """One finding about a field's branch rules."""

    kind: IssueKind
    field_id: str
    detail: str


def lint_form(form: Form) -> List[FormIssue]:
    """Report branch rules that the resolver will ignore or loop on."""
    issues: List[FormIssue] = []
    ids = {f.id for f in form.fields}

    for f in form.fields:
        if not f.logic_rules:
            continue

        if not f.is_single_choice:
            issues.append(FormIssue(
                kind="rules-ignored",
                field_id=f.id,
                detail=f"{len(f.logic_rules)} rule(s) on a {f.kind} field"
                + (" with multiple selection" if f.is_multi_select else "")
                + " never match",
            ))
            continue

        labels = set(f.option_labels)
        for rule in f.logic_rules:
            if rule.condition_value not in labels:
                issues.append(FormIssue(
                    kind="unknown-trigger",
                    field_id=f.id,
                    detail=f"trigger {rule.condition_value!r} is not an option label",
                ))
            if rule.is_submit:
                continue
            if rule.destination_id == f.id:
                issues.append(FormIssue(
                    kind="self-reference",
                    field_id=f.id,
                    detail=f"trigger {rule.condition_value!r} re-displays the same field",
                ))
            elif rule.destination_id not in ids:
                issues.append(FormIssue(
                    kind="dangling-destination",
                    field_id=f.id,
                    detail=f"trigger {rule.condition_value!r} points at unknown field "
                    f"{rule.destination_id!r}",
                ))

    return issues


def build_flow_graph(form: Form) -> Dict[str, Any]:
    """Build a cytoscape-style ``{nodes, edges}`` graph of the form's flow.

    Default edges link each field to the next one (the last one to the
    virtual SUBMIT node).  Rule edges are labelled with their trigger.
    Dangling destinations get no edge.
    """
    nodes: List[Dict[str, Any]] = []
    edges: List[Dict[str, Any]] = []
    ids = {f.id for f in form.fields}

    for f in form.fields:
        data: Dict[str, Any] = {
            "id": f.id,
            "label": f.label,
            "type": f.kind,
            "required": f.required,
        }
        if f.options:
            data["options"] = f.option_labels
        nodes.append({"data": data})

    for i, f in enumerate(form.fields):
        nxt = form.fields[i + 1].id if i + 1 < len(form.fields) else SUBMIT_SENTINEL
        edges.append({"data": {"source": f.id, "target": nxt, "label": "default"}})

        if not f.is_single_choice:
            continue
        for rule in f.logic_rules:
            if rule.is_submit or rule.destination_id in ids:
                edges.append({"data": {
                    "source": f.id,
                    "target": rule.destination_id,
                    "label": rule.condition_value,
                }})

    # Virtual terminal node
    nodes.append({"data": {"id": SUBMIT_SENTINEL, "label": "Submit", "type": "submit"}})
    return {"nodes": nodes, "edges": edges}
