"""Form reference endpoints — list forms, fetch one, inspect its branching.

These are read-only endpoints over the forms loaded from YAML at startup.
They don't require a respondent header since form definitions are public.
"""

from typing import Any

from fastapi import APIRouter, Depends

from formflow.lint import FormIssue, build_flow_graph, lint_form
from formflow.models.field import Form
from formflow.store import FormStore

from formflow_server.dependencies import get_store

router = APIRouter(prefix="/forms", tags=["forms"])


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("")
def list_forms(
    store: FormStore = Depends(get_store),
) -> list[dict]:
    """Return a summary of every loaded form."""
    return [
        {"id": form.id, "title": form.title, "field_count": len(form.fields)}
        for form in store.list_forms()
    ]


@router.get("/{form_id}")
def get_form(
    form_id: str,
    store: FormStore = Depends(get_store),
) -> Form:
    """Return the full form definition, branch rules included."""
    return store.get_form(form_id)


@router.get("/{form_id}/lint")
def get_form_lint(
    form_id: str,
    store: FormStore = Depends(get_store),
) -> list[FormIssue]:
    """Report branch rules that never fire, dangle, or loop."""
    return lint_form(store.get_form(form_id))


@router.get("/{form_id}/graph")
def get_form_graph(
    form_id: str,
    store: FormStore = Depends(get_store),
) -> dict[str, Any]:
    """Return the form's flow as a ``{nodes, edges}`` graph."""
    return build_flow_graph(store.get_form(form_id))
