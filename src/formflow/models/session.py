"""Session and step models — the contract between the engine and callers.

These models define what a navigation session returns at each step of the
wizard.  They are plain data so that a hosting layer can serialise them
straight into an HTTP response.

Step types:
  - QuestionStep: present one field to the respondent
  - CompletionStep: the flow ended; carries the final answer set
  - RejectionStep: the submitted answer (or operation) was refused

The ``StepResult`` union covers all three so callers can dispatch on ``type``.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel

from formflow.models.outcome import FailureReason, TerminationReason


class FieldPayload(BaseModel):
    """Flattened field for presentation layers.

    Strips branch rules and exposes only what the UI needs to render the
    question.
    """

    id: str
    kind: str
    label: str
    description: str | None = None
    placeholder: str | None = None
    required: bool = False
    # [{id, label}] for select fields
    options: list[dict] | None = None
    multiple: bool = False
    # {max_rating} for rating, {allowed_extensions} for file
    constraints: dict | None = None


class QuestionStep(BaseModel):
    """Present ``field`` and wait for an answer."""

    type: Literal["question"] = "question"
    index: int
    total: int
    field: FieldPayload
    # Presentation only -- never used for flow decisions.
    direction: Literal["forward", "backward"] = "forward"
    progress: int
    history_depth: int
    # Answer already given for this field (after going back), if any.
    previous_value: Any = None


class CompletionStep(BaseModel):
    """The flow ended; ``answers`` is the finalized answer set."""

    type: Literal["completed"] = "completed"
    reason: TerminationReason
    answers: dict[str, Any]


class RejectionStep(BaseModel):
    """The request was refused; session state is unchanged."""

    type: Literal["rejected"] = "rejected"
    reason: FailureReason
    field_id: str | None = None
    message: str


# Callers can match on step.type to dispatch rendering logic.
StepResult = QuestionStep | CompletionStep | RejectionStep


class SessionInfo(BaseModel):
    """Public view of a hosted session for API consumers."""

    respondent_id: str
    session_id: str
    form_id: str
    status: Literal["active", "completed"]
    current_index: int
    history_depth: int
    created_at: datetime
    updated_at: datetime
