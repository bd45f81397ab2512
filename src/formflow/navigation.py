"""NavigationSession — one respondent's walk through a form.

A session wraps the validator and the flow resolver with the state a
step-by-step wizard needs:

  - the current field position
  - a visited-path stack (``history``) of positions left by forward steps
  - the accumulated answer set, keyed by field id

State machine::

    Active(position) --submit(valid, non-terminal)--> Active(target)  [push]
    Active(position) --submit(valid, terminal)------> Completed(answers)
    Active(position) --submit(invalid)--------------> Active(position) [rejected]
    Active(position) --back, history non-empty------> Active(popped)   [pop]
    Active(position) --back, history empty----------> Active(position) [no-op]

``Completed`` is terminal; further submit/back calls are rejected with
``session-already-complete``.

Going back never recomputes flow and never discards answers: the answer
for the field being returned to is offered again as ``previous_value``,
and answers for fields that are left stay in the set until overwritten.

Sessions are synchronous and hold no locks.  One session belongs to one
respondent attempt; hosting layers must not share instances.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from formflow.models.field import Form, FormField
from formflow.models.outcome import TerminationReason, ValidationFailure
from formflow.models.session import (
    CompletionStep,
    FieldPayload,
    QuestionStep,
    RejectionStep,
    StepResult,
)
from formflow.resolver import FlowResolver
from formflow.validator import AnswerValidator

logger = logging.getLogger(__name__)


def field_to_payload(field: FormField) -> FieldPayload:
    """Flatten a field for presentation, dropping its branch rules."""
    constraints: dict | None = None
    if field.kind == "rating":
        constraints = {"max_rating": field.effective_max_rating}
    elif field.kind == "file":
        constraints = {"allowed_extensions": list(field.allowed_extensions or [])}

    options = None
    if field.options is not None:
        options = [{"id": o.id, "label": o.label} for o in field.options]

    return FieldPayload(
        id=field.id,
        kind=field.kind,
        label=field.label,
        description=field.description,
        placeholder=field.placeholder,
        required=field.required,
        options=options,
        multiple=field.is_multi_select,
        constraints=constraints,
    )


class NavigationSession:
    """Stateful controller for one in-memory response attempt.

    Args:
        form: the form being filled out
        validator: answer validator (defaults to :class:`AnswerValidator`)
        resolver: flow resolver (defaults to :class:`FlowResolver`)
    """

    def __init__(
        self,
        form: Form,
        *,
        validator: AnswerValidator | None = None,
        resolver: FlowResolver | None = None,
    ) -> None:
        self._form = form
        self._fields = list(form.fields)
        self._validator = validator or AnswerValidator()
        self._resolver = resolver or FlowResolver()

        self._index = 0
        self._history: list[int] = []
        self._answers: dict[str, Any] = {}
        self._direction: Literal["forward", "backward"] = "forward"

        # Set once by the terminal transition
        self._final_answers: dict[str, Any] | None = None
        self._termination_reason: TerminationReason | None = None

    # ==================================================================
    # Read-only state
    # ==================================================================

    @property
    def form(self) -> Form:
        return self._form

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_field(self) -> FormField:
        return self._fields[self._index]

    @property
    def history(self) -> tuple[int, ...]:
        """Positions left by forward steps, oldest first."""
        return tuple(self._history)

    @property
    def answers(self) -> dict[str, Any]:
        """Copy of the answers accumulated so far."""
        return dict(self._answers)

    @property
    def direction(self) -> Literal["forward", "backward"]:
        return self._direction

    @property
    def progress(self) -> int:
        """Integer percentage of the form behind the current position."""
        if self.is_complete():
            return 100
        return round(self._index / len(self._fields) * 100)

    @property
    def final_answers(self) -> dict[str, Any] | None:
        """The frozen answer set once completed, otherwise None."""
        if self._final_answers is None:
            return None
        return dict(self._final_answers)

    def is_complete(self) -> bool:
        return self._final_answers is not None

    # ==================================================================
    # Step API
    # ==================================================================

    def current_step(self) -> StepResult:
        """Return the step to present.  Does not modify session state."""
        if self._final_answers is not None:
            return CompletionStep(
                reason=self._termination_reason or "end_of_form",
                answers=dict(self._final_answers),
            )

        field = self.current_field
        return QuestionStep(
            index=self._index,
            total=len(self._fields),
            field=field_to_payload(field),
            direction=self._direction,
            progress=self.progress,
            history_depth=len(self._history),
            previous_value=self._answers.get(field.id),
        )

    def submit_current(self, value: Any) -> StepResult:
        """Answer the current field and advance.

        Returns a ``RejectionStep`` (state untouched) if the answer fails
        validation or the session is already complete; otherwise the next
        ``QuestionStep`` or the final ``CompletionStep``.
        """
        if self.is_complete():
            return self._reject(ValidationFailure(reason="session-already-complete"))

        field = self.current_field
        failure = self._validator.validate(field, value)
        if failure is not None:
            logger.debug("answer for %s rejected: %s", field.id, failure.reason)
            return self._reject(failure)

        # Overwrites any earlier answer for this field (after going back).
        self._answers[field.id] = list(value) if isinstance(value, (list, tuple)) else value

        resolution = self._resolver.resolve(field, value, self._fields)

        if resolution.action == "terminate":
            self._final_answers = dict(self._answers)
            self._termination_reason = resolution.reason
            self._direction = "forward"
            logger.debug(
                "form %s completed at %s (%s)", self._form.id, field.id, resolution.reason,
            )
            return self.current_step()

        self._history.append(self._index)
        self._index = resolution.index
        self._direction = "forward"
        logger.debug(
            "form %s: %s -> %s (%s)",
            self._form.id, field.id, self.current_field.id, resolution.action,
        )
        return self.current_step()

    def go_back(self) -> StepResult:
        """Return to the position held before the last forward step.

        With an empty history this is a no-op that re-presents the
        current field.
        """
        if self.is_complete():
            return self._reject(ValidationFailure(reason="session-already-complete"))

        if not self._history:
            return self.current_step()

        left = self.current_field.id
        self._index = self._history.pop()
        self._direction = "backward"
        logger.debug("form %s: back %s -> %s", self._form.id, left, self.current_field.id)
        return self.current_step()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _reject(failure: ValidationFailure) -> RejectionStep:
        return RejectionStep(
            reason=failure.reason,
            field_id=failure.field_id,
            message=failure.message,
        )
