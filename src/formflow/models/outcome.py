"""Outcome models produced by the validator and the flow resolver.

Resolutions describe where the flow goes after an accepted answer:
  - AdvanceResolution: default sequential flow to the next field
  - JumpResolution: a branch rule sent the flow to a specific field
  - TerminateResolution: the flow ends (SUBMIT rule, or past the last field)

The discriminated ``Resolution`` union uses the ``action`` field as its
discriminator, so callers can dispatch on ``resolution.action``.

Validation failures are values, not exceptions: the validator returns a
``ValidationFailure`` (or None) and the navigation session turns it into a
rejected step.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from formflow.constants import FAILURE_MESSAGES

FailureReason = Literal[
    "missing-required",
    "invalid-email",
    "invalid-file-extension",
    "session-already-complete",
]

TerminationReason = Literal["rule", "end_of_form"]


class AdvanceResolution(BaseModel):
    """Default flow: move to the field right after the current one."""

    action: Literal["advance"] = "advance"
    index: int


class JumpResolution(BaseModel):
    """A branch rule matched: move to ``field_id`` at ``index``."""

    action: Literal["jump"] = "jump"
    index: int
    field_id: str


class TerminateResolution(BaseModel):
    """End the flow; the answer just submitted is part of the final set."""

    action: Literal["terminate"] = "terminate"
    reason: TerminationReason


Resolution = Annotated[
    Union[AdvanceResolution, JumpResolution, TerminateResolution],
    Field(discriminator="action"),
]


class ValidationFailure(BaseModel):
    """Why an answer (or an operation) was refused."""

    reason: FailureReason
    field_id: Optional[str] = None

    @property
    def message(self) -> str:
        return FAILURE_MESSAGES[self.reason]
