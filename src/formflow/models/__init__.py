"""Public model re-exports for formflow.

Consumers should import from ``formflow.models`` rather than reaching into
sub-modules directly.
"""

# --- Fields ---
from formflow.models.field import (
    BranchRule,
    FieldKind,
    FieldOption,
    Form,
    FormField,
)

# --- Outcomes ---
from formflow.models.outcome import (
    AdvanceResolution,
    FailureReason,
    JumpResolution,
    Resolution,
    TerminateResolution,
    TerminationReason,
    ValidationFailure,
)

# --- Session / step ---
from formflow.models.session import (
    CompletionStep,
    FieldPayload,
    QuestionStep,
    RejectionStep,
    SessionInfo,
    StepResult,
)

__all__ = [
    # Fields
    "BranchRule",
    "FieldKind",
    "FieldOption",
    "Form",
    "FormField",
    # Outcomes
    "AdvanceResolution",
    "FailureReason",
    "JumpResolution",
    "Resolution",
    "TerminateResolution",
    "TerminationReason",
    "ValidationFailure",
    # Session
    "CompletionStep",
    "FieldPayload",
    "QuestionStep",
    "RejectionStep",
    "SessionInfo",
    "StepResult",
]
