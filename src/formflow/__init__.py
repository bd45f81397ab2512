"""formflow — conditional flow resolution for step-by-step forms.

Public API:
    NavigationSession — one respondent's walk through a form (submit / back)
    FlowResolver      — pure next-step computation from branch rules
    AnswerValidator   — pure answer checks (required, email, file extension)
    FormStore         — loads YAML forms into typed models
    lint_form         — authoring-time report of inert or looping rules

Models:
    Form, FormField, FieldOption, BranchRule — form definitions
    QuestionStep, CompletionStep, RejectionStep — step results (``StepResult``)
    Resolution        — union of advance / jump / terminate outcomes

Persistence hook:
    SubmissionSink    — ABC for storing finalized answer sets
"""

from formflow.constants import SUBMIT_SENTINEL
from formflow.interfaces import LoggingSubmissionSink, Submission, SubmissionSink
from formflow.lint import FormIssue, build_flow_graph, lint_form
from formflow.models import (
    BranchRule,
    CompletionStep,
    FieldOption,
    Form,
    FormField,
    QuestionStep,
    RejectionStep,
    Resolution,
    StepResult,
)
from formflow.navigation import NavigationSession
from formflow.resolver import FlowResolver, resolve_next
from formflow.store import FormStore
from formflow.validator import AnswerValidator, validate_answer

__all__ = [
    # Engine
    "AnswerValidator",
    "FlowResolver",
    "NavigationSession",
    "resolve_next",
    "validate_answer",
    "SUBMIT_SENTINEL",
    # Store & lint
    "FormStore",
    "FormIssue",
    "build_flow_graph",
    "lint_form",
    # Models
    "BranchRule",
    "FieldOption",
    "Form",
    "FormField",
    "QuestionStep",
    "CompletionStep",
    "RejectionStep",
    "Resolution",
    "StepResult",
    # Persistence hook
    "LoggingSubmissionSink",
    "Submission",
    "SubmissionSink",
]
