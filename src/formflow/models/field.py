"""Field models for authored forms.

Each field maps to one question in the respondent's step-by-step wizard:

  - text: short single-line text input
  - textarea: long multi-line text input
  - select: pick one option, or several when ``allow_multiple`` is set
  - rating: 1..N stars (N = ``max_rating``, default 5)
  - email: text input that must look like an email address
  - date: date picker (ISO string answer)
  - file: file upload; the answer is the uploaded filename

Any field may carry ``logic_rules``.  A rule maps an option label to a
destination field id, or to the ``SUBMIT`` sentinel which ends the flow.
Rules only drive navigation on single-choice ``select`` fields; on every
other kind they are inert.

Models are frozen: a form definition never changes while a respondent is
filling it out.
"""

from __future__ import annotations

from typing import List, Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from formflow.constants import CHOICE_KINDS, DEFAULT_MAX_RATING, SUBMIT_SENTINEL

FieldKind = Literal["text", "textarea", "select", "rating", "email", "date", "file"]


# --- Shared option/rule models ---

class FieldOption(BaseModel):
    """A selectable option with an id and display label."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str


class BranchRule(BaseModel):
    """Jump to ``destination_id`` when the answer equals ``condition_value``.

    ``condition_value`` is an option label of the owning field.
    ``destination_id`` is another field's id or ``SUBMIT``.
    """

    model_config = ConfigDict(frozen=True)

    condition_value: str
    destination_id: str

    @property
    def is_submit(self) -> bool:
        """True if this rule ends the flow instead of jumping to a field."""
        return self.destination_id == SUBMIT_SENTINEL


# --- Field ---

class FormField(BaseModel):
    """One question of a form, with its constraints and branch rules."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    kind: FieldKind
    label: str = ""
    description: Optional[str] = None
    placeholder: Optional[str] = None
    required: bool = False

    # select
    options: Optional[List[FieldOption]] = None
    allow_multiple: bool = False
    # rating
    max_rating: Optional[int] = Field(default=None, ge=1)
    # file -- empty or absent means any file is accepted
    allowed_extensions: Optional[List[str]] = None

    logic_rules: List[BranchRule] = []

    @field_validator("logic_rules")
    @classmethod
    def _dedupe_triggers(cls, rules: List[BranchRule]) -> List[BranchRule]:
        # One rule per trigger value: the last declaration wins and keeps its position.
        last = {rule.condition_value: i for i, rule in enumerate(rules)}
        return [rule for i, rule in enumerate(rules) if last[rule.condition_value] == i]

    @property
    def is_multi_select(self) -> bool:
        return self.kind in CHOICE_KINDS and self.allow_multiple

    @property
    def is_single_choice(self) -> bool:
        """True for fields whose answer is exactly one option label."""
        return self.kind in CHOICE_KINDS and not self.allow_multiple

    @property
    def option_labels(self) -> List[str]:
        return [opt.label for opt in self.options or []]

    @property
    def effective_max_rating(self) -> Optional[int]:
        """Star count for rating fields, None for every other kind."""
        if self.kind != "rating":
            return None
        return self.max_rating if self.max_rating is not None else DEFAULT_MAX_RATING

    @property
    def accepts_any_file(self) -> bool:
        return not self.allowed_extensions


# --- Lookup ---

def index_of(fields: Sequence[FormField], field_id: str) -> Optional[int]:
    """Position of ``field_id`` in an ordered field list, or None."""
    for i, f in enumerate(fields):
        if f.id == field_id:
            return i
    return None


# --- Form ---

class Form(BaseModel):
    """An ordered list of fields; list order is the default flow."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str = ""
    description: Optional[str] = None
    fields: List[FormField] = Field(min_length=1)

    @model_validator(mode="after")
    def _chk_unique_ids(self):
        seen: set[str] = set()
        for f in self.fields:
            if f.id in seen:
                raise ValueError(f"duplicate field id '{f.id}' in form '{self.id}'")
            seen.add(f.id)
        return self

    def index_of(self, field_id: str) -> int | None:
        """Position of ``field_id`` in the ordered field list, or None."""
        return index_of(self.fields, field_id)

    def get_field(self, field_id: str) -> FormField:
        """Look up a field by id.  Raises KeyError if absent."""
        idx = self.index_of(field_id)
        if idx is None:
            raise KeyError(field_id)
        return self.fields[idx]
