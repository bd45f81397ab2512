"""FlowResolver — computes where the wizard goes after an accepted answer.

Resolution is a pure function of (current field, its rules, the ordered
field list, the submitted value).  It never looks at history or at answers
to other fields.

Decision order:

  1. Branch rules, in declaration order.  Only single-choice ``select``
     fields take part; the first rule whose ``condition_value`` equals the
     answer wins.
       - destination ``SUBMIT`` → terminate (reason ``rule``)
       - destination is a known field id → jump there (forward, backward,
         or onto the current field itself)
       - destination is unknown → treated as if no rule matched
  2. Default sequential flow: the next field in list order, or terminate
     (reason ``end_of_form``) when the current field is the last one.

Malformed rules never raise; they degrade to default flow with a warning.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from formflow.models.field import BranchRule, FormField, index_of
from formflow.models.outcome import (
    AdvanceResolution,
    JumpResolution,
    Resolution,
    TerminateResolution,
)

logger = logging.getLogger(__name__)


def display_value(value: Any) -> str:
    """Canonical label form of an answer, used for rule matching."""
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class FlowResolver:
    """Stateless next-step computation for an ordered list of fields."""

    def resolve(
        self,
        field: FormField,
        value: Any,
        fields: Sequence[FormField],
    ) -> Resolution:
        """Return the resolution for ``value`` submitted on ``field``.

        Args:
            field: the field that was just answered
            value: the already-validated answer
            fields: the form's full ordered field list

        Raises:
            ValueError: if ``field`` is not part of ``fields``.
        """
        current = index_of(fields, field.id)
        if current is None:
            raise ValueError(f"field '{field.id}' not found in the field list")

        rule = self.match_rule(field, value)
        if rule is not None:
            if rule.is_submit:
                return TerminateResolution(reason="rule")
            target = index_of(fields, rule.destination_id)
            if target is not None:
                return JumpResolution(index=target, field_id=rule.destination_id)
            logger.warning(
                "rule %r on %s points at unknown field %r, using default flow",
                rule.condition_value, field.id, rule.destination_id,
            )

        return self._default(current, len(fields))

    def match_rule(self, field: FormField, value: Any) -> BranchRule | None:
        """First rule on ``field`` whose trigger equals ``value``, or None.

        Rules on anything but a single-choice field are ignored.
        """
        if not field.logic_rules or not field.is_single_choice:
            return None
        if value is None or isinstance(value, (list, tuple, set, dict)):
            return None

        label = display_value(value)
        for rule in field.logic_rules:
            if rule.condition_value == label:
                return rule
        return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _default(current: int, total: int) -> Resolution:
        nxt = current + 1
        if nxt >= total:
            return TerminateResolution(reason="end_of_form")
        return AdvanceResolution(index=nxt)


_default_resolver = FlowResolver()


def resolve_next(field: FormField, value: Any, fields: Sequence[FormField]) -> Resolution:
    """Module-level shorthand for ``FlowResolver().resolve``."""
    return _default_resolver.resolve(field, value, fields)
