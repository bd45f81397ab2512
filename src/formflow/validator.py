"""AnswerValidator — checks one answer against one field's constraints.

Validation runs in a fixed order:

  1. **required**: an empty answer on a required field fails with
     ``missing-required``.  An empty answer on an optional field passes
     immediately; no further checks run.
  2. **kind-specific**:
       - email: must look like ``local@domain.tld``
       - file: the filename must end with one of ``allowed_extensions``
         (case-insensitive) when that list is non-empty

Returns a ``ValidationFailure`` or ``None``.  Never raises for a bad answer.
"""

from __future__ import annotations

import logging
from typing import Any

from formflow.constants import EMAIL_PATTERN
from formflow.models.field import FormField
from formflow.models.outcome import ValidationFailure

logger = logging.getLogger(__name__)


def is_empty(value: Any) -> bool:
    """True for None, blank strings, and empty selections."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set)):
        return len(value) == 0
    return False


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


class AnswerValidator:
    """Pure classification of a candidate answer for a field."""

    def validate(self, field: FormField, value: Any) -> ValidationFailure | None:
        """Return the first failure for ``value`` on ``field``, or None."""
        if is_empty(value):
            if field.required:
                return ValidationFailure(reason="missing-required", field_id=field.id)
            return None

        if field.kind == "email":
            return self._check_email(field, value)
        if field.kind == "file":
            return self._check_file(field, value)
        return None

    # ------------------------------------------------------------------
    # Kind-specific checks
    # ------------------------------------------------------------------

    @staticmethod
    def _check_email(field: FormField, value: Any) -> ValidationFailure | None:
        if not isinstance(value, str) or not EMAIL_PATTERN.match(value):
            return ValidationFailure(reason="invalid-email", field_id=field.id)
        return None

    @staticmethod
    def _check_file(field: FormField, value: Any) -> ValidationFailure | None:
        if field.accepts_any_file:
            return None
        filename = str(value).lower()
        allowed = [_normalize_extension(ext) for ext in field.allowed_extensions or []]
        if any(filename.endswith(ext) for ext in allowed):
            return None
        logger.debug("file %r rejected for %s, allowed=%s", value, field.id, allowed)
        return ValidationFailure(reason="invalid-file-extension", field_id=field.id)


_default_validator = AnswerValidator()


def validate_answer(field: FormField, value: Any) -> ValidationFailure | None:
    """Module-level shorthand for ``AnswerValidator().validate``."""
    return _default_validator.validate(field, value)
