"""Abstract interface for the collaborator that stores finished responses.

The engine only produces a finalized answer map; where it goes is up to the
hosting system.  The SDK ships one concrete implementation,
:class:`LoggingSubmissionSink`, which just logs the submission.

Typical integration flow::

    session = NavigationSession(form)
    step = session.submit_current(value)
    # ... repeat until step.type == "completed" ...

    sink: SubmissionSink = MyDatabaseSink(...)
    await sink.deliver(Submission(form_id=form.id, answers=step.answers))
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class Submission(BaseModel):
    """A finalized answer set, ready for persistence."""

    form_id: str
    answers: dict[str, Any]
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SubmissionSink(ABC):
    """Interface for persisting finalized answer sets.

    Implementations receive each completed response exactly once.  The
    SDK imposes no storage format; only the input contract is specified
    here.
    """

    @abstractmethod
    async def deliver(self, submission: Submission) -> None:
        """Persist or forward one finished response.

        Parameters
        ----------
        submission:
            The form id and the final answer map keyed by field id,
            including the answer that ended the flow.
        """
        ...


class LoggingSubmissionSink(SubmissionSink):
    """Default sink: logs each submission and keeps nothing."""

    async def deliver(self, submission: Submission) -> None:
        logger.info(
            "Submission received: form_id=%s, answers=%d, submitted_at=%s",
            submission.form_id,
            len(submission.answers),
            submission.submitted_at.isoformat(),
        )
