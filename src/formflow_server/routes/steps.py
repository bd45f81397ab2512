"""Step endpoints — current step, submit an answer, go back.

Every response is a ``StepResult`` dispatched on ``type``:
  - ``question``: the field to present next
  - ``completed``: the flow ended; ``answers`` is the final set
  - ``rejected``: the answer was refused (state unchanged); re-prompt

A completed session hands its answers to the submission sink exactly once.
If the sink fails, the respondent still gets the completion step and the
next request on that session retries the delivery.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from formflow.interfaces import Submission, SubmissionSink
from formflow.models.session import StepResult

from formflow_server.dependencies import get_registry, get_respondent_id, get_sink
from formflow_server.registry import HostedSession, SessionRegistry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["steps"])


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------

class SubmitAnswerRequest(BaseModel):
    """Body for POST /sessions/{session_id}/step.

    ``value`` may be a string, a number (rating), a list of option labels
    (multi-select), or a filename (file fields).
    """
    value: Any = None


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

async def _deliver_pending(hosted: HostedSession, sink: SubmissionSink) -> None:
    """Hand a completed session's answers to the sink unless already done.

    A failing sink is logged and leaves ``delivered`` False; the registry
    keeps such sessions and the next request on them retries.
    """
    nav = hosted.navigation
    if hosted.delivered or not nav.is_complete():
        return
    try:
        await sink.deliver(Submission(form_id=hosted.form_id, answers=nav.final_answers))
    except Exception:
        logger.exception(
            "Submission delivery failed: session_id=%s, form_id=%s",
            hosted.session_id, hosted.form_id,
        )
        return
    hosted.delivered = True


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("/sessions/{session_id}/step")
async def get_current_step(
    session_id: str,
    respondent_id: str = Depends(get_respondent_id),
    registry: SessionRegistry = Depends(get_registry),
    sink: SubmissionSink = Depends(get_sink),
) -> StepResult:
    """Return the current step without changing the session."""
    hosted = registry.get(respondent_id, session_id)
    await _deliver_pending(hosted, sink)
    return hosted.navigation.current_step()


@router.post("/sessions/{session_id}/step")
async def submit_answer(
    session_id: str,
    body: SubmitAnswerRequest,
    respondent_id: str = Depends(get_respondent_id),
    registry: SessionRegistry = Depends(get_registry),
    sink: SubmissionSink = Depends(get_sink),
) -> StepResult:
    """Submit an answer for the current field and advance."""
    hosted = registry.get(respondent_id, session_id)
    step = hosted.navigation.submit_current(body.value)
    hosted.touch()
    await _deliver_pending(hosted, sink)
    return step


@router.post("/sessions/{session_id}/back")
async def go_back(
    session_id: str,
    respondent_id: str = Depends(get_respondent_id),
    registry: SessionRegistry = Depends(get_registry),
    sink: SubmissionSink = Depends(get_sink),
) -> StepResult:
    """Return to the field shown before the last forward step.

    A no-op at the first field; rejected once the session is complete.
    """
    hosted = registry.get(respondent_id, session_id)
    step = hosted.navigation.go_back()
    hosted.touch()
    await _deliver_pending(hosted, sink)
    return step
