"""Session management endpoints — create, get, list, abandon sessions.

All endpoints require the ``X-Respondent-ID`` header.  Session identity is
the (respondent_id, session_id) pair; a respondent never sees another
respondent's sessions.
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from formflow.models.session import SessionInfo
from formflow.store import FormStore

from formflow_server.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from formflow_server.dependencies import get_registry, get_respondent_id, get_store
from formflow_server.registry import SessionRegistry

router = APIRouter(tags=["sessions"])


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------

class CreateSessionRequest(BaseModel):
    """Body for POST /sessions."""
    session_id: str
    form_id: str


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/sessions", status_code=201)
async def create_session(
    body: CreateSessionRequest,
    respondent_id: str = Depends(get_respondent_id),
    registry: SessionRegistry = Depends(get_registry),
    store: FormStore = Depends(get_store),
) -> SessionInfo:
    """Start a new response attempt at the form's first field.

    Returns 201 on success, 404 for an unknown form, 409 if the respondent
    already has a session with the same id.
    """
    form = store.get_form(body.form_id)
    hosted = registry.create(respondent_id, body.session_id, form)
    return hosted.to_info()


@router.get("/sessions/{session_id}")
async def get_session(
    session_id: str,
    respondent_id: str = Depends(get_respondent_id),
    registry: SessionRegistry = Depends(get_registry),
) -> SessionInfo:
    """Get session info.  Raises 404 if the session does not exist."""
    return registry.get(respondent_id, session_id).to_info()


@router.delete("/sessions/{session_id}", status_code=204)
async def abandon_session(
    session_id: str,
    respondent_id: str = Depends(get_respondent_id),
    registry: SessionRegistry = Depends(get_registry),
) -> None:
    """Discard a session and its in-memory answers.  Nothing is submitted."""
    registry.discard(respondent_id, session_id)


@router.get("/sessions")
async def list_sessions(
    respondent_id: str = Depends(get_respondent_id),
    registry: SessionRegistry = Depends(get_registry),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
) -> list[SessionInfo]:
    """List the respondent's live sessions, most recently updated first."""
    return [
        h.to_info()
        for h in registry.list_sessions(respondent_id, limit=limit, offset=offset)
    ]
