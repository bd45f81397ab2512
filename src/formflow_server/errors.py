"""Exception handlers for the lookup failures formflow raises.

Answers never reach these handlers: a bad answer is a ``rejected`` step
returned with status 200.  What does reach them:

  - ``SessionRegistry`` raises ``ValueError("Session not found: ...")`` for
    an unknown or expired handle, and ``ValueError("Session already
    exists: ...")`` when a respondent reuses a live session id
  - ``FormStore.get_form`` raises ``KeyError(form_id)``

Messages carry respondent and session ids, so they are logged and the
client only sees a fixed description per status code.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# Registry message prefix -> status
_REGISTRY_STATUS: dict[str, int] = {
    "session not found": 404,
    "session already exists": 409,
}

_CLIENT_DETAIL: dict[int, str] = {
    400: "Invalid request",
    404: "Resource not found",
    409: "Resource already exists",
}


def _status_for(message: str) -> int:
    lowered = message.lower()
    for prefix, status in _REGISTRY_STATUS.items():
        if lowered.startswith(prefix):
            return status
    return 400


def _reply(status: int) -> JSONResponse:
    return JSONResponse(status_code=status, content={"detail": _CLIENT_DETAIL[status]})


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Unknown session → 404, reused session id → 409, anything else → 400."""
    status = _status_for(str(exc))
    logger.warning("%s %s -> %d: %s", request.method, request.url.path, status, exc)
    return _reply(status)


async def key_error_handler(request: Request, exc: KeyError) -> JSONResponse:
    """Unknown form id → 404."""
    logger.warning("%s %s -> 404: unknown key %s", request.method, request.url.path, exc)
    return _reply(404)


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})
