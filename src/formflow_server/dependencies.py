"""FastAPI dependency injection — provides the store, registry, sink, and respondent identity.

The store, registry and sink are created once in the lifespan handler and
stashed on ``app.state``; these helpers hand them to route functions.
"""

import hmac

from fastapi import Header, HTTPException, Request

from formflow.interfaces import SubmissionSink
from formflow.store import FormStore

from formflow_server.registry import SessionRegistry


# ------------------------------------------------------------------
# Shared objects: stashed on app.state during lifespan
# ------------------------------------------------------------------

def get_store(request: Request) -> FormStore:
    """Return the FormStore from ``app.state``."""
    return request.app.state.store


def get_registry(request: Request) -> SessionRegistry:
    """Return this application's SessionRegistry from ``app.state``."""
    return request.app.state.registry


def get_sink(request: Request) -> SubmissionSink:
    """Return the SubmissionSink from ``app.state``."""
    return request.app.state.sink


# ------------------------------------------------------------------
# Respondent identity: extracted from the X-Respondent-ID header
# ------------------------------------------------------------------

async def get_respondent_id(
    request: Request,
    x_respondent_id: str | None = Header(None, alias="X-Respondent-ID"),
    x_proxy_secret: str | None = Header(None, alias="X-Proxy-Secret"),
) -> str:
    """Extract respondent identity from the ``X-Respondent-ID`` header.

    Returns 401 if the header is missing — every session endpoint
    requires a known caller.

    When ``TRUSTED_PROXY_SECRET`` is configured, the request must also
    carry a matching ``X-Proxy-Secret`` header.  This proves the
    ``X-Respondent-ID`` was injected by a trusted gateway and not forged
    by an external client.
    """
    if not x_respondent_id:
        raise HTTPException(status_code=401, detail="X-Respondent-ID header is required")

    expected_secret: str | None = request.app.state.settings.trusted_proxy_secret
    if expected_secret:
        if not x_proxy_secret:
            raise HTTPException(
                status_code=403,
                detail="X-Proxy-Secret header is required",
            )
        # Constant-time comparison to prevent timing side-channels.
        if not hmac.compare_digest(x_proxy_secret, expected_secret):
            raise HTTPException(status_code=403, detail="Invalid proxy secret")

    return x_respondent_id
