"""Admin endpoints — in-memory session maintenance.

Protected by the ``ADMIN_API_KEY`` setting.  Every request must include an
``X-Admin-Key`` header whose value matches the configured key.  Returns 401
if missing, 403 if wrong or if admin endpoints are disabled.
"""

import hmac

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from pydantic import BaseModel

from formflow_server.dependencies import get_registry
from formflow_server.registry import SessionRegistry

router = APIRouter(prefix="/admin", tags=["admin"])


# ------------------------------------------------------------------
# Auth dependency
# ------------------------------------------------------------------

async def require_admin_key(
    request: Request,
    x_admin_key: str | None = Header(None, alias="X-Admin-Key"),
) -> str:
    """Validate the ``X-Admin-Key`` header against the configured key."""
    expected: str | None = request.app.state.settings.admin_api_key
    if not expected:
        raise HTTPException(
            status_code=403,
            detail="Admin endpoints are disabled (ADMIN_API_KEY not configured)",
        )
    if not x_admin_key:
        raise HTTPException(status_code=401, detail="X-Admin-Key header is required")
    if not hmac.compare_digest(x_admin_key, expected):
        raise HTTPException(status_code=403, detail="Invalid admin key")
    return x_admin_key


# ------------------------------------------------------------------
# Response models
# ------------------------------------------------------------------

class PurgeResult(BaseModel):
    """Response body for purge operations."""
    purged: int
    remaining: int


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/purge-expired", dependencies=[Depends(require_admin_key)])
async def purge_expired(
    registry: SessionRegistry = Depends(get_registry),
) -> PurgeResult:
    """Drop sessions idle for longer than ``SESSION_TTL_MINUTES``."""
    purged = registry.purge_expired()
    return PurgeResult(purged=purged, remaining=len(registry))
