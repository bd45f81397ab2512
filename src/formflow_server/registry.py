"""SessionRegistry — in-memory home for hosted navigation sessions.

Every session is keyed by the ``(respondent_id, session_id)`` pair, so a
respondent can only ever reach the sessions they created.  The registry
lives on ``app.state`` and is created per application; there is no
process-wide session table.

Sessions are never persisted.  Completed sessions stay around (so late
submit/back calls get ``session-already-complete``) until they are
discarded or exceed the idle TTL.  A completed session whose answers have
not reached the submission sink yet is exempt from expiry.

Route handlers that touch the registry are ``async def`` so every mutation
runs on the event-loop thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from formflow.models.field import Form
from formflow.models.session import SessionInfo
from formflow.navigation import NavigationSession

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class HostedSession:
    """A navigation session plus the bookkeeping the server needs."""

    respondent_id: str
    session_id: str
    navigation: NavigationSession
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    # True once the final answers went to the submission sink
    delivered: bool = False

    @property
    def form_id(self) -> str:
        return self.navigation.form.id

    @property
    def awaiting_delivery(self) -> bool:
        """Completed, but the final answers have not been delivered."""
        return self.navigation.is_complete() and not self.delivered

    def touch(self) -> None:
        self.updated_at = _utcnow()

    def to_info(self) -> SessionInfo:
        nav = self.navigation
        return SessionInfo(
            respondent_id=self.respondent_id,
            session_id=self.session_id,
            form_id=self.form_id,
            status="completed" if nav.is_complete() else "active",
            current_index=nav.current_index,
            history_depth=len(nav.history),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class SessionRegistry:
    """Per-respondent session table with optional idle expiry.

    Args:
        ttl_minutes: idle minutes before a session is dropped (0 = never)
    """

    def __init__(self, ttl_minutes: int = 0) -> None:
        self._ttl = timedelta(minutes=ttl_minutes) if ttl_minutes > 0 else None
        self._sessions: dict[tuple[str, str], HostedSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create(self, respondent_id: str, session_id: str, form: Form) -> HostedSession:
        """Start a new session at the form's first field.

        Raises:
            ValueError: if the respondent already has a live session with
                this id.
        """
        self.purge_expired()
        key = (respondent_id, session_id)
        if key in self._sessions:
            raise ValueError(
                f"Session already exists: respondent_id={respondent_id}, "
                f"session_id={session_id}"
            )
        hosted = HostedSession(
            respondent_id=respondent_id,
            session_id=session_id,
            navigation=NavigationSession(form),
        )
        self._sessions[key] = hosted
        logger.info("Session created: session_id=%s, form_id=%s", session_id, form.id)
        return hosted

    def get(self, respondent_id: str, session_id: str) -> HostedSession:
        """Fetch a live session.

        Raises:
            ValueError: if no such session exists or it has expired.
        """
        key = (respondent_id, session_id)
        hosted = self._sessions.get(key)
        if hosted is not None and self._is_expired(hosted, _utcnow()):
            del self._sessions[key]
            logger.info("Session expired: session_id=%s", session_id)
            hosted = None
        if hosted is None:
            raise ValueError(
                f"Session not found: respondent_id={respondent_id}, session_id={session_id}"
            )
        return hosted

    def list_sessions(self, respondent_id: str, *, limit: int = 20, offset: int = 0) -> list[HostedSession]:
        """Live sessions for a respondent, most recently updated first."""
        self.purge_expired()
        mine = [h for (rid, _), h in self._sessions.items() if rid == respondent_id]
        mine.sort(key=lambda h: h.updated_at, reverse=True)
        return mine[offset:offset + limit]

    def discard(self, respondent_id: str, session_id: str) -> None:
        """Drop a session (respondent abandoned it).

        Raises:
            ValueError: if no such session exists.
        """
        key = (respondent_id, session_id)
        if key not in self._sessions:
            raise ValueError(
                f"Session not found: respondent_id={respondent_id}, session_id={session_id}"
            )
        del self._sessions[key]
        logger.info("Session discarded: session_id=%s", session_id)

    def purge_expired(self, now: datetime | None = None) -> int:
        """Drop every session idle for longer than the TTL.  Returns the count."""
        if self._ttl is None:
            return 0
        now = now or _utcnow()
        stale = [k for k, h in self._sessions.items() if self._is_expired(h, now)]
        for key in stale:
            del self._sessions[key]
        if stale:
            logger.info("Purged %d expired sessions", len(stale))
        return len(stale)

    def _is_expired(self, hosted: HostedSession, now: datetime) -> bool:
        if self._ttl is None or hosted.awaiting_delivery:
            return False
        return now - hosted.updated_at > self._ttl
