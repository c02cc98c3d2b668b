from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable

from app.core.config import settings
from app.services.errors import SessionNotFoundError
from app.services.session_state import SessionState

logger = logging.getLogger(__name__)

_sessions: dict[str, SessionState] = {}
_sessions_lock = threading.Lock()

SessionFactory = Callable[[], SessionState]
_session_factory: SessionFactory = SessionState


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _idle_ttl() -> timedelta:
    return timedelta(minutes=max(1, int(settings.session_idle_ttl_minutes)))


def set_session_factory(factory: SessionFactory | None) -> None:
    global _session_factory
    _session_factory = factory or SessionState


def create_session() -> SessionState:
    session = _session_factory()
    with _sessions_lock:
        _sessions[session.session_id] = session
    logger.info("session_created session=%s", session.session_id)
    return session


def get_session(session_id: str) -> SessionState:
    with _sessions_lock:
        session = _sessions.get(session_id)
    if session is None:
        raise SessionNotFoundError(f"Unknown session '{session_id}'.")
    if not session.is_busy and session.updated_at + _idle_ttl() <= _utc_now():
        delete_session(session_id)
        raise SessionNotFoundError(f"Session '{session_id}' expired.")
    return session


def delete_session(session_id: str) -> bool:
    with _sessions_lock:
        removed = _sessions.pop(session_id, None)
    if removed is not None:
        logger.info("session_deleted session=%s", session_id)
    return removed is not None


def purge_expired_sessions() -> int:
    cutoff = _utc_now() - _idle_ttl()
    with _sessions_lock:
        expired = [
            session_id
            for session_id, session in _sessions.items()
            if not session.is_busy and session.updated_at <= cutoff
        ]
        for session_id in expired:
            del _sessions[session_id]
    return len(expired)


def session_count() -> int:
    with _sessions_lock:
        return len(_sessions)


def clear_sessions() -> None:
    with _sessions_lock:
        _sessions.clear()
