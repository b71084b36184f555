"""Session helpers (issue tokens, resolve the user's state store)."""
from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone

from fastapi import Request

from attrdefaults.core.config import get_settings
from attrdefaults.db.models import UserSession
from attrdefaults.db.session import get_session
from attrdefaults.repositories.state_repository import SQLStateStore, StateRepository

log = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "session"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def issue_session(email: str) -> str:
    """Create a new session token and persist it in the SQL store."""
    token = secrets.token_urlsafe(32)
    settings = get_settings()
    ttl = max(60, settings.session_ttl_seconds)
    expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl)

    with get_session() as session:
        session.add(UserSession(token=token, user_email=email, expires_at=expires_at))
        session.commit()
    return token


def _active_session(token: str | None) -> UserSession | None:
    if not token:
        return None
    now = datetime.now(timezone.utc)
    with get_session() as session:
        db_session = session.get(UserSession, token)
        if db_session is None:
            return None
        if db_session.expires_at and _as_utc(db_session.expires_at) < now:
            log.debug("Dropping expired session for %s", db_session.user_email)
            session.delete(db_session)
            session.commit()
            return None
        return db_session


def current_session_token(request: Request) -> str | None:
    """Return the session token from the cookie if it belongs to a live session."""
    db_session = _active_session(request.cookies.get(SESSION_COOKIE_NAME))
    return db_session.token if db_session else None


def current_user_email(request: Request) -> str | None:
    """Return the e-mail associated with the current session cookie, if any."""
    db_session = _active_session(request.cookies.get(SESSION_COOKIE_NAME))
    return db_session.user_email if db_session else None


def state_store(request: Request) -> SQLStateStore | None:
    """State store of the logged-in user, or None for anonymous requests."""
    token = current_session_token(request)
    if not token:
        return None
    return SQLStateStore(token)


def delete_session(token: str) -> None:
    """Remove a session token and every state entry stored for it."""
    if not token:
        return
    StateRepository().clear_states(token)
    with get_session() as session:
        entity = session.get(UserSession, token)
        if entity:
            session.delete(entity)
            session.commit()
