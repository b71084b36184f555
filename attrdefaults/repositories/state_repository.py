"""Per-session state entries backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select, delete

from attrdefaults.db.models import UserState
from attrdefaults.db.session import get_session


class StateRepository:
    """CRUD helpers for the ``user_state`` table."""

    def get_state(self, token: str, key: str) -> Optional[dict[str, Any]]:
        with get_session() as session:
            entity = session.get(UserState, (token, key))
            if entity is None:
                return None
            return dict(entity.value or {})

    def set_state(self, token: str, key: str, value: dict[str, Any]) -> None:
        now = datetime.now(timezone.utc)
        with get_session() as session:
            entity = session.get(UserState, (token, key))
            if entity is None:
                session.add(UserState(session_token=token, key=key, value=dict(value), updated_at=now))
            else:
                # assign a fresh dict so the JSON column is flagged dirty
                entity.value = dict(value)
                entity.updated_at = now
            session.commit()

    def delete_state(self, token: str, key: str) -> None:
        with get_session() as session:
            session.execute(delete(UserState).where(UserState.session_token == token, UserState.key == key))
            session.commit()

    def list_keys(self, token: str) -> list[str]:
        with get_session() as session:
            stmt = select(UserState.key).where(UserState.session_token == token).order_by(UserState.key)
            return list(session.execute(stmt).scalars())

    def clear_states(self, token: str) -> None:
        with get_session() as session:
            session.execute(delete(UserState).where(UserState.session_token == token))
            session.commit()


class SQLStateStore:
    """State store bound to one login session token."""

    def __init__(self, token: str, repository: StateRepository | None = None) -> None:
        self.token = token
        self.repository = repository or StateRepository()

    def get(self, key: str) -> Optional[dict[str, Any]]:
        return self.repository.get_state(self.token, key)

    def set(self, key: str, value: dict[str, Any]) -> None:
        self.repository.set_state(self.token, key, value)

    def delete(self, key: str) -> None:
        self.repository.delete_state(self.token, key)
