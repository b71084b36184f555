"""SQLAlchemy models for login sessions and their per-session state."""
from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    String,
    JSON,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base


class UserSession(Base):
    __tablename__ = "sessions"

    token = Column(String(128), primary_key=True)
    user_email = Column(String(255), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    states = relationship("UserState", back_populates="session", cascade="all,delete-orphan")


class UserState(Base):
    """One named state entry (e.g. ``default_ticket``) of a login session."""

    __tablename__ = "user_state"

    session_token = Column(String(128), ForeignKey("sessions.token", ondelete="CASCADE"), primary_key=True)
    key = Column(String(255), primary_key=True)
    value = Column(JSON, nullable=False, default=dict)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    session = relationship("UserSession", back_populates="states")
