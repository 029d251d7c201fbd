"""ConversationSession model: one row per assistant conversation."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, String
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import TimestampMixin, utcnow
from app.models.types import GUID, JSONDocument


class ConversationSession(Base, TimestampMixin):
    """
    Keyed by user_id (authenticated caller) or session_fingerprint (anonymous),
    never both. Sessions are deactivated, not deleted.
    """

    __tablename__ = "conversation_sessions"

    __table_args__ = (
        CheckConstraint(
            "user_id IS NULL OR session_fingerprint IS NULL",
            name="ck_conversation_sessions_single_identity",
        ),
    )

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    user_id = Column(String(256), nullable=True, index=True)
    session_fingerprint = Column(String(64), nullable=True, index=True)
    audience = Column(String(32), nullable=False, default="visitor")
    current_page = Column(String(512), nullable=True)
    language = Column(String(8), nullable=False, default="ar")
    caller_context = Column(JSONDocument, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    started_at = Column(DateTime, nullable=False, default=utcnow)
    last_activity_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    messages = relationship(
        "ConversationMessage",
        back_populates="session",
        order_by="ConversationMessage.sequence",
    )

    @property
    def identity(self) -> str | None:
        """Owner key used for unique/returning caller counts."""
        return self.user_id or self.session_fingerprint
