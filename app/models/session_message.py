"""ConversationMessage model: one row per user, assistant or system message in a session."""

from __future__ import annotations

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import utcnow
from app.models.types import GUID, JSONDocument


class ConversationMessage(Base):
    """Immutable once written, except for the feedback columns."""

    __tablename__ = "conversation_messages"

    __table_args__ = (
        Index(
            "ix_conversation_messages_session_sequence",
            "session_id",
            "sequence",
            unique=True,
        ),
        Index("ix_conversation_messages_created_at", "created_at"),
    )

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    session_id = Column(
        GUID,
        ForeignKey("conversation_sessions.id", ondelete="CASCADE"),
        nullable=False,
    )
    sequence = Column(Integer, nullable=False)
    message_type = Column(String(16), nullable=False)  # 'user' | 'assistant' | 'system'
    content = Column(Text, nullable=False)
    intent_detected = Column(String(128), nullable=True)
    confidence_score = Column(Float, nullable=True)
    matched_answer_id = Column(GUID, nullable=True)
    response_time_ms = Column(Integer, nullable=True)
    was_helpful = Column(Boolean, nullable=True)
    feedback_comment = Column(Text, nullable=True)
    extra = Column(
        "metadata", JSONDocument, nullable=True
    )  # DB column "metadata"; avoid shadowing Base.metadata
    created_at = Column(DateTime, default=utcnow, nullable=False)

    session = relationship("ConversationSession", back_populates="messages")

    @property
    def message_metadata(self) -> dict | None:
        """Expose DB column 'metadata' for Pydantic/serialization (avoid shadowing Base.metadata)."""
        return self.extra
