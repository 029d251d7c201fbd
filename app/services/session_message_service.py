"""Message Log: append-only turn records per session, plus feedback updates."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session as DBSession

from app.models.mixins import utcnow
from app.models.session import ConversationSession
from app.models.session_message import ConversationMessage
from app.schemas.assistant import MessageType
from app.schemas.session import MessageMetadata


class SessionMessageService:
    def __init__(self, db: DBSession) -> None:
        self.db = db

    def _next_sequence(self, session_id: UUID) -> int:
        current = (
            self.db.query(func.max(ConversationMessage.sequence))
            .filter(ConversationMessage.session_id == session_id)
            .scalar()
        )
        return (current or 0) + 1

    def append_message(
        self,
        session_id: UUID,
        message_type: MessageType,
        content: str,
        metadata: Optional[MessageMetadata] = None,
    ) -> ConversationMessage:
        """
        Append a message at the end of the session. Assistant messages also bump
        the session's last_activity_at.
        """
        metadata = metadata or MessageMetadata()
        msg = ConversationMessage(
            session_id=session_id,
            sequence=self._next_sequence(session_id),
            message_type=MessageType(message_type).value,
            content=content,
            intent_detected=metadata.intent,
            confidence_score=metadata.confidence,
            matched_answer_id=metadata.matched_answer_id,
            response_time_ms=metadata.response_time_ms,
            extra=metadata.extra,
        )
        self.db.add(msg)
        if msg.message_type == MessageType.ASSISTANT.value:
            self.db.query(ConversationSession).filter(
                ConversationSession.id == session_id
            ).update(
                {ConversationSession.last_activity_at: utcnow()},
                synchronize_session=False,
            )
        self.db.commit()
        self.db.refresh(msg)
        return msg

    def get_message(self, message_id: UUID) -> Optional[ConversationMessage]:
        return (
            self.db.query(ConversationMessage)
            .filter(ConversationMessage.id == message_id)
            .first()
        )

    def get_messages(
        self,
        session_id: UUID,
        limit: int = 100,
        offset: int = 0,
    ) -> List[ConversationMessage]:
        return (
            self.db.query(ConversationMessage)
            .filter(ConversationMessage.session_id == session_id)
            .order_by(ConversationMessage.sequence)
            .offset(offset)
            .limit(limit)
            .all()
        )

    def get_recent_messages(
        self, session_id: UUID, limit: int = 20
    ) -> List[ConversationMessage]:
        """Last `limit` messages, returned oldest first."""
        newest_first = (
            self.db.query(ConversationMessage)
            .filter(ConversationMessage.session_id == session_id)
            .order_by(ConversationMessage.sequence.desc())
            .limit(limit)
            .all()
        )
        return list(reversed(newest_first))

    def get_message_count(self, session_id: UUID) -> int:
        return (
            self.db.query(ConversationMessage)
            .filter(ConversationMessage.session_id == session_id)
            .count()
        )

    def set_feedback(
        self,
        message_id: UUID,
        was_helpful: bool,
        comment: Optional[str] = None,
    ) -> Optional[ConversationMessage]:
        """The feedback columns are the only mutable part of a message."""
        msg = self.get_message(message_id)
        if msg is None:
            return None
        msg.was_helpful = was_helpful
        msg.feedback_comment = comment
        self.db.commit()
        self.db.refresh(msg)
        return msg
