"""Per-turn helpfulness feedback."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session as DBSession

from app.core.best_effort import run_best_effort
from app.models.session_message import ConversationMessage
from app.services.knowledge_answer_service import KnowledgeAnswerService
from app.services.session_message_service import SessionMessageService


class FeedbackService:
    def __init__(self, db: DBSession) -> None:
        self.db = db
        self._messages = SessionMessageService(db)
        self._answers = KnowledgeAnswerService(db)

    def submit_feedback(
        self,
        message_id: UUID,
        was_helpful: bool,
        comment: Optional[str] = None,
    ) -> Optional[ConversationMessage]:
        """
        Store the flag on the message. A helpful vote on a matched answer also
        bumps that answer's helpful_count (best effort). None if unknown message.
        """
        message = self._messages.set_feedback(message_id, was_helpful, comment)
        if message is None:
            return None
        if was_helpful and message.matched_answer_id is not None:
            run_best_effort(
                self.db,
                "increment_helpful_count",
                self._answers.increment_helpful,
                message.matched_answer_id,
            )
        return message
