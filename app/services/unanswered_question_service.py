"""Unanswered-question backlog: exact-text dedup with a running frequency."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.orm import Session as DBSession

from app.models.mixins import utcnow
from app.models.unanswered_question import UnansweredQuestion
from app.schemas.unanswered_question import UnansweredStatus


class UnansweredQuestionService:
    def __init__(self, db: DBSession) -> None:
        self.db = db

    def get_question(self, question_id: UUID) -> Optional[UnansweredQuestion]:
        return (
            self.db.query(UnansweredQuestion)
            .filter(UnansweredQuestion.id == question_id)
            .first()
        )

    def find_new_by_text(self, question: str) -> Optional[UnansweredQuestion]:
        return (
            self.db.query(UnansweredQuestion)
            .filter(
                UnansweredQuestion.question == question,
                UnansweredQuestion.status == UnansweredStatus.NEW.value,
            )
            .order_by(UnansweredQuestion.created_at)
            .first()
        )

    def record_unanswered(
        self,
        question: str,
        audience: str,
        current_page: Optional[str] = None,
        caller_context: Optional[Dict[str, Any]] = None,
        session_id: Optional[UUID] = None,
    ) -> UnansweredQuestion:
        """
        Bump the frequency of the 'new' record with exactly this text, or insert
        one with frequency 1. Read-then-write without locking: two concurrent
        first askers can produce two rows, which is tolerated.
        """
        existing = self.find_new_by_text(question)
        if existing is not None:
            existing.frequency = (existing.frequency or 0) + 1
            existing.updated_at = utcnow()
            if session_id is not None:
                existing.session_id = session_id
            self.db.commit()
            self.db.refresh(existing)
            return existing

        record = UnansweredQuestion(
            question=question,
            audience=audience,
            current_page=current_page,
            caller_context=caller_context or None,
            session_id=session_id,
            status=UnansweredStatus.NEW.value,
            frequency=1,
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def get_backlog_query(
        self, status: Optional[UnansweredStatus] = UnansweredStatus.NEW
    ) -> Select:
        """Most frequent first (for pagination)."""
        stmt = select(UnansweredQuestion)
        if status is not None:
            stmt = stmt.where(UnansweredQuestion.status == status.value)
        return stmt.order_by(
            UnansweredQuestion.frequency.desc(), UnansweredQuestion.updated_at.desc()
        )

    def get_backlog(
        self,
        status: Optional[UnansweredStatus] = UnansweredStatus.NEW,
        limit: int = 50,
    ) -> List[UnansweredQuestion]:
        return list(self.db.scalars(self.get_backlog_query(status).limit(limit)))

    def update_status(
        self, question_id: UUID, status: UnansweredStatus
    ) -> Optional[UnansweredQuestion]:
        record = self.get_question(question_id)
        if record is None:
            return None
        record.status = status.value
        if status != UnansweredStatus.NEW:
            record.reviewed_at = utcnow()
        self.db.commit()
        self.db.refresh(record)
        return record
