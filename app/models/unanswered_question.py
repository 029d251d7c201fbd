"""UnansweredQuestion model: backlog of questions the assistant could not answer."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from app.db import Base
from app.models.mixins import TimestampMixin
from app.models.types import GUID, JSONDocument


class UnansweredQuestion(Base, TimestampMixin):
    """
    Deduplicated by exact question text among status='new' rows;
    repeats bump frequency and updated_at.
    """

    __tablename__ = "unanswered_questions"

    __table_args__ = (
        Index("ix_unanswered_questions_status_frequency", "status", "frequency"),
    )

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    question = Column(Text, nullable=False)
    audience = Column(String(32), nullable=False, default="visitor")
    current_page = Column(String(512), nullable=True)
    caller_context = Column(JSONDocument, nullable=True)
    session_id = Column(GUID, nullable=True)
    status = Column(String(16), nullable=False, default="new")
    frequency = Column(Integer, nullable=False, default=1)
    reviewed_at = Column(DateTime, nullable=True)
