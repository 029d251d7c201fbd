"""KnowledgeAnswer model: a curated question/answer pair (FAQ)."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text

from app.db import Base
from app.models.mixins import TimestampMixin
from app.models.types import GUID, JSONDocument


class KnowledgeAnswer(Base, TimestampMixin):
    """
    Eligible for matching only when both active and approved.

    `question`/`answer` hold the Arabic text; the English columns are optional
    and used only for callers whose language is English.
    """

    __tablename__ = "knowledge_answers"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    domain_id = Column(
        GUID,
        ForeignKey("knowledge_domains.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    topic_id = Column(
        GUID,
        ForeignKey("knowledge_topics.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    question_en = Column(Text, nullable=True)
    answer_en = Column(Text, nullable=True)
    intent_tags = Column(JSONDocument, nullable=False, default=list)
    target_audience = Column(String(32), nullable=False, default="all", index=True)
    page_contexts = Column(JSONDocument, nullable=False, default=list)
    is_approved = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    usage_count = Column(Integer, nullable=False, default=0)
    helpful_count = Column(Integer, nullable=False, default=0)

    @property
    def primary_intent(self) -> str | None:
        tags = self.intent_tags or []
        return tags[0] if tags else None

    def question_for(self, language: str) -> str:
        if language == "en" and self.question_en:
            return self.question_en
        return self.question

    def answer_for(self, language: str) -> str:
        if language == "en" and self.answer_en:
            return self.answer_en
        return self.answer
