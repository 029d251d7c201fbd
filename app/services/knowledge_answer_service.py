"""Read access to the curated answer corpus and its usage counters."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.orm import Query, Session as DBSession

from app.models.knowledge_answer import KnowledgeAnswer
from app.schemas.assistant import ALL_AUDIENCES, Audience


class KnowledgeAnswerService:
    """The assistant only reads answers; authoring happens elsewhere."""

    def __init__(self, db: DBSession) -> None:
        self.db = db

    def get_answer(self, answer_id: UUID) -> Optional[KnowledgeAnswer]:
        return (
            self.db.query(KnowledgeAnswer).filter(KnowledgeAnswer.id == answer_id).first()
        )

    def eligible_query(self) -> Query[KnowledgeAnswer]:
        """Active and approved answers in a deterministic order."""
        return (
            self.db.query(KnowledgeAnswer)
            .filter(
                KnowledgeAnswer.is_active.is_(True),
                KnowledgeAnswer.is_approved.is_(True),
            )
            .order_by(KnowledgeAnswer.created_at, KnowledgeAnswer.id)
        )

    def get_eligible_answers(self) -> List[KnowledgeAnswer]:
        return self.eligible_query().all()

    def faq_query(
        self,
        domain_id: Optional[UUID] = None,
        topic_id: Optional[UUID] = None,
    ) -> Select:
        """Eligible answers for browsing, most used first, optionally narrowed."""
        stmt = select(KnowledgeAnswer).where(
            KnowledgeAnswer.is_active.is_(True),
            KnowledgeAnswer.is_approved.is_(True),
        )
        if domain_id is not None:
            stmt = stmt.where(KnowledgeAnswer.domain_id == domain_id)
        if topic_id is not None:
            stmt = stmt.where(KnowledgeAnswer.topic_id == topic_id)
        return stmt.order_by(
            KnowledgeAnswer.usage_count.desc(),
            KnowledgeAnswer.created_at,
            KnowledgeAnswer.id,
        )

    def get_context_answers(
        self,
        audience: Audience,
        page: str,
        limit: int = 5,
    ) -> List[KnowledgeAnswer]:
        """Answers curated for this page and audience (or for all audiences)."""
        candidates = (
            self.db.query(KnowledgeAnswer)
            .filter(
                KnowledgeAnswer.is_active.is_(True),
                KnowledgeAnswer.is_approved.is_(True),
                KnowledgeAnswer.target_audience.in_([ALL_AUDIENCES, audience.value]),
            )
            .order_by(
                KnowledgeAnswer.usage_count.desc(),
                KnowledgeAnswer.created_at,
                KnowledgeAnswer.id,
            )
            .all()
        )
        # page_contexts is a JSON list; membership is checked here to stay portable
        return [a for a in candidates if page in (a.page_contexts or [])][:limit]

    def get_most_used_answers(self, limit: int = 6) -> List[KnowledgeAnswer]:
        return (
            self.db.query(KnowledgeAnswer)
            .filter(
                KnowledgeAnswer.is_active.is_(True),
                KnowledgeAnswer.is_approved.is_(True),
            )
            .order_by(
                KnowledgeAnswer.usage_count.desc(),
                KnowledgeAnswer.created_at,
                KnowledgeAnswer.id,
            )
            .limit(limit)
            .all()
        )

    def increment_usage(self, answer_id: UUID) -> bool:
        updated = (
            self.db.query(KnowledgeAnswer)
            .filter(KnowledgeAnswer.id == answer_id)
            .update(
                {KnowledgeAnswer.usage_count: KnowledgeAnswer.usage_count + 1},
                synchronize_session=False,
            )
        )
        self.db.commit()
        return updated > 0

    def increment_helpful(self, answer_id: UUID) -> bool:
        updated = (
            self.db.query(KnowledgeAnswer)
            .filter(KnowledgeAnswer.id == answer_id)
            .update(
                {KnowledgeAnswer.helpful_count: KnowledgeAnswer.helpful_count + 1},
                synchronize_session=False,
            )
        )
        self.db.commit()
        return updated > 0
