"""Read access to knowledge domains and their topics."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session as DBSession

from app.models.knowledge_domain import KnowledgeDomain, KnowledgeTopic


class KnowledgeDomainService:
    def __init__(self, db: DBSession) -> None:
        self.db = db

    def get_domain(self, domain_id: UUID) -> Optional[KnowledgeDomain]:
        return (
            self.db.query(KnowledgeDomain)
            .filter(
                KnowledgeDomain.id == domain_id,
                KnowledgeDomain.is_active.is_(True),
            )
            .first()
        )

    def get_domains(self) -> List[KnowledgeDomain]:
        """Active domains in display order."""
        return (
            self.db.query(KnowledgeDomain)
            .filter(KnowledgeDomain.is_active.is_(True))
            .order_by(KnowledgeDomain.display_order, KnowledgeDomain.created_at)
            .all()
        )

    def get_topics(self, domain_id: UUID) -> List[KnowledgeTopic]:
        return (
            self.db.query(KnowledgeTopic)
            .filter(
                KnowledgeTopic.domain_id == domain_id,
                KnowledgeTopic.is_active.is_(True),
            )
            .order_by(KnowledgeTopic.display_order, KnowledgeTopic.created_at)
            .all()
        )
