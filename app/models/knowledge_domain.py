"""KnowledgeDomain and KnowledgeTopic: the browsable structure of the FAQ corpus."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import TimestampMixin
from app.models.types import GUID, JSONDocument


class KnowledgeDomain(Base, TimestampMixin):
    """Top-level FAQ section (e.g. investment, harvest, payments)."""

    __tablename__ = "knowledge_domains"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    name_ar = Column(String(256), nullable=False)
    name_en = Column(String(256), nullable=True)
    description_ar = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)
    icon = Column(String(64), nullable=True)
    color = Column(String(32), nullable=False, default="green")
    display_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    topics = relationship(
        "KnowledgeTopic",
        back_populates="domain",
        order_by="KnowledgeTopic.display_order",
    )

    def name_for(self, language: str) -> str:
        if language == "en" and self.name_en:
            return self.name_en
        return self.name_ar


class KnowledgeTopic(Base, TimestampMixin):
    __tablename__ = "knowledge_topics"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    domain_id = Column(
        GUID,
        ForeignKey("knowledge_domains.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title_ar = Column(String(256), nullable=False)
    title_en = Column(String(256), nullable=True)
    summary_ar = Column(Text, nullable=True)
    summary_en = Column(Text, nullable=True)
    keywords = Column(JSONDocument, nullable=False, default=list)
    target_audience = Column(String(32), nullable=False, default="all")
    related_page_url = Column(String(512), nullable=True)
    display_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    domain = relationship("KnowledgeDomain", back_populates="topics")

    def title_for(self, language: str) -> str:
        if language == "en" and self.title_en:
            return self.title_en
        return self.title_ar
