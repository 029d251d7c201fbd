"""Read models for browsing the FAQ corpus by domain and topic.

Text fields are resolved to one language when the model is built; Arabic is
used wherever an English translation is missing.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from app.models.knowledge_answer import KnowledgeAnswer
from app.models.knowledge_domain import KnowledgeDomain, KnowledgeTopic


class FaqRead(BaseModel):
    id: UUID
    question: str
    answer: str
    intent_tags: list[str]
    domain_id: Optional[UUID] = None
    topic_id: Optional[UUID] = None

    @classmethod
    def from_answer(cls, answer: KnowledgeAnswer, language: str) -> "FaqRead":
        return cls(
            id=answer.id,
            question=answer.question_for(language),
            answer=answer.answer_for(language),
            intent_tags=list(answer.intent_tags or []),
            domain_id=answer.domain_id,
            topic_id=answer.topic_id,
        )


class DomainRead(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    color: str
    display_order: int

    @classmethod
    def from_domain(cls, domain: KnowledgeDomain, language: str) -> "DomainRead":
        description = domain.description_ar
        if language == "en" and domain.description_en:
            description = domain.description_en
        return cls(
            id=domain.id,
            name=domain.name_for(language),
            description=description,
            icon=domain.icon,
            color=domain.color,
            display_order=domain.display_order,
        )


class TopicRead(BaseModel):
    id: UUID
    domain_id: UUID
    title: str
    summary: Optional[str] = None
    keywords: list[str]
    target_audience: str
    related_page_url: Optional[str] = None
    display_order: int

    @classmethod
    def from_topic(cls, topic: KnowledgeTopic, language: str) -> "TopicRead":
        summary = topic.summary_ar
        if language == "en" and topic.summary_en:
            summary = topic.summary_en
        return cls(
            id=topic.id,
            domain_id=topic.domain_id,
            title=topic.title_for(language),
            summary=summary,
            keywords=list(topic.keywords or []),
            target_audience=topic.target_audience,
            related_page_url=topic.related_page_url,
            display_order=topic.display_order,
        )


class DomainsRead(BaseModel):
    items: list[DomainRead]


class TopicsRead(BaseModel):
    domain_id: UUID
    items: list[TopicRead]
