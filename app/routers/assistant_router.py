"""Assistant API: ask, suggested questions, feedback, FAQ browsing and session history."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import get_settings
from app.db import get_db
from app.infra.logging_config import get_logger
from app.infra.redis_client import get_redis_client
from app.models.knowledge_answer import KnowledgeAnswer
from app.models.knowledge_domain import KnowledgeDomain
from app.models.session import ConversationSession
from app.models.session_message import ConversationMessage
from app.routers.utils.dependencies import (
    get_domain_by_id,
    get_faq_by_id,
    get_session_by_id,
)
from app.schemas.assistant import (
    AskRequest,
    AssistantResponse,
    FeedbackRead,
    FeedbackRequest,
    SuggestedQuestionsRead,
    normalize_language,
)
from app.schemas.knowledge import (
    DomainRead,
    DomainsRead,
    FaqRead,
    TopicRead,
    TopicsRead,
)
from app.schemas.session import HistoryRead, MessageRead, SessionRead
from app.services.assistant_engine import AssistantEngine
from app.services.feedback_service import FeedbackService
from app.services.knowledge_answer_service import KnowledgeAnswerService
from app.services.knowledge_domain_service import KnowledgeDomainService
from app.services.session_message_service import SessionMessageService
from app.services.session_service import SessionService
from app.utils.rate_limit import (
    assistant_rate_limit_key,
    check_assistant_rate_limit,
)

logger = get_logger("assistant_router")

router = APIRouter(
    prefix="/assistant",
    tags=["assistant"],
    responses={404: {"description": "Not found"}},
)


def _language(tag: Optional[str]) -> str:
    return normalize_language(tag) or get_settings().default_language


@router.post("/ask", response_model=AssistantResponse)
def ask(
    data: AskRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> AssistantResponse:
    """Resolve a question: escalation, curated answer, corpus match or fallback."""
    settings = get_settings()
    if not check_assistant_rate_limit(
        assistant_rate_limit_key(
            data.caller_id,
            data.session_id,
            request.client.host if request.client else None,
        ),
        get_redis_client(),
        settings.assistant_rate_limit_per_minute,
    ):
        raise HTTPException(status_code=429, detail="Too many questions, slow down")
    return AssistantEngine(db).resolve(data)


@router.get("/suggested-questions", response_model=SuggestedQuestionsRead)
def suggested_questions(
    limit: int | None = Query(None, ge=1, le=20),
    language: Optional[str] = Query(None, max_length=16),
    db: Session = Depends(get_db),
) -> SuggestedQuestionsRead:
    """Most-used approved questions, or the default starter questions."""
    items = AssistantEngine(db).get_suggested_questions(
        limit=limit, language=_language(language)
    )
    return SuggestedQuestionsRead(items=items)


@router.post("/messages/{message_id}/feedback", response_model=FeedbackRead)
def submit_feedback(
    message_id: UUID,
    data: FeedbackRequest,
    db: Session = Depends(get_db),
) -> FeedbackRead:
    """Mark an assistant message as helpful or not."""
    message = FeedbackService(db).submit_feedback(
        message_id, data.was_helpful, data.comment
    )
    if message is None:
        raise HTTPException(status_code=404, detail="Message not found")
    return FeedbackRead(
        message_id=message.id,
        was_helpful=bool(message.was_helpful),
        comment=message.feedback_comment,
    )


@router.get("/sessions/{session_id}", response_model=SessionRead)
def get_session(
    session: ConversationSession = Depends(get_session_by_id),
    db: Session = Depends(get_db),
) -> SessionRead:
    """Get a conversation session by ID."""
    result = SessionRead.model_validate(session)
    result.message_count = SessionMessageService(db).get_message_count(session.id)
    return result


@router.get("/sessions/{session_id}/history", response_model=HistoryRead)
def get_history(
    limit: int | None = Query(None, ge=1, le=100),
    session: ConversationSession = Depends(get_session_by_id),
    db: Session = Depends(get_db),
) -> HistoryRead:
    """Most recent messages of a session, oldest first."""
    messages = AssistantEngine(db).get_history(session.id, limit=limit)
    return HistoryRead(
        session_id=session.id,
        items=[MessageRead.model_validate(m) for m in messages],
    )


@router.get("/sessions/{session_id}/messages", response_model=Page[MessageRead])
def list_session_messages(
    params: Params = Depends(),
    session: ConversationSession = Depends(get_session_by_id),
    db: Session = Depends(get_db),
) -> Page[MessageRead]:
    """List all messages of a session with pagination."""
    query = (
        select(ConversationMessage)
        .where(ConversationMessage.session_id == session.id)
        .order_by(ConversationMessage.sequence)
    )
    return paginate(
        db,
        query,
        params=params,
        transformer=lambda items: [MessageRead.model_validate(m) for m in items],
    )


@router.post("/sessions/{session_id}/deactivate", response_model=SessionRead)
def deactivate_session(
    session: ConversationSession = Depends(get_session_by_id),
    db: Session = Depends(get_db),
) -> SessionRead:
    """Deactivate a session (sessions are never deleted)."""
    updated = SessionService(db).deactivate_session(session.id)
    logger.info("Deactivated session %s", session.id)
    result = SessionRead.model_validate(updated)
    result.message_count = SessionMessageService(db).get_message_count(session.id)
    return result


@router.get("/faqs", response_model=Page[FaqRead])
def list_faqs(
    params: Params = Depends(),
    domain_id: Optional[UUID] = Query(None),
    topic_id: Optional[UUID] = Query(None),
    language: Optional[str] = Query(None, max_length=16),
    db: Session = Depends(get_db),
) -> Page[FaqRead]:
    """Browse published answers, most used first, optionally by domain or topic."""
    lang = _language(language)
    query = KnowledgeAnswerService(db).faq_query(domain_id=domain_id, topic_id=topic_id)
    return paginate(
        db,
        query,
        params=params,
        transformer=lambda items: [FaqRead.from_answer(a, lang) for a in items],
    )


@router.get("/faqs/{answer_id}", response_model=FaqRead)
def get_faq(
    language: Optional[str] = Query(None, max_length=16),
    answer: KnowledgeAnswer = Depends(get_faq_by_id),
) -> FaqRead:
    """Get a published answer by ID."""
    return FaqRead.from_answer(answer, _language(language))


@router.get("/domains", response_model=DomainsRead)
def list_domains(
    language: Optional[str] = Query(None, max_length=16),
    db: Session = Depends(get_db),
) -> DomainsRead:
    """Active knowledge domains in display order."""
    lang = _language(language)
    domains = KnowledgeDomainService(db).get_domains()
    return DomainsRead(items=[DomainRead.from_domain(d, lang) for d in domains])


@router.get("/domains/{domain_id}/topics", response_model=TopicsRead)
def list_domain_topics(
    language: Optional[str] = Query(None, max_length=16),
    domain: KnowledgeDomain = Depends(get_domain_by_id),
    db: Session = Depends(get_db),
) -> TopicsRead:
    """Active topics of a domain in display order."""
    lang = _language(language)
    topics = KnowledgeDomainService(db).get_topics(domain.id)
    return TopicsRead(
        domain_id=domain.id,
        items=[TopicRead.from_topic(t, lang) for t in topics],
    )
