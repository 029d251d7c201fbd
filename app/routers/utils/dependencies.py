from uuid import UUID

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from app.db import get_db
from app.models.knowledge_answer import KnowledgeAnswer
from app.models.knowledge_domain import KnowledgeDomain
from app.models.session import ConversationSession
from app.models.unanswered_question import UnansweredQuestion
from app.services.knowledge_answer_service import KnowledgeAnswerService
from app.services.knowledge_domain_service import KnowledgeDomainService
from app.services.session_service import SessionService
from app.services.unanswered_question_service import UnansweredQuestionService


def get_session_by_id(
    session_id: UUID,
    db: Session = Depends(get_db),
) -> ConversationSession:
    """FastAPI dependency to get a conversation session by ID."""
    session = SessionService(db).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def get_unanswered_question_by_id(
    id: UUID,
    db: Session = Depends(get_db),
) -> UnansweredQuestion:
    """FastAPI dependency to get a backlog entry by ID."""
    record = UnansweredQuestionService(db).get_question(id)
    if record is None:
        raise HTTPException(status_code=404, detail="Unanswered question not found")
    return record


def get_faq_by_id(
    answer_id: UUID,
    db: Session = Depends(get_db),
) -> KnowledgeAnswer:
    """FastAPI dependency to get a published (active and approved) answer by ID."""
    answer = KnowledgeAnswerService(db).get_answer(answer_id)
    if answer is None or not (answer.is_active and answer.is_approved):
        raise HTTPException(status_code=404, detail="FAQ not found")
    return answer


def get_domain_by_id(
    domain_id: UUID,
    db: Session = Depends(get_db),
) -> KnowledgeDomain:
    """FastAPI dependency to get an active knowledge domain by ID."""
    domain = KnowledgeDomainService(db).get_domain(domain_id)
    if domain is None:
        raise HTTPException(status_code=404, detail="Domain not found")
    return domain
