"""Unanswered-question backlog API for answer authors."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from app.db import get_db
from app.models.unanswered_question import UnansweredQuestion
from app.routers.utils.dependencies import get_unanswered_question_by_id
from app.schemas.unanswered_question import (
    UnansweredQuestionRead,
    UnansweredQuestionUpdate,
    UnansweredStatus,
)
from app.services.unanswered_question_service import UnansweredQuestionService

router = APIRouter(
    prefix="/unanswered-questions",
    tags=["unanswered-questions"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=Page[UnansweredQuestionRead])
def list_unanswered_questions(
    params: Params = Depends(),
    status: Optional[UnansweredStatus] = Query(UnansweredStatus.NEW),
    db: Session = Depends(get_db),
) -> Page[UnansweredQuestionRead]:
    """Backlog entries, most frequent first."""
    query = UnansweredQuestionService(db).get_backlog_query(status)
    return paginate(
        db,
        query,
        params=params,
        transformer=lambda items: [
            UnansweredQuestionRead.model_validate(q) for q in items
        ],
    )


@router.get("/{id}", response_model=UnansweredQuestionRead)
def get_unanswered_question(
    record: UnansweredQuestion = Depends(get_unanswered_question_by_id),
) -> UnansweredQuestionRead:
    """Get a backlog entry by ID."""
    return UnansweredQuestionRead.model_validate(record)


@router.patch("/{id}", response_model=UnansweredQuestionRead)
def update_unanswered_question(
    data: UnansweredQuestionUpdate,
    record: UnansweredQuestion = Depends(get_unanswered_question_by_id),
    db: Session = Depends(get_db),
) -> UnansweredQuestionRead:
    """Move a backlog entry out of (or back into) the 'new' state."""
    updated = UnansweredQuestionService(db).update_status(record.id, data.status)
    return UnansweredQuestionRead.model_validate(updated)
