"""Pydantic schemas for the unanswered-question backlog."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel


class UnansweredStatus(str, Enum):
    NEW = "new"
    REVIEWED = "reviewed"
    RESOLVED = "resolved"
    IGNORED = "ignored"


class UnansweredQuestionRead(BaseModel):
    id: UUID
    question: str
    audience: str
    current_page: Optional[str] = None
    caller_context: Optional[dict[str, Any]] = None
    status: UnansweredStatus
    frequency: int
    reviewed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UnansweredQuestionUpdate(BaseModel):
    status: UnansweredStatus
