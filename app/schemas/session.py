"""Pydantic schemas for ConversationSession and ConversationMessage."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.assistant import Audience, MessageType

# -----------------------------------------------------------------------------
# Session schemas
# -----------------------------------------------------------------------------


class SessionContext(BaseModel):
    """What the Session Store needs to find or open a session."""

    session_id: Optional[UUID] = None
    caller_id: Optional[str] = None
    audience: Audience = Audience.VISITOR
    current_page: Optional[str] = None
    language: Optional[str] = None
    caller_context: dict[str, Any] = Field(default_factory=dict)


class SessionRead(BaseModel):
    """Session for API responses."""

    id: UUID
    user_id: Optional[str] = None
    session_fingerprint: Optional[str] = None
    audience: str
    current_page: Optional[str] = None
    language: str
    is_active: bool
    started_at: datetime
    last_activity_at: datetime
    message_count: int = 0

    model_config = {"from_attributes": True}


# -----------------------------------------------------------------------------
# Message schemas
# -----------------------------------------------------------------------------


class MessageMetadata(BaseModel):
    """Resolution annotations attached to an assistant message."""

    intent: Optional[str] = None
    confidence: Optional[float] = None
    matched_answer_id: Optional[UUID] = None
    response_time_ms: Optional[int] = None
    extra: Optional[dict[str, Any]] = None


class MessageRead(BaseModel):
    """Conversation message for API responses."""

    id: UUID
    session_id: UUID
    sequence: int
    message_type: MessageType
    content: str
    intent_detected: Optional[str] = None
    confidence_score: Optional[float] = None
    matched_answer_id: Optional[UUID] = None
    response_time_ms: Optional[int] = None
    was_helpful: Optional[bool] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class HistoryRead(BaseModel):
    """Most recent messages of a session, oldest first."""

    session_id: UUID
    items: list[MessageRead]
