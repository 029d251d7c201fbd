"""
Request/response contracts of the assistant.

The HTTP boundary validates the question here (blank questions never reach
the engine); everything the engine returns is an AssistantResponse.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Audience(str, Enum):
    """Caller role used to scope answers and suggested actions."""

    VISITOR = "visitor"
    AUTHENTICATED = "authenticated"
    INVESTOR = "investor"
    PARTNER = "partner"
    ADMIN = "admin"


ALL_AUDIENCES = "all"


def normalize_language(tag: Optional[str]) -> Optional[str]:
    tag = (tag or "").strip().lower()
    return tag.split("-")[0] or None


class MessageType(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ResolutionOutcome(str, Enum):
    """Terminal state of one turn; exactly one per turn."""

    ESCALATED = "escalated"
    ANSWERED = "answered"
    FALLBACK = "fallback"


class SuggestedAction(BaseModel):
    """Button offered next to an answer."""

    model_config = ConfigDict(frozen=True)

    label: str
    action: str
    url: Optional[str] = None


class CallerContext(BaseModel):
    """Client environment attributes; unknown keys are kept for the backlog."""

    model_config = ConfigDict(extra="allow")

    user_agent: Optional[str] = None
    language: Optional[str] = None
    screen: Optional[str] = None  # e.g. "1920x1080"
    audience: Optional[Audience] = None


class AskRequest(BaseModel):
    """Inbound question (HTTP handler → engine)."""

    question: str = Field(..., min_length=1, max_length=2000)
    session_id: Optional[UUID] = None
    caller_id: Optional[str] = Field(None, max_length=256)
    current_page: str = Field("/", max_length=512)
    caller_context: CallerContext = Field(default_factory=CallerContext)

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("question must not be blank")
        return value

    @property
    def audience(self) -> Audience:
        """Explicit audience from the caller, else authenticated/visitor by identity."""
        if self.caller_context.audience is not None:
            return self.caller_context.audience
        return Audience.AUTHENTICATED if self.caller_id else Audience.VISITOR

    @property
    def language(self) -> Optional[str]:
        """Primary subtag of the caller's language ("en-US" -> "en"), if given."""
        return normalize_language(self.caller_context.language)


class AssistantResponse(BaseModel):
    """Outbound answer (engine → HTTP handler)."""

    answer: str
    confidence: float = Field(..., ge=0, le=1)
    category: Optional[str] = None
    matched_answer_id: Optional[UUID] = None
    intent: Optional[str] = None
    suggested_actions: list[SuggestedAction] = Field(default_factory=list)
    session_id: Optional[UUID] = None
    outcome: ResolutionOutcome = Field(ResolutionOutcome.FALLBACK, exclude=True)
    escalation: Optional[str] = Field(None, exclude=True)


class FeedbackRequest(BaseModel):
    was_helpful: bool
    comment: Optional[str] = Field(None, max_length=2000)


class FeedbackRead(BaseModel):
    message_id: UUID
    was_helpful: bool
    comment: Optional[str] = None


class SuggestedQuestionsRead(BaseModel):
    items: list[str]
