"""Pydantic schemas for daily intelligence metrics."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel


class IntelligenceMetricRead(BaseModel):
    metric_date: date
    total_conversations: int
    total_questions: int
    answered_successfully: int
    unanswered_questions: int
    escalated_questions: int
    avg_confidence_score: float
    avg_response_time_ms: float
    helpful_count: int
    unhelpful_count: int
    satisfaction_rate: float
    new_answers_count: int
    new_topics_count: int
    unique_users: int
    returning_users: int
    computed_at: datetime

    model_config = {"from_attributes": True}
