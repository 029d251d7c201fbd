"""
Daily intelligence metrics rollup.

Runs as a batch job (see app.tasks.metrics_task), never on the request path.
Recomputing a day overwrites that day's row.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session as DBSession

from app.infra.logging_config import get_logger
from app.models.intelligence_metric import IntelligenceMetric
from app.models.mixins import utcnow
from app.models.knowledge_answer import KnowledgeAnswer
from app.models.session import ConversationSession
from app.models.session_message import ConversationMessage
from app.models.unanswered_question import UnansweredQuestion
from app.schemas.assistant import MessageType, ResolutionOutcome

logger = get_logger("metrics")


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """[start, end) of a UTC day as naive datetimes, matching stored columns."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def _average(values: Iterable[Optional[float]]) -> float:
    present = [v for v in values if v is not None]
    if not present:
        return 0.0
    return round(sum(present) / len(present), 4)


def _outcome(message: ConversationMessage) -> ResolutionOutcome:
    outcome = (message.extra or {}).get("outcome")
    if outcome:
        try:
            return ResolutionOutcome(outcome)
        except ValueError:
            logger.warning(
                "Unknown outcome tag %r on message %s; inferring", outcome, message.id
            )
    # Rows written without a usable outcome tag: infer from confidence
    if message.confidence_score:
        return ResolutionOutcome.ANSWERED
    return ResolutionOutcome.FALLBACK


class MetricsService:
    def __init__(self, db: DBSession) -> None:
        self.db = db

    def get_metric(self, day: date) -> Optional[IntelligenceMetric]:
        return (
            self.db.query(IntelligenceMetric)
            .filter(IntelligenceMetric.metric_date == day)
            .first()
        )

    def get_recent_metrics(self, limit: int = 7) -> List[IntelligenceMetric]:
        return (
            self.db.query(IntelligenceMetric)
            .order_by(IntelligenceMetric.metric_date.desc())
            .limit(limit)
            .all()
        )

    def compute_daily_metrics(self, day: date) -> IntelligenceMetric:
        start, end = day_bounds(day)
        messages = (
            self.db.query(ConversationMessage)
            .filter(
                ConversationMessage.created_at >= start,
                ConversationMessage.created_at < end,
            )
            .all()
        )
        user_messages = [
            m for m in messages if m.message_type == MessageType.USER.value
        ]
        assistant_messages = [
            m for m in messages if m.message_type == MessageType.ASSISTANT.value
        ]
        outcomes = [_outcome(m) for m in assistant_messages]
        rated = [m.was_helpful for m in messages if m.was_helpful is not None]
        helpful = sum(1 for r in rated if r)
        unhelpful = len(rated) - helpful

        session_ids = {m.session_id for m in messages}
        unique_users, returning_users = self._count_users(session_ids, start)

        new_answers = (
            self.db.query(KnowledgeAnswer)
            .filter(KnowledgeAnswer.created_at >= start, KnowledgeAnswer.created_at < end)
            .count()
        )
        new_topics = (
            self.db.query(UnansweredQuestion)
            .filter(
                UnansweredQuestion.created_at >= start,
                UnansweredQuestion.created_at < end,
            )
            .count()
        )

        metric = self.get_metric(day)
        if metric is None:
            metric = IntelligenceMetric(metric_date=day)
            self.db.add(metric)

        metric.total_conversations = len(session_ids)
        metric.total_questions = len(user_messages)
        metric.answered_successfully = outcomes.count(ResolutionOutcome.ANSWERED)
        metric.unanswered_questions = outcomes.count(ResolutionOutcome.FALLBACK)
        metric.escalated_questions = outcomes.count(ResolutionOutcome.ESCALATED)
        metric.avg_confidence_score = _average(
            m.confidence_score for m in assistant_messages
        )
        metric.avg_response_time_ms = _average(
            m.response_time_ms for m in assistant_messages
        )
        metric.helpful_count = helpful
        metric.unhelpful_count = unhelpful
        metric.satisfaction_rate = round(helpful / len(rated), 4) if rated else 0.0
        metric.new_answers_count = new_answers
        metric.new_topics_count = new_topics
        metric.unique_users = unique_users
        metric.returning_users = returning_users
        metric.computed_at = utcnow()

        self.db.commit()
        self.db.refresh(metric)
        logger.info(
            "Computed metrics for %s: %d conversations, %d questions",
            day.isoformat(),
            metric.total_conversations,
            metric.total_questions,
        )
        return metric

    def _count_users(self, session_ids: set, start: datetime) -> Tuple[int, int]:
        """(unique identities active that day, those with a session before the day)."""
        if not session_ids:
            return 0, 0
        sessions = (
            self.db.query(ConversationSession)
            .filter(ConversationSession.id.in_(list(session_ids)))
            .all()
        )
        identities = {s.identity for s in sessions if s.identity}
        if not identities:
            return 0, 0
        earlier = (
            self.db.query(ConversationSession)
            .filter(
                ConversationSession.started_at < start,
                or_(
                    ConversationSession.user_id.in_(sorted(identities)),
                    ConversationSession.session_fingerprint.in_(sorted(identities)),
                ),
            )
            .all()
        )
        returning = {s.identity for s in earlier} & identities
        return len(identities), len(returning)
