"""
AssistantEngine: resolves one question per call.

Per turn: Received -> SensitiveCheck -> {Escalated | ContextMatch -> Answered |
CorpusMatch -> Answered | Fallback}. Exactly one terminal state is reached.

Persistence (session, message log, counters, backlog) is best effort: a
datastore failure there is logged and the caller still gets an answer. A
failure while matching is not a "no match": the turn falls back without
being added to the unanswered backlog.
"""

from __future__ import annotations

import time
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session as DBSession

from app.config import get_settings
from app.constants.assistant_messages import (
    FALLBACK_ANSWER,
    STATIC_SUGGESTED_QUESTIONS,
)
from app.core.best_effort import run_best_effort, safe_rollback
from app.core.suggested_actions import FALLBACK_ACTIONS, suggested_actions_for
from app.infra.logging_config import get_logger
from app.models.session_message import ConversationMessage
from app.schemas.assistant import (
    AskRequest,
    AssistantResponse,
    MessageType,
    ResolutionOutcome,
)
from app.schemas.session import MessageMetadata, SessionContext
from app.services.knowledge_answer_service import KnowledgeAnswerService
from app.services.knowledge_matcher import AnswerCandidate, KnowledgeMatcher
from app.services.scenario_detector import ScenarioDetector, ScenarioMatch
from app.services.session_message_service import SessionMessageService
from app.services.session_service import SessionService
from app.services.unanswered_question_service import UnansweredQuestionService

logger = get_logger("assistant")

KNOWLEDGE_BASE_CATEGORY = "knowledge_base"
FALLBACK_CATEGORY = "general"


def fallback_response() -> AssistantResponse:
    return AssistantResponse(
        answer=FALLBACK_ANSWER,
        confidence=0.0,
        category=FALLBACK_CATEGORY,
        suggested_actions=list(FALLBACK_ACTIONS),
        outcome=ResolutionOutcome.FALLBACK,
    )


class AssistantEngine:
    def __init__(
        self,
        db: DBSession,
        detector: Optional[ScenarioDetector] = None,
        matcher: Optional[KnowledgeMatcher] = None,
    ) -> None:
        self.db = db
        self._sessions = SessionService(db)
        self._messages = SessionMessageService(db)
        self._answers = KnowledgeAnswerService(db)
        self._backlog = UnansweredQuestionService(db)
        self._detector = detector or ScenarioDetector(db)
        self._matcher = matcher or KnowledgeMatcher(db, answer_service=self._answers)

    def resolve(self, request: AskRequest) -> AssistantResponse:
        """Answer a question; never raises for pipeline or persistence failures."""
        started = time.monotonic()
        session_id: Optional[UUID] = None
        try:
            session_id = self._open_session(request)
            if session_id is not None:
                run_best_effort(
                    self.db,
                    "append_user_message",
                    self._messages.append_message,
                    session_id,
                    MessageType.USER,
                    request.question,
                )

            response = self._run_pipeline(request, session_id)
        except Exception:
            logger.exception("Assistant pipeline failed; returning fallback")
            safe_rollback(self.db, "assistant_pipeline")
            response = fallback_response()

        response.session_id = session_id
        # The response holds plain values only, so a failed write here cannot change it
        if (
            response.outcome == ResolutionOutcome.ANSWERED
            and response.matched_answer_id is not None
        ):
            run_best_effort(
                self.db,
                "increment_usage_count",
                self._answers.increment_usage,
                response.matched_answer_id,
            )
        if session_id is not None:
            self._log_assistant_message(session_id, response, started)
        return response

    def _run_pipeline(
        self, request: AskRequest, session_id: Optional[UUID]
    ) -> AssistantResponse:
        scenario = self._detect(request.question)
        if scenario is not None:
            return self._escalate(scenario, request, session_id)

        language = request.language or get_settings().default_language
        candidate = self._match(request, language)
        if candidate is not None:
            return self._answer(candidate, request, language)

        self._record_unanswered(request, session_id)
        return fallback_response()

    def _open_session(self, request: AskRequest) -> Optional[UUID]:
        context = SessionContext(
            session_id=request.session_id,
            caller_id=request.caller_id,
            audience=request.audience,
            current_page=request.current_page,
            language=request.caller_context.language,
            caller_context=request.caller_context.model_dump(
                mode="json", exclude_none=True
            ),
        )
        session = run_best_effort(
            self.db,
            "get_or_create_session",
            self._sessions.get_or_create_session,
            context,
        )
        if session is None:
            logger.warning("Continuing session-less for this turn")
            return None
        return session.id

    def _detect(self, question: str) -> Optional[ScenarioMatch]:
        try:
            return self._detector.detect(question)
        except Exception:
            logger.exception("Sensitive-scenario detection failed; skipping gate")
            safe_rollback(self.db, "detect_scenario")
            return None

    def _match(self, request: AskRequest, language: str) -> Optional[AnswerCandidate]:
        # Errors propagate: resolve() turns them into a fallback that is not backlogged
        candidates = self._matcher.match(
            request.question, request.audience, request.current_page, language
        )
        return self._matcher.best_accepted(candidates)

    def _escalate(
        self,
        scenario: ScenarioMatch,
        request: AskRequest,
        session_id: Optional[UUID],
    ) -> AssistantResponse:
        rule = scenario.scenario
        if rule.notify_operators:
            logger.warning(
                "Operator notification: scenario=%s keyword=%r session=%s page=%s",
                rule.name,
                scenario.keyword,
                session_id,
                request.current_page,
            )
        return scenario.to_response()

    def _answer(
        self, candidate: AnswerCandidate, request: AskRequest, language: str
    ) -> AssistantResponse:
        answer = candidate.answer
        return AssistantResponse(
            answer=answer.answer_for(language),
            confidence=candidate.confidence,
            category=KNOWLEDGE_BASE_CATEGORY,
            matched_answer_id=answer.id,
            intent=answer.primary_intent,
            suggested_actions=suggested_actions_for(request.audience),
            outcome=ResolutionOutcome.ANSWERED,
        )

    def _record_unanswered(
        self, request: AskRequest, session_id: Optional[UUID]
    ) -> None:
        run_best_effort(
            self.db,
            "record_unanswered_question",
            self._backlog.record_unanswered,
            request.question,
            request.audience.value,
            request.current_page,
            request.caller_context.model_dump(mode="json", exclude_none=True),
            session_id,
        )

    def _log_assistant_message(
        self, session_id: UUID, response: AssistantResponse, started: float
    ) -> None:
        metadata = MessageMetadata(
            intent=response.intent,
            confidence=response.confidence,
            matched_answer_id=response.matched_answer_id,
            response_time_ms=int((time.monotonic() - started) * 1000),
            extra={"outcome": response.outcome.value, "category": response.category},
        )
        run_best_effort(
            self.db,
            "append_assistant_message",
            self._messages.append_message,
            session_id,
            MessageType.ASSISTANT,
            response.answer,
            metadata,
        )
        if response.escalation:
            run_best_effort(
                self.db,
                "append_escalation_message",
                self._messages.append_message,
                session_id,
                MessageType.SYSTEM,
                f"escalated: {response.escalation}",
                MessageMetadata(extra={"escalation": response.escalation}),
            )

    def get_suggested_questions(
        self, limit: Optional[int] = None, language: Optional[str] = None
    ) -> List[str]:
        """Most-used approved questions, or the static starter list when none exist."""
        limit = limit or get_settings().suggested_questions_limit
        language = language or get_settings().default_language
        answers = self._answers.get_most_used_answers(limit=limit)
        if not answers:
            return list(STATIC_SUGGESTED_QUESTIONS)
        return [a.question_for(language) for a in answers]

    def get_history(
        self, session_id: UUID, limit: Optional[int] = None
    ) -> List[ConversationMessage]:
        limit = limit or get_settings().history_limit
        return self._messages.get_recent_messages(session_id, limit=limit)
