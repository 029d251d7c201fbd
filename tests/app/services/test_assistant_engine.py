"""End-to-end tests for AssistantEngine.resolve and its read helpers."""

import logging

import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError

from app.constants.assistant_messages import (
    FALLBACK_ANSWER,
    STATIC_SUGGESTED_QUESTIONS,
)
from app.core.suggested_actions import CONTACT_SUPPORT, FALLBACK_ACTIONS
from app.schemas.assistant import AskRequest, ResolutionOutcome
from app.services.assistant_engine import AssistantEngine
from app.services.knowledge_answer_service import KnowledgeAnswerService
from app.services.knowledge_matcher import KnowledgeMatcher
from app.services.session_message_service import SessionMessageService
from app.services.session_service import SessionService
from app.services.unanswered_question_service import UnansweredQuestionService


def _ask(db, question, **kwargs):
    return AssistantEngine(db).resolve(AskRequest(question=question, **kwargs))


def _database_down(*args, **kwargs):
    raise OperationalError("UPDATE", {}, Exception("database is down"))


@pytest.fixture(scope="function")
def database_outage(db):
    """Returns a switch that makes every later statement on the test engine fail."""
    bind = db.get_bind()

    def refuse(conn, cursor, statement, parameters, context, executemany):
        raise OperationalError(statement, parameters, Exception("connection lost"))

    def start():
        event.listen(bind, "before_cursor_execute", refuse)

    yield start
    if event.contains(bind, "before_cursor_execute", refuse):
        event.remove(bind, "before_cursor_execute", refuse)


def test_corpus_answer_for_visitor(db, setup_commitment_answer):
    response = _ask(db, "هل يوجد التزام طويل؟")

    assert response.answer == setup_commitment_answer.answer
    assert response.confidence == 1.0
    assert response.category == "knowledge_base"
    assert response.intent == "commitment"
    assert response.matched_answer_id == setup_commitment_answer.id
    assert [a.action for a in response.suggested_actions] == ["start_investment"]
    assert response.suggested_actions[0].url == "/agricultural"
    assert response.outcome == ResolutionOutcome.ANSWERED
    assert response.session_id is not None

    db.refresh(setup_commitment_answer)
    assert setup_commitment_answer.usage_count == 1


def test_answer_turn_is_logged(db, setup_commitment_answer):
    response = _ask(db, "هل يوجد التزام طويل؟")

    messages = SessionMessageService(db).get_messages(response.session_id)

    assert [(m.sequence, m.message_type) for m in messages] == [
        (1, "user"),
        (2, "assistant"),
    ]
    assert messages[0].content == "هل يوجد التزام طويل؟"
    assistant = messages[1]
    assert assistant.matched_answer_id == setup_commitment_answer.id
    assert assistant.confidence_score == 1.0
    assert assistant.intent_detected == "commitment"
    assert assistant.response_time_ms is not None
    assert assistant.extra["outcome"] == "answered"


def test_authenticated_caller_gets_explore_action(db, setup_commitment_answer):
    response = _ask(db, "هل يوجد التزام طويل؟", caller_id="user-42")

    assert [a.action for a in response.suggested_actions] == ["explore_opportunities"]
    session = SessionService(db).get_session(response.session_id)
    assert session.user_id == "user-42"
    assert session.session_fingerprint is None


def test_investor_gets_no_actions(db, setup_commitment_answer):
    response = _ask(
        db, "هل يوجد التزام طويل؟", caller_context={"audience": "investor"}
    )
    assert response.outcome == ResolutionOutcome.ANSWERED
    assert response.suggested_actions == []


def test_page_context_answer_wins(db, setup_page_answer, setup_commitment_answer):
    response = _ask(db, "هل يوجد التزام طويل؟", current_page="/agricultural")

    assert response.matched_answer_id == setup_page_answer.id
    assert response.confidence == 1.0


def test_sensitive_question_escalates(
    db, caplog, setup_refund_scenario, setup_commitment_answer
):
    with caplog.at_level(logging.WARNING):
        response = _ask(db, "أريد استرداد مبلغي، هل يوجد التزام طويل؟")

    assert response.answer == setup_refund_scenario.response_template
    assert response.confidence == 1.0
    assert response.category == "sensitive"
    assert response.matched_answer_id is None
    assert response.suggested_actions == [CONTACT_SUPPORT]
    assert response.outcome == ResolutionOutcome.ESCALATED
    assert "Operator notification" in caplog.text

    messages = SessionMessageService(db).get_messages(response.session_id)
    assert [m.message_type for m in messages] == ["user", "assistant", "system"]
    assert messages[2].content == "escalated: refund_request"
    assert UnansweredQuestionService(db).get_backlog() == []

    db.refresh(setup_commitment_answer)
    assert setup_commitment_answer.usage_count == 0


def test_unknown_question_falls_back_and_is_recorded(db, setup_commitment_answer):
    first = _ask(db, "متى موعد الحصاد القادم")
    second = _ask(db, "متى موعد الحصاد القادم")
    assert second.session_id != first.session_id

    for response in (first, second):
        assert response.answer == FALLBACK_ANSWER
        assert response.confidence == 0.0
        assert response.category == "general"
        assert response.matched_answer_id is None
        assert response.suggested_actions == list(FALLBACK_ACTIONS)
        assert response.outcome == ResolutionOutcome.FALLBACK

    backlog = UnansweredQuestionService(db).get_backlog()
    assert len(backlog) == 1
    assert backlog[0].frequency == 2
    assert backlog[0].session_id == second.session_id


def test_low_score_falls_back(db, create_answer):
    create_answer(question="alpha beta gamma delta")

    response = _ask(db, "alpha beta gamma zzz")

    assert response.outcome == ResolutionOutcome.FALLBACK


def test_session_continues_across_turns(db, setup_commitment_answer):
    first = _ask(db, "هل يوجد التزام طويل؟")
    second = _ask(db, "سؤال آخر", session_id=first.session_id)

    assert second.session_id == first.session_id
    messages = SessionMessageService(db).get_messages(first.session_id)
    assert [m.sequence for m in messages] == [1, 2, 3, 4]


def test_session_store_failure_still_answers(
    db, monkeypatch, setup_commitment_answer
):
    def broken(self, context):
        raise OperationalError("INSERT", {}, Exception("database is down"))

    monkeypatch.setattr(SessionService, "get_or_create_session", broken)

    response = _ask(db, "هل يوجد التزام طويل؟")

    assert response.outcome == ResolutionOutcome.ANSWERED
    assert response.session_id is None


def test_detector_failure_skips_gate(db, setup_commitment_answer):
    class BrokenDetector:
        def detect(self, question):
            raise RuntimeError("rules unavailable")

    engine = AssistantEngine(db, detector=BrokenDetector())
    response = engine.resolve(AskRequest(question="هل يوجد التزام طويل؟"))

    assert response.outcome == ResolutionOutcome.ANSWERED


def test_pipeline_failure_returns_logged_fallback(db, monkeypatch):
    def boom(self, request, session_id):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(AssistantEngine, "_run_pipeline", boom)

    response = _ask(db, "any question")

    assert response.answer == FALLBACK_ANSWER
    assert response.session_id is not None
    messages = SessionMessageService(db).get_messages(response.session_id)
    assert [m.message_type for m in messages] == ["user", "assistant"]
    assert UnansweredQuestionService(db).get_backlog() == []


def test_suggested_questions_default_when_corpus_empty(db):
    assert AssistantEngine(db).get_suggested_questions() == list(
        STATIC_SUGGESTED_QUESTIONS
    )


def test_suggested_questions_most_used(db, create_answer):
    create_answer(question="least", usage_count=1)
    create_answer(question="most", usage_count=7)
    create_answer(question="hidden", usage_count=99, is_approved=False)

    assert AssistantEngine(db).get_suggested_questions(limit=2) == ["most", "least"]


def test_get_history_returns_recent_oldest_first(db, setup_commitment_answer):
    first = _ask(db, "هل يوجد التزام طويل؟")
    _ask(db, "سؤال آخر", session_id=first.session_id)

    history = AssistantEngine(db).get_history(first.session_id, limit=2)

    assert [m.sequence for m in history] == [3, 4]


def test_answer_survives_connection_loss_during_usage_count(
    db, monkeypatch, database_outage, setup_commitment_answer
):
    answer_id = setup_commitment_answer.id
    answer_text = setup_commitment_answer.answer
    increment_usage = KnowledgeAnswerService.increment_usage

    def increment_then_lose_connection(self, matched_id):
        database_outage()
        return increment_usage(self, matched_id)

    monkeypatch.setattr(
        KnowledgeAnswerService, "increment_usage", increment_then_lose_connection
    )

    response = _ask(db, "هل يوجد التزام طويل؟")

    assert response.outcome == ResolutionOutcome.ANSWERED
    assert response.answer == answer_text
    assert response.matched_answer_id == answer_id
    assert response.intent == "commitment"
    assert response.confidence == 1.0


@pytest.mark.parametrize(
    "service, method",
    [
        (KnowledgeAnswerService, "increment_usage"),
        (SessionMessageService, "append_message"),
        (SessionService, "get_or_create_session"),
    ],
)
def test_answered_turn_unchanged_by_failing_side_effect(
    db, monkeypatch, setup_commitment_answer, service, method
):
    expected = _ask(db, "هل يوجد التزام طويل؟")

    monkeypatch.setattr(service, method, _database_down)
    response = _ask(db, "هل يوجد التزام طويل؟")

    assert response.outcome == expected.outcome == ResolutionOutcome.ANSWERED
    assert response.model_dump(exclude={"session_id"}) == expected.model_dump(
        exclude={"session_id"}
    )


@pytest.mark.parametrize(
    "service, method",
    [
        (UnansweredQuestionService, "record_unanswered"),
        (SessionMessageService, "append_message"),
    ],
)
def test_fallback_turn_unchanged_by_failing_side_effect(
    db, monkeypatch, service, method
):
    expected = _ask(db, "متى موعد الحصاد القادم")

    monkeypatch.setattr(service, method, _database_down)
    response = _ask(db, "متى موعد الحصاد القادم")

    assert response.outcome == expected.outcome == ResolutionOutcome.FALLBACK
    assert response.model_dump(exclude={"session_id"}) == expected.model_dump(
        exclude={"session_id"}
    )


def test_matcher_failure_is_not_recorded_as_unanswered(
    db, monkeypatch, caplog, setup_commitment_answer
):
    def broken(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is down"))

    monkeypatch.setattr(KnowledgeMatcher, "match", broken)

    with caplog.at_level(logging.ERROR):
        response = _ask(db, "هل يوجد التزام طويل؟")

    assert response.outcome == ResolutionOutcome.FALLBACK
    assert response.answer == FALLBACK_ANSWER
    assert "Assistant pipeline failed" in caplog.text
    assert UnansweredQuestionService(db).get_backlog() == []

    messages = SessionMessageService(db).get_messages(response.session_id)
    assert messages[-1].extra["outcome"] == "fallback"


def test_failed_rollback_still_returns_fallback(db, monkeypatch):
    def boom(self, request, session_id):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(AssistantEngine, "_run_pipeline", boom)
    monkeypatch.setattr(db, "rollback", _database_down)

    response = _ask(db, "any question")

    assert response.answer == FALLBACK_ANSWER
    assert response.outcome == ResolutionOutcome.FALLBACK


def test_detector_failure_with_failed_rollback_still_answers(
    db, monkeypatch, setup_commitment_answer
):
    class BrokenDetector:
        def detect(self, question):
            raise RuntimeError("rules unavailable")

    monkeypatch.setattr(db, "rollback", _database_down)

    engine = AssistantEngine(db, detector=BrokenDetector())
    response = engine.resolve(AskRequest(question="هل يوجد التزام طويل؟"))

    assert response.outcome == ResolutionOutcome.ANSWERED


def test_english_caller_gets_translated_answer(db, create_answer):
    answer = create_answer(
        question="هل يمكنني البيع في أي وقت",
        answer="نعم، البيع متاح في أي وقت.",
        question_en="Can I sell my shares at any time?",
        answer_en="Yes, you can sell at any time.",
    )

    english = _ask(
        db, "can i sell my shares", caller_context={"language": "en-US"}
    )
    arabic = _ask(db, "هل يمكنني البيع")

    assert english.matched_answer_id == answer.id
    assert english.answer == "Yes, you can sell at any time."
    assert arabic.matched_answer_id == answer.id
    assert arabic.answer == "نعم، البيع متاح في أي وقت."


def test_english_caller_without_translation_gets_arabic(db, setup_commitment_answer):
    response = _ask(
        db, "هل يوجد التزام طويل؟", caller_context={"language": "en"}
    )

    assert response.outcome == ResolutionOutcome.ANSWERED
    assert response.answer == setup_commitment_answer.answer


def test_suggested_questions_in_english(db, create_answer):
    create_answer(question="سؤال", question_en="A question", usage_count=3)
    create_answer(question="سؤال ثان", usage_count=1)

    questions = AssistantEngine(db).get_suggested_questions(language="en")

    assert questions == ["A question", "سؤال ثان"]
