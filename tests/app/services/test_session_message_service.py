"""Tests for SessionMessageService."""

from uuid import uuid4

from app.schemas.assistant import MessageType
from app.schemas.session import MessageMetadata
from app.services.session_message_service import SessionMessageService


def test_append_assigns_increasing_sequence(db, setup_session):
    svc = SessionMessageService(db)
    first = svc.append_message(setup_session.id, MessageType.USER, "hello")
    second = svc.append_message(setup_session.id, MessageType.ASSISTANT, "hi")

    assert first.sequence == 1
    assert second.sequence == 2
    assert svc.get_message_count(setup_session.id) == 2


def test_sequence_is_per_session(db, setup_session, setup_user_session):
    svc = SessionMessageService(db)
    svc.append_message(setup_session.id, MessageType.USER, "a")
    other = svc.append_message(setup_user_session.id, MessageType.USER, "b")
    assert other.sequence == 1


def test_append_stores_metadata(db, setup_session):
    answer_id = uuid4()
    msg = SessionMessageService(db).append_message(
        setup_session.id,
        MessageType.ASSISTANT,
        "answer",
        MessageMetadata(
            intent="commitment",
            confidence=0.4,
            matched_answer_id=answer_id,
            response_time_ms=12,
            extra={"outcome": "answered"},
        ),
    )

    assert msg.intent_detected == "commitment"
    assert msg.confidence_score == 0.4
    assert msg.matched_answer_id == answer_id
    assert msg.response_time_ms == 12
    assert msg.message_metadata == {"outcome": "answered"}


def test_assistant_message_bumps_session_activity(db, setup_session):
    before = setup_session.last_activity_at
    SessionMessageService(db).append_message(
        setup_session.id, MessageType.ASSISTANT, "hi"
    )
    db.refresh(setup_session)
    assert setup_session.last_activity_at >= before


def test_get_recent_messages_oldest_first(db, setup_session):
    svc = SessionMessageService(db)
    for i in range(5):
        svc.append_message(setup_session.id, MessageType.USER, f"m{i}")

    recent = svc.get_recent_messages(setup_session.id, limit=3)

    assert [m.content for m in recent] == ["m2", "m3", "m4"]


def test_get_messages_ordered(db, setup_session):
    svc = SessionMessageService(db)
    svc.append_message(setup_session.id, MessageType.USER, "q")
    svc.append_message(setup_session.id, MessageType.ASSISTANT, "a")
    messages = svc.get_messages(setup_session.id)
    assert [m.message_type for m in messages] == ["user", "assistant"]


def test_set_feedback(db, setup_session):
    svc = SessionMessageService(db)
    msg = svc.append_message(setup_session.id, MessageType.ASSISTANT, "a")

    updated = svc.set_feedback(msg.id, False, "not what I asked")

    assert updated.was_helpful is False
    assert updated.feedback_comment == "not what I asked"
    assert updated.content == "a"


def test_set_feedback_unknown_message(db):
    assert SessionMessageService(db).set_feedback(uuid4(), True) is None
