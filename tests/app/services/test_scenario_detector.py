"""Tests for ScenarioDetector."""

from app.core.suggested_actions import CONTACT_SUPPORT
from app.schemas.assistant import ResolutionOutcome
from app.services.scenario_detector import ScenarioDetector


def test_detect_keyword_substring(db, setup_refund_scenario):
    match = ScenarioDetector(db).detect("أريد استرداد أموالي")
    assert match is not None
    assert match.scenario.id == setup_refund_scenario.id
    assert match.keyword == "استرداد"


def test_detect_is_case_insensitive(db, setup_refund_scenario):
    match = ScenarioDetector(db).detect("How do I get a REFUND?")
    assert match is not None
    assert match.keyword == "refund"


def test_detect_no_match(db, setup_refund_scenario):
    assert ScenarioDetector(db).detect("ما فكرة المنصة؟") is None


def test_detect_highest_priority_wins(db, create_scenario):
    create_scenario(name="low", trigger_keywords=["urgent"], priority=1)
    high = create_scenario(name="high", trigger_keywords=["urgent"], priority=5)

    match = ScenarioDetector(db).detect("this is urgent")

    assert match.scenario.id == high.id


def test_detect_skips_inactive(db, create_scenario):
    create_scenario(name="off", trigger_keywords=["fraud"], is_active=False)
    assert ScenarioDetector(db).detect("possible fraud") is None


def test_to_response_escalates_with_support_action(db, setup_refund_scenario):
    response = ScenarioDetector(db).detect("refund please").to_response()

    assert response.answer == setup_refund_scenario.response_template
    assert response.confidence == 1.0
    assert response.category == "sensitive"
    assert response.intent == "refund_request"
    assert response.suggested_actions == [CONTACT_SUPPORT]
    assert response.outcome == ResolutionOutcome.ESCALATED
    assert response.escalation == "refund_request"


def test_to_response_without_support_redirect(db, create_scenario):
    create_scenario(
        name="soft",
        trigger_keywords=["complaint"],
        redirect_to_support=False,
        requires_escalation=False,
    )
    response = ScenarioDetector(db).detect("a complaint").to_response()

    assert response.suggested_actions == []
    assert response.escalation is None
