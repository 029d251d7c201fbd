"""Fixtures for the curated answer corpus."""

import pytest

from app.models.knowledge_answer import KnowledgeAnswer


@pytest.fixture(scope="function")
def create_answer(db, faker):
    """
    Factory for KnowledgeAnswer rows. Defaults to an active, approved answer
    for all audiences with no page contexts.
    """

    def _create(**overrides) -> KnowledgeAnswer:
        values = {
            "question": faker.sentence(),
            "answer": faker.paragraph(),
            "intent_tags": [faker.word()],
            "target_audience": "all",
            "page_contexts": [],
            "is_approved": True,
            "is_active": True,
        }
        values.update(overrides)
        answer = KnowledgeAnswer(**values)
        db.add(answer)
        db.commit()
        db.refresh(answer)
        return answer

    return _create


@pytest.fixture(scope="function")
def setup_commitment_answer(create_answer):
    """Approved answer whose question contains 'هل يوجد التزام طويل؟'."""
    return create_answer(
        question="هل يوجد التزام طويل؟ وما مدة العقد",
        answer="لا يوجد التزام طويل، يمكنك البيع في أي وقت.",
        intent_tags=["commitment", "contract"],
    )


@pytest.fixture(scope="function")
def setup_page_answer(create_answer):
    """Answer curated for the agricultural page, all audiences."""
    return create_answer(
        question="كيف أختار المزرعة المناسبة؟",
        answer="قارن العائد المتوقع ومدة الموسم قبل الاختيار.",
        intent_tags=["farm_selection"],
        page_contexts=["/agricultural"],
    )
