"""Fixtures for knowledge domains and topics."""

import pytest

from app.models.knowledge_domain import KnowledgeDomain, KnowledgeTopic


@pytest.fixture(scope="function")
def create_domain(db, faker):
    """Factory for KnowledgeDomain rows; active unless overridden."""

    def _create(**overrides) -> KnowledgeDomain:
        values = {
            "name_ar": faker.word(),
            "display_order": 10,
            "is_active": True,
        }
        values.update(overrides)
        domain = KnowledgeDomain(**values)
        db.add(domain)
        db.commit()
        db.refresh(domain)
        return domain

    return _create


@pytest.fixture(scope="function")
def create_topic(db, faker):
    def _create(**overrides) -> KnowledgeTopic:
        values = {
            "title_ar": faker.sentence(),
            "keywords": [],
            "display_order": 10,
            "is_active": True,
        }
        values.update(overrides)
        topic = KnowledgeTopic(**values)
        db.add(topic)
        db.commit()
        db.refresh(topic)
        return topic

    return _create


@pytest.fixture(scope="function")
def setup_investment_domain(create_domain):
    return create_domain(
        name_ar="الاستثمار",
        name_en="Investment",
        description_ar="كل ما يخص الحصص الزراعية",
        icon="sprout",
        display_order=1,
    )


@pytest.fixture(scope="function")
def setup_exit_topic(create_topic, setup_investment_domain):
    """Topic about selling shares, under the investment domain."""
    return create_topic(
        domain_id=setup_investment_domain.id,
        title_ar="بيع الحصص",
        title_en="Selling shares",
        keywords=["بيع", "خروج"],
        related_page_url="/agricultural",
        display_order=1,
    )
