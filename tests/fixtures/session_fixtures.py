"""Fixtures for conversation sessions and messages."""

import pytest

from app.schemas.assistant import Audience
from app.schemas.session import SessionContext
from app.services.session_service import SessionService


@pytest.fixture(scope="function")
def setup_session(db, faker):
    """An anonymous visitor session on the home page."""
    context = SessionContext(
        audience=Audience.VISITOR,
        current_page="/",
        language="ar",
        caller_context={
            "user_agent": faker.user_agent(),
            "screen": "1920x1080",
            "language": "ar",
        },
    )
    return SessionService(db).create_session(context)


@pytest.fixture(scope="function")
def setup_user_session(db, faker):
    """A session owned by an authenticated caller."""
    context = SessionContext(
        caller_id=str(faker.uuid4()),
        audience=Audience.AUTHENTICATED,
        current_page="/dashboard",
    )
    return SessionService(db).create_session(context)
