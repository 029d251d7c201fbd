"""Session Store: find-or-create conversation sessions and track activity."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session as DBSession

from app.config import get_settings
from app.core.session_fingerprint import build_session_fingerprint
from app.models.mixins import utcnow
from app.models.session import ConversationSession
from app.schemas.session import SessionContext


class SessionService:
    def __init__(self, db: DBSession) -> None:
        self.db = db

    def get_session(self, session_id: UUID) -> Optional[ConversationSession]:
        return (
            self.db.query(ConversationSession)
            .filter(ConversationSession.id == session_id)
            .first()
        )

    def get_or_create_session(self, context: SessionContext) -> ConversationSession:
        """
        Reuse context.session_id when it exists (refreshing activity and page),
        otherwise open a new session keyed by caller_id or a fingerprint.
        """
        if context.session_id is not None:
            session = self.touch_session(context.session_id, context.current_page)
            if session is not None:
                return session
        return self.create_session(context)

    def create_session(self, context: SessionContext) -> ConversationSession:
        now = utcnow()
        session = ConversationSession(
            user_id=context.caller_id or None,
            session_fingerprint=(
                None
                if context.caller_id
                else build_session_fingerprint(context.caller_context, now)
            ),
            audience=context.audience.value,
            current_page=context.current_page,
            language=context.language or get_settings().default_language,
            caller_context=context.caller_context or None,
            is_active=True,
            started_at=now,
            last_activity_at=now,
        )
        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)
        return session

    def touch_session(
        self, session_id: UUID, current_page: Optional[str] = None
    ) -> Optional[ConversationSession]:
        session = self.get_session(session_id)
        if session is None:
            return None
        session.last_activity_at = utcnow()
        if current_page:
            session.current_page = current_page
        self.db.commit()
        self.db.refresh(session)
        return session

    def deactivate_session(self, session_id: UUID) -> Optional[ConversationSession]:
        """Sessions are never deleted; they are switched off."""
        session = self.get_session(session_id)
        if session is None:
            return None
        session.is_active = False
        self.db.commit()
        self.db.refresh(session)
        return session
