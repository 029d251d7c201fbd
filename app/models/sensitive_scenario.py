"""SensitiveScenario model: keyword-triggered escalation rule."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, Integer, String, Text

from app.db import Base
from app.models.mixins import TimestampMixin
from app.models.types import GUID, JSONDocument


class SensitiveScenario(Base, TimestampMixin):
    """Higher priority is evaluated first; the first keyword hit wins."""

    __tablename__ = "sensitive_scenarios"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    name = Column(String(128), unique=True, nullable=False)
    trigger_keywords = Column(JSONDocument, nullable=False, default=list)
    response_template = Column(Text, nullable=False)
    requires_escalation = Column(Boolean, nullable=False, default=True)
    notify_operators = Column(Boolean, nullable=False, default=False)
    redirect_to_support = Column(Boolean, nullable=False, default=True)
    priority = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
