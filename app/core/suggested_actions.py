"""Audience → suggested follow-up actions, plus the fixed recovery actions."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from app.constants.assistant_messages import (
    AGRICULTURAL_PAGE_URL,
    BROWSE_FAQS_LABEL,
    CONTACT_SUPPORT_LABEL,
    EXPLORE_OPPORTUNITIES_LABEL,
    START_INVESTMENT_LABEL,
    SUPPORT_PAGE_URL,
)
from app.schemas.assistant import Audience, SuggestedAction

BROWSE_FAQS = SuggestedAction(label=BROWSE_FAQS_LABEL, action="browse_faqs")
CONTACT_SUPPORT = SuggestedAction(
    label=CONTACT_SUPPORT_LABEL, action="contact_support", url=SUPPORT_PAGE_URL
)

FALLBACK_ACTIONS: tuple[SuggestedAction, ...] = (
    BROWSE_FAQS,
    SuggestedAction(label=CONTACT_SUPPORT_LABEL, action="contact_support"),
)

ACTIONS_BY_AUDIENCE: Mapping[Audience, tuple[SuggestedAction, ...]] = MappingProxyType(
    {
        Audience.VISITOR: (
            SuggestedAction(
                label=START_INVESTMENT_LABEL,
                action="start_investment",
                url=AGRICULTURAL_PAGE_URL,
            ),
        ),
        Audience.AUTHENTICATED: (
            SuggestedAction(
                label=EXPLORE_OPPORTUNITIES_LABEL,
                action="explore_opportunities",
                url=AGRICULTURAL_PAGE_URL,
            ),
        ),
        Audience.INVESTOR: (),
        Audience.PARTNER: (),
        Audience.ADMIN: (),
    }
)

_missing = set(Audience) - set(ACTIONS_BY_AUDIENCE)
if _missing:
    raise RuntimeError(f"No suggested actions defined for audiences: {_missing}")


def suggested_actions_for(audience: Audience) -> list[SuggestedAction]:
    return list(ACTIONS_BY_AUDIENCE[audience])
