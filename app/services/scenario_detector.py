"""Sensitive-Scenario Detector: keyword gate evaluated before any FAQ lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session as DBSession

from app.core.suggested_actions import CONTACT_SUPPORT
from app.models.sensitive_scenario import SensitiveScenario
from app.schemas.assistant import AssistantResponse, ResolutionOutcome

SENSITIVE_CATEGORY = "sensitive"


@dataclass(frozen=True)
class ScenarioMatch:
    scenario: SensitiveScenario
    keyword: str

    def to_response(self) -> AssistantResponse:
        actions = [CONTACT_SUPPORT] if self.scenario.redirect_to_support else []
        return AssistantResponse(
            answer=self.scenario.response_template,
            confidence=1.0,
            category=SENSITIVE_CATEGORY,
            intent=self.scenario.name,
            suggested_actions=actions,
            outcome=ResolutionOutcome.ESCALATED,
            escalation=(
                self.scenario.name if self.scenario.requires_escalation else None
            ),
        )


class ScenarioDetector:
    def __init__(self, db: DBSession) -> None:
        self.db = db

    def get_active_scenarios(self) -> List[SensitiveScenario]:
        return (
            self.db.query(SensitiveScenario)
            .filter(SensitiveScenario.is_active.is_(True))
            .order_by(SensitiveScenario.priority.desc(), SensitiveScenario.name)
            .all()
        )

    def detect(self, question: str) -> Optional[ScenarioMatch]:
        """
        First scenario (by descending priority) with any keyword contained in the
        case-folded question. Plain substring containment, not word boundaries.
        """
        folded = question.casefold()
        for scenario in self.get_active_scenarios():
            for keyword in scenario.trigger_keywords or []:
                if keyword and keyword.casefold() in folded:
                    return ScenarioMatch(scenario=scenario, keyword=keyword)
        return None
