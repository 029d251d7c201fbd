"""
Knowledge Matcher: page/audience-scoped lookup first, then corpus-wide lexical
scoring.

Scoring for the corpus pass, per eligible answer:
    +phrase_weight  if the lowercased question is a substring of the candidate
    +word_weight    for every whitespace-delimited query word found in it
Only scores > 0 are kept, sorted descending, top N. A candidate is accepted
when its score is strictly above the acceptance threshold.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional

from sqlalchemy.orm import Session as DBSession

from app.config import get_settings
from app.models.knowledge_answer import KnowledgeAnswer
from app.schemas.assistant import Audience
from app.services.knowledge_answer_service import KnowledgeAnswerService

MatchStage = Literal["context", "corpus"]


@dataclass(frozen=True)
class MatchWeights:
    phrase_weight: float = 10
    word_weight: float = 1
    acceptance_threshold: float = 3
    max_candidates: int = 5

    @classmethod
    def from_settings(cls) -> "MatchWeights":
        s = get_settings()
        return cls(
            phrase_weight=s.match_phrase_weight,
            word_weight=s.match_word_weight,
            acceptance_threshold=s.match_acceptance_threshold,
            max_candidates=s.match_max_candidates,
        )


@dataclass(frozen=True)
class AnswerCandidate:
    answer: KnowledgeAnswer
    score: float
    stage: MatchStage

    @property
    def confidence(self) -> float:
        return min(self.score / 10, 1.0)


def score_question(query: str, candidate_question: str, weights: MatchWeights) -> float:
    """Lexical score of one candidate question against the user's question."""
    query_lower = query.lower()
    candidate_lower = (candidate_question or "").lower()
    score = 0.0
    if query_lower in candidate_lower:
        score += weights.phrase_weight
    for word in query_lower.split():
        if word in candidate_lower:
            score += weights.word_weight
    return score


class KnowledgeMatcher:
    def __init__(
        self,
        db: DBSession,
        weights: Optional[MatchWeights] = None,
        answer_service: Optional[KnowledgeAnswerService] = None,
    ) -> None:
        self.weights = weights or MatchWeights.from_settings()
        self._answers = answer_service or KnowledgeAnswerService(db)

    def match(
        self,
        question: str,
        audience: Audience,
        page: Optional[str],
        language: str = "ar",
    ) -> List[AnswerCandidate]:
        """Context pass, short-circuiting into the corpus pass only when empty."""
        candidates = self.match_context(audience, page)
        if candidates:
            return candidates
        return self.search_corpus(question, language)

    def match_context(
        self, audience: Audience, page: Optional[str]
    ) -> List[AnswerCandidate]:
        if not page:
            return []
        answers = self._answers.get_context_answers(
            audience, page, limit=self.weights.max_candidates
        )
        # Curated for this slot: carry the full-phrase score
        return [
            AnswerCandidate(answer=a, score=self.weights.phrase_weight, stage="context")
            for a in answers
        ]

    def search_corpus(
        self, question: str, language: str = "ar"
    ) -> List[AnswerCandidate]:
        """Score against the question text in `language`, Arabic when no translation exists."""
        scored = [
            AnswerCandidate(
                answer=a,
                score=score_question(question, a.question_for(language), self.weights),
                stage="corpus",
            )
            for a in self._answers.get_eligible_answers()
        ]
        scored = [c for c in scored if c.score > 0]
        # sorted() is stable, so equal scores keep corpus order
        scored = sorted(scored, key=lambda c: c.score, reverse=True)
        return scored[: self.weights.max_candidates]

    def best_accepted(
        self, candidates: List[AnswerCandidate]
    ) -> Optional[AnswerCandidate]:
        if not candidates:
            return None
        best = candidates[0]
        if best.score > self.weights.acceptance_threshold:
            return best
        return None
