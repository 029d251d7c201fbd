from app.models.intelligence_metric import IntelligenceMetric
from app.models.knowledge_answer import KnowledgeAnswer
from app.models.knowledge_domain import KnowledgeDomain, KnowledgeTopic
from app.models.sensitive_scenario import SensitiveScenario
from app.models.session import ConversationSession
from app.models.session_message import ConversationMessage
from app.models.unanswered_question import UnansweredQuestion

__all__ = [
    "ConversationMessage",
    "ConversationSession",
    "IntelligenceMetric",
    "KnowledgeAnswer",
    "KnowledgeDomain",
    "KnowledgeTopic",
    "SensitiveScenario",
    "UnansweredQuestion",
]
