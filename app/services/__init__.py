from app.services.assistant_engine import AssistantEngine
from app.services.feedback_service import FeedbackService
from app.services.knowledge_answer_service import KnowledgeAnswerService
from app.services.knowledge_matcher import KnowledgeMatcher
from app.services.metrics_service import MetricsService
from app.services.scenario_detector import ScenarioDetector
from app.services.session_message_service import SessionMessageService
from app.services.session_service import SessionService
from app.services.unanswered_question_service import UnansweredQuestionService

__all__ = [
    "AssistantEngine",
    "FeedbackService",
    "KnowledgeAnswerService",
    "KnowledgeMatcher",
    "MetricsService",
    "ScenarioDetector",
    "SessionMessageService",
    "SessionService",
    "UnansweredQuestionService",
]
