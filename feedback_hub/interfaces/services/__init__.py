from feedback_hub.interfaces.services.analysis import AnalysisService
from feedback_hub.interfaces.services.feedback import FeedbackService
from feedback_hub.interfaces.services.insights import InsightsService
from feedback_hub.interfaces.services.user import UserService

__all__ = ["AnalysisService", "FeedbackService", "InsightsService", "UserService"]
