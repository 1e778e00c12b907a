from feedback_hub.interfaces.repositories.feedback import FeedbackRepository
from feedback_hub.interfaces.repositories.user import UserRepository

__all__ = ["FeedbackRepository", "UserRepository"]
