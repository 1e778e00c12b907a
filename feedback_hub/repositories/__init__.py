from feedback_hub.repositories.feedback import MongoFeedbackRepository
from feedback_hub.repositories.user import MongoUserRepository

__all__ = ["MongoFeedbackRepository", "MongoUserRepository"]
