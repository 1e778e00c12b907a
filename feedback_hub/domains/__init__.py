"""
Domain models for Feedback Hub.

This package contains all the core domain models used throughout the system.
"""
from feedback_hub.domains.users import AuthorIdentity, Caller, User, UserRole
from feedback_hub.domains.feedback import (
    AIAnalysis,
    FeedbackCategory,
    FeedbackItem,
    FeedbackMetadata,
    FeedbackPage,
    FeedbackPriority,
    FeedbackQuery,
    FeedbackResponse,
    FeedbackStats,
    FeedbackStatus,
    FeedbackSubmission,
    FeedbackView,
    Pagination,
    ResolvedResponse,
    Sentiment,
    StatusChange,
)
from feedback_hub.domains.analysis import (
    AnalysisResult,
    ClassifierStrategy,
    Insights,
    InsightsStatus,
)
from feedback_hub.domains.events import FeedbackEvent, JOIN_DASHBOARD, user_room

__all__ = [
    "AuthorIdentity",
    "Caller",
    "User",
    "UserRole",
    "AIAnalysis",
    "FeedbackCategory",
    "FeedbackItem",
    "FeedbackMetadata",
    "FeedbackPage",
    "FeedbackPriority",
    "FeedbackQuery",
    "FeedbackResponse",
    "FeedbackStats",
    "FeedbackStatus",
    "FeedbackSubmission",
    "FeedbackView",
    "Pagination",
    "ResolvedResponse",
    "Sentiment",
    "StatusChange",
    "AnalysisResult",
    "ClassifierStrategy",
    "Insights",
    "InsightsStatus",
    "FeedbackEvent",
    "JOIN_DASHBOARD",
    "user_room",
]
