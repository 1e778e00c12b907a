from abc import ABC, abstractmethod
from typing import List, Optional

from feedback_hub.domains import (
    Caller,
    FeedbackMetadata,
    FeedbackPage,
    FeedbackStats,
    FeedbackView,
)


class FeedbackService(ABC):
    """Interface for the feedback lifecycle."""

    @abstractmethod
    async def create_feedback(
        self,
        author_id: str,
        title: str,
        message: str,
        category: str,
        priority: Optional[str] = None,
        tags: Optional[List[str]] = None,
        metadata: Optional[FeedbackMetadata] = None,
    ) -> FeedbackView:
        """Validate, persist, classify and announce a new feedback item."""
        pass

    @abstractmethod
    async def list_feedback(self, caller: Caller, **params) -> FeedbackPage:
        """List feedback visible to the caller with filters and pagination."""
        pass

    @abstractmethod
    async def get_feedback(self, feedback_id: str, caller: Caller) -> FeedbackView:
        pass

    @abstractmethod
    async def update_status(
        self, feedback_id: str, status: str, actor: Caller, response: Optional[str] = None
    ) -> FeedbackView:
        """Admin-only status change recorded in the response thread."""
        pass

    @abstractmethod
    async def resolve(self, feedback_id: str, caller: Caller) -> FeedbackView:
        """Owner-or-admin shortcut to the resolved status."""
        pass

    @abstractmethod
    async def delete_feedback(self, feedback_id: str, caller: Caller) -> None:
        pass

    @abstractmethod
    async def stats(self, caller: Caller) -> FeedbackStats:
        pass
