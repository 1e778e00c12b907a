from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from feedback_hub.domains import AIAnalysis, FeedbackItem, FeedbackResponse


class FeedbackRepository(ABC):
    """Interface for feedback data access."""

    @abstractmethod
    def create(self, item: FeedbackItem) -> str:
        """Persist a new feedback item and return its ID."""
        pass

    @abstractmethod
    def get_by_id(self, feedback_id: str) -> Optional[FeedbackItem]:
        """Get a feedback item by ID."""
        pass

    @abstractmethod
    def find(
        self,
        query: Dict,
        sort: Optional[List[Tuple[str, int]]] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[FeedbackItem]:
        """Find feedback items matching query."""
        pass

    @abstractmethod
    def count(self, query: Dict) -> int:
        """Count feedback items matching query."""
        pass

    @abstractmethod
    def set_analysis(
        self, feedback_id: str, analysis: AIAnalysis, sentiment: str
    ) -> Optional[FeedbackItem]:
        """Merge an analysis result into a stored item."""
        pass

    @abstractmethod
    def update_status(
        self, feedback_id: str, status: str, responses: Sequence[FeedbackResponse] = ()
    ) -> Optional[FeedbackItem]:
        """Set the status and append response entries in one update."""
        pass

    @abstractmethod
    def delete(self, feedback_id: str) -> bool:
        """Permanently delete a feedback item."""
        pass
