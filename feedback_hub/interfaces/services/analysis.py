from abc import ABC, abstractmethod
from typing import Sequence

from feedback_hub.domains import (
    AnalysisResult,
    ClassifierStrategy,
    FeedbackItem,
    Insights,
    InsightsStatus,
)


class AnalysisService(ABC):
    """Interface for feedback analysis."""

    @property
    @abstractmethod
    def strategy(self) -> ClassifierStrategy:
        """Classifier strategy chosen at startup."""
        pass

    @abstractmethod
    async def classify(self, message: str) -> AnalysisResult:
        """Classify a single feedback message.

        Args:
            message: Feedback message text

        Returns:
            Summary, keywords, suggested actions, confidence and sentiment
        """
        pass

    @abstractmethod
    async def summarize(self, items: Sequence[FeedbackItem]) -> Insights:
        """Summarize a batch of feedback items into trends and recommendations."""
        pass

    @abstractmethod
    def describe(self) -> InsightsStatus:
        """Describe the active classifier."""
        pass
