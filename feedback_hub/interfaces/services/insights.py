from abc import ABC, abstractmethod

from feedback_hub.domains import Caller, Insights, InsightsStatus


class InsightsService(ABC):
    """Interface for narrative insights over recent feedback."""

    @abstractmethod
    async def generate(self, caller: Caller) -> Insights:
        """Summarize the most recent feedback visible to the caller."""
        pass

    @abstractmethod
    def status(self) -> InsightsStatus:
        pass
