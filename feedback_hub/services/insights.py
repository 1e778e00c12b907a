"""
Insights service implementation.

This service turns the most recent feedback visible to a caller into a
short narrative of trends and recommendations.
"""
from feedback_hub.domains import Caller, Insights, InsightsStatus
from feedback_hub.interfaces.repositories import FeedbackRepository
from feedback_hub.interfaces.services import AnalysisService
from feedback_hub.interfaces.services import InsightsService as InsightsServiceInterface

INSIGHTS_WINDOW = 50


def no_data_insights() -> Insights:
    """Fixed response used when there is nothing to analyze."""
    return Insights(
        summary="No feedback available for analysis",
        trends=[],
        recommendations=["Encourage users to submit more feedback"],
        total_analyzed=0,
    )


class InsightsService(InsightsServiceInterface):
    """Service for generating insights over recent feedback."""

    def __init__(
        self,
        feedback_repository: FeedbackRepository,
        analysis_service: AnalysisService,
        window: int = INSIGHTS_WINDOW,
    ):
        """Initialize the insights service.

        Args:
            feedback_repository: Repository for feedback items
            analysis_service: Service that summarizes a batch of items
            window: Maximum number of recent items analyzed
        """
        self.feedback_repository = feedback_repository
        self.analysis_service = analysis_service
        self.window = window

    async def generate(self, caller: Caller) -> Insights:
        """Generate insights for the caller.

        Args:
            caller: Requesting user; non-admins only see their own feedback

        Returns:
            Insights over up to ``window`` most recent items
        """
        query = {} if caller.is_admin else {"author_id": caller.id}
        items = self.feedback_repository.find(
            query, sort=[("created_at", -1)], limit=self.window
        )
        if not items:
            return no_data_insights()

        return await self.analysis_service.summarize(items)

    def status(self) -> InsightsStatus:
        return self.analysis_service.describe()
