"""
Feedback analysis service implementation.

This module provides the two classifier strategies and the service that
runs whichever one was configured, falling back to the local classifier
whenever the remote one fails.
"""
import asyncio
import logging
import math
from collections import Counter
from typing import Dict, Optional, Sequence

from feedback_hub.domains import (
    AnalysisResult,
    ClassifierStrategy,
    FeedbackCategory,
    FeedbackItem,
    Insights,
    InsightsStatus,
    Sentiment,
)
from feedback_hub.errors import ClassifierError
from feedback_hub.interfaces.providers import LLMProvider
from feedback_hub.interfaces.services import AnalysisService as AnalysisServiceInterface

logger = logging.getLogger(__name__)

STOPWORDS = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "is", "are", "was", "were", "be", "been", "have", "has",
    "had", "do", "does", "did", "will", "would", "could", "should", "may",
    "might", "can", "this", "that", "these", "those",
])

POSITIVE_WORDS = frozenset([
    "good", "great", "excellent", "amazing", "love", "like", "awesome",
    "fantastic", "wonderful", "perfect",
])

NEGATIVE_WORDS = frozenset([
    "bad", "terrible", "awful", "hate", "dislike", "horrible", "worst",
    "broken", "bug", "error", "problem", "issue",
])

TECHNICAL_KEYWORDS = frozenset(["bug", "error", "broken", "issue"])
FEATURE_KEYWORDS = frozenset(["feature", "add", "new", "request"])

TECHNICAL_ACTIONS = ["Investigate technical issue", "Assign to development team"]
FEATURE_ACTIONS = ["Evaluate feature request", "Add to product roadmap"]
GENERAL_ACTIONS = ["Review feedback with team", "Follow up with user"]

MAX_KEYWORDS = 5
MAX_SUGGESTED_ACTIONS = 3
SUMMARY_LIMIT = 80
LOCAL_CONFIDENCE = 0.6
DEFAULT_REMOTE_TIMEOUT = 10.0

ANALYSIS_SYSTEM_PROMPT = """You are an AI assistant that analyzes user feedback.
Analyze the feedback and return a JSON object with:
- summary: Brief summary of the feedback (max 100 chars)
- keywords: Array of 3-5 relevant keywords
- suggestedActions: Array of 2-3 actionable suggestions
- confidenceScore: Number between 0-1 indicating analysis confidence
- sentiment: "positive", "neutral", or "negative"

Return only valid JSON, no additional text."""

INSIGHTS_SYSTEM_PROMPT = """Analyze this collection of user feedback and provide insights.
Return a JSON object with:
- summary: Overall summary of feedback themes
- trends: Array of 3-5 key trends identified
- recommendations: Array of 3-5 actionable recommendations
- totalAnalyzed: Number of feedback items analyzed

Return only valid JSON, no additional text."""

CAPABILITIES = [
    "Feedback summarization",
    "Keyword extraction",
    "Sentiment analysis",
    "Trend identification",
    "Action recommendations",
]


class LocalClassifier:
    """Deterministic keyword-matching classifier.

    Every result is a pure function of its input, so the same message
    always yields the same analysis.
    """

    name = "Local keyword classifier"

    def classify(self, message: str) -> AnalysisResult:
        """Classify a message without any external calls.

        Args:
            message: Feedback message text (may be empty)

        Returns:
            Analysis with a fixed confidence of 0.6
        """
        message = message or ""
        words = message.lower().split()

        keywords = [
            word for word in words if len(word) > 3 and word not in STOPWORDS
        ][:MAX_KEYWORDS]

        positive = sum(1 for word in words if word in POSITIVE_WORDS)
        negative = sum(1 for word in words if word in NEGATIVE_WORDS)
        if positive > negative:
            sentiment = Sentiment.POSITIVE
        elif negative > positive:
            sentiment = Sentiment.NEGATIVE
        else:
            sentiment = Sentiment.NEUTRAL

        if len(message) > SUMMARY_LIMIT:
            summary = message[:SUMMARY_LIMIT - 3] + "..."
        else:
            summary = message

        if any(keyword in TECHNICAL_KEYWORDS for keyword in keywords):
            actions = TECHNICAL_ACTIONS
        elif any(keyword in FEATURE_KEYWORDS for keyword in keywords):
            actions = FEATURE_ACTIONS
        else:
            actions = GENERAL_ACTIONS

        return AnalysisResult(
            summary=summary,
            keywords=keywords,
            suggested_actions=list(actions),
            confidence_score=LOCAL_CONFIDENCE,
            sentiment=sentiment,
        )

    def summarize(self, items: Sequence[FeedbackItem]) -> Insights:
        """Build trend and recommendation sentences by simple counting.

        Args:
            items: Feedback items, most recent first

        Returns:
            Insights over the given items
        """
        total = len(items)
        category_counts: Dict[str, int] = {}
        sentiment_counts = {sentiment.value: 0 for sentiment in Sentiment}
        keyword_counts: Counter = Counter()

        for item in items:
            category_counts[item.category] = category_counts.get(item.category, 0) + 1
            sentiment_counts[item.sentiment] = sentiment_counts.get(item.sentiment, 0) + 1
            if item.ai_analysis:
                keyword_counts.update(item.ai_analysis.keywords)

        # Left fold seeded with "general"; ties go to the later category
        top_category = FeedbackCategory.GENERAL.value
        for category, count in category_counts.items():
            if not category_counts.get(top_category, 0) > count:
                top_category = category

        # Counter.most_common keeps first-seen order among equal counts
        top_keywords = [keyword for keyword, _ in keyword_counts.most_common(MAX_KEYWORDS)]

        if total:
            share = math.floor(category_counts.get(top_category, 0) / total * 100 + 0.5)
        else:
            share = 0

        positive = sentiment_counts[Sentiment.POSITIVE.value]
        negative = sentiment_counts[Sentiment.NEGATIVE.value]

        trends = [
            f"{top_category} feedback represents {share}% of submissions",
            f"{positive} positive vs {negative} negative responses",
            f"Common themes: {', '.join(top_keywords)}" if top_keywords else "Diverse feedback topics",
        ]

        recommendations = [
            "Prioritize bug fixes to improve user experience"
            if category_counts.get(FeedbackCategory.BUG.value, 0) > 0
            else "Continue monitoring for technical issues",
            "Evaluate popular feature requests for roadmap inclusion"
            if category_counts.get(FeedbackCategory.FEATURE.value, 0) > 0
            else "Gather more feature feedback",
            "Focus on addressing user pain points"
            if negative > positive
            else "Maintain current positive user experience",
        ]

        return Insights(
            summary=(
                f"Analyzed {total} feedback submissions. Primary focus areas: "
                f"{top_category} improvements and user experience enhancement."
            ),
            trends=trends,
            recommendations=recommendations,
            total_analyzed=total,
        )


class RemoteClassifier:
    """Classifier backed by a hosted language model."""

    name = "OpenAI structured analysis"

    def __init__(
        self,
        llm_provider: LLMProvider,
        model: Optional[str] = None,
        timeout: float = DEFAULT_REMOTE_TIMEOUT,
    ):
        """Initialize the remote classifier.

        Args:
            llm_provider: Provider for language model interactions
            model: Optional model override
            timeout: Upper bound in seconds for a single remote call
        """
        self.llm_provider = llm_provider
        self.model = model
        self.timeout = timeout

    async def classify(self, message: str) -> AnalysisResult:
        """Classify a message with the remote model.

        Raises:
            ClassifierError: On timeout, transport failure or malformed output
        """
        result = await self._call(
            prompt=f'Analyze this feedback: "{message}"',
            system_prompt=ANALYSIS_SYSTEM_PROMPT,
            model_class=AnalysisResult,
        )
        return result.model_copy(
            update={
                "keywords": result.keywords[:MAX_KEYWORDS],
                "suggested_actions": result.suggested_actions[:MAX_SUGGESTED_ACTIONS],
            }
        )

    async def summarize(self, items: Sequence[FeedbackItem]) -> Insights:
        """Summarize feedback items with the remote model.

        Raises:
            ClassifierError: On timeout, transport failure or malformed output
        """
        feedback_text = "\n".join(f"{item.category}: {item.message}" for item in items)
        return await self._call(
            prompt=f"Analyze this feedback collection:\n{feedback_text}",
            system_prompt=INSIGHTS_SYSTEM_PROMPT,
            model_class=Insights,
        )

    async def _call(self, prompt: str, system_prompt: str, model_class):
        try:
            return await asyncio.wait_for(
                self.llm_provider.parse_structured_output(
                    prompt=prompt,
                    system_prompt=system_prompt,
                    model_class=model_class,
                    model=self.model,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise ClassifierError(
                f"Remote analysis timed out after {self.timeout} seconds") from e
        except Exception as e:
            raise ClassifierError(f"Remote analysis failed: {e}") from e


class AnalysisService(AnalysisServiceInterface):
    """Runs the configured classifier with a local fallback."""

    def __init__(
        self,
        strategy: ClassifierStrategy,
        local_classifier: Optional[LocalClassifier] = None,
        remote_classifier: Optional[RemoteClassifier] = None,
    ):
        """Initialize the analysis service.

        Args:
            strategy: Classifier strategy resolved at startup
            local_classifier: Deterministic fallback classifier
            remote_classifier: Remote classifier, required for the remote strategy
        """
        strategy = ClassifierStrategy(strategy)
        if strategy == ClassifierStrategy.REMOTE and remote_classifier is None:
            raise ValueError("Remote strategy requires a remote classifier.")

        self._strategy = strategy
        self.local_classifier = local_classifier or LocalClassifier()
        self.remote_classifier = remote_classifier

    @property
    def strategy(self) -> ClassifierStrategy:
        return self._strategy

    @property
    def ai_enabled(self) -> bool:
        return self._strategy == ClassifierStrategy.REMOTE

    async def classify(self, message: str) -> AnalysisResult:
        if self.ai_enabled:
            try:
                return await self.remote_classifier.classify(message)
            except ClassifierError as e:
                logger.warning(f"Remote analysis failed, using local classifier: {e}")
        return self.local_classifier.classify(message)

    async def summarize(self, items: Sequence[FeedbackItem]) -> Insights:
        if self.ai_enabled:
            try:
                return await self.remote_classifier.summarize(items)
            except ClassifierError as e:
                logger.warning(f"Remote insights failed, using local summary: {e}")
        return self.local_classifier.summarize(items)

    def describe(self) -> InsightsStatus:
        classifier = self.remote_classifier if self.ai_enabled else self.local_classifier
        return InsightsStatus(
            ai_enabled=self.ai_enabled,
            service=classifier.name,
            capabilities=list(CAPABILITIES),
        )
