"""
Analysis domain models.

These models define the classifier strategy and the structured results
produced by the per-item classifier and the batch insight summarizer.
"""
from enum import Enum
from typing import List

from pydantic import ConfigDict, Field, field_validator

from feedback_hub.domains.base import DomainModel
from feedback_hub.domains.feedback import AIAnalysis, Sentiment


class ClassifierStrategy(str, Enum):
    """Which classifier serves analysis requests for the life of the process."""
    REMOTE = "remote"
    LOCAL = "local"


class AnalysisResult(DomainModel):
    """Structured judgment about a single feedback message."""

    model_config = ConfigDict(extra="forbid")

    summary: str = Field(..., description="Brief summary of the feedback (max 100 chars)")
    keywords: List[str] = Field(..., description="3-5 relevant keywords")
    suggested_actions: List[str] = Field(..., description="2-3 actionable suggestions")
    confidence_score: float = Field(..., description="Analysis confidence between 0 and 1")
    sentiment: Sentiment = Field(..., description="positive, neutral or negative")

    @field_validator("confidence_score")
    @classmethod
    def check_confidence(cls, value: float) -> float:
        if not 0.0 <= value <= 1.0:
            raise ValueError("confidence score must be between 0 and 1")
        return value

    def to_analysis(self) -> AIAnalysis:
        """Project onto the analysis payload stored with a feedback item."""
        return AIAnalysis(
            summary=self.summary,
            keywords=list(self.keywords),
            suggested_actions=list(self.suggested_actions),
            confidence_score=self.confidence_score,
        )


class Insights(DomainModel):
    """Narrative summary over a window of recent feedback."""

    model_config = ConfigDict(extra="forbid")

    summary: str = Field(..., description="Overall summary of feedback themes")
    trends: List[str] = Field(..., description="Key trends identified")
    recommendations: List[str] = Field(..., description="Actionable recommendations")
    total_analyzed: int = Field(..., description="Number of feedback items analyzed")


class InsightsStatus(DomainModel):
    """Description of the active classifier."""
    ai_enabled: bool
    service: str
    capabilities: List[str] = Field(default_factory=list)
