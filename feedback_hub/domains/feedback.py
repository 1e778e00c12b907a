"""
Feedback domain models.

These models define feedback items, their response thread, the inputs
accepted by the lifecycle operations and the views returned to callers.
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import Field, StringConstraints, field_validator
from typing_extensions import Annotated

from feedback_hub.domains.base import DomainModel, utcnow
from feedback_hub.domains.users import AuthorIdentity


class FeedbackCategory(str, Enum):
    """Closed set of feedback categories."""
    BUG = "bug"
    FEATURE = "feature"
    GENERAL = "general"
    IMPROVEMENT = "improvement"
    COMPLAINT = "complaint"


class FeedbackPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class FeedbackStatus(str, Enum):
    """Lifecycle status; any value may follow any other."""
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


# API sort keys mapped to stored field names
SORT_FIELDS: Dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "title": "title",
    "category": "category",
    "priority": "priority",
    "status": "status",
}

SortKey = Literal["createdAt", "updatedAt", "title", "category", "priority", "status"]


class FeedbackMetadata(DomainModel):
    """Request origin captured when the feedback was submitted."""
    user_agent: Optional[str] = Field(None, description="Submitting client's user agent")
    ip_address: Optional[str] = Field(None, description="Submitting client's address")
    source: str = Field("web", description="Submission channel")


class AIAnalysis(DomainModel):
    """Structured analysis merged into a feedback item."""
    summary: str = Field(..., description="Short summary of the message")
    keywords: List[str] = Field(default_factory=list, description="Extracted keywords")
    suggested_actions: List[str] = Field(
        default_factory=list, description="Actions suggested for the team")
    confidence_score: float = Field(
        ..., description="Confidence of the analysis (0-1)", ge=0.0, le=1.0)


class FeedbackResponse(DomainModel):
    """Entry in a feedback item's append-only response thread."""
    actor_id: str = Field(..., description="ID of the user who wrote the entry")
    message: str = Field(..., description="Entry text")
    timestamp: datetime = Field(
        default_factory=utcnow, description="When the entry was written")


class FeedbackItem(DomainModel):
    """A single feedback submission."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()),
                    description="Unique identifier")
    author_id: str = Field(..., description="ID of the submitting user")
    title: str = Field(..., description="Feedback title")
    message: str = Field(..., description="Feedback message")
    category: FeedbackCategory = Field(..., description="Feedback category")
    priority: FeedbackPriority = Field(
        FeedbackPriority.MEDIUM, description="Feedback priority")
    status: FeedbackStatus = Field(FeedbackStatus.OPEN, description="Lifecycle status")
    sentiment: Sentiment = Field(Sentiment.NEUTRAL, description="Detected sentiment")
    tags: List[str] = Field(default_factory=list, description="Lowercase tags")
    ai_analysis: Optional[AIAnalysis] = Field(
        None, description="Analysis result, once available")
    responses: List[FeedbackResponse] = Field(
        default_factory=list, description="Response thread")
    metadata: FeedbackMetadata = Field(
        default_factory=FeedbackMetadata, description="Request origin")
    is_archived: bool = Field(False, description="Reserved archival flag")
    created_at: datetime = Field(default_factory=utcnow, description="Creation time")
    updated_at: datetime = Field(default_factory=utcnow, description="Last mutation time")


Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=100)]
Message = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10, max_length=1000)]
ResponseText = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]


class FeedbackSubmission(DomainModel):
    """Validated input of the create operation."""
    title: Title
    message: Message
    category: FeedbackCategory
    priority: FeedbackPriority = FeedbackPriority.MEDIUM
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, tags: List[str]) -> List[str]:
        normalized: List[str] = []
        for tag in tags:
            tag = tag.strip().lower()
            if tag and tag not in normalized:
                normalized.append(tag)
        return normalized


SUBMISSION_MESSAGES = {
    "title": "Title must be between 3 and 100 characters",
    "message": "Message must be between 10 and 1000 characters",
    "category": "Category must be one of: bug, feature, general, improvement, complaint",
    "priority": "Priority must be one of: low, medium, high, critical",
}


class StatusChange(DomainModel):
    """Validated input of the admin status update."""
    status: FeedbackStatus
    response: Optional[ResponseText] = None


STATUS_CHANGE_MESSAGES = {
    "status": "Status must be one of: open, in-progress, resolved, closed",
    "response": "Response cannot exceed 500 characters",
}


class FeedbackQuery(DomainModel):
    """Validated filter, sort and pagination parameters of the list operation."""
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    category: Optional[FeedbackCategory] = None
    status: Optional[FeedbackStatus] = None
    priority: Optional[FeedbackPriority] = None
    sentiment: Optional[Sentiment] = None
    sort_by: SortKey = "createdAt"
    sort_order: Literal["asc", "desc"] = "desc"


QUERY_MESSAGES = {
    "page": "Page must be a positive integer",
    "limit": "Limit must be between 1 and 100",
    "category": "Invalid category",
    "status": "Invalid status",
    "priority": "Invalid priority",
    "sentiment": "Invalid sentiment",
    "sortBy": "Invalid sort field",
    "sortOrder": "Sort order must be asc or desc",
}


class ResolvedResponse(FeedbackResponse):
    """Response entry with the actor's identity attached."""
    actor: Optional[AuthorIdentity] = None


class FeedbackView(FeedbackItem):
    """Feedback item joined with author and response actor identities."""
    author: Optional[AuthorIdentity] = None
    responses: List[ResolvedResponse] = Field(default_factory=list)


class Pagination(DomainModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next: bool
    has_prev: bool


class FeedbackPage(DomainModel):
    items: List[FeedbackView] = Field(default_factory=list)
    pagination: Pagination


class FeedbackStats(DomainModel):
    """Counts over every feedback item visible to the caller."""
    total: int = 0
    category_distribution: Dict[str, int] = Field(default_factory=dict)
    status_distribution: Dict[str, int] = Field(default_factory=dict)
    sentiment_distribution: Dict[str, int] = Field(default_factory=dict)
    recent: List[FeedbackView] = Field(default_factory=list)
