"""
Feedback lifecycle service implementation.

This service owns creation, listing, status transitions and deletion of
feedback items, enforces who may perform each of them, and announces
every mutation on the push channel.
"""
import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type, TypeVar

import pydantic

from feedback_hub.domains import (
    Caller,
    FeedbackCategory,
    FeedbackEvent,
    FeedbackItem,
    FeedbackMetadata,
    FeedbackPage,
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
from feedback_hub.domains.feedback import (
    QUERY_MESSAGES,
    SORT_FIELDS,
    STATUS_CHANGE_MESSAGES,
    SUBMISSION_MESSAGES,
)
from feedback_hub.errors import AccessDeniedError, NotFoundError, ValidationError
from feedback_hub.interfaces.providers import EventBroadcaster
from feedback_hub.interfaces.repositories import FeedbackRepository, UserRepository
from feedback_hub.interfaces.services import AnalysisService
from feedback_hub.interfaces.services import FeedbackService as FeedbackServiceInterface

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=pydantic.BaseModel)

RECENT_LIMIT = 5


def _validate(model_class: Type[M], data: Dict[str, Any], messages: Mapping[str, str]) -> M:
    """Validate input, reporting every violated field at once."""
    try:
        return model_class.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError.from_errors(e.errors(), messages) from e


class FeedbackService(FeedbackServiceInterface):
    """Service for managing feedback items and their lifecycle."""

    def __init__(
        self,
        feedback_repository: FeedbackRepository,
        user_repository: UserRepository,
        analysis_service: AnalysisService,
        broadcaster: EventBroadcaster,
    ):
        """Initialize the feedback service.

        Args:
            feedback_repository: Repository for feedback items
            user_repository: Repository for authors and actors
            analysis_service: Classifier used on every new item
            broadcaster: Push channel for lifecycle events
        """
        self.feedback_repository = feedback_repository
        self.user_repository = user_repository
        self.analysis_service = analysis_service
        self.broadcaster = broadcaster

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
        """Create a feedback item.

        Args:
            author_id: ID of the submitting user
            title: Feedback title (3-100 chars after trimming)
            message: Feedback message (10-1000 chars after trimming)
            category: One of bug, feature, general, improvement, complaint
            priority: Optional priority, defaults to medium
            tags: Optional tags, stored lowercased
            metadata: Request origin of the submission

        Returns:
            The stored item joined with its author's identity

        Raises:
            ValidationError: Listing every invalid field
        """
        data: Dict[str, Any] = {
            "title": title,
            "message": message,
            "category": category,
            "tags": tags or [],
        }
        if priority is not None:
            data["priority"] = priority
        submission = _validate(FeedbackSubmission, data, SUBMISSION_MESSAGES)

        item = FeedbackItem(
            author_id=author_id,
            title=submission.title,
            message=submission.message,
            category=submission.category,
            priority=submission.priority,
            tags=submission.tags,
            metadata=metadata or FeedbackMetadata(),
        )
        self.feedback_repository.create(item)
        self.user_repository.increment_feedback_count(author_id)
        logger.info(f"Feedback {item.id} created by {author_id}")

        stored = await self._analyze(item)
        if stored is None:
            stored = self.feedback_repository.get_by_id(item.id) or item

        view = self._views([stored])[0]
        self.broadcaster.emit(
            FeedbackEvent.CREATED.value,
            {
                "id": view.id,
                "title": view.title,
                "category": view.category,
                "priority": view.priority,
                "user": (
                    {"name": view.author.name, "email": view.author.email}
                    if view.author else None
                ),
                "createdAt": view.created_at,
            },
        )
        return view

    async def list_feedback(self, caller: Caller, **params) -> FeedbackPage:
        """List feedback visible to the caller.

        Args:
            caller: Requesting user
            **params: page, limit, category, status, priority, sentiment,
                sort_by and sort_order

        Returns:
            One page of feedback with pagination metadata

        Raises:
            ValidationError: On unknown sort keys, filter values or page bounds
        """
        fields = FeedbackQuery.model_fields
        query_params = _validate(
            FeedbackQuery,
            {
                (fields[key].alias or key) if key in fields else key: value
                for key, value in params.items()
                if value is not None
            },
            QUERY_MESSAGES,
        )

        query: Dict[str, Any] = {}
        for field in ("category", "status", "priority", "sentiment"):
            value = getattr(query_params, field)
            if value is not None:
                query[field] = value
        if not caller.is_admin:
            query["author_id"] = caller.id

        direction = -1 if query_params.sort_order == "desc" else 1
        sort = [(SORT_FIELDS[query_params.sort_by], direction)]
        skip = (query_params.page - 1) * query_params.limit

        items = self.feedback_repository.find(
            query, sort=sort, skip=skip, limit=query_params.limit
        )
        total = self.feedback_repository.count(query)
        total_pages = math.ceil(total / query_params.limit)

        return FeedbackPage(
            items=self._views(items),
            pagination=Pagination(
                current_page=query_params.page,
                total_pages=total_pages,
                total_items=total,
                items_per_page=query_params.limit,
                has_next=query_params.page < total_pages,
                has_prev=query_params.page > 1,
            ),
        )

    async def get_feedback(self, feedback_id: str, caller: Caller) -> FeedbackView:
        item = self._get_authorized(feedback_id, caller)
        return self._views([item])[0]

    async def update_status(
        self,
        feedback_id: str,
        status: str,
        actor: Caller,
        response: Optional[str] = None,
    ) -> FeedbackView:
        """Change the status of a feedback item as an admin.

        A move to any status other than open is noted in the response
        thread, and a non-empty response adds a second entry.

        Args:
            feedback_id: Feedback ID
            status: New status
            actor: Admin performing the change
            response: Optional message to the author

        Returns:
            Updated feedback view
        """
        if not actor.is_admin:
            raise AccessDeniedError("Admin access required")

        change = _validate(
            StatusChange, {"status": status, "response": response}, STATUS_CHANGE_MESSAGES
        )
        if self.feedback_repository.get_by_id(feedback_id) is None:
            raise NotFoundError("Feedback not found", code="FEEDBACK_NOT_FOUND")

        entries: List[FeedbackResponse] = []
        if change.status != FeedbackStatus.OPEN:
            entries.append(
                FeedbackResponse(actor_id=actor.id, message=f"Status updated to: {change.status}")
            )
        if change.response:
            entries.append(FeedbackResponse(actor_id=actor.id, message=change.response))

        updated = self.feedback_repository.update_status(feedback_id, change.status, entries)
        if updated is None:
            raise NotFoundError("Feedback not found", code="FEEDBACK_NOT_FOUND")

        logger.info(f"Feedback {feedback_id} moved to {change.status} by {actor.id}")
        self._emit_updated(updated)
        return self._views([updated])[0]

    async def resolve(self, feedback_id: str, caller: Caller) -> FeedbackView:
        """Mark a feedback item resolved without touching its response thread."""
        self._get_authorized(feedback_id, caller)

        updated = self.feedback_repository.update_status(feedback_id, FeedbackStatus.RESOLVED.value)
        if updated is None:
            raise NotFoundError("Feedback not found", code="FEEDBACK_NOT_FOUND")

        logger.info(f"Feedback {feedback_id} resolved by {caller.id}")
        self._emit_updated(updated)
        return self._views([updated])[0]

    async def delete_feedback(self, feedback_id: str, caller: Caller) -> None:
        self._get_authorized(feedback_id, caller)

        if not self.feedback_repository.delete(feedback_id):
            raise NotFoundError("Feedback not found", code="FEEDBACK_NOT_FOUND")

        logger.info(f"Feedback {feedback_id} deleted by {caller.id}")
        self.broadcaster.emit(FeedbackEvent.DELETED.value, {"id": feedback_id})

    async def stats(self, caller: Caller) -> FeedbackStats:
        """Count feedback per category, status and sentiment.

        Every call rescans all matching items, so the counts are always exact.

        Args:
            caller: Requesting user; non-admins only see their own feedback

        Returns:
            Zero-filled distributions and the five most recent items
        """
        query = {} if caller.is_admin else {"author_id": caller.id}

        categories = {category.value: 0 for category in FeedbackCategory}
        statuses = {status.value: 0 for status in FeedbackStatus}
        sentiments = {sentiment.value: 0 for sentiment in Sentiment}

        items = self.feedback_repository.find(query)
        for item in items:
            categories[item.category] += 1
            statuses[item.status] += 1
            sentiments[item.sentiment] += 1

        recent = self.feedback_repository.find(
            query, sort=[("created_at", -1)], limit=RECENT_LIMIT
        )

        return FeedbackStats(
            total=len(items),
            category_distribution=categories,
            status_distribution=statuses,
            sentiment_distribution=sentiments,
            recent=self._views(recent),
        )

    async def _analyze(self, item: FeedbackItem) -> Optional[FeedbackItem]:
        """Classify a new item and merge the result; never fails creation."""
        try:
            result = await self.analysis_service.classify(item.message)
            return self.feedback_repository.set_analysis(
                item.id, result.to_analysis(), result.sentiment
            )
        except Exception as e:
            logger.exception(f"Analysis of feedback {item.id} failed: {e}")
            return None

    def _get_authorized(self, feedback_id: str, caller: Caller) -> FeedbackItem:
        item = self.feedback_repository.get_by_id(feedback_id)
        if item is None:
            raise NotFoundError("Feedback not found", code="FEEDBACK_NOT_FOUND")
        if not caller.is_admin and item.author_id != caller.id:
            raise AccessDeniedError("Access denied")
        return item

    def _emit_updated(self, item: FeedbackItem) -> None:
        self.broadcaster.emit(
            FeedbackEvent.UPDATED.value,
            {"id": item.id, "status": item.status, "updatedAt": item.updated_at},
        )

    def _views(self, items: Iterable[FeedbackItem]) -> List[FeedbackView]:
        """Join items with author and response actor identities."""
        items = list(items)
        user_ids = set()
        for item in items:
            user_ids.add(item.author_id)
            user_ids.update(response.actor_id for response in item.responses)
        identities = self.user_repository.get_identities(user_ids)

        views = []
        for item in items:
            data = item.model_dump()
            data["responses"] = [
                ResolvedResponse(**response.model_dump(), actor=identities.get(response.actor_id))
                for response in item.responses
            ]
            data["author"] = identities.get(item.author_id)
            views.append(FeedbackView(**data))
        return views
