"""
MongoDB implementation of the feedback repository.

This repository stores feedback items keyed by their ID and applies
every mutation as a single atomic document update.
"""
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from feedback_hub.domains import AIAnalysis, FeedbackItem, FeedbackResponse
from feedback_hub.domains.base import utcnow
from feedback_hub.interfaces.providers import DataStorageProvider
from feedback_hub.interfaces.repositories import FeedbackRepository

logger = logging.getLogger(__name__)


class MongoFeedbackRepository(FeedbackRepository):
    """MongoDB implementation of FeedbackRepository."""

    def __init__(self, db_adapter: DataStorageProvider):
        """Initialize the feedback repository.

        Args:
            db_adapter: MongoDB adapter
        """
        self.db = db_adapter
        self.collection = "feedback"

        # Ensure collection exists
        self.db.create_collection(self.collection)

        # Create indexes
        self.db.create_index(self.collection, [("author_id", 1), ("created_at", -1)])
        self.db.create_index(self.collection, [("category", 1), ("status", 1)])
        self.db.create_index(self.collection, [("created_at", -1)])
        self.db.create_index(self.collection, [("ai_analysis.keywords", 1)])
        self.db.create_index(self.collection, [("sentiment", 1)])

    def create(self, item: FeedbackItem) -> str:
        """Store a new feedback item.

        Args:
            item: Feedback item to store

        Returns:
            Feedback ID
        """
        doc = item.model_dump()
        doc["_id"] = item.id
        return self.db.insert_one(self.collection, doc)

    def get_by_id(self, feedback_id: str) -> Optional[FeedbackItem]:
        doc = self.db.find_one(self.collection, {"_id": feedback_id})
        return self._to_item(doc)

    def find(
        self,
        query: Dict,
        sort: Optional[List[Tuple[str, int]]] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[FeedbackItem]:
        """Find feedback items matching query.

        Args:
            query: MongoDB filter on stored field names
            sort: Optional list of (field, direction) pairs
            skip: Number of items to skip
            limit: Maximum number of items (0 for no limit)

        Returns:
            Matching feedback items
        """
        docs = self.db.find(self.collection, query, sort=sort, limit=limit, skip=skip)

        items = []
        for doc in docs:
            item = self._to_item(doc)
            if item is not None:
                items.append(item)
        return items

    def count(self, query: Dict) -> int:
        return self.db.count_documents(self.collection, query)

    def set_analysis(
        self, feedback_id: str, analysis: AIAnalysis, sentiment: str
    ) -> Optional[FeedbackItem]:
        """Merge an analysis result and its sentiment into a stored item."""
        doc = self.db.find_one_and_update(
            self.collection,
            {"_id": feedback_id},
            {
                "$set": {
                    "ai_analysis": analysis.model_dump(),
                    "sentiment": sentiment,
                    "updated_at": utcnow(),
                }
            },
        )
        return self._to_item(doc)

    def update_status(
        self, feedback_id: str, status: str, responses: Sequence[FeedbackResponse] = ()
    ) -> Optional[FeedbackItem]:
        """Set the status and append response entries.

        Args:
            feedback_id: Feedback ID
            status: New status value
            responses: Entries appended to the response thread, in order

        Returns:
            The updated item, or None if it no longer exists
        """
        update: Dict = {"$set": {"status": status, "updated_at": utcnow()}}
        if responses:
            update["$push"] = {
                "responses": {"$each": [response.model_dump() for response in responses]}
            }

        doc = self.db.find_one_and_update(self.collection, {"_id": feedback_id}, update)
        return self._to_item(doc)

    def delete(self, feedback_id: str) -> bool:
        return self.db.delete_one(self.collection, {"_id": feedback_id})

    def _to_item(self, doc: Optional[Dict]) -> Optional[FeedbackItem]:
        if not doc:
            return None
        doc = dict(doc)
        doc["id"] = doc.pop("_id", doc.get("id"))
        try:
            return FeedbackItem.model_validate(doc)
        except ValueError as e:
            logger.error(f"Error parsing feedback {doc.get('id')}: {e}")
            return None
