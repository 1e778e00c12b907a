"""
MongoDB implementation of the user repository.
"""
import logging
from typing import Dict, Iterable, Optional

from feedback_hub.domains import AuthorIdentity, User
from feedback_hub.domains.base import utcnow
from feedback_hub.interfaces.providers import DataStorageProvider
from feedback_hub.interfaces.repositories import UserRepository

logger = logging.getLogger(__name__)


class MongoUserRepository(UserRepository):
    """MongoDB implementation of the UserRepository interface."""

    def __init__(self, db_adapter: DataStorageProvider):
        """Initialize the repository with a database adapter.

        Args:
            db_adapter: MongoDB adapter instance
        """
        self.db = db_adapter
        self.collection = "users"

        self.db.create_collection(self.collection)

        self.db.create_index(self.collection, [("email", 1)], unique=True)
        self.db.create_index(self.collection, [("api_token_hash", 1)])

    def create(self, user: User) -> str:
        doc = user.model_dump()
        doc["_id"] = user.id
        return self.db.insert_one(self.collection, doc)

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._to_user(self.db.find_one(self.collection, {"_id": user_id}))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._to_user(
            self.db.find_one(self.collection, {"email": email.strip().lower()})
        )

    def get_by_token_hash(self, token_hash: str) -> Optional[User]:
        return self._to_user(
            self.db.find_one(self.collection, {"api_token_hash": token_hash})
        )

    def get_identities(self, user_ids: Iterable[str]) -> Dict[str, AuthorIdentity]:
        """Resolve user IDs to name/email identities in one query."""
        ids = sorted({user_id for user_id in user_ids if user_id})
        if not ids:
            return {}

        docs = self.db.find(self.collection, {"_id": {"$in": ids}})
        return {
            doc["_id"]: AuthorIdentity(id=doc["_id"], name=doc["name"], email=doc["email"])
            for doc in docs
        }

    def increment_feedback_count(self, user_id: str) -> bool:
        return self.db.update_one(
            self.collection, {"_id": user_id}, {"$inc": {"feedback_count": 1}}
        )

    def touch_last_login(self, user_id: str) -> bool:
        return self.db.update_one(
            self.collection, {"_id": user_id}, {"$set": {"last_login": utcnow()}}
        )

    def _to_user(self, doc: Optional[Dict]) -> Optional[User]:
        if not doc:
            return None
        doc = dict(doc)
        doc["id"] = doc.pop("_id", doc.get("id"))
        return User.model_validate(doc)
