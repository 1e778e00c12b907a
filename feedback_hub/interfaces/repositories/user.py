from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional

from feedback_hub.domains import AuthorIdentity, User


class UserRepository(ABC):
    """Interface for user data access."""

    @abstractmethod
    def create(self, user: User) -> str:
        """Persist a new user and return its ID."""
        pass

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_token_hash(self, token_hash: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_identities(self, user_ids: Iterable[str]) -> Dict[str, AuthorIdentity]:
        """Resolve user IDs to identities; unknown IDs are omitted."""
        pass

    @abstractmethod
    def increment_feedback_count(self, user_id: str) -> bool:
        pass

    @abstractmethod
    def touch_last_login(self, user_id: str) -> bool:
        pass
