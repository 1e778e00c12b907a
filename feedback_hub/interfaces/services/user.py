from abc import ABC, abstractmethod
from typing import Tuple

from feedback_hub.domains import User


class UserService(ABC):
    """Interface for user registration and bearer-token authentication."""

    @abstractmethod
    def create_user(self, name: str, email: str, role: str = "user") -> Tuple[User, str]:
        """Register a user and return it with its one-time bearer token."""
        pass

    @abstractmethod
    def authenticate(self, token: str) -> User:
        """Resolve a bearer token to an active user."""
        pass
