"""
User service implementation.

This service registers users and resolves bearer tokens to users. Only
the SHA-256 hash of a token is ever stored.
"""
import hashlib
import logging
import re
import secrets
from typing import Tuple

from feedback_hub.domains import User, UserRole
from feedback_hub.errors import (
    AuthenticationError,
    ConflictError,
    FieldError,
    ValidationError,
)
from feedback_hub.interfaces.repositories import UserRepository
from feedback_hub.interfaces.services import UserService as UserServiceInterface

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class UserService(UserServiceInterface):
    """Service for user registration and authentication."""

    def __init__(self, user_repository: UserRepository):
        """Initialize the user service.

        Args:
            user_repository: Repository for users
        """
        self.user_repository = user_repository

    def create_user(self, name: str, email: str, role: str = UserRole.USER.value) -> Tuple[User, str]:
        """Register a user.

        Args:
            name: Display name (2-50 chars)
            email: Email address, unique across users
            role: user or admin

        Returns:
            The stored user and its bearer token, which is not recoverable later

        Raises:
            ValidationError: On an invalid name, email or role
            ConflictError: If the email is already registered
        """
        name = (name or "").strip()
        email = (email or "").strip().lower()

        errors = []
        if not 2 <= len(name) <= 50:
            errors.append(FieldError(field="name", message="Name must be between 2 and 50 characters"))
        if not EMAIL_PATTERN.match(email):
            errors.append(FieldError(field="email", message="Please provide a valid email"))
        if role not in {r.value for r in UserRole}:
            errors.append(FieldError(field="role", message="Role must be one of: user, admin"))
        if errors:
            raise ValidationError(errors)

        if self.user_repository.get_by_email(email):
            raise ConflictError("User already exists with this email", code="USER_EXISTS")

        token = secrets.token_urlsafe(32)
        user = User(name=name, email=email, role=role, api_token_hash=hash_token(token))
        self.user_repository.create(user)
        logger.info(f"Registered {role} {user.id}")
        return user, token

    def authenticate(self, token: str) -> User:
        """Resolve a bearer token to an active user.

        Raises:
            AuthenticationError: If the token is missing, unknown or belongs
                to an inactive user
        """
        if not token:
            raise AuthenticationError("Access token required")

        user = self.user_repository.get_by_token_hash(hash_token(token))
        if user is None or not user.is_active:
            raise AuthenticationError("Invalid or expired token", code="INVALID_TOKEN")

        self.user_repository.touch_last_login(user.id)
        return user
