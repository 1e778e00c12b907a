"""
User domain models.

Users are the store of record for identity and roles; the feedback
lifecycle reads only the fields defined here.
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from feedback_hub.domains.base import DomainModel, utcnow


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class Caller(DomainModel):
    """Identity and role of whoever invokes a lifecycle operation."""
    id: str = Field(..., description="Caller's user ID")
    role: UserRole = Field(UserRole.USER, description="Caller's role")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class AuthorIdentity(DomainModel):
    """Minimal user projection joined onto feedback views."""
    id: str
    name: str
    email: str


class User(DomainModel):
    """Registered user."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()),
                    description="Unique identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Unique, lower-cased email address")
    role: UserRole = Field(UserRole.USER, description="User role")
    feedback_count: int = Field(0, description="Number of feedback items submitted", ge=0)
    last_login: Optional[datetime] = Field(None, description="Last successful authentication")
    is_active: bool = Field(True, description="Whether the account may authenticate")
    created_at: datetime = Field(default_factory=utcnow, description="Creation time")
    api_token_hash: Optional[str] = Field(
        None, description="SHA-256 of the bearer token", repr=False)

    def as_caller(self) -> Caller:
        return Caller(id=self.id, role=self.role)

    def identity(self) -> AuthorIdentity:
        return AuthorIdentity(id=self.id, name=self.name, email=self.email)
