"""
Shared base for domain models.

Fields are stored under their snake_case names and serialized to API
clients under camelCase aliases.
"""
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Base model with camelCase aliases and plain enum values."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )
