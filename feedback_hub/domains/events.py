"""
Push channel event names.
"""
from enum import Enum


class FeedbackEvent(str, Enum):
    """Server-to-client lifecycle events."""
    CREATED = "feedback:new"
    UPDATED = "feedback:updated"
    DELETED = "feedback:deleted"


# Client-to-server request to join the caller's per-user room
JOIN_DASHBOARD = "join-dashboard"


def user_room(user_id: str) -> str:
    return f"user-{user_id}"
