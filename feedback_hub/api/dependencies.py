"""
FastAPI dependencies shared by the routers.
"""
from typing import Optional

from fastapi import Depends, Header, Request

from feedback_hub.client.feedback_hub import FeedbackHub
from feedback_hub.domains import Caller, FeedbackMetadata
from feedback_hub.errors import AuthenticationError


def get_hub(request: Request) -> FeedbackHub:
    return request.app.state.hub


def get_caller(
    authorization: Optional[str] = Header(None),
    hub: FeedbackHub = Depends(get_hub),
) -> Caller:
    """Resolve the ``Authorization: Bearer <token>`` header to a caller."""
    if not authorization:
        raise AuthenticationError("Access token required")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Access token required")

    return hub.user_service.authenticate(token.strip()).as_caller()


def get_request_metadata(request: Request) -> FeedbackMetadata:
    return FeedbackMetadata(
        user_agent=request.headers.get("user-agent"),
        ip_address=request.client.host if request.client else None,
    )
