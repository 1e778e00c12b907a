"""
Error taxonomy for Feedback Hub.

Every error a caller can observe derives from FeedbackHubError and carries
the HTTP status the API layer renders it with.

Usage:
    from feedback_hub.errors import NotFoundError
    raise NotFoundError("Feedback not found", code="FEEDBACK_NOT_FOUND")
"""
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel

# Location prefixes FastAPI adds to request validation errors
_REQUEST_LOCATIONS = ("body", "query", "path", "header")


class FieldError(BaseModel):
    """A single field-level validation failure."""
    field: str
    message: str


class FeedbackHubError(Exception):
    """Base class for structured application errors."""

    http_status = 500
    default_code: Optional[str] = None

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def to_dict(self) -> Dict[str, Any]:
        """Render the error body returned to API clients."""
        body: Dict[str, Any] = {"message": self.message}
        if self.code:
            body["code"] = self.code
        return body


class ValidationError(FeedbackHubError):
    """One or more input fields violated their constraints."""

    http_status = 400
    default_code = "VALIDATION_FAILED"

    def __init__(self, errors: List[FieldError], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = errors

    @property
    def fields(self) -> List[str]:
        """Names of the violated fields, in reporting order."""
        return [error.field for error in self.errors]

    @classmethod
    def from_errors(
        cls,
        errors: Sequence[Mapping[str, Any]],
        messages: Optional[Mapping[str, str]] = None,
    ) -> "ValidationError":
        """Build from pydantic-style error dicts.

        Args:
            errors: Items shaped like ``pydantic.ValidationError.errors()``
            messages: Optional per-field message overrides

        Returns:
            ValidationError listing every violated field once
        """
        messages = messages or {}
        field_errors: List[FieldError] = []
        seen = set()
        for error in errors:
            loc = [str(part) for part in error.get("loc", ())]
            if loc and loc[0] in _REQUEST_LOCATIONS:
                loc = loc[1:]
            field = ".".join(loc) or "body"
            if field in seen:
                continue
            seen.add(field)
            field_errors.append(
                FieldError(field=field, message=messages.get(field, error.get("msg", "Invalid value")))
            )
        return cls(field_errors)

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["errors"] = [error.model_dump() for error in self.errors]
        return body


class AuthenticationError(FeedbackHubError):
    """The caller could not be identified."""

    http_status = 401
    default_code = "AUTH_REQUIRED"


class AccessDeniedError(FeedbackHubError):
    """The caller is identified but may not perform the operation."""

    http_status = 403
    default_code = "ACCESS_DENIED"


class NotFoundError(FeedbackHubError):
    http_status = 404
    default_code = "NOT_FOUND"


class ConflictError(FeedbackHubError):
    http_status = 409
    default_code = "CONFLICT"


class ClassifierError(FeedbackHubError):
    """The remote analysis call failed; always recovered by falling back locally."""

    default_code = "CLASSIFIER_FAILED"
