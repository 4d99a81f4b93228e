"""
Error kinds raised by the relay.

Every error carries the HTTP status it maps to, a short message that is safe
to return to callers, and optional details (e.g. the upstream error
description). app.main turns them into {"error": ..., "details": ...}.
"""
from typing import Any, Optional


class RelayError(Exception):
    """Base exception for relay errors"""
    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_response(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class BadRequestError(RelayError):
    """Raised when a required field is missing or invalid"""
    status_code = 400


class NotFoundError(RelayError):
    """Raised when the referenced application doesn't exist"""
    status_code = 404


class UpstreamAuthError(RelayError):
    """Raised when the Discord token or profile exchange fails"""
    pass


class UpstreamWebhookError(RelayError):
    """
    Raised when a webhook notification cannot be delivered.

    Only the deprecated /api/webhook/application endpoint lets this reach the
    caller; submission-triggered notifications log it and move on.
    """
    pass


class InternalError(RelayError):
    """Raised for unexpected failures during store access"""
    pass
