"""Core module containing interfaces and error kinds."""

from app.core.interfaces import IApplicationRepository
from app.core.exceptions import (
    RelayError,
    BadRequestError,
    NotFoundError,
    UpstreamAuthError,
    UpstreamWebhookError,
    InternalError,
)

__all__ = [
    "IApplicationRepository",
    "RelayError",
    "BadRequestError",
    "NotFoundError",
    "UpstreamAuthError",
    "UpstreamWebhookError",
    "InternalError",
]
