"""Request/record models package"""
from app.models.application import ApplicationRecord, StatusUpdate

__all__ = [
    "ApplicationRecord",
    "StatusUpdate"
]
