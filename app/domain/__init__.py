"""
Domain layer - Business objects.

No dependencies on infrastructure or frameworks.
"""
from app.domain.entities import UserProfile

__all__ = ["UserProfile"]
