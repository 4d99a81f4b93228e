"""
Application layer - Use cases and business logic orchestration.

No direct dependencies on frameworks (FastAPI, etc.)
"""
from app.application.application_service import ApplicationService

__all__ = ["ApplicationService"]
