"""
Careers API - Application Endpoints

Submission, listing and review of job applications. Storage is in-memory,
see app/repositories/application_repository.py.
"""
from fastapi import APIRouter, Depends
from typing import Optional
import logging

from app.api.dependencies import get_application_service
from app.application.application_service import ApplicationService
from app.core.exceptions import InternalError, RelayError
from app.models.application import ApplicationRecord, StatusUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/applications")
async def list_applications(
    service: ApplicationService = Depends(get_application_service)
):
    """List every stored application"""
    try:
        applications = await service.list_all()
    except Exception as e:
        logger.error(f"Error fetching applications: {e}", exc_info=True)
        raise InternalError("Failed to fetch applications")

    return {"applications": [record.to_dict() for record in applications]}


@router.get("/applications/{user_id}")
async def list_user_applications(
    user_id: str,
    service: ApplicationService = Depends(get_application_service)
):
    """List the applications submitted by one Discord user (empty list if none)"""
    try:
        applications = await service.list_for_user(user_id)
    except Exception as e:
        logger.error(f"Error fetching user applications: {e}", exc_info=True)
        raise InternalError("Failed to fetch applications")

    return {"applications": [record.to_dict() for record in applications]}


@router.post("/applications")
async def submit_application(
    application: ApplicationRecord,
    service: ApplicationService = Depends(get_application_service)
):
    """
    Submit (or resubmit) an application.

    A second submission with the same id replaces the first. If webhookUrl
    is present a Discord notification is sent in the background; its
    outcome never changes this response.
    """
    try:
        stored = await service.submit(application)
    except RelayError:
        raise
    except Exception as e:
        logger.error(f"Error saving application: {e}", exc_info=True)
        raise InternalError("Failed to save application")

    return {"success": True, "application": stored.to_dict()}


@router.patch("/applications/{application_id}")
async def update_application_status(
    application_id: str,
    patch: Optional[StatusUpdate] = None,
    service: ApplicationService = Depends(get_application_service)
):
    """
    Record a review decision.

    Only status, reviewedAt (set to now) and reviewedBy change. An empty
    body clears status and reviewedBy.
    """
    try:
        updated = await service.update_status(application_id, patch or StatusUpdate())
    except RelayError:
        raise
    except Exception as e:
        logger.error(f"Error updating application: {e}", exc_info=True)
        raise InternalError("Failed to update application")

    return {"success": True, "application": updated.to_dict()}
