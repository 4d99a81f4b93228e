"""
FastAPI dependencies exposing the lifetime-scoped components.

The components are created once in app.main's lifespan and stored on
app.state; handlers receive them through Depends() so tests can swap them
via app.dependency_overrides.
"""
from fastapi import Request

from app.application.application_service import ApplicationService
from app.clients.discord_client import DiscordClient
from app.services.webhook_notifier import WebhookNotifier


def get_application_service(request: Request) -> ApplicationService:
    return request.app.state.application_service


def get_discord_client(request: Request) -> DiscordClient:
    return request.app.state.discord_client


def get_webhook_notifier(request: Request) -> WebhookNotifier:
    return request.app.state.webhook_notifier
