"""
Services package for outbound integrations.
"""
from app.services.webhook_notifier import WebhookNotifier

__all__ = ['WebhookNotifier']
