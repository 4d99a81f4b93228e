"""
Tests for the Emirates Careers OAuth Server

Tests are organized by functionality:
- test_application_repository.py: In-memory store semantics
- test_webhook_notifier.py: Discord webhook payloads and delivery
- test_discord_client.py: OAuth code exchange and avatar URLs
- api/: End-to-end HTTP tests through TestClient
"""
