"""
Pytest configuration and shared fixtures.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app

DISCORD_API = "https://discord.test/api"
DISCORD_CDN = "https://cdn.discord.test"
WEBHOOK_OK = "https://discord.test/api/webhooks/1/ok"
WEBHOOK_FAILING = "https://discord.test/api/webhooks/1/failing"
WEBHOOK_UNREACHABLE = "https://unreachable.test/webhook"

DISCORD_USER = {
    "id": "80351110224678912",
    "username": "captain",
    "discriminator": "1337",
    "avatar": "8342729096ea3675442027381ff50dfe",
    "email": "captain@example.com",
}


class FakeDiscord:
    """
    httpx.MockTransport handler standing in for Discord.

    Records every request so tests can assert what went out.
    """

    def __init__(self):
        self.requests = []
        self.user = dict(DISCORD_USER)
        self.token_status = 200
        self.token_body = {"access_token": "test_access_token", "token_type": "Bearer"}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url == f"{DISCORD_API}/oauth2/token":
            return httpx.Response(self.token_status, json=self.token_body)
        if url == f"{DISCORD_API}/users/@me":
            return httpx.Response(200, json=self.user)
        if url == WEBHOOK_OK:
            return httpx.Response(204)
        if url == WEBHOOK_FAILING:
            return httpx.Response(500, json={"message": "boom"})
        if url == WEBHOOK_UNREACHABLE:
            raise httpx.ConnectError("Connection refused", request=request)
        return httpx.Response(404, json={"message": "Unknown route"})

    def sent_to(self, url: str) -> list:
        return [r for r in self.requests if str(r.url) == url]

    def json_sent_to(self, url: str) -> list:
        return [json.loads(r.content) for r in self.sent_to(url)]


@pytest.fixture
def test_settings(monkeypatch):
    """Settings pointed at the fake Discord endpoints"""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("DISCORD_CLIENT_ID", "client-id")
    monkeypatch.setenv("DISCORD_CLIENT_SECRET", "client-secret")
    monkeypatch.setenv("FRONTEND_URL", "https://careers.example.com/emirates/careers")
    monkeypatch.setenv("DISCORD_API_BASE_URL", DISCORD_API)
    monkeypatch.setenv("DISCORD_CDN_BASE_URL", DISCORD_CDN)
    monkeypatch.delenv("DISCORD_REDIRECT_URI", raising=False)
    return Settings()


@pytest.fixture
def fake_discord():
    return FakeDiscord()


@pytest.fixture
def client(test_settings, fake_discord):
    """TestClient with lifespan running (components live on app.state)"""
    app = create_app(test_settings, http_transport=httpx.MockTransport(fake_discord))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def application_payload():
    return {
        "id": "APP-1001",
        "userId": "80351110224678912",
        "fullName": "Jane Pilot",
        "position": "First Officer",
        "email": "jane@example.com",
        "licenseNumber": "ATPL-12345",
        "experience": 3500,
        "motivation": "I want to fly the A380.",
        "experienceDetail": "B777 type rating, 3500 hours.",
        "userAvatar": "https://cdn.discordapp.com/avatars/1/abc.png",
    }
