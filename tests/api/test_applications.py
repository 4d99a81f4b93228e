"""
Tests for the application endpoints.

Covers submission, owner filtering, status updates and the guarantee that
webhook failures never change the submission response.
"""
import httpx
from fastapi.testclient import TestClient

from app.main import create_app
from tests.conftest import WEBHOOK_FAILING, WEBHOOK_OK, WEBHOOK_UNREACHABLE


class TestSubmitApplication:

    def test_submit_stores_record(self, client, application_payload):
        response = client.post("/api/applications", json=application_payload)

        assert response.status_code == 200
        assert response.json() == {"success": True, "application": application_payload}

        listed = client.get("/api/applications").json()["applications"]
        assert listed == [application_payload]

    def test_submit_without_id_returns_400(self, client, application_payload):
        del application_payload["id"]

        response = client.post("/api/applications", json=application_payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Application ID is required"}
        assert client.get("/api/applications").json() == {"applications": []}

    def test_resubmit_same_id_replaces(self, client, application_payload):
        client.post("/api/applications", json=application_payload)
        second = {"id": application_payload["id"], "userId": "someone-else", "position": "Captain"}

        client.post("/api/applications", json=second)

        assert client.get("/api/applications").json() == {"applications": [second]}

    def test_unknown_fields_round_trip(self, client, application_payload):
        application_payload["submittedAt"] = "2025-11-08T10:30:00.000Z"

        response = client.post("/api/applications", json=application_payload)

        assert response.json()["application"]["submittedAt"] == "2025-11-08T10:30:00.000Z"

    def test_null_fields_round_trip(self, client):
        payload = {"id": "APP-2002", "userId": "u", "userAvatar": None, "note": None}

        response = client.post("/api/applications", json=payload)

        assert response.json()["application"] == payload
        assert client.get("/api/applications").json() == {"applications": [payload]}

    def test_non_string_values_kept_as_sent(self, client):
        payload = {"id": "APP-3003", "fullName": 42, "motivation": True, "position": ["Captain"]}

        response = client.post("/api/applications", json=payload)

        assert response.status_code == 200
        assert response.json()["application"] == payload
        assert client.get("/api/applications").json() == {"applications": [payload]}

    def test_non_json_body_returns_400(self, client):
        response = client.post(
            "/api/applications",
            content="not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "error" in response.json()


class TestSubmissionWebhook:

    def test_webhook_notified_with_application(self, test_settings, fake_discord, application_payload):
        application_payload["webhookUrl"] = WEBHOOK_OK
        app = create_app(test_settings, http_transport=httpx.MockTransport(fake_discord))

        with TestClient(app) as client:
            response = client.post("/api/applications", json=application_payload)
            assert response.status_code == 200

        # Leaving the client runs shutdown, which drains pending notifications
        sent = fake_discord.json_sent_to(WEBHOOK_OK)
        assert len(sent) == 1
        assert sent[0]["embeds"][0]["footer"]["text"] == "Application ID: APP-1001"
        assert sent[0]["components"][0]["components"][0]["custom_id"] == "accept_APP-1001"

    def test_failing_webhook_does_not_affect_response(self, test_settings, fake_discord, application_payload):
        responses = []
        for url in (WEBHOOK_FAILING, WEBHOOK_UNREACHABLE):
            payload = dict(application_payload, webhookUrl=url)
            app = create_app(test_settings, http_transport=httpx.MockTransport(fake_discord))
            with TestClient(app) as client:
                responses.append(client.post("/api/applications", json=payload))

        for response in responses:
            assert response.status_code == 200
            assert response.json()["success"] is True
        assert len(fake_discord.sent_to(WEBHOOK_FAILING)) == 1
        assert len(fake_discord.sent_to(WEBHOOK_UNREACHABLE)) == 1

    def test_no_webhook_url_sends_nothing(self, test_settings, fake_discord, application_payload):
        app = create_app(test_settings, http_transport=httpx.MockTransport(fake_discord))

        with TestClient(app) as client:
            client.post("/api/applications", json=application_payload)

        assert fake_discord.requests == []


class TestListApplications:

    def test_filter_by_owner(self, client, application_payload):
        client.post("/api/applications", json=dict(application_payload, id="APP-1", userId="alice"))
        client.post("/api/applications", json=dict(application_payload, id="APP-2", userId="bob"))
        client.post("/api/applications", json=dict(application_payload, id="APP-3", userId="alice"))

        alice = client.get("/api/applications/alice").json()["applications"]
        assert [a["id"] for a in alice] == ["APP-1", "APP-3"]

    def test_unknown_owner_returns_empty_list(self, client):
        response = client.get("/api/applications/nobody")

        assert response.status_code == 200
        assert response.json() == {"applications": []}


class TestUpdateStatus:

    def test_update_sets_review_fields_only(self, client, application_payload):
        client.post("/api/applications", json=application_payload)

        response = client.patch(
            "/api/applications/APP-1001",
            json={"status": "accepted", "reviewedBy": "chief-pilot"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        application = body["application"]
        assert application.pop("status") == "accepted"
        assert application.pop("reviewedBy") == "chief-pilot"
        assert application.pop("reviewedAt")
        assert application == application_payload

        stored = client.get("/api/applications").json()["applications"][0]
        assert stored["status"] == "accepted"

    def test_update_unknown_id_returns_404(self, client, application_payload):
        client.post("/api/applications", json=application_payload)

        response = client.patch("/api/applications/APP-404", json={"status": "denied", "reviewedBy": "ops"})

        assert response.status_code == 404
        assert response.json() == {"error": "Application not found"}
        assert client.get("/api/applications").json() == {"applications": [application_payload]}

    def test_update_without_body_unknown_id_returns_404(self, client):
        response = client.patch("/api/applications/APP-404")

        assert response.status_code == 404
        assert response.json() == {"error": "Application not found"}

    def test_update_without_body_sets_review_time(self, client, application_payload):
        client.post("/api/applications", json=application_payload)

        response = client.patch("/api/applications/APP-1001")

        assert response.status_code == 200
        application = response.json()["application"]
        assert application["status"] is None
        assert application["reviewedBy"] is None
        assert application["reviewedAt"]
