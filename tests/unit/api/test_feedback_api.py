"""
HTTP tests for the feedback, insights and health routes.
"""
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from feedback_hub.adapters.broadcast_adapter import WebSocketBroadcaster
from feedback_hub.api import create_app
from feedback_hub.client.feedback_hub import FeedbackHub
from feedback_hub.services.analysis import AnalysisService
from feedback_hub.services.feedback import FeedbackService
from feedback_hub.services.insights import InsightsService
from feedback_hub.services.user import UserService


@pytest.fixture
def hub(feedback_repository, user_repository):
    analysis = AnalysisService(strategy="local")
    broadcaster = WebSocketBroadcaster()
    return FeedbackHub(
        feedback_service=FeedbackService(
            feedback_repository, user_repository, analysis, broadcaster),
        insights_service=InsightsService(feedback_repository, analysis),
        user_service=UserService(user_repository),
        broadcaster=broadcaster,
        environment="development",
    )


@pytest.fixture
def client(hub):
    return TestClient(create_app(hub), raise_server_exceptions=False)


@pytest.fixture
def tokens(hub):
    _, alice = hub.user_service.create_user("Alice", "alice@example.com")
    _, bob = hub.user_service.create_user("Bob", "bob@example.com")
    _, admin = hub.user_service.create_user("Ada Admin", "admin@example.com", role="admin")
    return {"alice": alice, "bob": bob, "admin": admin}


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def submit(client, token, **overrides):
    body = {
        "title": "Login broken",
        "message": "Login page is broken on mobile, please fix",
        "category": "bug",
    }
    body.update(overrides)
    return client.post("/api/feedback", json=body, headers=auth(token))


class TestHealth:
    def test_plain_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.text == "healthy"

    def test_api_health(self, client):
        body = client.get("/api/health").json()

        assert body["status"] == "OK"
        assert "timestamp" in body
        assert body["uptime"] >= 0


class TestAuthentication:
    def test_missing_token(self, client):
        response = client.get("/api/feedback")

        assert response.status_code == 401
        assert response.json() == {"message": "Access token required", "code": "AUTH_REQUIRED"}

    def test_invalid_token(self, client):
        response = client.get("/api/feedback", headers=auth("nope"))

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    def test_wrong_scheme(self, client, tokens):
        response = client.get(
            "/api/feedback", headers={"Authorization": f"Basic {tokens['alice']}"})

        assert response.status_code == 401


class TestFeedbackRoutes:
    def test_create(self, client, tokens):
        response = submit(client, tokens["alice"], tags=["Mobile"])

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Feedback submitted successfully"
        feedback = body["feedback"]
        assert feedback["title"] == "Login broken"
        assert feedback["status"] == "open"
        assert feedback["sentiment"] == "negative"
        assert feedback["tags"] == ["mobile"]
        assert feedback["author"]["email"] == "alice@example.com"
        assert feedback["aiAnalysis"]["confidenceScore"] == 0.6
        assert feedback["metadata"]["userAgent"] == "testclient"
        assert "createdAt" in feedback

    def test_create_invalid(self, client, tokens):
        response = submit(client, tokens["alice"], title="ab", category="praise")

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_FAILED"
        assert {error["field"] for error in body["errors"]} == {"title", "category"}

    def test_create_requires_object_body(self, client, tokens):
        response = client.post("/api/feedback", json=["not", "an", "object"],
                               headers=auth(tokens["alice"]))

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_FAILED"

    def test_list_scoped_and_sorted(self, client, tokens):
        for title in ["Charlie", "Alpha", "Bravo"]:
            submit(client, tokens["alice"], title=title)
        submit(client, tokens["bob"], title="From Bob")

        response = client.get(
            "/api/feedback",
            params={"sortBy": "title", "sortOrder": "asc", "limit": 2},
            headers=auth(tokens["alice"]),
        )

        assert response.status_code == 200
        body = response.json()
        assert [item["title"] for item in body["feedback"]] == ["Alpha", "Bravo"]
        assert body["pagination"] == {
            "currentPage": 1,
            "totalPages": 2,
            "totalItems": 3,
            "itemsPerPage": 2,
            "hasNext": True,
            "hasPrev": False,
        }

    def test_list_invalid_query(self, client, tokens):
        response = client.get(
            "/api/feedback", params={"page": 0}, headers=auth(tokens["alice"]))

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "page", "message": "Page must be a positive integer"}]

    def test_get_access(self, client, tokens):
        feedback_id = submit(client, tokens["alice"]).json()["feedback"]["id"]

        own = client.get(f"/api/feedback/{feedback_id}", headers=auth(tokens["alice"]))
        foreign = client.get(f"/api/feedback/{feedback_id}", headers=auth(tokens["bob"]))
        missing = client.get("/api/feedback/missing", headers=auth(tokens["alice"]))

        assert own.status_code == 200
        assert own.json()["feedback"]["id"] == feedback_id
        assert foreign.status_code == 403
        assert foreign.json()["code"] == "ACCESS_DENIED"
        assert missing.status_code == 404
        assert missing.json()["code"] == "FEEDBACK_NOT_FOUND"

    def test_update_status(self, client, tokens):
        feedback_id = submit(client, tokens["alice"]).json()["feedback"]["id"]

        denied = client.patch(f"/api/feedback/{feedback_id}/status",
                              json={"status": "closed"}, headers=auth(tokens["alice"]))
        response = client.patch(
            f"/api/feedback/{feedback_id}/status",
            json={"status": "resolved", "response": "Fixed in 2.3"},
            headers=auth(tokens["admin"]),
        )

        assert denied.status_code == 403
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Feedback updated successfully"
        assert body["feedback"]["status"] == "resolved"
        responses = body["feedback"]["responses"]
        assert [entry["message"] for entry in responses] == [
            "Status updated to: resolved", "Fixed in 2.3"]
        assert responses[0]["actor"]["name"] == "Ada Admin"

    def test_resolve(self, client, tokens):
        feedback_id = submit(client, tokens["alice"]).json()["feedback"]["id"]

        response = client.patch(
            f"/api/feedback/{feedback_id}/resolve", headers=auth(tokens["alice"]))

        assert response.status_code == 200
        assert response.json()["message"] == "Feedback marked as resolved"
        assert response.json()["feedback"]["status"] == "resolved"

    def test_delete(self, client, tokens):
        feedback_id = submit(client, tokens["alice"]).json()["feedback"]["id"]

        response = client.delete(f"/api/feedback/{feedback_id}", headers=auth(tokens["alice"]))
        again = client.get(f"/api/feedback/{feedback_id}", headers=auth(tokens["alice"]))

        assert response.status_code == 200
        assert response.json() == {"message": "Feedback deleted successfully"}
        assert again.status_code == 404

    def test_stats(self, client, tokens):
        submit(client, tokens["alice"])

        body = client.get("/api/feedback/stats", headers=auth(tokens["alice"])).json()

        assert body["stats"]["total"] == 1
        assert body["stats"]["categoryDistribution"]["bug"] == 1
        assert body["stats"]["statusDistribution"]["in-progress"] == 0
        assert len(body["recentFeedback"]) == 1


class TestInsightsRoutes:
    def test_insights_without_feedback(self, client, tokens):
        body = client.get("/api/insights", headers=auth(tokens["alice"])).json()

        assert body["aiEnabled"] is False
        assert body["insights"]["totalAnalyzed"] == 0
        assert "generatedAt" in body

    def test_insights_with_feedback(self, client, tokens):
        submit(client, tokens["alice"])

        body = client.get("/api/insights", headers=auth(tokens["alice"])).json()

        assert body["insights"]["totalAnalyzed"] == 1
        assert body["insights"]["trends"][0] == "bug feedback represents 100% of submissions"

    def test_status(self, client, tokens):
        body = client.get("/api/insights/status", headers=auth(tokens["alice"])).json()

        assert body == {
            "aiEnabled": False,
            "service": "Local keyword classifier",
            "capabilities": [
                "Feedback summarization",
                "Keyword extraction",
                "Sentiment analysis",
                "Trend identification",
                "Action recommendations",
            ],
        }


class TestUnexpectedErrors:
    def test_development_exposes_error(self, client, hub, tokens):
        hub.feedback_service.stats = AsyncMock(side_effect=RuntimeError("database exploded"))

        response = client.get("/api/feedback/stats", headers=auth(tokens["alice"]))

        assert response.status_code == 500
        assert response.json() == {
            "message": "Something went wrong!", "error": "database exploded"}

    def test_production_hides_error(self, hub, tokens):
        hub.environment = "production"
        client = TestClient(create_app(hub), raise_server_exceptions=False)
        hub.feedback_service.stats = AsyncMock(side_effect=RuntimeError("database exploded"))

        response = client.get("/api/feedback/stats", headers=auth(tokens["alice"]))

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"
