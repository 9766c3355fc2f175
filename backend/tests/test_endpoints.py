import pytest
from fastapi.testclient import TestClient

from exceptions import ProviderUnavailableError, ProviderConfigurationError
from conftest import MOON_CLAIM


class TestHealthCheckEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check(self, test_client):
        """Test GET / returns healthy status."""
        response = test_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "FactCheck API" in data["message"]

    def test_request_context_headers(self, test_client):
        response = test_client.get("/", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
        assert response.headers["X-Response-Time"].endswith("s")

    def test_request_id_generated(self, test_client):
        response = test_client.get("/")
        assert len(response.headers["X-Request-ID"]) == 32


class TestAnalysisEndpoint:
    """Tests for POST /analysis."""

    def test_moon_cheese(self, test_client):
        """Test a successful check returns and stores the record."""
        response = test_client.post("/analysis", json={"claimText": MOON_CLAIM})

        assert response.status_code == 201
        data = response.json()
        assert data["verdict"] == "Fake"
        assert data["score"] == 97
        assert data["claim"] == MOON_CLAIM
        assert data["fullClaim"] == MOON_CLAIM
        assert data["ownerId"] is None
        assert data["sources"] == [{"title": "NASA", "uri": "https://nasa.gov"}]
        assert "createdAt" in data

        history = test_client.get("/analysis/history").json()
        assert [item["id"] for item in history] == [data["id"]]

    def test_empty_claim(self, test_client, fake_provider):
        """Test an empty claim returns 400."""
        response = test_client.post("/analysis", json={"claimText": "   "})

        assert response.status_code == 400
        assert response.json() == {"message": "claimText (string) is required and cannot be empty."}
        assert fake_provider.calls == []

    def test_missing_claim(self, test_client):
        """Test a body without claimText returns 400."""
        response = test_client.post("/analysis", json={})

        assert response.status_code == 400
        assert "claimText" in response.json()["message"]

    def test_non_string_claim(self, test_client):
        response = test_client.post("/analysis", json={"claimText": 123})
        assert response.status_code == 400

    def test_length_boundary(self, test_client):
        accepted = test_client.post("/analysis", json={"claimText": "x" * 5000})
        rejected = test_client.post("/analysis", json={"claimText": "x" * 5001})

        assert accepted.status_code == 201
        assert len(accepted.json()["claim"]) == 150
        assert rejected.status_code == 400
        assert "5000" in rejected.json()["message"]

    def test_no_json_reply_returns_502(self, test_client, fake_provider):
        """Test a reply without JSON fails and leaves history unchanged."""
        test_client.post("/analysis", json={"claimText": MOON_CLAIM})
        before = test_client.get("/analysis/history").json()

        fake_provider.text = "I cannot produce structured output today."
        response = test_client.post("/analysis", json={"claimText": "Another claim"})

        assert response.status_code == 502
        assert response.json() == {"message": "There was an issue processing the AI's response format."}
        assert test_client.get("/analysis/history").json() == before

    def test_provider_busy_returns_503(self, test_client, fake_provider):
        fake_provider.error = ProviderUnavailableError("HTTP 429", upstream_status=429, busy=True)

        response = test_client.post("/analysis", json={"claimText": MOON_CLAIM})

        assert response.status_code == 503
        assert "AI service" in response.json()["message"]

    def test_huge_score_is_clamped(self, test_client, fake_provider):
        fake_provider.text = '```json\n{"verdict": "Real", "score": 1' + "0" * 400 + ', "explanation": "x"}\n```'

        response = test_client.post("/analysis", json={"claimText": MOON_CLAIM})

        assert response.status_code == 201
        assert response.json()["score"] == 100

    def test_unexpected_error_returns_json_500(self, fake_provider):
        """Test a non-domain exception still renders a {message} body."""
        import main
        fake_provider.error = RuntimeError("boom")
        with TestClient(main.app, raise_server_exceptions=False) as client:
            main.app.state.provider = fake_provider
            response = client.post("/analysis", json={"claimText": MOON_CLAIM})

        assert response.status_code == 500
        assert response.json() == {"message": "An unexpected error occurred while processing your request."}

    def test_provider_not_configured(self, test_client, fake_provider):
        fake_provider.error = ProviderConfigurationError("API key not configured")

        response = test_client.post("/analysis", json={"claimText": MOON_CLAIM})

        assert response.status_code == 503
        assert response.json()["message"] == "AI service is not configured. Check server configuration."


class TestHistoryEndpoints:

    def test_history_newest_first(self, test_client):
        ids = [test_client.post("/analysis", json={"claimText": f"claim {i}"}).json()["id"] for i in range(3)]

        history = test_client.get("/analysis/history").json()

        assert [item["id"] for item in history] == list(reversed(ids))

    def test_history_limit(self, test_client):
        for i in range(3):
            test_client.post("/analysis", json={"claimText": f"claim {i}"})

        assert len(test_client.get("/analysis/history?limit=2").json()) == 2
        assert test_client.get("/analysis/history?limit=0").status_code == 400

    def test_get_by_id(self, test_client):
        created = test_client.post("/analysis", json={"claimText": MOON_CLAIM}).json()

        response = test_client.get(f"/analysis/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_missing(self, test_client):
        response = test_client.get("/analysis/unknown")
        assert response.status_code == 404
        assert response.json() == {"message": "History item not found."}

    def test_delete(self, test_client):
        created = test_client.post("/analysis", json={"claimText": MOON_CLAIM}).json()

        response = test_client.delete(f"/history/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "History item deleted successfully.", "id": created["id"]}
        assert test_client.get("/analysis/history").json() == []

    def test_delete_missing_leaves_history_unchanged(self, test_client):
        test_client.post("/analysis", json={"claimText": MOON_CLAIM})
        before = test_client.get("/analysis/history").json()

        response = test_client.delete("/history/does-not-exist")

        assert response.status_code == 404
        assert test_client.get("/analysis/history").json() == before


class TestTrendingEndpoint:

    def test_trending(self, test_client):
        for claim in ("A", "B", "A"):
            test_client.post("/analysis", json={"claimText": claim})

        response = test_client.get("/analysis/trending")

        assert response.status_code == 200
        assert response.json() == [{"_id": "A", "count": 2, "verdict": "Fake", "score": 97}]

    def test_trending_empty(self, test_client):
        assert test_client.get("/analysis/trending").json() == []


class TestOwnerScopedMode:

    def test_missing_identity_is_401(self, owner_scoped_client):
        response = owner_scoped_client.post("/analysis", json={"claimText": MOON_CLAIM})

        assert response.status_code == 401
        assert owner_scoped_client.get("/analysis/history").status_code == 401

    def test_history_is_per_owner(self, owner_scoped_client):
        alice = {"X-User-ID": "alice"}
        bob = {"X-User-ID": "bob"}
        created = owner_scoped_client.post("/analysis", json={"claimText": MOON_CLAIM}, headers=alice).json()
        owner_scoped_client.post("/analysis", json={"claimText": MOON_CLAIM}, headers=bob)

        assert created["ownerId"] == "alice"
        assert [i["ownerId"] for i in owner_scoped_client.get("/analysis/history", headers=alice).json()] == ["alice"]
        assert owner_scoped_client.get(f"/analysis/{created['id']}", headers=bob).status_code == 404
        assert owner_scoped_client.delete(f"/history/{created['id']}", headers=bob).status_code == 404
        assert owner_scoped_client.get(f"/analysis/{created['id']}", headers=alice).status_code == 200

    def test_trending_stays_global(self, owner_scoped_client):
        owner_scoped_client.post("/analysis", json={"claimText": "A"}, headers={"X-User-ID": "alice"})
        owner_scoped_client.post("/analysis", json={"claimText": "A"}, headers={"X-User-ID": "bob"})

        response = owner_scoped_client.get("/analysis/trending")

        assert response.status_code == 200
        assert response.json()[0]["count"] == 2
