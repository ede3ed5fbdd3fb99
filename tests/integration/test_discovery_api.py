"""Integration tests for the Discovery API.

Runs whole conversations over HTTP against the keyword-fallback engine,
sending the returned state back with every reply.
"""


class TestHealthEndpoints:
    """Test health and root endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] in ("healthy", "degraded")
        assert "text_completion" in body["services"]

    def test_liveness(self, client):
        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_api_root_lists_endpoints(self, client):
        body = client.get("/api/v1").json()

        assert body["endpoints"]["start"] == "/api/v1/discovery/start"


class TestDiscoveryConversation:
    """Test the start/continue flow."""

    def test_start(self, client):
        response = client.post(
            "/api/v1/discovery/start",
            json={"description": "I'm a solo plumber", "seed": 3},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["response"]["question_count"] == 2
        assert body["response"]["complete"] is False
        assert body["state"]["fast_path"] is True
        assert body["state"]["ledger"]["industry"]["value"] == "plumber"

    def test_quick_build_completes(self, client):
        started = client.post(
            "/api/v1/discovery/start",
            json={"description": "I'm a solo plumber", "seed": 3},
        ).json()

        response = client.post(
            "/api/v1/discovery/continue",
            json={"state": started["state"], "message": "just build it"},
        )

        assert response.status_code == 200
        body = response.json()["response"]
        assert body["complete"] is True
        assert body["app_config"]["industry"] == "plumber"
        assert body["app_config"]["team_size"] == "solo"

    def test_full_conversation_over_http(self, client):
        body = client.post(
            "/api/v1/discovery/start",
            json={"description": "I'm a solo plumber", "seed": 3},
        ).json()

        for message in ["Emergency calls mostly", "Quotes first, then invoices", "Modern", "Drip Fix Plumbing", "yes"]:
            body = client.post(
                "/api/v1/discovery/continue",
                json={"state": body["state"], "message": message},
            ).json()

        assert body["response"]["complete"] is True
        assert body["response"]["app_config"]["business_name"] == "Drip Fix Plumbing"


class TestValidation:
    """Test request validation errors."""

    def test_empty_description(self, client):
        response = client.post("/api/v1/discovery/start", json={"description": ""})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["errors"][0]["field"] == "body.description"

    def test_continue_requires_state(self, client):
        response = client.post("/api/v1/discovery/continue", json={"message": "yes"})

        assert response.status_code == 422
