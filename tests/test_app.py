"""Tests for the FastAPI application."""

from conftest import service_error

PROMPT = "Create a user profile with a name and email"


class TestHealthCheck:
    """Tests for the health check endpoint."""

    async def test_health_returns_200(self, client):
        response = await client.get("/health")
        assert response.status_code == 200

    async def test_health_returns_healthy_status(self, client):
        response = await client.get("/health")
        assert response.json() == {"status": "healthy"}


class TestAppRouting:
    """Tests that app routes are correctly mounted."""

    async def test_api_router_is_mounted(self, client):
        response = await client.get("/api/history")
        assert response.status_code == 200
        assert response.json() == {"records": [], "total": 0}

    async def test_unknown_route_returns_404(self, client):
        response = await client.get("/nonexistent")
        assert response.status_code == 404


class TestOperationEndpoints:
    """Tests for the stateless Structure, Enhance and Title endpoints."""

    async def test_structure_returns_raw_json_string(self, client):
        response = await client.post("/api/structure", json={"prompt": PROMPT})
        assert response.status_code == 200
        data = response.json()
        assert data["structured_json"] == '{"name":"string","email":"string"}'
        assert data["bias_detected"] is False

    async def test_structure_empty_prompt_returns_400(self, client, model_service):
        response = await client.post("/api/structure", json={"prompt": "  "})
        assert response.status_code == 400
        assert response.json()["detail"]["category"] == "empty_input"
        assert model_service.calls == []

    async def test_missing_body_field_returns_422(self, client):
        response = await client.post("/api/structure", json={})
        assert response.status_code == 422

    async def test_enhance_empty_json_returns_400(self, client, model_service):
        response = await client.post("/api/enhance", json={"prompt": PROMPT, "json_output": ""})
        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "JSON output cannot be empty."
        assert model_service.calls == []

    async def test_title(self, client):
        response = await client.post("/api/title", json={"prompt": PROMPT})
        assert response.status_code == 200
        assert response.json() == {"title": "User Profile Schema"}

    async def test_service_failure_is_classified(self, client, model_service):
        model_service.responses["title"] = service_error(401, "Unauthorized")
        response = await client.post("/api/title", json={"prompt": PROMPT})
        assert response.status_code == 401
        assert response.json()["detail"]["category"] == "unauthorized"


class TestWorkspaceEndpoints:
    """Tests for the workspace flow over HTTP."""

    async def test_generate_saves_to_history(self, client):
        response = await client.post("/api/workspace/generate", json={"prompt": PROMPT})
        assert response.status_code == 200
        data = response.json()
        assert data["state"]["structured_output"].startswith("{\n  ")
        assert data["saved"]["record"]["title"] == "User Profile Schema"

        history = (await client.get("/api/history")).json()
        assert history["total"] == 1
        assert history["records"][0]["prompt"] == PROMPT

        workspace = (await client.get("/api/workspace")).json()
        assert workspace["prompt"] == PROMPT

    async def test_quota_failure_returns_429_with_retry_after(self, client, model_service):
        model_service.responses["structure"] = service_error(
            429, "You exceeded your current quota. Please retry in 42s."
        )

        response = await client.post("/api/workspace/generate", json={"prompt": PROMPT})

        assert response.status_code == 429
        assert response.headers["retry-after"] == "42"
        detail = response.json()["detail"]
        assert detail["category"] == "quota_exceeded"
        assert detail["retry_after_seconds"] == 42
        assert detail["retry_after_minutes"] == 1

    async def test_invalid_key_returns_400(self, client, model_service):
        model_service.responses["structure"] = service_error(
            400, "API key not valid.", reason_code="API_KEY_INVALID"
        )
        response = await client.post("/api/workspace/generate", json={"prompt": PROMPT})
        assert response.status_code == 400
        assert response.json()["detail"]["category"] == "invalid_credentials"

    async def test_enhance_after_generate(self, client):
        await client.post("/api/workspace/generate", json={"prompt": PROMPT})
        response = await client.post("/api/workspace/enhance")
        assert response.status_code == 200
        assert response.json()["state"]["enhancement"]["reasoning"]

        record = (await client.get("/api/history")).json()["records"][0]
        assert record["enhancement"]["enhanced_prompt"]

    async def test_enhance_without_output_returns_400(self, client):
        response = await client.post("/api/workspace/enhance")
        assert response.status_code == 400

    async def test_reveal_without_output_returns_404(self, client):
        response = await client.get("/api/workspace/reveal")
        assert response.status_code == 404

    async def test_load_without_pending_record_returns_404(self, client):
        response = await client.post("/api/workspace/load")
        assert response.status_code == 404

    async def test_open_then_load(self, client):
        generated = (
            await client.post("/api/workspace/generate", json={"prompt": PROMPT})
        ).json()
        record_id = generated["saved"]["record"]["id"]
        await client.post("/api/workspace/generate", json={"prompt": "Another prompt"})

        response = await client.post(f"/api/history/{record_id}/open")
        assert response.json() == {"status": "ready", "id": record_id}

        state = (await client.post("/api/workspace/load")).json()
        assert state["prompt"] == PROMPT


class TestHistoryAndFavoritesEndpoints:
    """Tests for history and favorites management."""

    async def _generate(self, client) -> str:
        response = await client.post("/api/workspace/generate", json={"prompt": PROMPT})
        return response.json()["saved"]["record"]["id"]

    async def test_delete_history_record(self, client):
        record_id = await self._generate(client)

        response = await client.delete(f"/api/history/{record_id}")
        assert response.status_code == 200
        assert (await client.get("/api/history")).json()["total"] == 0

    async def test_delete_missing_record_is_noop(self, client):
        await self._generate(client)

        for path in ("/api/history/missing", "/api/favorites/missing"):
            response = await client.delete(path)
            assert response.status_code == 200
            assert response.json() == {"status": "not_found"}

        assert (await client.get("/api/history")).json()["total"] == 1

    async def test_removing_favorite_keeps_history(self, client):
        record_id = await self._generate(client)

        response = await client.post(f"/api/history/{record_id}/favorite")
        assert response.status_code == 200
        assert (await client.get("/api/favorites")).json()["total"] == 1

        await client.delete(f"/api/favorites/{record_id}")

        assert (await client.get("/api/favorites")).json()["total"] == 0
        assert (await client.get("/api/history")).json()["total"] == 1

    async def test_favorite_missing_record_returns_404(self, client):
        response = await client.post("/api/history/missing/favorite")
        assert response.status_code == 404

    async def test_clear_history_keeps_favorites(self, client):
        record_id = await self._generate(client)
        await client.post(f"/api/history/{record_id}/favorite")

        response = await client.delete("/api/history")

        assert response.json() == {"status": "cleared"}
        assert (await client.get("/api/history")).json()["total"] == 0
        assert (await client.get("/api/favorites")).json()["total"] == 1

    async def test_open_favorite_after_history_cleared(self, client):
        record_id = await self._generate(client)
        await client.post(f"/api/history/{record_id}/favorite")
        await client.delete("/api/history")

        response = await client.post(f"/api/favorites/{record_id}/open")
        assert response.status_code == 200

        state = (await client.post("/api/workspace/load")).json()
        assert state["prompt"] == PROMPT
