"""
End-to-end tests for the wizard API.
"""

import io
import os
import zipfile
from unittest.mock import MagicMock

import pytest
from httpx import AsyncClient

from project_generator.core.constants import (
    DATA_AGENT_ID,
    DOCUMENTATION_AGENT_ID,
    MANAGING_AGENT_ID,
    REQUIRED_MCP_IDS,
)

API = "/api/v1"


def _agent_ids(payload: dict) -> list[str]:
    return [agent["id"] for agent in payload["data"]["requiredAgents"]]


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_api_project_without_database(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            f"{API}/analyze",
            json={
                "name": "Weather API",
                "description": "Forecast lookups",
                "type": "api",
                "features": ["auth"],
                "techStack": {"backend": "node"},
            },
        )
        assert response.status_code == 200

        payload = response.json()
        assert payload["success"] is True
        agent_ids = _agent_ids(payload)
        assert DATA_AGENT_ID not in agent_ids
        assert agent_ids[0] == MANAGING_AGENT_ID
        assert DOCUMENTATION_AGENT_ID in agent_ids

    @pytest.mark.asyncio
    async def test_api_project_with_database(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            f"{API}/analyze",
            json={
                "projectName": "Weather API",
                "description": "Forecast lookups",
                "projectType": "api",
                "features": ["database"],
            },
        )
        assert response.status_code == 200
        assert DATA_AGENT_ID in _agent_ids(response.json())

    @pytest.mark.asyncio
    async def test_result_shape(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            f"{API}/analyze",
            json={
                "name": "Acme",
                "description": "Invoices",
                "type": "saas",
                "features": [{"id": "payment"}, "unknown-feature"],
                "techStack": {"frontend": "react", "database": ["postgresql", "redis"]},
                "estimatedComplexity": "complex",
            },
        )
        data = response.json()["data"]

        assert [m["id"] for m in data["recommendedMCPs"]] == list(REQUIRED_MCP_IDS)
        assert data["project"]["techStack"]["frontend"] == ["react"]
        assert data["project"]["techStack"]["database"] == ["postgresql", "redis"]
        assert [f["id"] for f in data["project"]["features"]] == ["payment"]
        assert data["project"]["metadata"]["estimatedComplexity"] == "complex"
        assert data["taskBreakdown"][0]["assignedAgent"] == MANAGING_AGENT_ID
        assert "reviewProcess" in data["collaborationProtocol"]

    @pytest.mark.asyncio
    async def test_missing_fields(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(f"{API}/analyze", json={"name": "Acme"})
        assert response.status_code == 400

        payload = response.json()
        assert payload["success"] is False
        assert payload["code"] == "MISSING_FIELDS"
        assert "projectName/name" in payload["error"]

    @pytest.mark.asyncio
    async def test_unknown_project_type(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            f"{API}/analyze",
            json={"name": "Acme", "description": "Invoices", "type": "spaceship"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_REQUEST"

    @pytest.mark.asyncio
    async def test_malformed_json(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            f"{API}/analyze",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestGenerate:
    @pytest.mark.asyncio
    async def test_generate_and_download(
        self, auth_client: AsyncClient, projects_path: str
    ) -> None:
        response = await auth_client.post(
            f"{API}/generate",
            json={
                "config": {
                    "projectName": "Acme Invoicing!",
                    "description": "Invoices for small businesses",
                    "projectType": "saas",
                    "features": ["auth", "database"],
                    "techStack": {"frontend": "react", "backend": "node"},
                },
                "discoveryData": {
                    "questions": [{"id": "q1", "type": "text", "question": "Who uses it?"}],
                    "answers": {"q1": "Accountants"},
                },
            },
        )
        assert response.status_code == 200

        data = response.json()["data"]
        assert data["sanitizedName"] == "acme-invoicing"
        assert data["projectPath"] == os.path.join(projects_path, "acme-invoicing")
        assert os.path.isfile(data["promptPath"])
        assert "Who uses it?" in data["prompt"]
        assert data["analysis"]["totalMCPs"] == len(REQUIRED_MCP_IDS)
        assert data["analysis"]["totalAgents"] > 0
        assert ".claude/PROJECT_PROMPT.md" in data["files"]

        download = await auth_client.get(
            f"{API}/download-zip", params={"project": data["sanitizedName"]}
        )
        assert download.status_code == 200
        assert download.headers["content-type"] == "application/zip"
        assert 'filename="acme-invoicing.zip"' in download.headers["content-disposition"]

        with zipfile.ZipFile(io.BytesIO(download.content)) as archive:
            assert "README.md" in archive.namelist()

    @pytest.mark.asyncio
    async def test_missing_config(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(f"{API}/generate", json={"config": None})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing project configuration"

    @pytest.mark.asyncio
    async def test_name_without_usable_characters(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            f"{API}/generate",
            json={"config": {"name": "!!!", "type": "website"}},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid project name"

    @pytest.mark.asyncio
    async def test_download_missing_project(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get(f"{API}/download-zip", params={"project": "nope"})
        assert response.status_code == 404
        assert response.json()["code"] == "PROJECT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_download_filename_uses_resolved_name(
        self, auth_client: AsyncClient, projects_path: str
    ) -> None:
        os.makedirs(os.path.join(projects_path, "demo-app"))
        with open(os.path.join(projects_path, "demo-app", "README.md"), "w", encoding="utf-8") as f:
            f.write("# Demo\n")

        response = await auth_client.get(
            f"{API}/download-zip", params={"project": "./demo-app/"}
        )
        assert response.status_code == 200
        assert response.headers["content-disposition"] == 'attachment; filename="demo-app.zip"'

    @pytest.mark.asyncio
    async def test_download_rejects_traversal(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get(f"{API}/download-zip", params={"project": "../.."})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_download_requires_project(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get(f"{API}/download-zip")
        assert response.status_code == 400


class TestSuggestions:
    @pytest.mark.asyncio
    async def test_suggest_falls_back(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            f"{API}/suggest",
            json={"projectName": "Docs", "description": "Docs site", "projectType": "website"},
        )
        assert response.status_code == 200

        data = response.json()["data"]
        assert data["techStack"] == {"frontend": "astro", "backend": "none", "database": "none"}
        assert data["reasoning"]

    @pytest.mark.asyncio
    async def test_suggest_missing_fields(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(f"{API}/suggest", json={"projectName": "Docs"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_questions_unavailable_without_key(
        self, auth_client: AsyncClient, mock_claude_client: MagicMock
    ) -> None:
        mock_claude_client.is_available = False
        response = await auth_client.post(
            f"{API}/generate-questions",
            json={"projectName": "Docs", "description": "Docs site", "projectType": "website"},
        )
        assert response.status_code == 503

        payload = response.json()
        assert payload["success"] is False
        assert "ANTHROPIC_API_KEY" in payload["error"]

    @pytest.mark.asyncio
    async def test_questions_fallback(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            f"{API}/generate-questions",
            json={"projectName": "Docs", "description": "Docs site", "projectType": "website"},
        )
        assert response.status_code == 200
        questions = response.json()["data"]["questions"]
        assert [q["id"] for q in questions] == ["q1", "q2", "q3", "q4"]


class TestRepository:
    @pytest.mark.asyncio
    async def test_push_without_token(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            f"{API}/github-push",
            json={
                "projectName": "Acme",
                "sanitizedName": "acme",
                "projectPath": "/tmp/acme",
            },
        )
        assert response.status_code == 500
        assert "token" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_push_missing_fields(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(f"{API}/github-push", json={"projectName": "Acme"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_status(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get(f"{API}/github-push/status", params={"repo": "acme"})
        assert response.status_code == 200
        assert response.json()["data"]["exists"] is False


class TestRegistry:
    @pytest.mark.asyncio
    async def test_templates(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get(f"{API}/templates", params={"category": "api"})
        data = response.json()["data"]

        assert data["templates"]
        assert all(t["category"] == "api" for t in data["templates"])
        assert data["counts"]["all"] >= len(data["templates"])
        assert len(data["popular"]) == 3

    @pytest.mark.asyncio
    async def test_template_by_id(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get(f"{API}/templates/saas-starter")
        assert response.json()["data"]["config"]["type"] == "saas"

        missing = await auth_client.get(f"{API}/templates/nope")
        assert missing.status_code == 404
        assert missing.json()["code"] == "TEMPLATE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_features(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get(f"{API}/features", params={"projectType": "saas"})
        data = response.json()["data"]
        assert {f["id"] for f in data["features"]} >= {"auth", "database"}
        assert "payment" in data["recommended"]

        validation = await auth_client.post(f"{API}/features/validate", json={"features": ["api"]})
        assert validation.json()["data"]["valid"] is False

    @pytest.mark.asyncio
    async def test_mcp_servers(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get(f"{API}/mcp-servers")
        ids = [s["id"] for s in response.json()["data"]]
        assert set(REQUIRED_MCP_IDS) <= set(ids)

        search = await auth_client.get(f"{API}/mcp-servers", params={"q": "supabase"})
        assert [s["id"] for s in search.json()["data"]] == ["supabase"]
