"""
Pytest configuration and fixtures.
"""

from typing import AsyncGenerator, Generator
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from project_generator.api import deps
from project_generator.core.config import settings
from project_generator.core.exceptions import AIServiceError
from project_generator.core.security import issue_auth_token
from project_generator.domain.project import ProjectConfig, ProjectFeature
from project_generator.llm.claude_client import ClaudeClient
from project_generator.main import app as fastapi_app
from project_generator.services.analyzer import ProjectAnalyzer
from project_generator.services.prompt_generator import PromptGenerator
from project_generator.services.repository_service import RepositoryService
from project_generator.services.scaffolder import ProjectScaffolder
from project_generator.services.suggestion_service import SuggestionService


@pytest.fixture
def mock_claude_client() -> MagicMock:
    """Claude client whose every call fails, as when the API is unreachable."""
    client = MagicMock(spec=ClaudeClient)
    client.is_available = True
    client.recommend_mcps.side_effect = AIServiceError("connection refused")
    client.generate_tech_stack_suggestions.side_effect = AIServiceError("connection refused")
    client.generate_discovery_questions.side_effect = AIServiceError("connection refused")
    return client


@pytest.fixture
def projects_path(tmp_path) -> str:
    """Base directory generated projects are written to."""
    path = tmp_path / "projects"
    path.mkdir()
    return str(path)


@pytest.fixture
def scaffolder(projects_path: str) -> ProjectScaffolder:
    return ProjectScaffolder(base_path=projects_path)


@pytest.fixture
def app(
    mock_claude_client: MagicMock,
    scaffolder: ProjectScaffolder,
) -> Generator[FastAPI, None, None]:
    """Application with services wired to the mock client and a temp directory."""
    fastapi_app.dependency_overrides = {
        deps.get_claude_client: lambda: mock_claude_client,
        deps.get_analyzer: lambda: ProjectAnalyzer(mock_claude_client),
        deps.get_prompt_generator: lambda: PromptGenerator(),
        deps.get_scaffolder: lambda: scaffolder,
        deps.get_suggestion_service: lambda: SuggestionService(mock_claude_client),
        deps.get_repository_service: lambda: RepositoryService(token="", owner=""),
    }
    yield fastapi_app
    fastapi_app.dependency_overrides = {}


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def auth_client(async_client: AsyncClient) -> AsyncClient:
    """Client carrying a valid auth cookie."""
    async_client.cookies.set(settings.auth.cookie_name, issue_auth_token())
    return async_client


@pytest.fixture
def database_feature() -> ProjectFeature:
    return ProjectFeature(id="database", name="Database", category="database")


@pytest.fixture
def auth_feature() -> ProjectFeature:
    return ProjectFeature(id="auth", name="User Authentication", category="authentication")


@pytest.fixture
def saas_config(database_feature: ProjectFeature, auth_feature: ProjectFeature) -> ProjectConfig:
    """A SaaS project exercising most role rules."""
    return ProjectConfig(
        name="Acme Invoicing",
        description="Invoice tracking for small businesses",
        type="saas",
        features=[auth_feature, database_feature],
        tech_stack={"frontend": ["react"], "backend": ["node"], "database": ["postgresql"]},
    )


@pytest.fixture
def api_config() -> ProjectConfig:
    return ProjectConfig(
        name="Weather API",
        description="Forecast lookups",
        type="api",
        tech_stack={"backend": ["node"]},
    )
