"""
Unit tests for the project analyzer.
"""

from unittest.mock import MagicMock

import pytest

from project_generator.core.constants import (
    BACKEND_AGENT_ID,
    DATA_AGENT_ID,
    DEVOPS_AGENT_ID,
    DOCUMENTATION_AGENT_ID,
    FRONTEND_AGENT_ID,
    MANAGING_AGENT_ID,
    QA_AGENT_ID,
    REQUIRED_MCP_IDS,
    RESEARCH_AGENT_ID,
    SECURITY_AGENT_ID,
)
from project_generator.core.exceptions import AIServiceUnavailableError
from project_generator.domain.project import ProjectConfig, ProjectMetadata
from project_generator.services.analyzer import ProjectAnalyzer


def _assert_dependencies_point_backwards(tasks) -> None:
    seen: set[str] = set()
    for task in tasks:
        for dependency in task.dependencies:
            assert dependency in seen, f"{task.id} depends on later task {dependency}"
        seen.add(task.id)


@pytest.mark.asyncio
async def test_analyze_survives_failing_ai(
    mock_claude_client: MagicMock, saas_config: ProjectConfig
) -> None:
    analysis = await ProjectAnalyzer(mock_claude_client).analyze(saas_config)

    assert analysis.mcp_ids == list(REQUIRED_MCP_IDS)
    assert analysis.required_agents
    assert analysis.task_breakdown


@pytest.mark.asyncio
async def test_analyze_without_api_key(
    mock_claude_client: MagicMock, api_config: ProjectConfig
) -> None:
    mock_claude_client.recommend_mcps.side_effect = AIServiceUnavailableError()
    analysis = await ProjectAnalyzer(mock_claude_client).analyze(api_config)
    assert set(REQUIRED_MCP_IDS) <= set(analysis.mcp_ids)


@pytest.mark.asyncio
async def test_ai_recommendations_are_filtered(
    mock_claude_client: MagicMock, saas_config: ProjectConfig
) -> None:
    mock_claude_client.recommend_mcps.side_effect = None
    mock_claude_client.recommend_mcps.return_value = [
        {"id": "supabase", "required": True, "reasoning": "Managed Postgres"},
        {"id": "not-a-real-mcp", "required": True, "reasoning": "Hallucinated"},
        {"id": "supabase", "required": False, "reasoning": "Duplicate"},
        {"id": "github", "required": False},
    ]

    analysis = await ProjectAnalyzer(mock_claude_client).analyze(saas_config)

    assert analysis.mcp_ids == ["desktop-commander", "supabase", "github"]
    supabase = analysis.recommended_mcps[1]
    assert supabase.required is True
    assert supabase.reasoning == "Managed Postgres"
    # Registry-required servers stay required whatever the model says
    github = analysis.recommended_mcps[2]
    assert github.required is True


@pytest.mark.asyncio
async def test_saas_roles(mock_claude_client: MagicMock, saas_config: ProjectConfig) -> None:
    analysis = await ProjectAnalyzer(mock_claude_client).analyze(saas_config)

    assert analysis.agent_ids == [
        MANAGING_AGENT_ID,
        FRONTEND_AGENT_ID,
        BACKEND_AGENT_ID,
        DATA_AGENT_ID,
        SECURITY_AGENT_ID,
        QA_AGENT_ID,
        DOCUMENTATION_AGENT_ID,
        DEVOPS_AGENT_ID,
    ]


@pytest.mark.asyncio
async def test_api_without_database(mock_claude_client: MagicMock, api_config: ProjectConfig) -> None:
    analysis = await ProjectAnalyzer(mock_claude_client).analyze(api_config)

    assert DATA_AGENT_ID not in analysis.agent_ids
    assert FRONTEND_AGENT_ID not in analysis.agent_ids
    assert BACKEND_AGENT_ID in analysis.agent_ids
    assert analysis.agent_ids[0] == MANAGING_AGENT_ID
    assert DOCUMENTATION_AGENT_ID in analysis.agent_ids
    assert QA_AGENT_ID in analysis.agent_ids
    assert DEVOPS_AGENT_ID in analysis.agent_ids


@pytest.mark.asyncio
async def test_research_for_complex_projects(
    mock_claude_client: MagicMock, api_config: ProjectConfig
) -> None:
    config = api_config.model_copy(
        update={"metadata": ProjectMetadata(estimated_complexity="enterprise")}
    )
    analysis = await ProjectAnalyzer(mock_claude_client).analyze(config)
    assert RESEARCH_AGENT_ID in analysis.agent_ids


@pytest.mark.asyncio
async def test_managing_agent_sees_everything(
    mock_claude_client: MagicMock, saas_config: ProjectConfig
) -> None:
    analysis = await ProjectAnalyzer(mock_claude_client).analyze(saas_config)

    managing = analysis.required_agents[0]
    assert managing.mcp_access == analysis.mcp_ids
    assert managing.collaborates_with == analysis.agent_ids[1:]

    for agent in analysis.required_agents[1:]:
        assert set(agent.mcp_access) <= set(analysis.mcp_ids)


@pytest.mark.asyncio
@pytest.mark.parametrize("project_type", ["saas", "website", "api", "mobile-app", "cli-tool"])
async def test_task_dependencies_reference_earlier_tasks(
    mock_claude_client: MagicMock,
    saas_config: ProjectConfig,
    project_type: str,
) -> None:
    config = saas_config.model_copy(update={"type": project_type})
    analysis = await ProjectAnalyzer(mock_claude_client).analyze(config)

    ids = [task.id for task in analysis.task_breakdown]
    assert ids == [f"task-{n}" for n in range(1, len(ids) + 1)]
    _assert_dependencies_point_backwards(analysis.task_breakdown)

    assigned = {task.assigned_agent for task in analysis.task_breakdown}
    assert assigned <= set(analysis.agent_ids)


@pytest.mark.asyncio
async def test_task_phase_order(mock_claude_client: MagicMock, saas_config: ProjectConfig) -> None:
    analysis = await ProjectAnalyzer(mock_claude_client).analyze(saas_config)
    titles = [task.title for task in analysis.task_breakdown]

    assert titles.index("Design Database Schema") < titles.index("Build API Endpoints")
    assert titles.index("Build API Endpoints") < titles.index("Implement Authentication")
    assert titles.index("Implement Authentication") < titles.index("Build UI Components")
    assert titles.index("Write Test Suites") < titles.index("Write Documentation")
    assert titles[-1] == "Set Up CI/CD Pipeline"
