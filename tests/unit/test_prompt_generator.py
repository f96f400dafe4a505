"""
Unit tests for prompt and artifact rendering.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from project_generator.domain.analysis import AnalysisResult
from project_generator.domain.discovery import DiscoveryData, DiscoveryQuestion
from project_generator.domain.project import ProjectConfig
from project_generator.services import artifacts
from project_generator.services.analyzer import ProjectAnalyzer
from project_generator.services.prompt_generator import SECTION_SEPARATOR, PromptGenerator

GENERATED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def analysis(mock_claude_client: MagicMock, saas_config: ProjectConfig) -> AnalysisResult:
    return await ProjectAnalyzer(mock_claude_client).analyze(saas_config)


@pytest.mark.asyncio
async def test_prompt_sections_in_order(analysis: AnalysisResult) -> None:
    prompt = PromptGenerator().generate(analysis, generated_at=GENERATED_AT)
    markdown = prompt.markdown

    headings = [
        "# Acme Invoicing",
        "## 📋 Project Context",
        "## 🔧 Available MCP Servers",
        "## 🤖 AI Agents",
        "## 📊 Task Breakdown",
        "## 🤝 Collaboration Protocol",
        "## 🚀 Getting Started",
    ]
    positions = [markdown.index(heading) for heading in headings]
    assert positions == sorted(positions)
    for heading in headings[1:]:
        assert SECTION_SEPARATOR + heading in markdown
    assert "Discovery Insights" not in markdown
    assert "**Project Type:** SAAS" in markdown
    assert f"Estimated Total Hours: {analysis.total_hours}" in markdown


@pytest.mark.asyncio
async def test_prompt_metadata(analysis: AnalysisResult) -> None:
    prompt = PromptGenerator().generate(analysis, generated_at=GENERATED_AT)

    assert prompt.metadata.project_name == "Acme Invoicing"
    assert prompt.metadata.total_agents == len(analysis.required_agents)
    assert prompt.metadata.total_mcps == len(analysis.recommended_mcps)
    assert prompt.metadata.total_tasks == len(analysis.task_breakdown)
    assert prompt.metadata.generated_at == GENERATED_AT

    dumped = prompt.metadata.model_dump(by_alias=True)
    assert "totalMCPs" in dumped


@pytest.mark.asyncio
async def test_prompt_is_deterministic(analysis: AnalysisResult) -> None:
    generator = PromptGenerator()
    first = generator.generate(analysis, generated_at=GENERATED_AT)
    second = generator.generate(analysis, generated_at=GENERATED_AT)
    assert first.markdown == second.markdown


@pytest.mark.asyncio
async def test_discovery_only_answered_questions(analysis: AnalysisResult) -> None:
    discovery = DiscoveryData(
        questions=[
            DiscoveryQuestion(id="q1", question="Who are the users?"),
            DiscoveryQuestion(id="q2", question="Which integrations?", type="checkboxes"),
            DiscoveryQuestion(id="q3", question="Color scheme?"),
        ],
        answers={"q1": "Accountants", "q2": ["Payments", "Email"], "q3": "  "},
    )

    markdown = PromptGenerator().generate(analysis, discovery, GENERATED_AT).markdown

    assert "## 🔍 Discovery Insights" in markdown
    assert markdown.index("Discovery Insights") < markdown.index("Available MCP Servers")
    assert "**Who are the users?**  \nAccountants" in markdown
    assert "Payments, Email" in markdown
    assert "Color scheme?" not in markdown


@pytest.mark.asyncio
async def test_mcp_reasoning_rendered(analysis: AnalysisResult) -> None:
    mcps = [
        mcp.model_copy(update={"reasoning": "Needed for file access"})
        if mcp.id == "desktop-commander"
        else mcp
        for mcp in analysis.recommended_mcps
    ]
    annotated = analysis.model_copy(update={"recommended_mcps": mcps})

    markdown = PromptGenerator().generate(annotated, generated_at=GENERATED_AT).markdown
    assert "**Why:** Needed for file access" in markdown


@pytest.mark.asyncio
async def test_agent_markdown(analysis: AnalysisResult) -> None:
    managing = analysis.required_agents[0]
    content = artifacts.render_agent_markdown(managing, GENERATED_AT)

    assert content.startswith("# Managing Agent")
    assert "**Priority:** 🔴 CRITICAL" in content
    assert "## Success Criteria" in content
    assert GENERATED_AT.isoformat() in content


def test_index_file_variants(saas_config: ProjectConfig, api_config: ProjectConfig) -> None:
    typescript = saas_config.model_copy(
        update={"tech_stack": saas_config.tech_stack.model_copy(update={"tools": ["TypeScript"]})}
    )
    assert artifacts.index_filename(typescript) == "index.ts"
    assert artifacts.index_filename(saas_config) == "index.js"
    assert "API Server" in artifacts.render_index_file(api_config)


def test_env_example_without_features(api_config: ProjectConfig) -> None:
    content = artifacts.render_env_example(api_config)
    assert "NODE_ENV=development" in content
    assert "DATABASE_URL" not in content
    assert "# MCP Servers" not in content
