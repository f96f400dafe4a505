"""
Analysis domain models: tool integrations, agents, tasks and the result aggregate.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from project_generator.core.constants import AgentPriority
from project_generator.domain.base import CamelModel
from project_generator.domain.project import ProjectConfig


class MCPServer(CamelModel):
    """Tool-integration descriptor (an MCP server a project may use)."""

    id: str
    name: str
    description: str
    capabilities: list[str] = Field(default_factory=list)
    use_cases: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    required: bool = Field(default=False)
    reasoning: Optional[str] = Field(
        default=None, description="Why the AI recommended this server"
    )


class Agent(CamelModel):
    """A role assigned to work on the project."""

    id: str
    name: str
    role: str
    responsibilities: list[str] = Field(default_factory=list)
    mcp_access: list[str] = Field(default_factory=list)
    collaborates_with: list[str] = Field(default_factory=list)
    priority: AgentPriority = Field(default=AgentPriority.MEDIUM)


class Task(CamelModel):
    """A unit of work in the task breakdown."""

    id: str
    title: str
    description: str
    assigned_agent: str
    dependencies: list[str] = Field(default_factory=list)
    estimated_hours: int = Field(default=1, ge=0)
    priority: int = Field(default=1, ge=1)


class CollaborationProtocol(CamelModel):
    """Ground rules for how agents work together."""

    communication_channels: list[str] = Field(default_factory=list)
    review_process: list[str] = Field(default_factory=list)
    conflict_resolution: list[str] = Field(default_factory=list)
    progress_tracking: list[str] = Field(default_factory=list)


class AnalysisResult(CamelModel):
    """Everything derived from a ProjectConfig in one analysis run."""

    project: ProjectConfig
    recommended_mcps: list[MCPServer] = Field(default_factory=list, alias="recommendedMCPs")
    required_agents: list[Agent] = Field(default_factory=list)
    task_breakdown: list[Task] = Field(default_factory=list)
    collaboration_protocol: CollaborationProtocol = Field(default_factory=CollaborationProtocol)

    @property
    def agent_ids(self) -> list[str]:
        return [agent.id for agent in self.required_agents]

    @property
    def mcp_ids(self) -> list[str]:
        return [mcp.id for mcp in self.recommended_mcps]

    @property
    def total_hours(self) -> int:
        return sum(task.estimated_hours for task in self.task_breakdown)

    def get_agent(self, agent_id: str) -> Optional[Agent]:
        """Find an agent by id."""
        for agent in self.required_agents:
            if agent.id == agent_id:
                return agent
        return None


class PromptMetadata(CamelModel):
    """Summary numbers for a generated prompt."""

    project_name: str
    total_agents: int
    total_mcps: int = Field(alias="totalMCPs")
    total_tasks: int
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class GeneratedPrompt(CamelModel):
    """The rendered project prompt."""

    markdown: str
    metadata: PromptMetadata
