"""
Prompt generator - renders an AnalysisResult as the project prompt Markdown.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from project_generator.core.constants import PRIORITY_EMOJI
from project_generator.domain.analysis import (
    AnalysisResult,
    GeneratedPrompt,
    PromptMetadata,
    Task,
)
from project_generator.domain.discovery import DiscoveryData

SECTION_SEPARATOR = "\n\n---\n\n"


def bullet_list(items: list[str], empty: str = "") -> str:
    """Render items as a Markdown bullet list."""
    if not items:
        return empty
    return "\n".join(f"- {item}" for item in items)


class PromptGenerator:
    """
    Builds the PROJECT_PROMPT.md document.

    Pure rendering: the same analysis, discovery data and timestamp always
    give the same Markdown.
    """

    def generate(
        self,
        analysis: AnalysisResult,
        discovery: Optional[DiscoveryData] = None,
        generated_at: Optional[datetime] = None,
    ) -> GeneratedPrompt:
        """
        Render the prompt and its summary metadata.

        Args:
            analysis: Result of the project analysis
            discovery: Optional wizard questions and answers
            generated_at: Timestamp to stamp into the header (defaults to now)

        Returns:
            GeneratedPrompt with markdown and metadata
        """
        generated_at = generated_at or datetime.now(timezone.utc)

        sections = [
            self._header(analysis, generated_at),
            self._project_context(analysis),
            self._discovery(discovery),
            self._mcp_section(analysis),
            self._agents_section(analysis),
            self._task_breakdown(analysis),
            self._collaboration_protocol(analysis),
            self._footer(),
        ]
        markdown = SECTION_SEPARATOR.join(section for section in sections if section)

        return GeneratedPrompt(
            markdown=markdown,
            metadata=PromptMetadata(
                project_name=analysis.project.name,
                total_agents=len(analysis.required_agents),
                total_mcps=len(analysis.recommended_mcps),
                total_tasks=len(analysis.task_breakdown),
                generated_at=generated_at,
            ),
        )

    def _header(self, analysis: AnalysisResult, generated_at: datetime) -> str:
        project = analysis.project
        metadata = project.metadata
        return (
            f"# {project.name}\n\n"
            f"**Project Type:** {project.type.upper()}  \n"
            f"**Complexity:** {metadata.estimated_complexity}  \n"
            f"**Estimated Duration:** {metadata.estimated_duration}  \n"
            f"**Team Size:** {metadata.team_size} AI Agents\n\n"
            f"Generated: {generated_at.isoformat()}"
        )

    def _project_context(self, analysis: AnalysisResult) -> str:
        project = analysis.project
        features = [f"**{feature.name}** ({feature.category})" for feature in project.features]

        lines = [
            "## 📋 Project Context",
            "",
            "### Description",
            project.description,
            "",
            "### Core Features",
            bullet_list(features, empty="- None specified"),
            "",
            "### Tech Stack",
        ]
        stack = project.tech_stack
        for label, layer in (
            ("Frontend", stack.frontend),
            ("Backend", stack.backend),
            ("Database", stack.database),
            ("Infrastructure", stack.infrastructure),
            ("Tools", stack.tools),
        ):
            if layer:
                lines.append(f"**{label}:** {', '.join(layer)}")
        return "\n".join(lines)

    def _discovery(self, discovery: Optional[DiscoveryData]) -> str:
        if discovery is None:
            return ""
        answered = list(discovery.answered())
        if not answered:
            return ""

        parts = ["## 🔍 Discovery Insights", ""]
        for question, answer in answered:
            parts.append(f"**{question.question}**  \n{answer}\n")
        return "\n".join(parts).rstrip()

    def _mcp_section(self, analysis: AnalysisResult) -> str:
        parts = [
            "## 🔧 Available MCP Servers\n\n"
            "The following MCP servers are available for this project:\n"
        ]
        for mcp in analysis.recommended_mcps:
            block = (
                f"### {mcp.name}\n"
                f"**ID:** `{mcp.id}`  \n"
                f"**Description:** {mcp.description}\n"
            )
            if mcp.reasoning:
                block += f"**Why:** {mcp.reasoning}\n"
            block += (
                f"\n**Capabilities:**\n{bullet_list(mcp.capabilities)}\n\n"
                f"**Use Cases:**\n{bullet_list(mcp.use_cases)}\n"
            )
            parts.append(block)
        return "\n".join(parts).rstrip()

    def _agents_section(self, analysis: AnalysisResult) -> str:
        agents = analysis.required_agents
        parts = [
            "## 🤖 AI Agents\n\n"
            f"This project requires {len(agents)} specialized AI agents working together:\n"
        ]
        for index, agent in enumerate(agents, start=1):
            emoji = PRIORITY_EMOJI.get(agent.priority, "")
            parts.append(
                f"### {index}. {agent.name} {emoji}\n\n"
                f"**Role:** {agent.role}\n\n"
                f"**Responsibilities:**\n{bullet_list(agent.responsibilities)}\n\n"
                f"**MCP Access:**\n{bullet_list([f'`{m}`' for m in agent.mcp_access], empty='- None')}\n\n"
                f"**Collaborates With:**\n"
                f"{bullet_list(agent.collaborates_with, empty='- Works independently')}\n"
            )
        return "\n".join(parts).rstrip()

    def _task_breakdown(self, analysis: AnalysisResult) -> str:
        tasks = analysis.task_breakdown
        parts = [
            "## 📊 Task Breakdown\n\n"
            f"Total Tasks: {len(tasks)}  \n"
            f"Estimated Total Hours: {analysis.total_hours}\n"
        ]

        # Group by agent, keeping first-appearance order
        grouped: dict[str, list[Task]] = {}
        for task in tasks:
            grouped.setdefault(task.assigned_agent, []).append(task)

        for agent_id, agent_tasks in grouped.items():
            agent = analysis.get_agent(agent_id)
            heading = agent.name if agent else agent_id
            hours = sum(task.estimated_hours for task in agent_tasks)
            entries = "\n".join(
                f"**{task.id}:** {task.title}  \n"
                f"{task.description}  \n"
                f"*Estimated: {task.estimated_hours}h | "
                f"Dependencies: {', '.join(task.dependencies) or 'None'}*\n"
                for task in agent_tasks
            )
            parts.append(f"### {heading} ({hours}h)\n\n{entries}")
        return "\n".join(parts).rstrip()

    def _collaboration_protocol(self, analysis: AnalysisResult) -> str:
        protocol = analysis.collaboration_protocol
        return (
            "## 🤝 Collaboration Protocol\n\n"
            f"### Communication Channels\n{bullet_list(protocol.communication_channels)}\n\n"
            f"### Review Process\n{bullet_list(protocol.review_process)}\n\n"
            f"### Conflict Resolution\n{bullet_list(protocol.conflict_resolution)}\n\n"
            f"### Progress Tracking\n{bullet_list(protocol.progress_tracking)}"
        )

    def _footer(self) -> str:
        return GETTING_STARTED


GETTING_STARTED = """## 🚀 Getting Started

**IMPORTANT INSTRUCTIONS FOR CLAUDE CODE:**

1. **Read this entire prompt carefully** before starting any work
2. **Managing Agent coordinates all activities** - defer to Managing Agent for decisions
3. **Each agent should**:
   - Focus on their assigned responsibilities
   - Use only their assigned MCP servers
   - Communicate through code comments and documentation
   - Request review from appropriate agents
4. **Follow the task breakdown order** unless Managing Agent decides otherwise
5. **Maintain code quality**:
   - Write clean, documented code
   - Follow TypeScript best practices
   - Include error handling
   - Write tests where applicable

### First Steps

```
[Managing Agent] START HERE:

1. Initialize project structure using desktop-commander
2. Set up Git repository and push to GitHub
3. Delegate tasks to appropriate agents according to the Task Breakdown
4. Monitor progress and coordinate between agents

Begin execution now!
```

---

**⚡ PROJECT GENERATION COMPLETE - START BUILDING! ⚡**"""
