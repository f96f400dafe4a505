"""
Project analyzer - turns a ProjectConfig into MCP servers, agents and a task plan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from project_generator.core.constants import (
    BACKEND_AGENT_ID,
    DATA_AGENT_ID,
    DEVOPS_AGENT_ID,
    DOCUMENTATION_AGENT_ID,
    FRONTEND_AGENT_ID,
    MANAGING_AGENT_ID,
    QA_AGENT_ID,
    RESEARCH_AGENT_ID,
    SECURITY_AGENT_ID,
    AgentPriority,
    Complexity,
    FeatureCategory,
    ProjectType,
)
from project_generator.core.logging import get_logger
from project_generator.domain.analysis import (
    Agent,
    AnalysisResult,
    CollaborationProtocol,
    MCPServer,
    Task,
)
from project_generator.domain.project import ProjectConfig
from project_generator.llm.claude_client import ClaudeClient
from project_generator.registries.mcp_servers import (
    MCP_REGISTRY,
    get_mcp_by_id,
    get_required_mcps,
)

logger = get_logger(__name__)

Predicate = Callable[[ProjectConfig], bool]


def _type_in(*types: ProjectType) -> Predicate:
    values = {t.value for t in types}
    return lambda config: config.type in values


def _has_category(category: FeatureCategory) -> Predicate:
    return lambda config: config.has_feature_category(category.value)


def _complexity_in(*tiers: Complexity) -> Predicate:
    values = {t.value for t in tiers}
    return lambda config: config.complexity in values


def _always(config: ProjectConfig) -> bool:
    return True


@dataclass(frozen=True)
class RoleRule:
    """An agent role and the condition under which a project needs it."""

    id: str
    name: str
    role: str
    responsibilities: tuple[str, ...]
    preferred_mcps: tuple[str, ...]
    collaborates_with: tuple[str, ...]
    priority: AgentPriority
    applies: Predicate = field(default=_always)

    def build(self, mcp_ids: list[str]) -> Agent:
        available = set(mcp_ids)
        return Agent(
            id=self.id,
            name=self.name,
            role=self.role,
            responsibilities=list(self.responsibilities),
            mcp_access=[mcp_id for mcp_id in self.preferred_mcps if mcp_id in available],
            collaborates_with=list(self.collaborates_with),
            priority=self.priority,
        )


MANAGING_ROLE = RoleRule(
    id=MANAGING_AGENT_ID,
    name="Managing Agent",
    role="Project Orchestrator & Strategic Decision Maker",
    responsibilities=(
        "Coordinate all agents and delegate tasks",
        "Make strategic architectural decisions",
        "Resolve conflicts between agents",
        "Track overall project progress",
        "Ensure code quality standards",
        "Manage project timeline and priorities",
        "Review and approve all major changes",
    ),
    preferred_mcps=(),
    collaborates_with=(),
    priority=AgentPriority.CRITICAL,
)

# Evaluated in order; the managing role always comes first and is handled separately
ROLE_RULES: tuple[RoleRule, ...] = (
    RoleRule(
        id=FRONTEND_AGENT_ID,
        name="Frontend Agent",
        role="UI/UX Developer",
        responsibilities=(
            "Build responsive user interfaces",
            "Implement component architecture",
            "Handle state management",
            "Optimize frontend performance",
            "Ensure accessibility standards",
            "Integrate with backend APIs",
            "Implement design systems",
        ),
        preferred_mcps=("desktop-commander", "github", "chrome-devtools"),
        collaborates_with=(MANAGING_AGENT_ID, BACKEND_AGENT_ID),
        priority=AgentPriority.HIGH,
        applies=_type_in(ProjectType.SAAS, ProjectType.WEBSITE, ProjectType.MOBILE_APP),
    ),
    RoleRule(
        id=BACKEND_AGENT_ID,
        name="Backend Agent",
        role="API & Business Logic Developer",
        responsibilities=(
            "Design and implement REST/GraphQL APIs",
            "Develop business logic and services",
            "Handle data validation and processing",
            "Implement authentication and authorization",
            "Optimize database queries",
            "Build scalable architecture",
            "Handle error management",
        ),
        preferred_mcps=("desktop-commander", "github", "supabase", "n8n"),
        collaborates_with=(MANAGING_AGENT_ID, FRONTEND_AGENT_ID, DATA_AGENT_ID),
        priority=AgentPriority.HIGH,
        applies=_type_in(ProjectType.SAAS, ProjectType.API, ProjectType.WEBSITE),
    ),
    RoleRule(
        id=DATA_AGENT_ID,
        name="Data Agent",
        role="Database Architect & Data Engineer",
        responsibilities=(
            "Design optimal database schemas",
            "Create and manage migrations",
            "Implement data seeding strategies",
            "Optimize query performance",
            "Handle data relationships",
            "Implement caching strategies",
            "Ensure data integrity",
        ),
        preferred_mcps=("desktop-commander", "github", "supabase", "airtable"),
        collaborates_with=(MANAGING_AGENT_ID, BACKEND_AGENT_ID),
        priority=AgentPriority.HIGH,
        applies=_has_category(FeatureCategory.DATABASE),
    ),
    RoleRule(
        id=SECURITY_AGENT_ID,
        name="Security Agent",
        role="Security & Authentication Specialist",
        responsibilities=(
            "Implement authentication flows",
            "Set up authorization rules",
            "Configure security policies (RLS, CORS)",
            "Handle sensitive data encryption",
            "Implement input validation",
            "Conduct security audits",
            "Manage API keys and secrets",
        ),
        preferred_mcps=("desktop-commander", "github", "supabase"),
        collaborates_with=(MANAGING_AGENT_ID, BACKEND_AGENT_ID),
        priority=AgentPriority.HIGH,
        applies=_has_category(FeatureCategory.AUTHENTICATION),
    ),
    RoleRule(
        id=QA_AGENT_ID,
        name="QA Agent",
        role="Quality Assurance & Testing Specialist",
        responsibilities=(
            "Write unit and integration tests",
            "Implement E2E test suites",
            "Perform code reviews",
            "Test edge cases and error scenarios",
            "Ensure code coverage standards",
            "Validate user flows",
            "Report and track bugs",
        ),
        preferred_mcps=("desktop-commander", "github", "chrome-devtools"),
        collaborates_with=(MANAGING_AGENT_ID,),
        priority=AgentPriority.MEDIUM,
    ),
    RoleRule(
        id=DOCUMENTATION_AGENT_ID,
        name="Documentation Agent",
        role="Technical Writer & Documentation Specialist",
        responsibilities=(
            "Write comprehensive README files",
            "Document API endpoints",
            "Create code comments and JSDoc",
            "Write setup and deployment guides",
            "Maintain changelog",
            "Create user documentation",
            "Document architecture decisions",
        ),
        preferred_mcps=("desktop-commander", "github", "context7"),
        collaborates_with=(MANAGING_AGENT_ID,),
        priority=AgentPriority.MEDIUM,
    ),
    RoleRule(
        id=DEVOPS_AGENT_ID,
        name="DevOps Agent",
        role="Deployment & Infrastructure Engineer",
        responsibilities=(
            "Set up CI/CD pipelines",
            "Configure deployment environments",
            "Implement monitoring and logging",
            "Manage infrastructure as code",
            "Optimize build processes",
            "Handle container orchestration",
            "Ensure deployment reliability",
        ),
        preferred_mcps=("desktop-commander", "github", "ssh"),
        collaborates_with=(MANAGING_AGENT_ID,),
        priority=AgentPriority.MEDIUM,
    ),
    RoleRule(
        id=RESEARCH_AGENT_ID,
        name="Research Agent",
        role="Technology Researcher & Advisor",
        responsibilities=(
            "Research best practices and patterns",
            "Evaluate technology choices",
            "Find and recommend libraries",
            "Stay updated on latest developments",
            "Provide technical guidance",
            "Identify potential issues early",
            "Suggest optimizations",
        ),
        preferred_mcps=("desktop-commander", "context7", "apify"),
        collaborates_with=(MANAGING_AGENT_ID,),
        priority=AgentPriority.LOW,
        applies=_complexity_in(Complexity.COMPLEX, Complexity.ENTERPRISE),
    ),
)

DEFAULT_COLLABORATION_PROTOCOL = CollaborationProtocol(
    communication_channels=[
        "Code comments for implementation details",
        "Git commit messages for change descriptions",
        "Pull request descriptions for feature explanations",
        "Documentation for architectural decisions",
    ],
    review_process=[
        "All code must be reviewed by Managing Agent",
        "Backend changes reviewed by Security Agent",
        "Frontend changes tested by QA Agent",
        "Documentation reviewed by Documentation Agent",
        "No direct commits to main branch",
    ],
    conflict_resolution=[
        "Managing Agent makes final decisions",
        "Technical debates resolved through proof-of-concept",
        "Performance concerns validated with benchmarks",
        "Security issues have highest priority",
    ],
    progress_tracking=[
        "Daily status updates in commit messages",
        "Task completion logged in project board",
        "Blockers immediately escalated to Managing Agent",
        "Weekly progress summary by Managing Agent",
    ],
)


class _TaskPlan:
    """Accumulates tasks with sequential ids."""

    def __init__(self) -> None:
        self.tasks: list[Task] = []

    @property
    def last_id(self) -> Optional[str]:
        return self.tasks[-1].id if self.tasks else None

    def add(
        self,
        title: str,
        description: str,
        agent: str,
        dependencies: list[Optional[str]],
        hours: int,
        priority: int,
    ) -> str:
        task_id = f"task-{len(self.tasks) + 1}"
        self.tasks.append(
            Task(
                id=task_id,
                title=title,
                description=description,
                assigned_agent=agent,
                dependencies=[dep for dep in dependencies if dep],
                estimated_hours=hours,
                priority=priority,
            )
        )
        return task_id


class ProjectAnalyzer:
    """
    Derives the team, tooling and task plan for a project.

    Only the MCP selection talks to the model. Any failure there falls back
    to the universally required servers, so analyze() never fails because
    of the AI call.
    """

    def __init__(self, claude_client: ClaudeClient) -> None:
        self.claude_client = claude_client

    async def analyze(self, config: ProjectConfig) -> AnalysisResult:
        """
        Run the full analysis.

        Args:
            config: Project to analyze

        Returns:
            AnalysisResult with MCPs, agents, tasks and the collaboration protocol
        """
        logger.info("Analyzing project", project=config.name, type=config.type)

        mcps = await self.select_mcps(config)
        agents = self.select_agents(config, mcps)
        tasks = self.generate_tasks(agents)

        logger.info(
            "Project analysis complete",
            project=config.name,
            mcps=len(mcps),
            agents=len(agents),
            tasks=len(tasks),
        )

        return AnalysisResult(
            project=config,
            recommended_mcps=mcps,
            required_agents=agents,
            task_breakdown=tasks,
            collaboration_protocol=DEFAULT_COLLABORATION_PROTOCOL,
        )

    async def select_mcps(self, config: ProjectConfig) -> list[MCPServer]:
        """
        Pick MCP servers with the model's help.

        Unknown ids are ignored, duplicates collapse, and the required
        servers are always present (prepended when the model left them out).
        """
        try:
            recommendations = await self.claude_client.recommend_mcps(config, MCP_REGISTRY)
        except Exception as e:
            logger.warning("AI MCP recommendation failed, using required MCPs", error=str(e))
            return get_required_mcps()

        selected: dict[str, MCPServer] = {}
        for entry in recommendations:
            mcp = get_mcp_by_id(entry["id"])
            if mcp is None:
                logger.debug("Ignoring unknown MCP id", mcp_id=entry["id"])
                continue
            if mcp.id in selected:
                continue
            reasoning = entry.get("reasoning")
            selected[mcp.id] = mcp.model_copy(
                update={
                    "required": mcp.required or entry.get("required") is True,
                    "reasoning": str(reasoning) if reasoning else None,
                }
            )

        missing = [mcp for mcp in get_required_mcps() if mcp.id not in selected]
        return missing + list(selected.values())

    def select_agents(self, config: ProjectConfig, mcps: list[MCPServer]) -> list[Agent]:
        """Apply the role rule table; the managing agent is first and sees everything."""
        mcp_ids = [mcp.id for mcp in mcps]

        others = [rule.build(mcp_ids) for rule in ROLE_RULES if rule.applies(config)]
        managing = MANAGING_ROLE.build(mcp_ids).model_copy(
            update={
                "mcp_access": list(mcp_ids),
                "collaborates_with": [agent.id for agent in others],
            }
        )
        return [managing, *others]

    def generate_tasks(self, agents: list[Agent]) -> list[Task]:
        """
        Build the phase-ordered task list.

        Every dependency points at a task emitted earlier in the same plan.
        """
        present = {agent.id for agent in agents}
        plan = _TaskPlan()

        # Foundation
        init_id = plan.add(
            "Initialize Project Structure",
            "Create project directories, initialize git, set up package.json",
            MANAGING_AGENT_ID,
            [],
            hours=1,
            priority=1,
        )
        env_id = plan.add(
            "Configure Development Environment",
            "Set up TypeScript, ESLint, Prettier, and other dev tools",
            MANAGING_AGENT_ID,
            [init_id],
            hours=2,
            priority=2,
        )

        # Data
        if DATA_AGENT_ID in present:
            plan.add(
                "Design Database Schema",
                "Define tables, relationships, and constraints",
                DATA_AGENT_ID,
                [env_id],
                hours=4,
                priority=3,
            )
            plan.add(
                "Implement Database Migrations",
                "Create migration files and seed data",
                DATA_AGENT_ID,
                [plan.last_id],
                hours=3,
                priority=4,
            )

        # Backend
        if BACKEND_AGENT_ID in present:
            plan.add(
                "Build API Endpoints",
                "Implement REST/GraphQL APIs with business logic",
                BACKEND_AGENT_ID,
                [plan.last_id if DATA_AGENT_ID in present else env_id],
                hours=8,
                priority=5,
            )

        # Security
        if SECURITY_AGENT_ID in present:
            plan.add(
                "Implement Authentication",
                "Set up user authentication and authorization",
                SECURITY_AGENT_ID,
                [plan.last_id if BACKEND_AGENT_ID in present else env_id],
                hours=6,
                priority=6,
            )

        # Frontend
        if FRONTEND_AGENT_ID in present:
            plan.add(
                "Build UI Components",
                "Create reusable React components and pages",
                FRONTEND_AGENT_ID,
                [env_id],
                hours=10,
                priority=7,
            )
            plan.add(
                "Integrate Frontend with Backend",
                "Connect UI to API endpoints and handle state",
                FRONTEND_AGENT_ID,
                [plan.last_id],
                hours=6,
                priority=8,
            )

        # QA
        if QA_AGENT_ID in present:
            plan.add(
                "Write Test Suites",
                "Implement unit, integration, and E2E tests",
                QA_AGENT_ID,
                [plan.last_id],
                hours=8,
                priority=9,
            )

        # Documentation
        plan.add(
            "Write Documentation",
            "Create README, API docs, and user guides",
            DOCUMENTATION_AGENT_ID,
            [],
            hours=4,
            priority=10,
        )

        # Deployment
        if DEVOPS_AGENT_ID in present:
            plan.add(
                "Set Up CI/CD Pipeline",
                "Configure GitHub Actions and deployment",
                DEVOPS_AGENT_ID,
                [plan.last_id],
                hours=5,
                priority=11,
            )

        return plan.tasks
