"""
MCP server registry - tool integrations a generated project can declare.
"""

from dataclasses import dataclass, field
from typing import Optional

from project_generator.core.constants import REQUIRED_MCP_IDS
from project_generator.domain.analysis import MCPServer


@dataclass(frozen=True)
class LaunchSpec:
    """How a tool integration is started from a project's .mcp.json."""

    package: str
    extra_args: tuple[str, ...] = field(default_factory=tuple)
    # Env var name -> value written into the launch config (a ${VAR} reference, never a secret)
    env: dict[str, str] = field(default_factory=dict)


MCP_REGISTRY: list[MCPServer] = [
    # Filesystem & project management
    MCPServer(
        id="desktop-commander",
        name="Desktop Commander",
        description="Comprehensive file system operations, terminal access, and process management",
        capabilities=[
            "File read/write/edit operations",
            "Directory management",
            "File search (content and names)",
            "Terminal command execution",
            "Process management",
            "Interactive REPL sessions",
            "Configuration management",
        ],
        use_cases=[
            "Project file creation",
            "Code generation",
            "Build automation",
            "Local development tasks",
            "Script execution",
            "Data analysis with Python/Node",
            "File transformations",
        ],
        categories=["filesystem", "automation"],
        required=True,
    ),
    # Version control
    MCPServer(
        id="github",
        name="GitHub MCP",
        description="Complete GitHub repository management and collaboration",
        capabilities=[
            "Repository creation and management",
            "File operations (CRUD)",
            "Branch management",
            "Pull request workflows",
            "Issue tracking",
            "Code search",
            "Release management",
            "Collaboration features",
        ],
        use_cases=[
            "Repository initialization",
            "Code versioning",
            "Team collaboration",
            "CI/CD integration",
            "Project documentation",
            "Issue management",
            "Code review workflows",
        ],
        categories=["version-control", "collaboration"],
        required=True,
    ),
    # Databases & backend
    MCPServer(
        id="supabase",
        name="Supabase MCP",
        description="PostgreSQL database, authentication, storage, and backend services",
        capabilities=[
            "Database schema management",
            "SQL query execution",
            "Migrations and versioning",
            "Real-time subscriptions",
            "Authentication management",
            "File storage",
            "Edge Functions deployment",
            "Performance monitoring",
            "Row-level security (RLS)",
        ],
        use_cases=[
            "Full-stack applications",
            "Real-time apps",
            "User authentication",
            "Data persistence",
            "API backends",
            "File uploads",
            "Serverless functions",
        ],
        categories=["database", "backend", "authentication"],
    ),
    MCPServer(
        id="airtable",
        name="Airtable MCP",
        description="No-code database with spreadsheet interface",
        capabilities=[
            "Table/record CRUD operations",
            "Field management",
            "Views and filters",
            "Attachments handling",
            "Collaborative features",
            "API access",
            "Webhooks",
        ],
        use_cases=[
            "Rapid prototyping",
            "Content management",
            "Project tracking",
            "CRM systems",
            "Workflow automation",
            "Data collection",
            "Collaborative databases",
        ],
        categories=["database", "automation"],
    ),
    # Web scraping & data collection
    MCPServer(
        id="apify",
        name="Apify MCP",
        description="Web scraping, data extraction, and automation platform",
        capabilities=[
            "Actor execution (scrapers)",
            "Dataset management",
            "Web browser automation",
            "API scraping",
            "Data transformation",
            "Scheduled runs",
            "Proxy management",
        ],
        use_cases=[
            "Web scraping",
            "Market research",
            "Competitor analysis",
            "Data aggregation",
            "Content monitoring",
            "Lead generation",
            "Price tracking",
        ],
        categories=["api", "automation", "data"],
    ),
    MCPServer(
        id="chrome-devtools",
        name="Chrome DevTools MCP",
        description="Browser automation and web application testing",
        capabilities=[
            "Page navigation",
            "Element interaction (click, fill, hover)",
            "Screenshot capture",
            "Network request inspection",
            "Console log access",
            "Performance profiling",
            "CPU/Network throttling",
            "Dialog handling",
            "JavaScript execution",
        ],
        use_cases=[
            "E2E testing",
            "Web scraping",
            "UI automation",
            "Performance testing",
            "Visual regression testing",
            "Form automation",
            "Browser-based workflows",
        ],
        categories=["browser", "automation", "testing"],
    ),
    # Automation & workflows
    MCPServer(
        id="n8n",
        name="n8n MCP",
        description="Workflow automation and integration platform",
        capabilities=[
            "Workflow creation and execution",
            "Node-based automation",
            "API integrations",
            "Data transformation",
            "Scheduled triggers",
            "Webhook support",
            "Error handling",
            "Template library access",
        ],
        use_cases=[
            "API integration",
            "Data synchronization",
            "Event-driven automation",
            "ETL pipelines",
            "Notification systems",
            "Multi-step workflows",
            "Business process automation",
        ],
        categories=["automation", "api", "integration"],
    ),
    # Documentation & knowledge
    MCPServer(
        id="context7",
        name="Context7 MCP",
        description="Documentation search and library information",
        capabilities=[
            "Library documentation lookup",
            "Code examples retrieval",
            "API reference search",
            "Best practices lookup",
            "Framework guides",
            "Technical specifications",
            "Version compatibility checks",
        ],
        use_cases=[
            "Learning new libraries",
            "API integration guidance",
            "Framework setup",
            "Troubleshooting",
            "Code implementation examples",
            "Technology research",
            "Documentation generation",
        ],
        categories=["documentation", "research"],
    ),
    # Infrastructure & deployment
    MCPServer(
        id="ssh",
        name="SSH MCP",
        description="Remote server access and management",
        capabilities=[
            "Remote command execution",
            "File transfer",
            "Server configuration",
            "Process management",
            "Log monitoring",
            "Service management",
            "Sudo operations",
        ],
        use_cases=[
            "Server deployment",
            "Remote management",
            "Infrastructure automation",
            "Log analysis",
            "Service monitoring",
            "Security audits",
            "Backup operations",
        ],
        categories=["deployment", "infrastructure"],
    ),
]

LAUNCH_SPECS: dict[str, LaunchSpec] = {
    "desktop-commander": LaunchSpec(package="@wonderwhy-er/desktop-commander"),
    "github": LaunchSpec(
        package="@modelcontextprotocol/server-github",
        env={"GITHUB_PERSONAL_ACCESS_TOKEN": "${GITHUB_TOKEN}"},
    ),
    "supabase": LaunchSpec(
        package="@supabase/mcp-server-supabase",
        extra_args=("--project-ref=${SUPABASE_PROJECT_REF}",),
        env={"SUPABASE_ACCESS_TOKEN": "${SUPABASE_ACCESS_TOKEN}"},
    ),
    "airtable": LaunchSpec(
        package="airtable-mcp-server",
        env={"AIRTABLE_API_KEY": "${AIRTABLE_API_KEY}"},
    ),
    "apify": LaunchSpec(
        package="@apify/actors-mcp-server",
        env={"APIFY_TOKEN": "${APIFY_TOKEN}"},
    ),
    "chrome-devtools": LaunchSpec(package="chrome-devtools-mcp"),
    "n8n": LaunchSpec(
        package="n8n-mcp",
        env={"N8N_API_URL": "${N8N_API_URL}", "N8N_API_KEY": "${N8N_API_KEY}"},
    ),
    "context7": LaunchSpec(package="@upstash/context7-mcp"),
    "ssh": LaunchSpec(
        package="ssh-mcp",
        extra_args=("--", "--host=${SSH_HOST}", "--user=${SSH_USER}"),
    ),
}

_BY_ID: dict[str, MCPServer] = {mcp.id: mcp for mcp in MCP_REGISTRY}


def get_mcp_by_id(mcp_id: str) -> Optional[MCPServer]:
    return _BY_ID.get(mcp_id)


def get_mcps_by_category(category: str) -> list[MCPServer]:
    return [mcp for mcp in MCP_REGISTRY if category in mcp.categories]


def get_required_mcps() -> list[MCPServer]:
    """Return the universally required servers in their canonical order."""
    return [_BY_ID[mcp_id] for mcp_id in REQUIRED_MCP_IDS]


def get_launch_spec(mcp_id: str) -> Optional[LaunchSpec]:
    return LAUNCH_SPECS.get(mcp_id)


def search_mcps(query: str) -> list[MCPServer]:
    """Case-insensitive search over name, description, capabilities and use cases."""
    needle = query.lower()
    return [
        mcp
        for mcp in MCP_REGISTRY
        if needle in mcp.name.lower()
        or needle in mcp.description.lower()
        or any(needle in capability.lower() for capability in mcp.capabilities)
        or any(needle in use_case.lower() for use_case in mcp.use_cases)
    ]
