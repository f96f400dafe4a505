"""
System-wide constants for the project generator.
"""

from enum import Enum


# =============================================================================
# Enums
# =============================================================================


class ProjectType(str, Enum):
    """Kinds of project the wizard can scaffold."""

    SAAS = "saas"
    WEBSITE = "website"
    API = "api"
    MOBILE_APP = "mobile-app"
    CLI_TOOL = "cli-tool"
    DESKTOP_APP = "desktop-app"
    CHROME_EXTENSION = "chrome-extension"
    AUTOMATION_SCRIPT = "automation-script"


class FeatureCategory(str, Enum):
    """Well-known feature categories the analyzer reacts to."""

    AUTHENTICATION = "authentication"
    DATABASE = "database"
    STORAGE = "storage"
    REALTIME = "realtime"
    PAYMENTS = "payments"
    EMAIL = "email"
    ANALYTICS = "analytics"
    MONITORING = "monitoring"
    SEARCH = "search"
    AI = "ai"
    AUTOMATION = "automation"


class Complexity(str, Enum):
    """Estimated project complexity tiers."""

    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    ENTERPRISE = "enterprise"


class AgentPriority(str, Enum):
    """Priority tier of an agent role."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class QuestionType(str, Enum):
    """Input types for discovery questions."""

    TEXT = "text"
    TEXTAREA = "textarea"
    MULTIPLE_CHOICE = "multiple-choice"
    CHECKBOXES = "checkboxes"


class QuestionCategory(str, Enum):
    """Topics discovery questions are grouped under."""

    DESIGN = "design"
    FUNCTIONALITY = "functionality"
    DATA = "data"
    AUDIENCE = "audience"
    TECHNICAL = "technical"
    OTHER = "other"


# =============================================================================
# API Constants
# =============================================================================

API_VERSION = "v1"
API_PREFIX = f"/api/{API_VERSION}"

SERVICE_NAME = "Project Generator Pro"

# =============================================================================
# Agent Constants
# =============================================================================

MANAGING_AGENT_ID = "managing-agent"
FRONTEND_AGENT_ID = "frontend-agent"
BACKEND_AGENT_ID = "backend-agent"
DATA_AGENT_ID = "data-agent"
SECURITY_AGENT_ID = "security-agent"
QA_AGENT_ID = "qa-agent"
DOCUMENTATION_AGENT_ID = "documentation-agent"
DEVOPS_AGENT_ID = "devops-agent"
RESEARCH_AGENT_ID = "research-agent"

PRIORITY_EMOJI = {
    AgentPriority.CRITICAL.value: "🔴",
    AgentPriority.HIGH.value: "🟠",
    AgentPriority.MEDIUM.value: "🟡",
    AgentPriority.LOW.value: "🟢",
}

# =============================================================================
# MCP Constants
# =============================================================================

# Always part of a generated project, whatever the AI recommends
REQUIRED_MCP_IDS = ("desktop-commander", "github")

# Registry entries offered to the model when asking for a recommendation
MAX_MCPS_IN_PROMPT = 12

# =============================================================================
# Project Defaults
# =============================================================================

DEFAULT_COMPLEXITY = Complexity.MODERATE
DEFAULT_DURATION = "2-4 weeks"
DEFAULT_TEAM_SIZE = 3

# =============================================================================
# Scaffold Layout
# =============================================================================

CLAUDE_DIR = ".claude"
AGENTS_DIR = f"{CLAUDE_DIR}/agents"
PROMPT_FILENAME = "PROJECT_PROMPT.md"
MCP_CONFIG_FILENAME = "mcp-config.json"
MCP_LAUNCH_CONFIG_FILENAME = ".mcp.json"

BASE_DIRECTORIES = [CLAUDE_DIR, AGENTS_DIR, "src", "docs", "tests"]

TYPE_DIRECTORIES = {
    ProjectType.SAAS.value: ["src/components", "src/pages", "src/lib", "public"],
    ProjectType.WEBSITE.value: ["src/components", "src/pages", "src/lib", "public"],
    ProjectType.API.value: ["src/routes", "src/middleware", "src/models"],
    ProjectType.CLI_TOOL.value: ["src/commands", "src/utils"],
}
