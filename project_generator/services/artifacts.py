"""
Renderers for the files written into a generated project.

Every function here is pure: it takes domain models and returns file content.
"""

import json
import re
from datetime import datetime, timezone
from typing import Any, Optional

from project_generator.core.constants import (
    AGENTS_DIR,
    CLAUDE_DIR,
    MCP_CONFIG_FILENAME,
    PRIORITY_EMOJI,
    PROMPT_FILENAME,
    REQUIRED_MCP_IDS,
    SERVICE_NAME,
    FeatureCategory,
    ProjectType,
)
from project_generator.domain.analysis import Agent, MCPServer
from project_generator.domain.project import ProjectConfig
from project_generator.registries.mcp_servers import get_launch_spec
from project_generator.services.prompt_generator import bullet_list

_ENV_REFERENCE = re.compile(r"\$\{([A-Z0-9_]+)\}")


def _timestamp(now: Optional[datetime]) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def render_agent_markdown(agent: Agent, now: Optional[datetime] = None) -> str:
    """Render .claude/agents/<id>.md for one agent."""
    emoji = PRIORITY_EMOJI.get(agent.priority, "")
    mcp_access = bullet_list([f"`{mcp_id}`" for mcp_id in agent.mcp_access], empty="- None")
    collaborators = bullet_list(agent.collaborates_with, empty="- Works independently")
    criteria = bullet_list([f"Successfully completed: {r}" for r in agent.responsibilities])

    return (
        f"# {agent.name}\n\n"
        f"**Role:** {agent.role}\n\n"
        f"**Priority:** {emoji} {agent.priority.upper()}\n\n"
        f"## Responsibilities\n\n{bullet_list(agent.responsibilities)}\n\n"
        f"## MCP Access\n\n{mcp_access}\n\n"
        f"## Collaborates With\n\n{collaborators}\n\n"
        f"## Success Criteria\n\n{criteria}\n\n"
        "---\n\n"
        f"**Generated by {SERVICE_NAME}**\n"
        f"**Date:** {_timestamp(now)}\n"
    )


def render_readme(
    config: ProjectConfig,
    sanitized_name: str,
    agents: Optional[list[Agent]] = None,
    now: Optional[datetime] = None,
) -> str:
    """Render the project README.md."""
    metadata = config.metadata
    features = bullet_list(
        [f"**{f.name}** ({f.category})" for f in config.features],
        empty="- To be defined",
    )
    stack_lines = [
        f"**{label}:** {', '.join(layer)}"
        for label, layer in (
            ("Frontend", config.tech_stack.frontend),
            ("Backend", config.tech_stack.backend),
            ("Database", config.tech_stack.database),
        )
        if layer
    ]
    stack = "\n".join(stack_lines) or "To be decided"

    if agents:
        agent_lines = bullet_list([f"**{a.name}**: {a.role}" for a in agents])
        agent_intro = f"This project uses {len(agents)} specialized AI agents:\n{agent_lines}"
    else:
        agent_intro = (
            f"This project uses {metadata.team_size} specialized AI agents:\n"
            "- Managing Agent (coordinates all activities)\n"
            "- Additional agents based on project requirements"
        )

    return f"""# {config.name}

{config.description}

## Project Information

- **Type:** {config.type}
- **Complexity:** {metadata.estimated_complexity}
- **Estimated Duration:** {metadata.estimated_duration}
- **Team Size:** {metadata.team_size} AI Agents

## Features

{features}

## Tech Stack

{stack}

## Getting Started

1. **Open in Claude Code**
   ```bash
   cd {sanitized_name}
   ```

2. **Review the project prompt**
   - Open `{CLAUDE_DIR}/{PROMPT_FILENAME}`
   - Read agent definitions in `{AGENTS_DIR}/`
   - Check MCP configuration in `{CLAUDE_DIR}/{MCP_CONFIG_FILENAME}`

3. **Install dependencies**
   ```bash
   npm install
   ```

4. **Start development**
   ```bash
   npm run dev
   ```

## Project Structure

```
{sanitized_name}/
├── .claude/
│   ├── PROJECT_PROMPT.md    # Main project prompt for Claude Code
│   ├── agents/              # Individual agent definitions
│   └── mcp-config.json      # MCP server configuration
├── src/                     # Source code
├── docs/                    # Documentation
├── tests/                   # Test files
├── .mcp.json                # MCP server launch configuration
├── README.md
├── package.json
└── .gitignore
```

## AI Agents

{agent_intro}

See `{AGENTS_DIR}/` for detailed agent definitions.

## Next Steps

1. Review and customize the generated prompt
2. Let Claude Code agents start building!
3. Monitor progress and provide feedback
4. Test and iterate

---

**Generated by {SERVICE_NAME}**
**Date:** {_timestamp(now)}
"""


def render_package_json(config: ProjectConfig, sanitized_name: str) -> str:
    """Render package.json."""
    return _to_json(
        {
            "name": sanitized_name,
            "version": "0.1.0",
            "description": config.description,
            "type": "module",
            "scripts": {
                "dev": 'echo "Setup your dev script here"',
                "build": 'echo "Setup your build script here"',
                "start": 'echo "Setup your start script here"',
                "test": 'echo "Setup your test script here"',
            },
            "keywords": [config.type, "generated-project"],
            "author": "",
            "license": "MIT",
        }
    )


GITIGNORE = """# Dependencies
node_modules/
.pnp
.pnp.js

# Testing
coverage/
*.log

# Production
dist/
build/
.output/

# Environment
.env
.env.local
.env.production
.env.development
*.local

# IDE
.vscode/
.idea/
*.swp
*.swo
*~

# OS
.DS_Store
Thumbs.db
desktop.ini

# Debug
npm-debug.log*
yarn-debug.log*
yarn-error.log*
pnpm-debug.log*

# Misc
*.tgz
.cache/
.temp/
.tmp/
"""


def render_gitignore() -> str:
    return GITIGNORE


# Feature category -> block appended to .env.example
ENV_BLOCKS: list[tuple[str, str]] = [
    (FeatureCategory.DATABASE.value, "# Database\nDATABASE_URL=\n"),
    (FeatureCategory.AUTHENTICATION.value, "# Authentication\nJWT_SECRET=\nAUTH_PROVIDER_KEY=\n"),
    (FeatureCategory.EMAIL.value, "# Email Service\nSMTP_HOST=\nSMTP_PORT=587\nSMTP_USER=\nSMTP_PASSWORD=\n"),
    (FeatureCategory.PAYMENTS.value, "# Payment Processing\nSTRIPE_SECRET_KEY=\nSTRIPE_WEBHOOK_SECRET=\n"),
    (FeatureCategory.STORAGE.value, "# File Storage\nSTORAGE_BUCKET=\nSTORAGE_ACCESS_KEY=\n"),
    (FeatureCategory.ANALYTICS.value, "# Analytics\nANALYTICS_ID=\n"),
    (FeatureCategory.AI.value, "# AI Services\nOPENAI_API_KEY=\nANTHROPIC_API_KEY=\n"),
]


def render_env_example(config: ProjectConfig, mcps: Optional[list[MCPServer]] = None) -> str:
    """
    Render .env.example with variables for the selected features.

    When MCP servers are given, the variables their launch configuration
    references are listed too.
    """
    blocks = [
        "# Environment Variables\n# Copy this file to .env and fill in your values\n\n"
        "# General\nNODE_ENV=development\n"
    ]
    for category, block in ENV_BLOCKS:
        if config.has_feature_category(category):
            blocks.append(block)

    mcp_vars = sorted(_launch_env_vars(mcps or []))
    if mcp_vars:
        blocks.append("# MCP Servers\n" + "".join(f"{name}=\n" for name in mcp_vars))

    return "\n".join(blocks)


def uses_typescript(config: ProjectConfig) -> bool:
    return config.tech_stack.uses("TypeScript")


def index_filename(config: ProjectConfig) -> str:
    return "index.ts" if uses_typescript(config) else "index.js"


def render_index_file(config: ProjectConfig) -> str:
    """Render the src/index stub."""
    if config.type == ProjectType.API.value:
        return (
            f"/**\n * {config.name} - API Server\n *\n * Generated by {SERVICE_NAME}\n */\n\n"
            f"console.log('{config.name} API starting...');\n\n"
            "// The Backend Agent builds the API server from here.\n"
        )
    return (
        f"/**\n * {config.name}\n *\n * Generated by {SERVICE_NAME}\n */\n\n"
        f"console.log('{config.name} starting...');\n\n"
        "// The project agents build the application from here.\n"
    )


def render_mcp_config(mcps: list[MCPServer]) -> str:
    """Render .claude/mcp-config.json describing the selected servers."""
    return _to_json(
        {
            "mcpServers": [
                {
                    "id": mcp.id,
                    "name": mcp.name,
                    "required": mcp.required or mcp.id in REQUIRED_MCP_IDS,
                    "enabled": True,
                    "description": mcp.description,
                    "capabilities": mcp.capabilities,
                }
                for mcp in mcps
            ]
        }
    )


def build_launch_config(mcps: list[MCPServer], project_path: str) -> dict[str, Any]:
    """
    Build the .mcp.json launch configuration.

    Secrets are never inlined; env values are ${VAR} references resolved
    from the project's .env at launch time.
    """
    servers: dict[str, Any] = {}
    for mcp in mcps:
        spec = get_launch_spec(mcp.id)
        if spec is None:
            continue
        entry: dict[str, Any] = {
            "command": "npx",
            "args": ["-y", spec.package, *spec.extra_args],
        }
        env = dict(spec.env)
        if mcp.id == "desktop-commander":
            env["ALLOWED_DIRECTORIES"] = project_path
        if env:
            entry["env"] = env
        servers[mcp.id] = entry
    return {"mcpServers": servers}


def render_launch_config(mcps: list[MCPServer], project_path: str) -> str:
    return _to_json(build_launch_config(mcps, project_path))


def _launch_env_vars(mcps: list[MCPServer]) -> set[str]:
    names: set[str] = set()
    for mcp in mcps:
        spec = get_launch_spec(mcp.id)
        if spec is None:
            continue
        for value in [*spec.env.values(), *spec.extra_args]:
            names.update(_ENV_REFERENCE.findall(value))
    return names
