"""
Quick-start templates - pre-filled project configurations that skip the feature steps.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from project_generator.core.constants import Complexity, ProjectType
from project_generator.domain.project import (
    ProjectConfig,
    ProjectFeature,
    ProjectMetadata,
    TechStack,
)

TEMPLATE_CATEGORIES = ("web", "api", "tool", "other")


def _feature(feature_id: str, name: str, category: str, required: bool = True) -> ProjectFeature:
    return ProjectFeature(id=feature_id, name=name, category=category, required=required)


@dataclass(frozen=True)
class QuickStartTemplate:
    """A ready-made project configuration."""

    id: str
    name: str
    icon: str
    description: str
    estimated_time: str
    popularity: int
    tags: tuple[str, ...]
    category: str
    type: ProjectType
    features: tuple[ProjectFeature, ...]
    frontend: tuple[str, ...] = field(default_factory=tuple)
    backend: tuple[str, ...] = field(default_factory=tuple)
    database: tuple[str, ...] = field(default_factory=tuple)
    complexity: Complexity = Complexity.SIMPLE
    duration: str = "1 week"
    team_size: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "description": self.description,
            "estimatedTime": self.estimated_time,
            "popularity": self.popularity,
            "tags": list(self.tags),
            "category": self.category,
            "config": {
                "type": self.type.value,
                "features": [f.model_dump(by_alias=True, exclude_none=True) for f in self.features],
                "techStack": {
                    "frontend": list(self.frontend),
                    "backend": list(self.backend),
                    "database": list(self.database),
                },
                "metadata": {
                    "estimatedComplexity": self.complexity.value,
                    "estimatedDuration": self.duration,
                    "teamSize": self.team_size,
                },
            },
        }


QUICK_START_TEMPLATES: list[QuickStartTemplate] = [
    QuickStartTemplate(
        id="saas-starter",
        name="SaaS Starter Kit",
        icon="🚀",
        description="Full-featured SaaS application with authentication, payments, and admin panel",
        estimated_time="15-30 seconds",
        popularity=5,
        tags=("saas", "authentication", "payments", "dashboard"),
        category="web",
        type=ProjectType.SAAS,
        features=(
            _feature("auth-oauth", "OAuth Authentication", "authentication"),
            _feature("payment-stripe", "Stripe Payments", "payments"),
            _feature("db-postgresql", "PostgreSQL Database", "database"),
            _feature("ui-admin", "Admin Dashboard", "ui", required=False),
            _feature("api-rest", "REST API", "api"),
            _feature("email-sendgrid", "Email Integration", "email", required=False),
            _feature("storage-s3", "File Storage", "storage", required=False),
            _feature("analytics-mixpanel", "Analytics", "analytics", required=False),
        ),
        frontend=("Next.js", "TypeScript", "Tailwind CSS"),
        backend=("Node.js", "Express", "Prisma"),
        database=("PostgreSQL", "Redis"),
        complexity=Complexity.MODERATE,
        duration="2-3 weeks",
        team_size=4,
    ),
    QuickStartTemplate(
        id="api-microservice",
        name="API Microservice",
        icon="⚡",
        description="Production-ready REST API with authentication, rate limiting, and documentation",
        estimated_time="15-20 seconds",
        popularity=4,
        tags=("api", "microservice", "backend", "rest"),
        category="api",
        type=ProjectType.API,
        features=(
            _feature("auth-jwt", "JWT Authentication", "authentication"),
            _feature("api-rest", "RESTful Endpoints", "api"),
            _feature("db-mongodb", "MongoDB Database", "database"),
            _feature("api-ratelimit", "Rate Limiting", "security"),
            _feature("api-docs", "Swagger Documentation", "documentation", required=False),
            _feature("monitoring-prometheus", "Monitoring", "monitoring", required=False),
            _feature("cache-redis", "Redis Caching", "performance", required=False),
        ),
        backend=("Node.js", "Express", "TypeScript"),
        database=("MongoDB", "Redis"),
        duration="1 week",
        team_size=2,
    ),
    QuickStartTemplate(
        id="landing-page",
        name="Marketing Landing Page",
        icon="🎨",
        description="Modern landing page with analytics, contact form, and CMS integration",
        estimated_time="10-15 seconds",
        popularity=5,
        tags=("website", "landing", "marketing", "seo"),
        category="web",
        type=ProjectType.WEBSITE,
        features=(
            _feature("ui-responsive", "Responsive Design", "ui"),
            _feature("seo-optimization", "SEO Optimization", "marketing"),
            _feature("analytics-ga", "Google Analytics", "analytics", required=False),
            _feature("form-contact", "Contact Form", "communication"),
            _feature("cms-contentful", "CMS Integration", "content", required=False),
            _feature("animation-framer", "Animations", "ui", required=False),
        ),
        frontend=("Astro", "TypeScript", "Tailwind CSS"),
        duration="3-5 days",
    ),
    QuickStartTemplate(
        id="ecommerce-store",
        name="E-Commerce Store",
        icon="🛍️",
        description="Complete online store with cart, checkout, inventory, and order management",
        estimated_time="20-30 seconds",
        popularity=4,
        tags=("ecommerce", "shop", "payments", "inventory"),
        category="web",
        type=ProjectType.SAAS,
        features=(
            _feature("cart-checkout", "Shopping Cart", "ecommerce"),
            _feature("payment-stripe", "Payment Processing", "payments"),
            _feature("inventory-management", "Inventory System", "ecommerce"),
            _feature("order-tracking", "Order Management", "ecommerce"),
            _feature("auth-customers", "Customer Accounts", "authentication"),
            _feature("search-algolia", "Product Search", "search", required=False),
            _feature("reviews-ratings", "Reviews System", "social", required=False),
            _feature("email-notifications", "Email Notifications", "email", required=False),
        ),
        frontend=("Next.js", "TypeScript", "Tailwind CSS"),
        backend=("Node.js", "Express", "TypeScript"),
        database=("PostgreSQL", "Redis"),
        complexity=Complexity.COMPLEX,
        duration="3-4 weeks",
        team_size=4,
    ),
    QuickStartTemplate(
        id="blog-platform",
        name="Blog Platform",
        icon="📝",
        description="Content management system with Markdown support, comments, and SEO",
        estimated_time="10-20 seconds",
        popularity=3,
        tags=("blog", "content", "cms", "markdown"),
        category="web",
        type=ProjectType.WEBSITE,
        features=(
            _feature("cms-markdown", "Markdown Editor", "content"),
            _feature("auth-authors", "Author Management", "authentication"),
            _feature("comments-system", "Comments System", "social", required=False),
            _feature("seo-optimization", "SEO Features", "marketing"),
            _feature("rss-feed", "RSS Feed", "content", required=False),
            _feature("search-posts", "Search Function", "search", required=False),
        ),
        frontend=("Astro", "MDX", "Tailwind CSS"),
        backend=("Node.js",),
        database=("SQLite",),
        duration="1 week",
        team_size=2,
    ),
    QuickStartTemplate(
        id="admin-dashboard",
        name="Admin Dashboard",
        icon="📊",
        description="Data visualization dashboard with real-time updates and user management",
        estimated_time="15-25 seconds",
        popularity=4,
        tags=("dashboard", "analytics", "admin", "charts"),
        category="web",
        type=ProjectType.SAAS,
        features=(
            _feature("charts-visualization", "Data Visualization", "ui"),
            _feature("realtime-updates", "Real-time Updates", "realtime"),
            _feature("auth-rbac", "Role-Based Access", "authentication"),
            _feature("export-reports", "Report Generation", "reporting", required=False),
            _feature("audit-logs", "Audit Logging", "monitoring", required=False),
            _feature("notifications", "Notifications System", "communication", required=False),
        ),
        frontend=("React", "TypeScript", "Material-UI"),
        backend=("Node.js", "GraphQL"),
        database=("PostgreSQL",),
        complexity=Complexity.MODERATE,
        duration="2 weeks",
        team_size=3,
    ),
    QuickStartTemplate(
        id="cli-tool",
        name="CLI Tool",
        icon="💻",
        description="Command-line tool with interactive prompts and configuration management",
        estimated_time="10-15 seconds",
        popularity=2,
        tags=("cli", "tool", "automation", "terminal"),
        category="tool",
        type=ProjectType.CLI_TOOL,
        features=(
            _feature("cli-commands", "Command Structure", "core"),
            _feature("cli-prompts", "Interactive Prompts", "ui"),
            _feature("config-management", "Config Files", "configuration"),
            _feature("cli-colors", "Colored Output", "ui", required=False),
            _feature("cli-progress", "Progress Bars", "ui", required=False),
        ),
        backend=("Node.js", "TypeScript"),
        duration="3-5 days",
    ),
    QuickStartTemplate(
        id="mobile-backend",
        name="Mobile App Backend",
        icon="📱",
        description="API backend for mobile apps with push notifications and real-time sync",
        estimated_time="15-25 seconds",
        popularity=3,
        tags=("mobile", "api", "backend", "realtime"),
        category="api",
        type=ProjectType.API,
        features=(
            _feature("auth-mobile", "Mobile Authentication", "authentication"),
            _feature("push-notifications", "Push Notifications", "communication"),
            _feature("realtime-sync", "Real-time Sync", "realtime"),
            _feature("file-upload", "File Upload", "storage", required=False),
            _feature("offline-support", "Offline Support", "performance", required=False),
            _feature("analytics-mobile", "Mobile Analytics", "analytics", required=False),
        ),
        backend=("Node.js", "Socket.io", "TypeScript"),
        database=("MongoDB", "Redis"),
        complexity=Complexity.MODERATE,
        duration="2 weeks",
        team_size=3,
    ),
    QuickStartTemplate(
        id="chrome-extension",
        name="Chrome Extension",
        icon="🔌",
        description="Browser extension with popup, background scripts, and content injection",
        estimated_time="10-20 seconds",
        popularity=4,
        tags=("extension", "browser", "chrome", "plugin"),
        category="tool",
        type=ProjectType.CHROME_EXTENSION,
        features=(
            _feature("extension-popup", "Popup Interface", "ui"),
            _feature("background-script", "Background Scripts", "automation"),
            _feature("content-injection", "Content Scripts", "automation"),
            _feature("storage-local", "Local Storage", "storage"),
            _feature("api-integration", "API Integration", "api", required=False),
            _feature("settings-page", "Options Page", "ui", required=False),
        ),
        frontend=("TypeScript", "React", "Webpack"),
        duration="3-5 days",
    ),
    QuickStartTemplate(
        id="discord-bot",
        name="Discord Bot",
        icon="🤖",
        description="Discord bot with slash commands, events, and database integration",
        estimated_time="10-20 seconds",
        popularity=4,
        tags=("discord", "bot", "automation", "chat"),
        category="other",
        type=ProjectType.AUTOMATION_SCRIPT,
        features=(
            _feature("discord-commands", "Slash Commands", "automation"),
            _feature("discord-events", "Event Handlers", "automation"),
            _feature("db-persistence", "Data Persistence", "database"),
            _feature("moderation", "Moderation Tools", "automation", required=False),
            _feature("music-player", "Music Playback", "media", required=False),
            _feature("api-external", "External APIs", "api", required=False),
        ),
        backend=("Node.js", "Discord.js", "TypeScript"),
        database=("SQLite",),
        duration="3-5 days",
    ),
    QuickStartTemplate(
        id="vscode-extension",
        name="VS Code Extension",
        icon="🎯",
        description="Visual Studio Code extension with commands, snippets, and language support",
        estimated_time="10-15 seconds",
        popularity=3,
        tags=("vscode", "extension", "editor", "tools"),
        category="tool",
        type=ProjectType.DESKTOP_APP,
        features=(
            _feature("vscode-commands", "Custom Commands", "automation"),
            _feature("code-snippets", "Code Snippets", "automation"),
            _feature("syntax-highlighting", "Syntax Highlighting", "ui", required=False),
            _feature("quick-fix", "Quick Fix Provider", "automation", required=False),
            _feature("tree-view", "Tree View Panel", "ui", required=False),
            _feature("webview", "Webview UI", "ui", required=False),
        ),
        frontend=("TypeScript",),
        backend=("Node.js",),
        duration="3-5 days",
    ),
    QuickStartTemplate(
        id="docs-site",
        name="Documentation Site",
        icon="📚",
        description="Documentation website with search, versioning, and API reference",
        estimated_time="10-15 seconds",
        popularity=3,
        tags=("docs", "documentation", "knowledge", "wiki"),
        category="web",
        type=ProjectType.WEBSITE,
        features=(
            _feature("docs-markdown", "Markdown Docs", "content"),
            _feature("search-docs", "Full-text Search", "search"),
            _feature("versioning", "Version Control", "content"),
            _feature("api-reference", "API Documentation", "documentation", required=False),
            _feature("dark-mode", "Dark Mode", "ui", required=False),
            _feature("i18n", "Internationalization", "localization", required=False),
        ),
        frontend=("Astro", "TypeScript", "Tailwind CSS"),
        duration="3-5 days",
    ),
    QuickStartTemplate(
        id="portfolio",
        name="Portfolio Website",
        icon="👨‍💻",
        description="Personal portfolio with projects showcase, blog, and contact form",
        estimated_time="10-15 seconds",
        popularity=5,
        tags=("portfolio", "personal", "showcase", "resume"),
        category="web",
        type=ProjectType.WEBSITE,
        features=(
            _feature("project-showcase", "Project Gallery", "content"),
            _feature("blog-posts", "Blog Section", "content", required=False),
            _feature("contact-form", "Contact Form", "communication"),
            _feature("resume-download", "Resume/CV", "content"),
            _feature("animations", "Smooth Animations", "ui", required=False),
            _feature("seo-meta", "SEO Optimization", "marketing"),
        ),
        frontend=("Astro", "TypeScript", "Tailwind CSS"),
        duration="2-3 days",
    ),
    QuickStartTemplate(
        id="data-pipeline",
        name="Data Pipeline",
        icon="⚙️",
        description="ETL pipeline for data processing, transformation, and scheduling",
        estimated_time="15-20 seconds",
        popularity=2,
        tags=("etl", "data", "pipeline", "processing"),
        category="other",
        type=ProjectType.AUTOMATION_SCRIPT,
        features=(
            _feature("data-extraction", "Data Extraction", "data"),
            _feature("data-transform", "Data Transformation", "data"),
            _feature("data-loading", "Data Loading", "data"),
            _feature("scheduler", "Job Scheduling", "automation"),
            _feature("error-handling", "Error Handling", "monitoring"),
            _feature("monitoring", "Pipeline Monitoring", "monitoring", required=False),
        ),
        backend=("Python", "Apache Airflow"),
        database=("PostgreSQL",),
        complexity=Complexity.MODERATE,
        duration="1-2 weeks",
        team_size=2,
    ),
]

_BY_ID: dict[str, QuickStartTemplate] = {t.id: t for t in QUICK_START_TEMPLATES}


def get_template_by_id(template_id: str) -> Optional[QuickStartTemplate]:
    return _BY_ID.get(template_id)


def get_popular_templates(limit: int = 3) -> list[QuickStartTemplate]:
    """Most popular templates first; ties keep registry order."""
    return sorted(QUICK_START_TEMPLATES, key=lambda t: -t.popularity)[:limit]


def get_templates_by_tag(tag: str) -> list[QuickStartTemplate]:
    needle = tag.lower()
    return [t for t in QUICK_START_TEMPLATES if any(needle in tt.lower() for tt in t.tags)]


def get_templates_by_category(category: str = "all") -> list[QuickStartTemplate]:
    if category == "all":
        return list(QUICK_START_TEMPLATES)
    return [t for t in QUICK_START_TEMPLATES if t.category == category]


def get_category_counts() -> dict[str, int]:
    counts = {"all": len(QUICK_START_TEMPLATES)}
    counts.update({category: 0 for category in TEMPLATE_CATEGORIES})
    for template in QUICK_START_TEMPLATES:
        counts[template.category] += 1
    return counts


def template_to_project_config(
    template: QuickStartTemplate,
    project_name: str,
    description: str = "",
) -> ProjectConfig:
    """
    Build a ProjectConfig from a template.

    Args:
        template: Template to expand
        project_name: Name chosen by the user
        description: Optional description (defaults to the template's)

    Returns:
        A fresh ProjectConfig with template_used set
    """
    return ProjectConfig(
        name=project_name,
        description=description or template.description,
        type=template.type,
        features=list(template.features),
        tech_stack=TechStack(
            frontend=list(template.frontend),
            backend=list(template.backend),
            database=list(template.database),
        ),
        metadata=ProjectMetadata(
            estimated_complexity=template.complexity,
            estimated_duration=template.duration,
            team_size=template.team_size,
            template_used=template.id,
        ),
    )
