"""
Registry listings used by the wizard: templates, features and MCP servers.
"""

from typing import Any, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from project_generator.core.exceptions import TemplateNotFoundError
from project_generator.registries.features import (
    FEATURE_DEFINITIONS,
    get_features_by_category,
    get_recommended_features,
    validate_feature_dependencies,
)
from project_generator.registries.mcp_servers import (
    MCP_REGISTRY,
    get_mcps_by_category,
    search_mcps,
)
from project_generator.registries.templates import (
    get_category_counts,
    get_popular_templates,
    get_template_by_id,
    get_templates_by_category,
    get_templates_by_tag,
)

router = APIRouter()


class FeatureSelection(BaseModel):
    """Feature ids picked in the wizard."""

    features: list[str] = Field(default_factory=list)


@router.get("/templates")
async def list_templates(
    category: str = Query(default="all", description="Template category or 'all'"),
    tag: Optional[str] = Query(default=None, description="Filter by tag substring"),
) -> dict[str, Any]:
    """List quick-start templates with per-category counts."""
    templates = get_templates_by_tag(tag) if tag else get_templates_by_category(category)
    if tag and category != "all":
        templates = [t for t in templates if t.category == category]

    return {
        "success": True,
        "data": {
            "templates": [t.to_dict() for t in templates],
            "popular": [t.id for t in get_popular_templates()],
            "counts": get_category_counts(),
        },
    }


@router.get("/templates/{template_id}")
async def get_template(template_id: str) -> dict[str, Any]:
    template = get_template_by_id(template_id)
    if template is None:
        raise TemplateNotFoundError(template_id)
    return {"success": True, "data": template.to_dict()}


@router.get("/features")
async def list_features(
    category: Optional[str] = Query(default=None),
    project_type: Optional[str] = Query(default=None, alias="projectType"),
) -> dict[str, Any]:
    """List selectable features, optionally with recommendations for a project kind."""
    definitions = get_features_by_category(category) if category else list(FEATURE_DEFINITIONS.values())
    return {
        "success": True,
        "data": {
            "features": [d.to_dict() for d in definitions],
            "recommended": get_recommended_features(project_type) if project_type else [],
        },
    }


@router.post("/features/validate")
async def validate_features(selection: FeatureSelection) -> dict[str, Any]:
    """Check that selected features include their dependencies."""
    return {"success": True, "data": validate_feature_dependencies(selection.features)}


@router.get("/mcp-servers")
async def list_mcp_servers(
    category: Optional[str] = Query(default=None),
    q: Optional[str] = Query(default=None, description="Free-text search"),
) -> dict[str, Any]:
    """List MCP servers from the registry."""
    if q:
        servers = search_mcps(q)
    elif category:
        servers = get_mcps_by_category(category)
    else:
        servers = MCP_REGISTRY

    return {
        "success": True,
        "data": [s.model_dump(by_alias=True, exclude_none=True) for s in servers],
    }
