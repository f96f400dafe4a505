"""
Project analysis endpoint.
"""

from typing import Any, Optional, Union

from fastapi import APIRouter, Depends
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from project_generator.api.deps import get_analyzer
from project_generator.core.constants import DEFAULT_COMPLEXITY
from project_generator.core.exceptions import InvalidRequestError, MissingFieldsError
from project_generator.core.logging import get_logger
from project_generator.domain.base import CamelModel
from project_generator.domain.project import ProjectConfig, ProjectMetadata, TechStack
from project_generator.registries.features import map_features_to_project_features
from project_generator.services.analyzer import ProjectAnalyzer

logger = get_logger(__name__)

router = APIRouter()

StackValue = Union[str, list[str], None]


# Request models
class ProjectRequest(CamelModel):
    """
    Project description as posted by the wizard.

    Both `name`/`projectName` and `type`/`projectType` are accepted.
    Tech stack layers may be a single string or a list.
    """

    name: Optional[str] = None
    project_name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    project_type: Optional[str] = None
    features: list[Any] = Field(default_factory=list)
    tech_stack: Optional[dict[str, StackValue]] = None
    metadata: Optional[dict[str, Any]] = None
    estimated_complexity: Optional[str] = None

    @property
    def resolved_name(self) -> Optional[str]:
        return self.project_name or self.name

    @property
    def resolved_type(self) -> Optional[str]:
        return self.project_type or self.type


def _layer(value: StackValue) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [item for item in value if item]


def build_project_config(body: ProjectRequest, require_description: bool = True) -> ProjectConfig:
    """
    Build an immutable ProjectConfig from a wizard request.

    Raises:
        MissingFieldsError: If name, description or type is absent
        InvalidRequestError: If a field has an unsupported value
    """
    name = body.resolved_name
    project_type = body.resolved_type
    if not name or not project_type or (require_description and not body.description):
        raise MissingFieldsError(["projectName/name", "description", "projectType/type"])

    stack = body.tech_stack or {}
    try:
        if body.metadata:
            metadata = ProjectMetadata.model_validate(body.metadata)
        else:
            metadata = ProjectMetadata(
                estimated_complexity=body.estimated_complexity or DEFAULT_COMPLEXITY
            )

        return ProjectConfig(
            name=name,
            description=body.description or "",
            type=project_type,
            features=map_features_to_project_features(body.features),
            tech_stack=TechStack(
                frontend=_layer(stack.get("frontend")),
                backend=_layer(stack.get("backend")),
                database=_layer(stack.get("database")),
                infrastructure=_layer(stack.get("infrastructure")),
                tools=_layer(stack.get("tools")),
            ),
            metadata=metadata,
        )
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        raise InvalidRequestError(f"Invalid project configuration: {first['msg']}", field=field or None) from e


@router.post("/analyze")
async def analyze_project(
    request: ProjectRequest,
    analyzer: ProjectAnalyzer = Depends(get_analyzer),
) -> dict[str, Any]:
    """
    Analyze a project and recommend MCP servers, agents and tasks.

    AI failures never surface here: MCP selection falls back to the
    required servers.
    """
    config = build_project_config(request)

    logger.info(
        "Analyzing project",
        project=config.name,
        type=config.type,
        features=len(config.features),
    )

    analysis = await analyzer.analyze(config)

    return {
        "success": True,
        "data": analysis.model_dump(by_alias=True, mode="json"),
    }
