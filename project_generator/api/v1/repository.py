"""
GitHub repository push endpoints.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from project_generator.api.deps import get_repository_service
from project_generator.core.exceptions import MissingFieldsError
from project_generator.core.logging import get_logger
from project_generator.domain.base import CamelModel
from project_generator.services.repository_service import RepositoryService

logger = get_logger(__name__)

router = APIRouter(prefix="/github-push")


class PushRequest(CamelModel):
    """A generated project to publish."""

    project_name: Optional[str] = None
    sanitized_name: Optional[str] = None
    project_path: Optional[str] = None
    description: Optional[str] = None


@router.post("")
async def github_push(
    request: PushRequest,
    service: RepositoryService = Depends(get_repository_service),
) -> dict[str, Any]:
    """
    Prepare repository creation and the git commands that push the project.

    Nothing is executed server-side.
    """
    if not (request.project_name and request.sanitized_name and request.project_path):
        raise MissingFieldsError(["projectName", "sanitizedName", "projectPath"])

    plan = service.prepare_push(
        request.project_name,
        request.sanitized_name,
        request.project_path,
        description=request.description or "",
    )
    return {"success": True, "data": plan.model_dump(by_alias=True)}


@router.get("/status")
async def github_push_status(
    repo: Optional[str] = Query(default=None, description="Repository name"),
    service: RepositoryService = Depends(get_repository_service),
) -> dict[str, Any]:
    """Report whether a repository exists."""
    status = await service.status(repo or "")
    return {"success": True, "data": status.model_dump(by_alias=True)}
