"""
AI suggestion and discovery question endpoints.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends

from project_generator.api.deps import get_suggestion_service
from project_generator.core.exceptions import MissingFieldsError
from project_generator.core.logging import get_logger
from project_generator.domain.base import CamelModel
from project_generator.domain.discovery import DiscoveryData
from project_generator.services.suggestion_service import SuggestionService

logger = get_logger(__name__)

router = APIRouter()

REQUIRED_FIELDS = ["projectName", "description", "projectType"]


# Request models
class SuggestRequest(CamelModel):
    """Project basics for suggestions and discovery questions."""

    project_name: Optional[str] = None
    description: Optional[str] = None
    project_type: Optional[str] = None
    discovery_data: Optional[DiscoveryData] = None

    def require_basics(self) -> None:
        if not (self.project_name and self.description and self.project_type):
            raise MissingFieldsError(REQUIRED_FIELDS)


@router.post("/suggest")
async def suggest(
    request: SuggestRequest,
    service: SuggestionService = Depends(get_suggestion_service),
) -> dict[str, Any]:
    """
    Suggest features and a tech stack.

    Always succeeds once the request is valid; AI failures return the
    per-type defaults.
    """
    request.require_basics()

    suggestion = await service.suggest(
        request.project_name,
        request.description,
        request.project_type,
        request.discovery_data,
    )
    return {"success": True, "data": suggestion.model_dump(by_alias=True, mode="json")}


@router.post("/generate-questions")
async def generate_questions(
    request: SuggestRequest,
    service: SuggestionService = Depends(get_suggestion_service),
) -> dict[str, Any]:
    """Generate discovery questions; 503 when AI is not configured."""
    request.require_basics()

    question_set = await service.generate_questions(
        request.project_name,
        request.description,
        request.project_type,
    )
    logger.info("Discovery questions ready", count=len(question_set.questions))

    return {"success": True, "data": question_set.model_dump(by_alias=True, mode="json")}
