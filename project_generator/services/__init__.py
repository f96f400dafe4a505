"""
Service layer implementations.
"""

from project_generator.services.analyzer import ProjectAnalyzer
from project_generator.services.prompt_generator import PromptGenerator
from project_generator.services.repository_service import RepositoryService
from project_generator.services.scaffolder import (
    ProjectScaffolder,
    ScaffoldResult,
    sanitize_project_name,
)
from project_generator.services.suggestion_service import SuggestionService

__all__ = [
    "ProjectAnalyzer",
    "PromptGenerator",
    "ProjectScaffolder",
    "RepositoryService",
    "ScaffoldResult",
    "SuggestionService",
    "sanitize_project_name",
]
