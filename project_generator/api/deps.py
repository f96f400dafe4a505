"""
API dependencies for dependency injection.
"""

from typing import Optional

from fastapi import Request

from project_generator.core.config import settings
from project_generator.core.exceptions import AuthenticationError
from project_generator.core.logging import get_logger
from project_generator.core.security import is_valid_auth_token
from project_generator.llm.claude_client import ClaudeClient
from project_generator.services.analyzer import ProjectAnalyzer
from project_generator.services.prompt_generator import PromptGenerator
from project_generator.services.repository_service import RepositoryService
from project_generator.services.scaffolder import ProjectScaffolder
from project_generator.services.suggestion_service import SuggestionService

logger = get_logger(__name__)


class ServiceContainer:
    """
    Container for all application services.
    Provides singleton instances of services.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        self._initialized = False

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def initialize(self) -> None:
        """Initialize all services."""
        if self._initialized:
            return

        self._claude_client = ClaudeClient()

        self._analyzer = ProjectAnalyzer(self._claude_client)
        self._prompt_generator = PromptGenerator()
        self._scaffolder = ProjectScaffolder()
        self._suggestion_service = SuggestionService(self._claude_client)
        self._repository_service = RepositoryService()

        self._initialized = True

    async def shutdown(self) -> None:
        """Release network clients."""
        if self._initialized:
            await self._claude_client.close()

    @property
    def claude_client(self) -> ClaudeClient:
        """Get the Claude client."""
        self.initialize()
        return self._claude_client

    @property
    def analyzer(self) -> ProjectAnalyzer:
        """Get the project analyzer."""
        self.initialize()
        return self._analyzer

    @property
    def prompt_generator(self) -> PromptGenerator:
        self.initialize()
        return self._prompt_generator

    @property
    def scaffolder(self) -> ProjectScaffolder:
        """Get the project scaffolder."""
        self.initialize()
        return self._scaffolder

    @property
    def suggestion_service(self) -> SuggestionService:
        self.initialize()
        return self._suggestion_service

    @property
    def repository_service(self) -> RepositoryService:
        self.initialize()
        return self._repository_service


# Singleton container instance
container = ServiceContainer.get_instance()


# Dependency functions for FastAPI
def get_claude_client() -> ClaudeClient:
    """Get the Claude client instance."""
    return container.claude_client


def get_analyzer() -> ProjectAnalyzer:
    """Get the project analyzer instance."""
    return container.analyzer


def get_prompt_generator() -> PromptGenerator:
    """Get the prompt generator instance."""
    return container.prompt_generator


def get_scaffolder() -> ProjectScaffolder:
    """Get the project scaffolder instance."""
    return container.scaffolder


def get_suggestion_service() -> SuggestionService:
    """Get the suggestion service instance."""
    return container.suggestion_service


def get_repository_service() -> RepositoryService:
    """Get the repository service instance."""
    return container.repository_service


async def require_auth(request: Request) -> None:
    """
    Reject requests without a valid auth cookie.

    Raises:
        AuthenticationError: If the cookie is missing, forged or expired
    """
    token = request.cookies.get(settings.auth.cookie_name)
    if not is_valid_auth_token(token):
        logger.warning("Unauthorized request", path=request.url.path)
        raise AuthenticationError()
