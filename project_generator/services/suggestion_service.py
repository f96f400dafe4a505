"""
Suggestion service - AI tech-stack suggestions and discovery questions with static fallbacks.
"""

from typing import Optional

from project_generator.core.constants import ProjectType, QuestionCategory, QuestionType
from project_generator.core.exceptions import AIServiceUnavailableError
from project_generator.core.logging import get_logger
from project_generator.domain.discovery import (
    DiscoveryData,
    DiscoveryQuestion,
    QuestionSet,
    TechStackChoice,
    TechStackSuggestion,
)
from project_generator.llm.claude_client import ClaudeClient

logger = get_logger(__name__)

DEFAULT_SUGGESTIONS: dict[str, TechStackSuggestion] = {
    ProjectType.SAAS.value: TechStackSuggestion(
        features=["auth", "database", "api", "payment", "email"],
        tech_stack=TechStackChoice(frontend="react", backend="node", database="postgresql"),
        reasoning="Standard SaaS stack with authentication, payments, and database.",
    ),
    ProjectType.WEBSITE.value: TechStackSuggestion(
        features=["api", "email", "analytics"],
        tech_stack=TechStackChoice(frontend="astro", backend="none", database="none"),
        reasoning="Static website with minimal backend requirements.",
    ),
    ProjectType.API.value: TechStackSuggestion(
        features=["database", "api", "auth"],
        tech_stack=TechStackChoice(frontend="none", backend="node", database="postgresql"),
        reasoning="Backend API with database and authentication.",
    ),
}

FALLBACK_QUESTIONS = QuestionSet(
    reasoning="General questions that help shape most projects.",
    questions=[
        DiscoveryQuestion(
            id="q1",
            type=QuestionType.TEXTAREA,
            question="Who are the primary users of this project and what problem does it solve for them?",
            placeholder="Example: Small business owners who need to track invoices...",
            category=QuestionCategory.AUDIENCE,
        ),
        DiscoveryQuestion(
            id="q2",
            type=QuestionType.TEXTAREA,
            question="Describe the main user workflow from start to finish:",
            placeholder="Example: User signs up -> Creates profile -> Browses items -> Makes purchase...",
            category=QuestionCategory.FUNCTIONALITY,
        ),
        DiscoveryQuestion(
            id="q3",
            type=QuestionType.MULTIPLE_CHOICE,
            question="What is your primary color scheme preference?",
            options=[
                "Modern & Minimal (Blue/Gray)",
                "Vibrant & Energetic (Purple/Orange)",
                "Professional (Navy/White)",
                "Custom",
            ],
            required=False,
            category=QuestionCategory.DESIGN,
        ),
        DiscoveryQuestion(
            id="q4",
            type=QuestionType.CHECKBOXES,
            question="Which external services should the project integrate with?",
            options=["Payments", "Email", "Analytics", "Cloud storage", "None"],
            required=False,
            category=QuestionCategory.TECHNICAL,
        ),
    ],
)


def default_suggestions(project_type: str) -> TechStackSuggestion:
    """Static suggestion for a project type (SaaS defaults for anything unknown)."""
    return DEFAULT_SUGGESTIONS.get(project_type, DEFAULT_SUGGESTIONS[ProjectType.SAAS.value])


class SuggestionService:
    """Wizard helpers backed by the model, never failing on model errors."""

    def __init__(self, claude_client: ClaudeClient) -> None:
        self.claude_client = claude_client

    async def suggest(
        self,
        project_name: str,
        description: str,
        project_type: str,
        discovery: Optional[DiscoveryData] = None,
    ) -> TechStackSuggestion:
        """
        Suggest features and a tech stack.

        Falls back to per-type defaults on any failure, including a missing API key.
        """
        logger.info(
            "Generating suggestions",
            project=project_name,
            type=project_type,
            with_discovery=discovery is not None,
        )
        try:
            return await self.claude_client.generate_tech_stack_suggestions(
                project_name, description, project_type, discovery
            )
        except Exception as e:
            logger.warning("AI suggestions failed, using defaults", type=project_type, error=str(e))
            return default_suggestions(project_type)

    async def generate_questions(
        self,
        project_name: str,
        description: str,
        project_type: str,
    ) -> QuestionSet:
        """
        Generate discovery questions.

        Raises:
            AIServiceUnavailableError: If no API key is configured
        """
        if not self.claude_client.is_available:
            raise AIServiceUnavailableError()

        try:
            return await self.claude_client.generate_discovery_questions(
                project_name, description, project_type
            )
        except AIServiceUnavailableError:
            raise
        except Exception as e:
            logger.warning("AI question generation failed, using fallback set", error=str(e))
            return FALLBACK_QUESTIONS
