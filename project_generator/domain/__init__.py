"""
Domain models.
"""

from project_generator.domain.analysis import (
    Agent,
    AnalysisResult,
    CollaborationProtocol,
    GeneratedPrompt,
    MCPServer,
    PromptMetadata,
    Task,
)
from project_generator.domain.discovery import (
    DiscoveryData,
    DiscoveryQuestion,
    QuestionSet,
    TechStackChoice,
    TechStackSuggestion,
)
from project_generator.domain.project import (
    ProjectConfig,
    ProjectFeature,
    ProjectMetadata,
    TechStack,
)

__all__ = [
    "Agent",
    "AnalysisResult",
    "CollaborationProtocol",
    "DiscoveryData",
    "DiscoveryQuestion",
    "GeneratedPrompt",
    "MCPServer",
    "ProjectConfig",
    "ProjectFeature",
    "ProjectMetadata",
    "PromptMetadata",
    "QuestionSet",
    "Task",
    "TechStack",
    "TechStackChoice",
    "TechStackSuggestion",
]
