"""
Project configuration domain model.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import ConfigDict, Field

from project_generator.core.constants import (
    DEFAULT_COMPLEXITY,
    DEFAULT_DURATION,
    DEFAULT_TEAM_SIZE,
    Complexity,
    ProjectType,
)
from project_generator.domain.base import CamelModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProjectFeature(CamelModel):
    """A feature selected for the project."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Feature identifier")
    name: str = Field(..., description="Human-readable feature name")
    category: str = Field(..., description="Feature category, e.g. 'database'")
    required: bool = Field(default=True)
    description: Optional[str] = Field(default=None)


class TechStack(CamelModel):
    """Technology choices, one list per layer."""

    model_config = ConfigDict(frozen=True)

    frontend: list[str] = Field(default_factory=list)
    backend: list[str] = Field(default_factory=list)
    database: list[str] = Field(default_factory=list)
    infrastructure: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)

    def uses(self, technology: str) -> bool:
        """Check if any layer lists the given technology (case-insensitive)."""
        needle = technology.lower()
        return any(
            item.lower() == needle
            for layer in (self.frontend, self.backend, self.database, self.infrastructure, self.tools)
            for item in layer
        )


class ProjectMetadata(CamelModel):
    """Estimates attached to a project."""

    model_config = ConfigDict(frozen=True)

    created_at: datetime = Field(default_factory=_utcnow)
    estimated_complexity: Complexity = Field(default=DEFAULT_COMPLEXITY)
    estimated_duration: str = Field(default=DEFAULT_DURATION)
    team_size: int = Field(default=DEFAULT_TEAM_SIZE, ge=1)
    template_used: Optional[str] = Field(default=None)


class ProjectConfig(CamelModel):
    """
    Complete description of the project to scaffold.

    Built once from user input and never modified afterwards.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Project name")
    description: str = Field(default="", description="Free-text project description")
    type: ProjectType = Field(..., description="Declared project type")
    features: list[ProjectFeature] = Field(default_factory=list)
    tech_stack: TechStack = Field(default_factory=TechStack)
    metadata: ProjectMetadata = Field(default_factory=ProjectMetadata)

    def has_feature_category(self, category: str) -> bool:
        """Check if any selected feature belongs to the category."""
        return any(feature.category == category for feature in self.features)

    @property
    def complexity(self) -> str:
        """Shortcut for the estimated complexity tier."""
        return self.metadata.estimated_complexity
