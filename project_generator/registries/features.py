"""
Feature registry - the features the wizard offers and how they map onto ProjectFeature.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from project_generator.core.constants import FeatureCategory
from project_generator.core.logging import get_logger
from project_generator.domain.project import ProjectFeature

logger = get_logger(__name__)


@dataclass(frozen=True)
class FeatureDefinition:
    """Definition of a selectable feature."""

    id: str
    name: str
    category: FeatureCategory
    description: str = ""
    dependencies: tuple[str, ...] = field(default_factory=tuple)
    tech_requirements: tuple[str, ...] = field(default_factory=tuple)

    def to_project_feature(self) -> ProjectFeature:
        return ProjectFeature(
            id=self.id,
            name=self.name,
            category=self.category.value,
            required=True,
            description=self.description,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "description": self.description,
            "dependencies": list(self.dependencies),
            "techRequirements": list(self.tech_requirements),
        }


FEATURE_DEFINITIONS: dict[str, FeatureDefinition] = {
    definition.id: definition
    for definition in (
        FeatureDefinition(
            id="auth",
            name="Authentication",
            category=FeatureCategory.AUTHENTICATION,
            description="User authentication and authorization system",
            tech_requirements=("backend",),
        ),
        FeatureDefinition(
            id="database",
            name="Database",
            category=FeatureCategory.DATABASE,
            description="Database integration and ORM setup",
            tech_requirements=("backend",),
        ),
        FeatureDefinition(
            id="api",
            name="API Routes",
            category=FeatureCategory.DATABASE,
            description="RESTful API endpoints",
            dependencies=("database",),
            tech_requirements=("backend",),
        ),
        FeatureDefinition(
            id="upload",
            name="File Upload",
            category=FeatureCategory.STORAGE,
            description="File upload and storage functionality",
            tech_requirements=("backend",),
        ),
        FeatureDefinition(
            id="email",
            name="Email Service",
            category=FeatureCategory.EMAIL,
            description="Email sending and notification system",
        ),
        FeatureDefinition(
            id="payment",
            name="Payment Integration",
            category=FeatureCategory.PAYMENTS,
            description="Payment processing and subscription management",
            tech_requirements=("backend",),
        ),
        FeatureDefinition(
            id="analytics",
            name="Analytics",
            category=FeatureCategory.ANALYTICS,
            description="User analytics and metrics tracking",
        ),
        FeatureDefinition(
            id="testing",
            name="Testing Setup",
            category=FeatureCategory.AUTOMATION,
            description="Automated testing framework and CI/CD",
        ),
    )
}

# Keyed by the wizard's broad project kinds, not only ProjectType values
RECOMMENDED_FEATURES: dict[str, list[str]] = {
    "saas": ["auth", "database", "api", "payment", "email", "analytics"],
    "api": ["auth", "database", "api", "testing"],
    "website": ["analytics"],
    "webapp": ["auth", "database", "api", "upload"],
    "mobile": ["auth", "api", "analytics"],
    "desktop": ["database", "upload"],
    "cli": ["testing"],
    "library": ["testing"],
    "microservice": ["api", "database", "testing"],
}


def _feature_id(item: Any) -> Optional[str]:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        value = item.get("id")
        return value if isinstance(value, str) else None
    value = getattr(item, "id", None)
    return value if isinstance(value, str) else None


def map_features_to_project_features(items: Iterable[Any]) -> list[ProjectFeature]:
    """
    Convert feature ids (or objects carrying an id) into ProjectFeature models.

    Unknown ids are dropped with a warning.

    Args:
        items: Feature ids, dicts with an "id" key, or objects with an id attribute

    Returns:
        ProjectFeature list in input order
    """
    features: list[ProjectFeature] = []
    for item in items:
        feature_id = _feature_id(item)
        if not feature_id:
            continue
        definition = FEATURE_DEFINITIONS.get(feature_id)
        if definition is None:
            logger.warning("Unknown feature id ignored", feature_id=feature_id)
            continue
        features.append(definition.to_project_feature())
    return features


def get_feature_definition(feature_id: str) -> Optional[FeatureDefinition]:
    return FEATURE_DEFINITIONS.get(feature_id)


def get_all_feature_ids() -> list[str]:
    return list(FEATURE_DEFINITIONS)


def get_features_by_category(category: str) -> list[FeatureDefinition]:
    return [d for d in FEATURE_DEFINITIONS.values() if d.category.value == category]


def validate_feature_dependencies(selected_ids: list[str]) -> dict[str, Any]:
    """
    Check that every selected feature has its dependencies selected too.

    Returns:
        {"valid": bool, "missingDependencies": [...], "warnings": [...]}
    """
    selected = set(selected_ids)
    missing: list[str] = []

    for feature_id in selected_ids:
        definition = FEATURE_DEFINITIONS.get(feature_id)
        if definition is None:
            continue
        for dependency in definition.dependencies:
            if dependency not in selected:
                dep_definition = FEATURE_DEFINITIONS.get(dependency)
                dep_name = dep_definition.name if dep_definition else dependency
                missing.append(f"{definition.name} requires {dep_name}")

    return {"valid": not missing, "missingDependencies": missing, "warnings": []}


def get_recommended_features(project_kind: str) -> list[str]:
    return list(RECOMMENDED_FEATURES.get(project_kind, []))
