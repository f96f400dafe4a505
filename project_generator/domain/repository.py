"""
Repository push domain models.
"""

from pydantic import Field

from project_generator.domain.base import CamelModel


class GitCommand(CamelModel):
    """A git command to run inside the generated project."""

    command: str
    cwd: str
    description: str
    requires_auth: bool = False


class RepositorySpec(CamelModel):
    """Payload for the repository-creation API call."""

    name: str
    private: bool = True
    description: str = ""
    auto_init: bool = False
    has_issues: bool = True
    has_projects: bool = True
    has_wiki: bool = False


class GitHubOperations(CamelModel):
    """Everything needed to publish a project; prepared, not executed."""

    create_repository: RepositorySpec
    git_commands: list[GitCommand] = Field(default_factory=list)


class PushPlan(CamelModel):
    """Result of preparing a repository push."""

    repo_name: str
    github_url: str
    clone_url: str
    github_operations: GitHubOperations
    message: str


class RepositoryStatus(CamelModel):
    """Whether a repository exists and where it lives."""

    exists: bool
    url: str
    message: str
