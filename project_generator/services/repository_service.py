"""
Repository service - prepares GitHub repository creation and push for a generated project.

Nothing is executed here: the service returns the API payload and the git
commands a client (or an agent in the generated project) runs.
"""

from typing import Optional

import httpx

from project_generator.core.config import settings
from project_generator.core.exceptions import GitHubError, InvalidRequestError
from project_generator.core.logging import get_logger
from project_generator.domain.repository import (
    GitCommand,
    GitHubOperations,
    PushPlan,
    RepositorySpec,
    RepositoryStatus,
)
from project_generator.services.scaffolder import sanitize_project_name

logger = get_logger(__name__)

GITHUB_WEB_URL = "https://github.com"
GITHUB_API_URL = "https://api.github.com"


class RepositoryService:
    """GitHub push stub and repository status lookups."""

    def __init__(
        self,
        token: Optional[str] = None,
        owner: Optional[str] = None,
        private_repos: Optional[bool] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        config = settings.github
        self.token = token if token is not None else config.token
        self.owner = owner if owner is not None else config.owner
        self.private_repos = config.private_repos if private_repos is None else private_repos
        self.timeout = timeout
        self.transport = transport

    def repository_url(self, repo_name: str) -> str:
        if self.owner:
            return f"{GITHUB_WEB_URL}/{self.owner}/{repo_name}"
        return f"{GITHUB_WEB_URL}/{repo_name}"

    def prepare_push(
        self,
        project_name: str,
        sanitized_name: str,
        project_path: str,
        description: str = "",
    ) -> PushPlan:
        """
        Build the repository payload and git command list.

        Raises:
            InvalidRequestError: If the repository name is not usable
            GitHubError: If no GitHub token is configured
        """
        repo_name = sanitize_project_name(sanitized_name)
        if not repo_name:
            raise InvalidRequestError("Invalid repository name", field="sanitizedName")

        if not self.token:
            raise GitHubError("GitHub token is not configured. Set GITHUB_TOKEN to enable pushing.")

        github_url = self.repository_url(repo_name)
        clone_url = f"{github_url}.git"

        commands = [
            GitCommand(command="git init", cwd=project_path, description="Initialize git repository"),
            GitCommand(command="git add .", cwd=project_path, description="Stage all files"),
            GitCommand(
                command=f'git commit -m "Initial commit: {project_name}"',
                cwd=project_path,
                description="Create initial commit",
            ),
            GitCommand(command="git branch -M main", cwd=project_path, description="Rename branch to main"),
            GitCommand(
                command=f"git remote add origin {clone_url}",
                cwd=project_path,
                description="Add GitHub remote",
            ),
            GitCommand(
                command="git push -u origin main",
                cwd=project_path,
                description="Push to GitHub",
                requires_auth=True,
            ),
        ]

        logger.info("Prepared GitHub push", repo=repo_name, url=github_url)

        return PushPlan(
            repo_name=repo_name,
            github_url=github_url,
            clone_url=clone_url,
            github_operations=GitHubOperations(
                create_repository=RepositorySpec(
                    name=repo_name,
                    private=self.private_repos,
                    description=description or f"{project_name} - generated project",
                ),
                git_commands=commands,
            ),
            message="GitHub operations prepared. Run the git commands to push the project.",
        )

    async def status(self, repo: str) -> RepositoryStatus:
        """
        Report where a repository lives and, when credentials allow, whether it exists.

        Lookup failures are reported as "unknown" rather than raised.
        """
        repo_name = sanitize_project_name(repo)
        if not repo_name:
            raise InvalidRequestError("Repository name is required", field="repo")

        url = self.repository_url(repo_name)
        if not (self.token and self.owner):
            return RepositoryStatus(
                exists=False,
                url=url,
                message="Repository status unknown: GitHub credentials are not configured",
            )

        try:
            async with httpx.AsyncClient(
                base_url=GITHUB_API_URL, timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(
                    f"/repos/{self.owner}/{repo_name}",
                    headers={
                        "Authorization": f"Bearer {self.token}",
                        "Accept": "application/vnd.github+json",
                    },
                )
        except httpx.RequestError as e:
            logger.warning("GitHub status lookup failed", repo=repo_name, error=str(e))
            return RepositoryStatus(exists=False, url=url, message="Repository status unknown")

        exists = response.status_code == 200
        return RepositoryStatus(
            exists=exists,
            url=url,
            message="Repository exists" if exists else "Repository not found",
        )
