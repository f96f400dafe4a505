"""
Project scaffolder - writes a generated project to disk and packages it as a ZIP.
"""

from __future__ import annotations

import errno
import io
import os
import re
import shutil
import time
import zipfile
from dataclasses import dataclass, field
from typing import Optional

from project_generator.core.config import settings
from project_generator.core.constants import (
    AGENTS_DIR,
    BASE_DIRECTORIES,
    CLAUDE_DIR,
    MCP_CONFIG_FILENAME,
    MCP_LAUNCH_CONFIG_FILENAME,
    PROMPT_FILENAME,
    TYPE_DIRECTORIES,
)
from project_generator.core.exceptions import (
    FileSystemError,
    InvalidRequestError,
    ProjectNotFoundError,
)
from project_generator.core.logging import get_logger
from project_generator.core.security import sanitize_path
from project_generator.domain.analysis import AnalysisResult, GeneratedPrompt
from project_generator.services import artifacts

logger = get_logger(__name__)

_DISALLOWED = re.compile(r"[^a-z0-9\-\s]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")

# Suffixed names tried after the plain name is taken
COLLISION_ATTEMPTS = 3


def sanitize_project_name(name: str) -> str:
    """
    Turn a display name into a directory-safe slug.

    Lowercases, drops everything except a-z, 0-9, hyphens and whitespace,
    turns whitespace runs into hyphens, collapses hyphen runs and strips
    leading/trailing hyphens. Applying it twice gives the same result.
    """
    slug = _DISALLOWED.sub("", (name or "").lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


@dataclass
class ScaffoldResult:
    """Where a project was written and what was written."""

    project_path: str
    prompt_path: str
    sanitized_name: str
    files: list[str] = field(default_factory=list)


class ProjectScaffolder:
    """
    Creates generated projects under the configured base directory.

    Writes are sequential. A name collision is resolved by appending the
    current epoch milliseconds (and a counter when that is taken too),
    without locking.
    """

    def __init__(self, base_path: Optional[str] = None) -> None:
        self.base_path = os.path.abspath(base_path or settings.scaffold.projects_path)

    def scaffold(self, analysis: AnalysisResult, prompt: GeneratedPrompt) -> ScaffoldResult:
        """
        Write the project tree.

        Args:
            analysis: Analysis of the project
            prompt: Rendered project prompt

        Returns:
            ScaffoldResult with absolute paths and the relative file list

        Raises:
            InvalidRequestError: If the name sanitizes to nothing
            FileSystemError: If the tree cannot be written
        """
        config = analysis.project
        sanitized_name = sanitize_project_name(config.name)
        if not sanitized_name:
            raise InvalidRequestError("Invalid project name", field="name")

        created = False
        try:
            sanitized_name, project_path = self._create_project_dir(sanitized_name)
            created = True

            for directory in BASE_DIRECTORIES + TYPE_DIRECTORIES.get(config.type, []):
                os.makedirs(os.path.join(project_path, directory), exist_ok=True)

            files = self._render_files(analysis, prompt, sanitized_name, project_path)
            for relative_path, content in files.items():
                with open(os.path.join(project_path, relative_path), "w", encoding="utf-8") as f:
                    f.write(content)

        except OSError as e:
            logger.error(
                "Failed to scaffold project",
                project=sanitized_name,
                errno=e.errno,
                error=str(e),
            )
            if created:
                shutil.rmtree(project_path, ignore_errors=True)
            raise FileSystemError.from_os_error(e, "write project files") from e

        logger.info(
            "Project scaffolded",
            project=sanitized_name,
            path=project_path,
            files=len(files),
        )

        return ScaffoldResult(
            project_path=project_path,
            prompt_path=os.path.join(project_path, CLAUDE_DIR, PROMPT_FILENAME),
            sanitized_name=sanitized_name,
            files=list(files),
        )

    def _create_project_dir(self, sanitized_name: str) -> tuple[str, str]:
        """
        Create the project root, suffixing the name while it is taken.

        Returns:
            (final sanitized name, absolute project path)

        Raises:
            FileExistsError: If every candidate name is taken
        """
        os.makedirs(self.base_path, exist_ok=True)

        candidate = sanitized_name
        for attempt in range(COLLISION_ATTEMPTS + 1):
            project_path = sanitize_path(candidate, self.base_path)
            try:
                os.makedirs(project_path)
                return candidate, project_path
            except FileExistsError:
                suffix = int(time.time() * 1000)
                candidate = f"{sanitized_name}-{suffix}"
                if attempt:
                    candidate = f"{candidate}-{attempt}"
                logger.info("Project directory exists, using suffixed name", name=candidate)

        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), project_path)

    def _render_files(
        self,
        analysis: AnalysisResult,
        prompt: GeneratedPrompt,
        sanitized_name: str,
        project_path: str,
    ) -> dict[str, str]:
        config = analysis.project
        mcps = analysis.recommended_mcps

        files = {f"{CLAUDE_DIR}/{PROMPT_FILENAME}": prompt.markdown}
        for agent in analysis.required_agents:
            files[f"{AGENTS_DIR}/{agent.id}.md"] = artifacts.render_agent_markdown(agent)
        files[f"{CLAUDE_DIR}/{MCP_CONFIG_FILENAME}"] = artifacts.render_mcp_config(mcps)
        files[MCP_LAUNCH_CONFIG_FILENAME] = artifacts.render_launch_config(mcps, project_path)
        files["README.md"] = artifacts.render_readme(
            config, sanitized_name, agents=analysis.required_agents
        )
        files["package.json"] = artifacts.render_package_json(config, sanitized_name)
        files[".gitignore"] = artifacts.render_gitignore()
        files[".env.example"] = artifacts.render_env_example(config, mcps)
        files[f"src/{artifacts.index_filename(config)}"] = artifacts.render_index_file(config)
        return files

    def project_path(self, sanitized_name: str) -> str:
        """
        Resolve an existing generated project.

        Raises:
            InvalidRequestError: If the name is empty or escapes the base directory
            ProjectNotFoundError: If no such project exists
        """
        if not sanitized_name or not sanitized_name.strip():
            raise InvalidRequestError("Project name is required", field="project")

        path = sanitize_path(sanitized_name, self.base_path)
        if not os.path.isdir(path):
            raise ProjectNotFoundError(sanitized_name)
        return path

    def build_archive(self, sanitized_name: str) -> bytes:
        """
        Package a generated project as a deflated ZIP archive.

        Entries are relative to the project root.
        """
        path = self.project_path(sanitized_name)

        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED, compresslevel=9) as archive:
                for root, dirs, filenames in os.walk(path):
                    dirs.sort()
                    for filename in sorted(filenames):
                        full_path = os.path.join(root, filename)
                        arcname = os.path.relpath(full_path, path).replace(os.sep, "/")
                        archive.write(full_path, arcname)
        except OSError as e:
            logger.error("Failed to build project archive", project=sanitized_name, error=str(e))
            raise FileSystemError.from_os_error(e, "create ZIP file") from e

        logger.info("Project archive built", project=sanitized_name, size=buffer.tell())
        return buffer.getvalue()
