"""
Project generation and download endpoints.
"""

import os
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.concurrency import run_in_threadpool

from project_generator.api.deps import get_analyzer, get_prompt_generator, get_scaffolder
from project_generator.api.v1.analysis import ProjectRequest, build_project_config
from project_generator.core.exceptions import InvalidRequestError
from project_generator.core.logging import LogContext, get_logger
from project_generator.domain.base import CamelModel
from project_generator.domain.discovery import DiscoveryData
from project_generator.services.analyzer import ProjectAnalyzer
from project_generator.services.prompt_generator import PromptGenerator
from project_generator.services.scaffolder import ProjectScaffolder

logger = get_logger(__name__)

router = APIRouter()


# Request models
class GenerateRequest(CamelModel):
    """Final wizard submission."""

    config: Optional[ProjectRequest] = None
    discovery_data: Optional[DiscoveryData] = None


@router.post("/generate")
async def generate_project(
    request: GenerateRequest,
    analyzer: ProjectAnalyzer = Depends(get_analyzer),
    prompt_generator: PromptGenerator = Depends(get_prompt_generator),
    scaffolder: ProjectScaffolder = Depends(get_scaffolder),
) -> dict[str, Any]:
    """
    Analyze the project, render its prompt and write it to disk.

    Flow:
    1. Build the project configuration
    2. Analyze (MCPs, agents, tasks)
    3. Render the project prompt, including discovery answers
    4. Scaffold the project directory
    """
    if request.config is None or not request.config.resolved_name:
        raise InvalidRequestError("Missing project configuration", field="config")

    config = build_project_config(request.config, require_description=False)

    with LogContext(project=config.name):
        logger.info("Generating project", type=config.type)

        analysis = await analyzer.analyze(config)
        prompt = prompt_generator.generate(analysis, request.discovery_data)
        result = await run_in_threadpool(scaffolder.scaffold, analysis, prompt)

        logger.info("Project generated", path=result.project_path, files=len(result.files))

    return {
        "success": True,
        "data": {
            "projectPath": result.project_path,
            "promptPath": result.prompt_path,
            "sanitizedName": result.sanitized_name,
            "prompt": prompt.markdown,
            "analysis": {
                "totalAgents": len(analysis.required_agents),
                "totalMCPs": len(analysis.recommended_mcps),
                "totalTasks": len(analysis.task_breakdown),
            },
            "files": result.files,
        },
    }


@router.get("/download-zip")
async def download_zip(
    project: Optional[str] = Query(default=None, description="Sanitized project name"),
    scaffolder: ProjectScaffolder = Depends(get_scaffolder),
) -> Response:
    """Download a generated project as a ZIP archive."""
    archive = await run_in_threadpool(scaffolder.build_archive, project or "")

    project_name = os.path.basename(scaffolder.project_path(project or ""))
    filename = f"{project_name}.zip"
    logger.info("Serving project archive", project=project, size=len(archive))

    return Response(
        content=archive,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
