"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from project_generator import __version__
from project_generator.api.deps import container, require_auth
from project_generator.api.v1 import (
    analysis,
    auth,
    generation,
    health,
    registry,
    repository,
    suggestions,
)
from project_generator.core.config import DEFAULT_SECRET_KEY, Settings, settings
from project_generator.core.constants import API_PREFIX, SERVICE_NAME
from project_generator.core.exceptions import ConfigurationError, ProjectGeneratorError
from project_generator.core.logging import bind_context, clear_context, get_logger, setup_logging
from project_generator.core.security import generate_request_id

# Initialize logging
setup_logging()
logger = get_logger(__name__)


def check_settings(config: Settings) -> None:
    """
    Refuse to start with settings that are unsafe outside development.

    Raises:
        ConfigurationError: If production runs with the default signing key
    """
    if config.is_production and config.security.secret_key == DEFAULT_SECRET_KEY:
        raise ConfigurationError(
            "SECURITY_SECRET_KEY must be set in production",
            details={"setting": "SECURITY_SECRET_KEY"},
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(
        "Starting Project Generator",
        app_name=settings.app_name,
        env=settings.app_env,
        projects_path=settings.scaffold.projects_path,
    )

    check_settings(settings)
    container.initialize()
    if not container.claude_client.is_available:
        logger.warning("ANTHROPIC_API_KEY not set; AI features will use fallbacks")

    yield

    # Shutdown
    logger.info("Shutting down Project Generator")
    await container.shutdown()


# Create FastAPI application
app = FastAPI(
    title=f"{SERVICE_NAME} API",
    description="Wizard backend that analyzes a project idea and scaffolds an agent-ready project",
    version=__version__,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.security.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Bind a request id to every log line emitted while handling the request."""
    request_id = request.headers.get("X-Request-ID") or generate_request_id()
    clear_context()
    bind_context(request_id=request_id)
    try:
        response = await call_next(request)
    finally:
        clear_context()
    response.headers["X-Request-ID"] = request_id
    return response


# Exception handlers
@app.exception_handler(ProjectGeneratorError)
async def project_generator_error_handler(
    request: Request,
    exc: ProjectGeneratorError,
) -> JSONResponse:
    """Handle custom application errors."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Application error",
        error_code=exc.code,
        error_message=exc.message,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed JSON and wrongly typed fields are client errors."""
    errors = exc.errors()
    logger.warning("Request validation failed", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Invalid request format.",
            "code": "VALIDATION_ERROR",
            "details": {
                "errors": [
                    {"loc": [str(part) for part in e.get("loc", ())], "msg": e.get("msg", "")}
                    for e in errors
                ]
            },
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unexpected errors."""
    logger.exception(
        "Unexpected error",
        error=str(exc),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        },
    )


# Include routers
protected = [Depends(require_auth)]

app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
app.include_router(auth.router, prefix=API_PREFIX, tags=["Auth"])
app.include_router(analysis.router, prefix=API_PREFIX, tags=["Analysis"], dependencies=protected)
app.include_router(generation.router, prefix=API_PREFIX, tags=["Generation"], dependencies=protected)
app.include_router(suggestions.router, prefix=API_PREFIX, tags=["Suggestions"], dependencies=protected)
app.include_router(repository.router, prefix=API_PREFIX, tags=["Repository"], dependencies=protected)
app.include_router(registry.router, prefix=API_PREFIX, tags=["Registry"], dependencies=protected)


# Root endpoint
@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "docs": "/docs" if settings.debug else "Disabled in production",
    }


# API info endpoint
@app.get("/api")
async def api_info() -> dict[str, Any]:
    """API information endpoint."""
    return {
        "name": f"{SERVICE_NAME} API",
        "version": __version__,
        "prefix": API_PREFIX,
        "endpoints": {
            "health": f"{API_PREFIX}/health",
            "auth": f"{API_PREFIX}/auth",
            "analyze": f"{API_PREFIX}/analyze",
            "generate": f"{API_PREFIX}/generate",
            "download": f"{API_PREFIX}/download-zip",
            "suggest": f"{API_PREFIX}/suggest",
            "questions": f"{API_PREFIX}/generate-questions",
            "githubPush": f"{API_PREFIX}/github-push",
            "templates": f"{API_PREFIX}/templates",
            "features": f"{API_PREFIX}/features",
            "mcpServers": f"{API_PREFIX}/mcp-servers",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "project_generator.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )
