"""
Configuration management using Pydantic Settings.
Loads settings from environment variables and .env files.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnthropicSettings(BaseSettings):
    """Anthropic API configuration settings."""

    model_config = SettingsConfigDict(env_prefix="ANTHROPIC_")

    api_key: str = Field(default="", description="Anthropic API key")
    base_url: Optional[str] = Field(
        default=None,
        description="Override for the Anthropic API base URL",
    )

    # Haiku for the quick structured calls, as the wizard waits on them
    model: str = Field(
        default="claude-3-5-haiku-20241022",
        description="Model used for recommendations, suggestions and questions",
    )
    max_tokens: int = Field(default=2000, description="Max tokens per response")
    temperature: float = Field(default=0.7, description="Sampling temperature")
    timeout: int = Field(default=60, description="Request timeout in seconds")
    max_attempts: int = Field(
        default=2,
        description="Attempts for transient connection failures",
    )

    @property
    def is_configured(self) -> bool:
        """Check if an API key is available."""
        return bool(self.api_key.strip())


class AuthSettings(BaseSettings):
    """Access-code authentication settings."""

    model_config = SettingsConfigDict(env_prefix="AUTH_", populate_by_name=True)

    access_code: str = Field(
        default="vibe2024",
        validation_alias=AliasChoices("ACCESS_CODE", "AUTH_ACCESS_CODE"),
        description="Shared access code for the wizard",
    )
    cookie_name: str = Field(default="auth_token", description="Auth cookie name")
    cookie_max_age: int = Field(
        default=60 * 60 * 24 * 7,
        description="Auth cookie lifetime in seconds (7 days)",
    )
    cookie_secure: bool = Field(
        default=False,
        description="Mark the auth cookie Secure (enable behind HTTPS)",
    )


class ScaffoldSettings(BaseSettings):
    """Generated project output settings."""

    model_config = SettingsConfigDict(env_prefix="SCAFFOLD_", populate_by_name=True)

    projects_path: str = Field(
        default="/root/apps/projects",
        validation_alias=AliasChoices("CLAUDE_PROJECTS_PATH", "SCAFFOLD_PROJECTS_PATH"),
        description="Base directory generated projects are written under",
    )


class GitHubSettings(BaseSettings):
    """GitHub repository push settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_")

    token: str = Field(default="", description="GitHub personal access token")
    owner: str = Field(default="", description="GitHub user or organisation for new repos")
    private_repos: bool = Field(default=True, description="Create repositories as private")


DEFAULT_SECRET_KEY = "change-me-in-production"


class SecuritySettings(BaseSettings):
    """Security configuration."""

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    secret_key: str = Field(default=DEFAULT_SECRET_KEY, description="Secret key for signing")
    allowed_origins: list[str] = Field(
        default=["http://localhost:4321", "http://localhost:3000"],
        description="CORS allowed origins",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="project-generator", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=True, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    version: str = Field(default="1.0.0", description="Service version")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=4321, description="Server port")

    # Sub-settings
    anthropic: AnthropicSettings = Field(default_factory=AnthropicSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    scaffold: ScaffoldSettings = Field(default_factory=ScaffoldSettings)
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        allowed = {"development", "staging", "production"}
        if v.lower() not in allowed:
            raise ValueError(f"app_env must be one of {allowed}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience accessor for modules that read settings at import time
settings = get_settings()
