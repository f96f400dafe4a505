"""
Custom exception hierarchy for the project generator.
Provides structured error handling with proper HTTP status codes.
"""

import errno
from typing import Any, Optional


class ProjectGeneratorError(Exception):
    """Base exception for all project generator errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[dict[str, Any]] = None,
        status_code: int = 500,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the API failure envelope."""
        payload: dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.code,
        }
        if self.details:
            payload["details"] = self.details
        return payload


# =============================================================================
# Configuration Errors (500)
# =============================================================================


class ConfigurationError(ProjectGeneratorError):
    """Error in application configuration."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details=details,
            status_code=500,
        )


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(ProjectGeneratorError):
    """Request validation failed."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details=details,
            status_code=400,
        )


class MissingFieldsError(ValidationError):
    """One or more required request fields are absent."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            message=f"Missing required fields: {', '.join(fields)}",
            details={"fields": fields},
        )
        self.code = "MISSING_FIELDS"


class InvalidRequestError(ValidationError):
    """Invalid request parameters."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message=message, details=details)
        self.code = "INVALID_REQUEST"


# =============================================================================
# Authentication Errors (401)
# =============================================================================


class AuthenticationError(ProjectGeneratorError):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Unauthorized. Please login first.",
        code: str = "AUTH_REQUIRED",
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            status_code=401,
        )


class InvalidAccessCodeError(AuthenticationError):
    """The submitted access code does not match."""

    def __init__(self) -> None:
        super().__init__(message="Invalid access code", code="INVALID_ACCESS_CODE")


# =============================================================================
# Not Found Errors (404)
# =============================================================================


class NotFoundError(ProjectGeneratorError):
    """Requested resource not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        msg = message or f"{resource_type} not found"
        super().__init__(
            message=msg,
            code="NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id},
            status_code=404,
        )


class ProjectNotFoundError(NotFoundError):
    """Generated project directory not found."""

    def __init__(self, project_name: str) -> None:
        super().__init__(
            resource_type="Project",
            resource_id=project_name,
            message="Project not found",
        )
        self.code = "PROJECT_NOT_FOUND"


class TemplateNotFoundError(NotFoundError):
    """Quick-start template not found."""

    def __init__(self, template_id: str) -> None:
        super().__init__(
            resource_type="Template",
            resource_id=template_id,
            message=f"Template '{template_id}' not found",
        )
        self.code = "TEMPLATE_NOT_FOUND"


# =============================================================================
# External Service Errors (502, 503)
# =============================================================================


class ExternalServiceError(ProjectGeneratorError):
    """Error communicating with external service."""

    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=f"{service_name} error: {message}",
            code="EXTERNAL_SERVICE_ERROR",
            details={"service": service_name, **(details or {})},
            status_code=502,
        )


class AIServiceError(ExternalServiceError):
    """Error calling the hosted language model."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(service_name="Anthropic", message=message, details=details)
        self.code = "AI_ERROR"


class AIResponseFormatError(AIServiceError):
    """The model answered, but not with the JSON shape we asked for."""

    def __init__(self, message: str = "AI returned invalid response format") -> None:
        super().__init__(message=message)
        self.code = "AI_RESPONSE_INVALID"


class AIServiceUnavailableError(ProjectGeneratorError):
    """AI features are disabled because no API key is configured."""

    def __init__(self) -> None:
        super().__init__(
            message=(
                "AI features are not available. Please configure ANTHROPIC_API_KEY "
                "to enable AI-powered discovery questions."
            ),
            code="AI_UNAVAILABLE",
            status_code=503,
        )


class GitHubError(ProjectGeneratorError):
    """Repository push could not be prepared."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="GITHUB_ERROR", status_code=500)


# =============================================================================
# File System Errors (500)
# =============================================================================

_ERRNO_MESSAGES = {
    errno.ENOSPC: (
        "DISK_FULL",
        "Not enough disk space. Please free up some space and try again.",
    ),
    errno.EACCES: (
        "PERMISSION_DENIED",
        "Permission denied while writing project files. Please check directory permissions.",
    ),
    errno.EPERM: (
        "PERMISSION_DENIED",
        "Permission denied while writing project files. Please check directory permissions.",
    ),
    errno.EROFS: (
        "PERMISSION_DENIED",
        "The projects directory is read-only. Please check the configured output path.",
    ),
}


class FileSystemError(ProjectGeneratorError):
    """Creating or writing the project tree failed."""

    def __init__(
        self,
        message: str = "Failed to create or access files. Please check permissions and try again.",
        code: str = "FILE_SYSTEM_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, code=code, details=details, status_code=500)

    @classmethod
    def from_os_error(cls, exc: OSError, operation: str) -> "FileSystemError":
        """Translate an OSError into a user-facing file system error."""
        code, message = _ERRNO_MESSAGES.get(
            exc.errno or 0,
            ("FILE_SYSTEM_ERROR", f"Failed to {operation}"),
        )
        return cls(
            message=message,
            code=code,
            details={"operation": operation, "errno": exc.errno},
        )
