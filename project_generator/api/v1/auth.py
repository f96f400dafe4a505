"""
Access-code authentication endpoints.
"""

from typing import Any, Optional

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel, Field

from project_generator.core.config import settings
from project_generator.core.exceptions import InvalidAccessCodeError, InvalidRequestError
from project_generator.core.logging import get_logger
from project_generator.core.security import (
    is_valid_auth_token,
    issue_auth_token,
    verify_access_code,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/auth")


class LoginRequest(BaseModel):
    """Access code submitted from the login screen."""

    code: Optional[str] = Field(default=None, description="Shared access code")


@router.post("/login")
async def login(request: LoginRequest, response: Response) -> dict[str, Any]:
    """
    Verify the access code and set the auth cookie.
    """
    if not request.code or not request.code.strip():
        raise InvalidRequestError("Missing access code", field="code")

    if not verify_access_code(request.code):
        logger.warning("Login rejected")
        raise InvalidAccessCodeError()

    response.set_cookie(
        key=settings.auth.cookie_name,
        value=issue_auth_token(),
        max_age=settings.auth.cookie_max_age,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.auth.cookie_secure,
    )
    logger.info("Login successful")

    return {"success": True, "data": {"message": "Authentication successful"}}


@router.post("/logout")
async def logout(response: Response) -> dict[str, Any]:
    """Clear the auth cookie."""
    response.delete_cookie(
        key=settings.auth.cookie_name,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.auth.cookie_secure,
    )
    return {"success": True, "data": {"message": "Logged out successfully"}}


@router.get("/verify")
async def verify(request: Request) -> dict[str, bool]:
    """Report whether the caller holds a valid auth cookie."""
    token = request.cookies.get(settings.auth.cookie_name)
    return {"authenticated": is_valid_auth_token(token)}
