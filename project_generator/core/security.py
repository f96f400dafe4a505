"""
Authentication and security utilities.
"""

import hashlib
import hmac
import os
import secrets
from datetime import datetime, timezone
from typing import Optional

from project_generator.core.config import settings
from project_generator.core.exceptions import AuthenticationError, InvalidRequestError

AUTH_TOKEN_SUBJECT = "authenticated"


def generate_request_id() -> str:
    """
    Generate a unique request ID for tracing.

    Returns:
        A random 8-byte hex string prefixed with 'req_'
    """
    return f"req_{secrets.token_hex(8)}"


def verify_access_code(provided_code: str, expected_code: Optional[str] = None) -> bool:
    """
    Compare a submitted access code with the configured one.

    Surrounding whitespace is ignored on both sides.

    Args:
        provided_code: Code entered by the user
        expected_code: Code to compare against (defaults to settings)

    Returns:
        True if the codes match
    """
    expected = (expected_code if expected_code is not None else settings.auth.access_code).strip()
    if not expected:
        return False
    return hmac.compare_digest(provided_code.strip().encode(), expected.encode())


def create_signature(payload: str, timestamp: Optional[int] = None) -> tuple[str, int]:
    """
    Create an HMAC signature for a payload.

    Args:
        payload: The payload to sign
        timestamp: Optional timestamp (defaults to current time)

    Returns:
        Tuple of (signature, timestamp)
    """
    if timestamp is None:
        timestamp = int(datetime.now(timezone.utc).timestamp())

    message = f"{timestamp}.{payload}"
    signature = hmac.new(
        settings.security.secret_key.encode(),
        message.encode(),
        hashlib.sha256,
    ).hexdigest()

    return signature, timestamp


def verify_signature(
    payload: str,
    signature: str,
    timestamp: int,
    max_age_seconds: int = 300,
) -> bool:
    """
    Verify an HMAC signature.

    Args:
        payload: The original payload
        signature: The provided signature
        timestamp: The timestamp from the signature
        max_age_seconds: Maximum age of the signature

    Returns:
        True if signature is valid and not expired

    Raises:
        AuthenticationError: If signature is invalid or expired
    """
    current_time = int(datetime.now(timezone.utc).timestamp())
    if current_time - timestamp > max_age_seconds:
        raise AuthenticationError("Session expired. Please login again.")

    expected_signature, _ = create_signature(payload, timestamp)
    if not hmac.compare_digest(signature.encode("utf-8"), expected_signature.encode("utf-8")):
        raise AuthenticationError("Invalid session. Please login again.")

    return True


def issue_auth_token() -> str:
    """
    Issue the value stored in the auth cookie after a successful login.

    Returns:
        "<timestamp>.<signature>" token
    """
    signature, timestamp = create_signature(AUTH_TOKEN_SUBJECT)
    return f"{timestamp}.{signature}"


def is_valid_auth_token(token: Optional[str]) -> bool:
    """
    Check an auth cookie value.

    Args:
        token: Cookie value, possibly missing

    Returns:
        True if the token was issued by us and has not expired
    """
    if not token or "." not in token:
        return False

    raw_timestamp, signature = token.split(".", 1)
    try:
        timestamp = int(raw_timestamp)
    except ValueError:
        return False

    try:
        return verify_signature(
            AUTH_TOKEN_SUBJECT,
            signature,
            timestamp,
            max_age_seconds=settings.auth.cookie_max_age,
        )
    except AuthenticationError:
        return False


def sanitize_path(path: str, base_path: str) -> str:
    """
    Sanitize a file path to prevent directory traversal attacks.

    Args:
        path: The path to sanitize
        base_path: The allowed base path

    Returns:
        Sanitized absolute path

    Raises:
        InvalidRequestError: If path escapes base directory
    """
    base = os.path.normpath(os.path.abspath(base_path))
    target = os.path.normpath(os.path.abspath(os.path.join(base, path)))

    if target == base or os.path.commonpath([base, target]) != base:
        raise InvalidRequestError("Invalid project path", field="project")

    return target
