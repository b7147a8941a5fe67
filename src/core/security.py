"""Shared security utilities for handling GitHub credentials."""

from src.config import settings
from src.core.exceptions import UnauthorizedError, ValidationError
from src.core.logging import get_logger

logger = get_logger("security")


def is_header_safe(token: str) -> bool:
    """Check that a token can be sent as an HTTP header value.

    Args:
        token: Raw credential string

    Returns:
        True if every character is visible ASCII, False otherwise
    """
    return bool(token) and all(33 <= ord(ch) <= 126 for ch in token)


def require_valid_token(token: str | None) -> str:
    """Return the token or raise if it cannot be used as a bearer credential.

    Args:
        token: Credential supplied by the caller

    Returns:
        The token, unchanged

    Raises:
        ValidationError: If the token is empty or not header-safe
    """
    if not token:
        raise ValidationError("GitHub token must not be empty")
    if not is_header_safe(token):
        logger.warning("Rejected GitHub token containing non-printable or non-ASCII characters")
        raise ValidationError("GitHub token contains characters that cannot be sent in a header")
    return token


def extract_bearer_token(authorization: str | None) -> str:
    """Extract the credential from an Authorization header.

    Falls back to the configured GITHUB_TOKEN when no header was sent.

    Args:
        authorization: Authorization header value, e.g. "Bearer ghp_..."

    Returns:
        The validated token

    Raises:
        UnauthorizedError: If neither a header nor a configured token is available
        ValidationError: If the token is malformed
    """
    if not authorization:
        if not settings.github_token:
            raise UnauthorizedError("Missing Authorization header and no GITHUB_TOKEN configured")
        return require_valid_token(settings.github_token)

    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() not in ("bearer", "token") or not token.strip():
        raise UnauthorizedError("Authorization header must be 'Bearer <token>'")
    return require_valid_token(token.strip())
