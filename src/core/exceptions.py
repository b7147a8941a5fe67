"""Custom API exceptions for the application."""


class ApiException(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        status_code: int,
        message: str,
        details: dict | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class UnauthorizedError(ApiException):
    """Unauthorized access exception."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(401, message)


class ValidationError(ApiException):
    """Request validation error."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(422, message, details)


class ExternalServiceError(ApiException):
    """External service (GitHub) error."""

    def __init__(self, service: str, message: str) -> None:
        super().__init__(502, f"{service} error: {message}")


class GitHubError(ExternalServiceError):
    """A GitHub request failed. Carries the URL and, once known, the pipeline stage."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        self.stage: str | None = None
        super().__init__("GitHub", f"{reason} ({url})")
        self.details = {"url": url}

    def at_stage(self, stage: str) -> "GitHubError":
        """Tag the error with the stage it happened in. The first tag sticks."""
        if self.stage is None:
            self.stage = stage
            self.message = f"{self.message} while {stage}"
            self.details["stage"] = stage
        return self


class TransportError(GitHubError):
    """Connection failure, timeout, or non-2xx response."""

    def __init__(self, url: str, reason: str, upstream_status: int | None = None) -> None:
        super().__init__(url, reason)
        self.upstream_status = upstream_status
        if upstream_status is not None:
            self.details["upstream_status"] = upstream_status


class AuthError(TransportError):
    """GitHub rejected the credential."""

    def __init__(self, url: str, reason: str, upstream_status: int) -> None:
        super().__init__(url, reason, upstream_status)
        self.status_code = 401


class ParseError(GitHubError):
    """Response body is not valid JSON or lacks a required field."""
