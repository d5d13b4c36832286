"""GitHub API client exceptions."""

from enum import Enum
from typing import Any


class GitHubErrorKind(str, Enum):
    """Failure categories used for retry and propagation decisions."""

    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    UNPROCESSABLE_INPUT = "unprocessable_input"
    SERVER_ERROR = "server_error"
    TIMEOUT = "timeout"
    GENERIC = "generic"


class GitHubError(Exception):
    """Base exception for GitHub API errors."""

    kind: GitHubErrorKind = GitHubErrorKind.GENERIC

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: Any = None,
        status_text: str = "",
        documentation_url: str | None = None,
    ):
        """Initialize GitHub error.

        Args:
            message: Error message
            status_code: HTTP status code
            response_data: Raw response body from GitHub API, if any
            status_text: HTTP reason phrase
            documentation_url: Documentation link returned by GitHub
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data
        self.status_text = status_text
        self.documentation_url = documentation_url


class GitHubAuthenticationError(GitHubError):
    """Raised when the credential is missing or rejected (401)."""

    kind = GitHubErrorKind.UNAUTHORIZED


class GitHubForbiddenError(GitHubError):
    """Raised when GitHub refuses the request (403)."""

    kind = GitHubErrorKind.FORBIDDEN


class GitHubRateLimitError(GitHubForbiddenError):
    """Raised when a 403 is caused by an exhausted quota."""

    def __init__(
        self,
        message: str,
        reset_time: int | None = None,
        remaining: int = 0,
        limit: int = 0,
        **kwargs: Any,
    ):
        """Initialize rate limit error.

        Args:
            message: Error message
            reset_time: Unix timestamp when rate limit resets
            remaining: Remaining API calls
            limit: Total rate limit
            **kwargs: Forwarded to GitHubError
        """
        kwargs.setdefault("status_code", 403)
        super().__init__(message, **kwargs)
        self.reset_time = reset_time
        self.remaining = remaining
        self.limit = limit


class GitHubNotFoundError(GitHubError):
    """Raised when resource is not found."""

    kind = GitHubErrorKind.NOT_FOUND


class GitHubValidationError(GitHubError):
    """Raised when request input is rejected, locally or by GitHub (422)."""

    kind = GitHubErrorKind.UNPROCESSABLE_INPUT


class GitHubServerError(GitHubError):
    """Raised when GitHub server returns 5xx error."""

    kind = GitHubErrorKind.SERVER_ERROR


class GitHubTimeoutError(GitHubError):
    """Raised when request times out."""

    kind = GitHubErrorKind.TIMEOUT


class GitHubConnectionError(GitHubError):
    """Raised when the transport fails before any response is received."""

    pass


_STATUS_ERRORS: dict[int, type[GitHubError]] = {
    401: GitHubAuthenticationError,
    403: GitHubForbiddenError,
    404: GitHubNotFoundError,
    422: GitHubValidationError,
}


def error_class_for_status(status: int) -> type[GitHubError]:
    """Map an HTTP status code to the matching exception class."""
    if status in _STATUS_ERRORS:
        return _STATUS_ERRORS[status]
    if status >= 500:
        return GitHubServerError
    return GitHubError
