"""GitHub API client package."""

from .auth import AuthToken, mask_token
from .client import GitHubClient, GitHubClientConfig
from .exceptions import (
    GitHubAuthenticationError,
    GitHubConnectionError,
    GitHubError,
    GitHubErrorKind,
    GitHubForbiddenError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubServerError,
    GitHubTimeoutError,
    GitHubValidationError,
)
from .executor import RequestExecutor
from .models import (
    MergeableState,
    PullRequest,
    PullRequestState,
    PullRequestStateFilter,
)
from .rate_limiting import RateLimitInfo, RateLimitTracker
from .retry import RetryPolicy

__all__ = [
    "AuthToken",
    "GitHubAuthenticationError",
    "GitHubClient",
    "GitHubClientConfig",
    "GitHubConnectionError",
    "GitHubError",
    "GitHubErrorKind",
    "GitHubForbiddenError",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
    "GitHubServerError",
    "GitHubTimeoutError",
    "GitHubValidationError",
    "MergeableState",
    "PullRequest",
    "PullRequestState",
    "PullRequestStateFilter",
    "RateLimitInfo",
    "RateLimitTracker",
    "RequestExecutor",
    "RetryPolicy",
    "mask_token",
]
