"""Retry and backoff decisions for GitHub API requests."""

import time
from dataclasses import dataclass

from .exceptions import GitHubConnectionError, GitHubError, GitHubErrorKind
from .rate_limiting import RateLimitInfo

MAX_ATTEMPTS = 3
BASE_DELAY = 1.0

# Caller-correctable conditions; retrying cannot change the outcome.
NON_RETRYABLE_KINDS = frozenset(
    {
        GitHubErrorKind.UNAUTHORIZED,
        GitHubErrorKind.NOT_FOUND,
        GitHubErrorKind.UNPROCESSABLE_INPUT,
    }
)
RETRYABLE_KINDS = frozenset({GitHubErrorKind.SERVER_ERROR, GitHubErrorKind.TIMEOUT})


def _quota_exhausted(rate_limit: RateLimitInfo | None) -> bool:
    return rate_limit is not None and rate_limit.remaining <= 0


@dataclass(frozen=True)
class RetryPolicy:
    """Decides whether a failed attempt is retried and how long to wait.

    Attempts are numbered from 1. With the defaults a logical request makes
    at most three attempts, waiting 1s and then 2s between them unless the
    quota is exhausted, in which case the wait stretches to the reset time.
    """

    max_attempts: int = MAX_ATTEMPTS
    base_delay: float = BASE_DELAY

    def should_retry(
        self,
        error: GitHubError,
        attempt: int,
        rate_limit: RateLimitInfo | None = None,
    ) -> bool:
        """Check whether the request should be attempted again.

        Args:
            error: Classified error raised by the failed attempt
            attempt: Number of the attempt that just failed
            rate_limit: Current rate limit snapshot

        Returns:
            True if another attempt should be made
        """
        if attempt >= self.max_attempts:
            return False

        if isinstance(error, GitHubConnectionError):
            return True

        if error.kind in NON_RETRYABLE_KINDS:
            return False

        if error.kind == GitHubErrorKind.FORBIDDEN:
            # 403 is shared by "quota exhausted" and "permission denied"
            return _quota_exhausted(rate_limit)

        return error.kind in RETRYABLE_KINDS

    def backoff_delay(
        self,
        attempt: int,
        rate_limit: RateLimitInfo | None = None,
        now: float | None = None,
    ) -> float:
        """Calculate seconds to wait after a failed attempt.

        Args:
            attempt: Number of the attempt that just failed
            rate_limit: Current rate limit snapshot
            now: Current epoch time, defaults to time.time()

        Returns:
            Delay in seconds
        """
        delay = self.base_delay * 2 ** (attempt - 1)
        if rate_limit is not None and _quota_exhausted(rate_limit):
            current = time.time() if now is None else now
            delay = max(rate_limit.reset - current, delay)
        return delay

    def preflight_delay(
        self, rate_limit: RateLimitInfo | None, now: float | None = None
    ) -> float:
        """Seconds to wait before the first attempt of a request.

        Non-zero only when the quota is exhausted and the reset lies ahead.
        """
        if rate_limit is None or not _quota_exhausted(rate_limit):
            return 0.0
        current = time.time() if now is None else now
        return max(0.0, rate_limit.reset - current)
