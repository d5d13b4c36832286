"""GitHub API client with rate limiting, retries, and a result cache."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import aiohttp
from pydantic import ValidationError

from src.cache import BaseCache, MemoryCache

from .auth import AuthToken, mask_token
from .exceptions import GitHubError, GitHubErrorKind, GitHubNotFoundError
from .executor import RequestExecutor
from .models import PullRequest, PullRequestStateFilter
from .rate_limiting import RateLimitInfo, RateLimitTracker
from .retry import RetryPolicy
from .validation import (
    clamp_per_page,
    validate_owner,
    validate_positive_int,
    validate_repo,
    validate_state_filter,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitHubClientConfig:
    """Configuration for GitHub client.

    Assembled by the caller (see ``src.config``); the client itself never
    reads the environment.
    """

    token: str | None = None
    base_url: str = "https://api.github.com"
    user_agent: str = "pr-minder/1.0"
    timeout: float = 10.0
    cache_enabled: bool = True
    cache_ttl: float = 120.0

    def __repr__(self) -> str:
        return (
            f"GitHubClientConfig(token={mask_token(self.token)!r}, "
            f"base_url={self.base_url!r}, user_agent={self.user_agent!r}, "
            f"timeout={self.timeout!r}, cache_enabled={self.cache_enabled!r}, "
            f"cache_ttl={self.cache_ttl!r})"
        )


class GitHubClient:
    """Async GitHub API client used by the PR tracking bot."""

    def __init__(
        self,
        config: GitHubClientConfig | None = None,
        session: aiohttp.ClientSession | None = None,
        cache: BaseCache[PullRequest | None] | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize GitHub client.

        Args:
            config: Client configuration
            session: Externally owned HTTP session; created lazily if omitted
            cache: Cache for single pull request lookups
            retry_policy: Retry and backoff policy
        """
        self.config = config or GitHubClientConfig()
        self.rate_limiter = RateLimitTracker()
        self.retry_policy = retry_policy or RetryPolicy()
        self.executor = RequestExecutor(
            base_url=self.config.base_url,
            auth=AuthToken(self.config.token),
            rate_limiter=self.rate_limiter,
            user_agent=self.config.user_agent,
            timeout=self.config.timeout,
        )

        self._cache: BaseCache[PullRequest | None] | None = None
        # A non-positive TTL means nothing may be served from the cache
        if self.config.cache_enabled and self.config.cache_ttl > 0:
            self._cache = cache or MemoryCache(default_ttl=self.config.cache_ttl)

        self._session = session
        self._owns_session = session is None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self) -> "GitHubClient":
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure HTTP session is initialized."""
        if self._session is None or self._session.closed:
            async with self._session_lock:
                if self._session is None or self._session.closed:
                    self._session = aiohttp.ClientSession()
                    self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    async def _sleep(self, seconds: float) -> None:
        """Suspend for a backoff or quota wait."""
        await asyncio.sleep(seconds)

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> Any:
        """Make a request with quota pacing and bounded retries.

        Args:
            method: HTTP method
            path: API path
            params: Query parameters
            data: Request body data

        Returns:
            Decoded response body

        Raises:
            GitHubError: The last classified error once retries stop
        """
        wait_time = self.retry_policy.preflight_delay(self.rate_limiter.snapshot())
        if wait_time > 0:
            logger.info(
                f"GitHub quota exhausted, waiting {wait_time:.1f}s for reset "
                f"before {method} {path}"
            )
            await self._sleep(wait_time)

        session = await self._ensure_session()

        max_attempts = self.retry_policy.max_attempts
        for attempt in range(1, max_attempts + 1):
            try:
                return await self.executor.execute(session, method, path, params, data)
            except GitHubError as e:
                rate_limit = self.rate_limiter.snapshot()
                if not self.retry_policy.should_retry(e, attempt, rate_limit):
                    raise

                backoff_time = self.retry_policy.backoff_delay(attempt, rate_limit)
                logger.warning(
                    f"GitHub request {method} {path} failed "
                    f"(attempt {attempt}/{max_attempts}), "
                    f"retrying in {backoff_time:.1f}s: {e}"
                )
                await self._sleep(backoff_time)

        raise GitHubError(f"Request failed after {max_attempts} attempts")

    @staticmethod
    def _pull_cache_key(
        cache: BaseCache[PullRequest | None], owner: str, repo: str, number: int
    ) -> str:
        return cache.make_key("pull", owner.lower(), repo.lower(), number)

    async def fetch_pull_request(
        self, owner: str, repo: str, number: int
    ) -> PullRequest | None:
        """Get a single pull request.

        Not-found is an answer, not an error: it returns None and is cached
        like a hit so the same dead link is not looked up again within the
        TTL.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
            Pull request, or None if GitHub reports it does not exist

        Raises:
            GitHubValidationError: If owner, repo or number is malformed
            GitHubError: Any other failure once retries are exhausted
        """
        validate_owner(owner)
        validate_repo(repo)
        validate_positive_int(number, "pull request number")

        cache_key = None
        if self._cache is not None:
            cache_key = self._pull_cache_key(self._cache, owner, repo, number)
            entry = await self._cache.get(cache_key)
            if entry is not None:
                logger.debug(f"Cache hit for {cache_key}")
                return entry.value

        try:
            data = await self._request("GET", f"/repos/{owner}/{repo}/pulls/{number}")
        except GitHubNotFoundError:
            logger.info(f"Pull request {owner}/{repo}#{number} not found")
            pull_request = None
        else:
            pull_request = parse_pull_request(data)

        if self._cache is not None and cache_key is not None:
            await self._cache.set(cache_key, pull_request, ttl=self.config.cache_ttl)

        return pull_request

    async def list_pull_requests(
        self,
        owner: str,
        repo: str,
        state: PullRequestStateFilter | str = PullRequestStateFilter.OPEN,
        page: int = 1,
        per_page: int = 30,
    ) -> list[PullRequest]:
        """List one page of pull requests for a repository.

        Results are never cached.

        Args:
            owner: Repository owner
            repo: Repository name
            state: PR state (open, closed, all)
            page: 1-based page number
            per_page: Items per page, clamped to GitHub's maximum of 100

        Returns:
            Pull requests on the requested page
        """
        validate_owner(owner)
        validate_repo(repo)
        state_filter = validate_state_filter(state)
        validate_positive_int(page, "page number")

        params = {
            "state": state_filter.value,
            "page": page,
            "per_page": clamp_per_page(per_page),
        }
        data = await self._request("GET", f"/repos/{owner}/{repo}/pulls", params=params)
        if not isinstance(data, list):
            raise GitHubError(
                "Expected a list of pull requests from GitHub",
                response_data=data,
            )
        return [parse_pull_request(item) for item in data]

    async def validate_credential(self) -> bool:
        """Check the configured token against the authenticated user endpoint.

        Returns:
            False if GitHub rejects the token or none is configured

        Raises:
            GitHubError: Any failure other than an authentication rejection
        """
        try:
            await self._request("GET", "/user")
        except GitHubError as e:
            if e.kind == GitHubErrorKind.UNAUTHORIZED:
                logger.info(f"GitHub token rejected: {e}")
                return False
            raise
        return True

    def get_rate_limit(self) -> RateLimitInfo | None:
        """Get the latest observed rate limit, or None before any response."""
        return self.rate_limiter.snapshot()


def parse_pull_request(data: Any) -> PullRequest:
    """Deserialize a pull request payload.

    Raises:
        GitHubError: If the payload does not describe a pull request
    """
    try:
        return PullRequest.model_validate(data)
    except ValidationError as e:
        raise GitHubError(
            f"Malformed pull request payload: {e}", response_data=data
        ) from e
