"""Single-attempt HTTP execution against the GitHub REST API."""

import json
import logging
import time
import uuid
from typing import Any
from urllib.parse import urljoin

import aiohttp

from .auth import AuthToken
from .exceptions import (
    GitHubConnectionError,
    GitHubError,
    GitHubForbiddenError,
    GitHubRateLimitError,
    GitHubTimeoutError,
    error_class_for_status,
)
from .rate_limiting import RateLimitTracker

logger = logging.getLogger(__name__)

GITHUB_MEDIA_TYPE = "application/vnd.github+json"


class RequestExecutor:
    """Performs exactly one request and classifies the outcome.

    Successful responses return the decoded body. Anything else raises a
    GitHubError subclass whose ``kind`` drives the retry policy.
    """

    def __init__(
        self,
        base_url: str,
        auth: AuthToken,
        rate_limiter: RateLimitTracker,
        user_agent: str,
        timeout: float,
    ) -> None:
        """Initialize request executor.

        Args:
            base_url: API root, e.g. https://api.github.com
            auth: Credential attached to every request
            rate_limiter: Tracker fed with every response's quota headers
            user_agent: Client identification header value
            timeout: Per-attempt timeout in seconds
        """
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.auth = auth
        self.rate_limiter = rate_limiter
        self.user_agent = user_agent
        self.timeout = timeout

    def build_url(self, path: str) -> str:
        """Join an API path onto the configured base URL."""
        return urljoin(self.base_url, path.lstrip("/"))

    def build_headers(self) -> dict[str, str]:
        """Build request headers, failing fast when no token is configured."""
        headers = {
            "Accept": GITHUB_MEDIA_TYPE,
            "User-Agent": self.user_agent,
        }
        headers.update(self.auth.to_header())
        return headers

    def _generate_correlation_id(self) -> str:
        """Generate correlation ID for request tracking."""
        return str(uuid.uuid4())[:8]

    async def execute(
        self,
        session: aiohttp.ClientSession,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> Any:
        """Make one HTTP request.

        Args:
            session: Open HTTP session
            method: HTTP method
            path: API path relative to the base URL
            params: Query parameters
            data: JSON request body

        Returns:
            Decoded JSON, raw text, or None for 204 No Content

        Raises:
            GitHubError: Classified failure
        """
        headers = self.build_headers()
        url = self.build_url(path)
        correlation_id = self._generate_correlation_id()

        request_kwargs: dict[str, Any] = {
            "params": params,
            "headers": headers,
            "timeout": aiohttp.ClientTimeout(total=self.timeout),
        }
        if data is not None:
            request_kwargs["json"] = data

        logger.debug(f"GitHub API request [{correlation_id}] {method} {url}")
        start_time = time.time()

        try:
            async with session.request(method, url, **request_kwargs) as response:
                self.rate_limiter.update_from_headers(response.headers)

                logger.debug(
                    f"GitHub API response [{correlation_id}] "
                    f"{response.status} in {time.time() - start_time:.2f}s"
                )

                if 200 <= response.status < 300:
                    return await self._read_success_body(response)

                await self._handle_error_response(response, correlation_id)

        except TimeoutError as e:
            raise GitHubTimeoutError(
                f"GitHub request timed out after {self.timeout}s",
                status_code=408,
                status_text="Request Timeout",
            ) from e

        except aiohttp.ClientError as e:
            raise GitHubConnectionError(
                f"Connection error for {method} {url}: {e}"
            ) from e

    async def _read_success_body(self, response: aiohttp.ClientResponse) -> Any:
        """Decode a 2xx body according to its content type."""
        if response.status == 204:
            return None

        if "application/json" not in response.headers.get("Content-Type", ""):
            return await response.text()

        try:
            return await response.json()
        except (json.JSONDecodeError, aiohttp.ContentTypeError) as e:
            raise GitHubError(
                f"Malformed JSON in GitHub response: {e}",
                status_code=response.status,
                status_text=response.reason or "",
            ) from e

    async def _read_error_body(self, response: aiohttp.ClientResponse) -> Any:
        """Read an error body, returning None when it cannot be parsed."""
        if "application/json" in response.headers.get("Content-Type", ""):
            try:
                return await response.json()
            except (json.JSONDecodeError, aiohttp.ClientError, ValueError):
                return None

        try:
            text = await response.text()
        except (aiohttp.ClientError, UnicodeDecodeError):
            return None
        return text or None

    async def _handle_error_response(
        self, response: aiohttp.ClientResponse, correlation_id: str
    ) -> None:
        """Handle error responses from GitHub API.

        Args:
            response: HTTP response
            correlation_id: Request correlation ID

        Raises:
            GitHubError: Appropriate error based on status code
        """
        error_body = await self._read_error_body(response)
        error_message = (
            extract_error_message(error_body)
            or f"GitHub request failed with status {response.status}"
        )

        logger.warning(
            f"GitHub API error [{correlation_id}] {response.status}: {error_message}"
        )

        error_kwargs: dict[str, Any] = {
            "status_code": response.status,
            "response_data": error_body,
            "status_text": response.reason or "",
            "documentation_url": extract_documentation_url(error_body),
        }

        error_class = error_class_for_status(response.status)
        if error_class is GitHubForbiddenError:
            rate_limit = self.rate_limiter.snapshot()
            if rate_limit is not None and rate_limit.is_exceeded:
                raise GitHubRateLimitError(
                    error_message,
                    reset_time=rate_limit.reset,
                    remaining=rate_limit.remaining,
                    limit=rate_limit.limit,
                    **error_kwargs,
                )

        raise error_class(error_message, **error_kwargs)


def extract_error_message(body: Any) -> str | None:
    """Pull a human-readable message out of an error body."""
    if isinstance(body, dict):
        message = body.get("message")
        return message if isinstance(message, str) else None
    if isinstance(body, str) and body:
        return body
    return None


def extract_documentation_url(body: Any) -> str | None:
    """Pull GitHub's documentation link out of an error body."""
    if isinstance(body, dict):
        documentation_url = body.get("documentation_url")
        if isinstance(documentation_url, str):
            return documentation_url
    return None
