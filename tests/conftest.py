"""
Test configuration and fixtures for the GitHub access layer.

Provides client configurations and clients whose waits are recorded rather
than slept, so retry and rate limit tests run instantly.
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from src.github.client import GitHubClient, GitHubClientConfig


@pytest.fixture(autouse=True)
def clean_github_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Why: CI runners often export GITHUB_TOKEN and friends
    What: Removes GITHUB_* settings variables for every test
    How: Uses monkeypatch so the environment is restored afterwards
    """
    for name in (
        "GITHUB_TOKEN",
        "GITHUB_BASE_URL",
        "GITHUB_USER_AGENT",
        "GITHUB_TIMEOUT",
        "GITHUB_CACHE_ENABLED",
        "GITHUB_CACHE_TTL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def client_config() -> GitHubClientConfig:
    """Client configuration with a token and caching enabled."""
    return GitHubClientConfig(token="test-token", cache_ttl=120.0)


@pytest.fixture
def uncached_config() -> GitHubClientConfig:
    """Client configuration with the result cache bypassed."""
    return GitHubClientConfig(token="test-token", cache_enabled=False)


@pytest_asyncio.fixture
async def github_client(
    client_config: GitHubClientConfig,
) -> AsyncGenerator[GitHubClient, None]:
    """GitHubClient whose backoff and quota waits are captured by an AsyncMock."""
    client = GitHubClient(client_config)
    client._sleep = AsyncMock()  # type: ignore[method-assign]
    yield client
    await client.close()


@pytest_asyncio.fixture
async def uncached_client(
    uncached_config: GitHubClientConfig,
) -> AsyncGenerator[GitHubClient, None]:
    """GitHubClient without a result cache."""
    client = GitHubClient(uncached_config)
    client._sleep = AsyncMock()  # type: ignore[method-assign]
    yield client
    await client.close()
