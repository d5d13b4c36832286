"""Factories for fake GitHub API responses."""

from .factories import (
    API_ROOT,
    pull_payload,
    pull_url,
    rate_limit_headers,
    request_count,
)

__all__ = [
    "API_ROOT",
    "pull_payload",
    "pull_url",
    "rate_limit_headers",
    "request_count",
]
