"""Local validation of request path segments and query options.

Everything here runs before a URL is built, so bad input never costs a
request against the quota.
"""

import re
from typing import Any

from .exceptions import GitHubValidationError
from .models import PullRequestStateFilter

OWNER_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]{0,38}")
REPO_PATTERN = re.compile(r"[A-Za-z0-9_.-]{1,100}")

MAX_PER_PAGE = 100


def validate_owner(owner: Any) -> str:
    """Validate a repository owner (user or organization login)."""
    if not isinstance(owner, str) or not OWNER_PATTERN.fullmatch(owner):
        raise GitHubValidationError(f"Invalid repository owner: {owner!r}")
    return owner


def validate_repo(repo: Any) -> str:
    """Validate a repository name."""
    if (
        not isinstance(repo, str)
        or repo in (".", "..")
        or not REPO_PATTERN.fullmatch(repo)
    ):
        raise GitHubValidationError(f"Invalid repository name: {repo!r}")
    return repo


def validate_positive_int(value: Any, name: str) -> int:
    """Validate a strictly positive integer such as a PR or page number."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise GitHubValidationError(f"Invalid {name}: {value!r}")
    return value


def validate_state_filter(state: Any) -> PullRequestStateFilter:
    """Validate a pull request list state filter."""
    try:
        return PullRequestStateFilter(state)
    except ValueError as e:
        raise GitHubValidationError(f"Invalid state filter: {state!r}") from e


def clamp_per_page(per_page: int) -> int:
    """Clamp a page size into GitHub's accepted range."""
    return max(1, min(per_page, MAX_PER_PAGE))
