"""GitHub API rate limit tracking."""

import logging
import math
import time
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

logger = logging.getLogger(__name__)

LIMIT_HEADER = "x-ratelimit-limit"
REMAINING_HEADER = "x-ratelimit-remaining"
RESET_HEADER = "x-ratelimit-reset"
USED_HEADER = "x-ratelimit-used"


@dataclass(frozen=True)
class RateLimitInfo:
    """Rate limit information from GitHub API."""

    limit: int
    remaining: int
    reset: int
    used: int = 0

    @property
    def reset_datetime(self) -> datetime:
        """Get reset time as datetime."""
        return datetime.fromtimestamp(self.reset)

    @property
    def seconds_until_reset(self) -> float:
        """Get seconds until rate limit resets."""
        return max(0, self.reset - time.time())

    @property
    def is_exceeded(self) -> bool:
        """Check if rate limit is exceeded."""
        return self.remaining <= 0

    @property
    def usage_percentage(self) -> float:
        """Get percentage of rate limit used."""
        if self.limit == 0:
            return 0.0
        return ((self.limit - self.remaining) / self.limit) * 100


def _parse_number(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(parsed):
        return None
    return int(parsed)


class RateLimitTracker:
    """Holds the most recent quota snapshot observed for one credential."""

    def __init__(self) -> None:
        self._rate_limit: RateLimitInfo | None = None

    def snapshot(self) -> RateLimitInfo | None:
        """Return the latest snapshot, or None if no response carried one yet."""
        return self._rate_limit

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        """Update rate limit info from response headers.

        A response missing any of limit/remaining/reset, or carrying a
        non-numeric value for one of them, leaves the previous snapshot
        untouched.

        Args:
            headers: HTTP response headers from GitHub API
        """
        normalized = {key.lower(): value for key, value in headers.items()}

        limit = _parse_number(normalized.get(LIMIT_HEADER))
        remaining = _parse_number(normalized.get(REMAINING_HEADER))
        reset = _parse_number(normalized.get(RESET_HEADER))
        if limit is None or remaining is None or reset is None:
            return

        used = _parse_number(normalized.get(USED_HEADER))
        self._rate_limit = RateLimitInfo(
            limit=limit,
            remaining=remaining,
            reset=reset,
            used=used if used is not None else limit - remaining,
        )

        if self._rate_limit.is_exceeded:
            logger.warning(
                f"GitHub rate limit exhausted ({limit} requests), "
                f"resets in {self._rate_limit.seconds_until_reset:.0f}s"
            )
