"""Typed records deserialized from GitHub API responses."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PullRequestState(str, Enum):
    """Lifecycle state of a pull request as reported by GitHub."""

    OPEN = "open"
    CLOSED = "closed"


class PullRequestStateFilter(str, Enum):
    """State filter accepted by the pull request list endpoint."""

    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class MergeableState(str, Enum):
    """Mergeability of a pull request."""

    UNKNOWN = "unknown"
    CLEAN = "clean"
    DIRTY = "dirty"
    UNSTABLE = "unstable"


class PullRequest(BaseModel):
    """Immutable snapshot of a pull request.

    A refetch produces a new instance; cached instances are replaced, never
    updated in place.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    number: int = Field(gt=0)
    title: str
    state: PullRequestState
    draft: bool = False
    html_url: str
    author: str
    created_at: datetime
    updated_at: datetime
    mergeable_state: MergeableState | None = None

    @model_validator(mode="before")
    @classmethod
    def extract_author(cls, data: Any) -> Any:
        """Lift ``user.login`` from the API payload into ``author``."""
        if isinstance(data, dict) and "author" not in data:
            user = data.get("user") or {}
            if not isinstance(user, dict):
                raise ValueError(f"Expected user object, got {type(user).__name__}")
            data = {**data, "author": user.get("login", "")}
        return data

    @field_validator("mergeable_state", mode="before")
    @classmethod
    def coerce_mergeable_state(cls, v: Any) -> Any:
        """Map states outside the tracked set (blocked, behind...) to unknown."""
        if v is None:
            return None
        if not isinstance(v, str):
            raise ValueError(f"Expected mergeable state string, got {type(v).__name__}")
        if v not in {state.value for state in MergeableState}:
            return MergeableState.UNKNOWN
        return v

    @property
    def is_open(self) -> bool:
        """Check if the pull request is still open."""
        return self.state == PullRequestState.OPEN

    @property
    def is_draft(self) -> bool:
        """Check if the pull request is a draft."""
        return self.draft
