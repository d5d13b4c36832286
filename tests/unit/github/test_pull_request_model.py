"""Unit tests for the PullRequest record."""

import pytest
from pydantic import ValidationError

from src.github.client import parse_pull_request
from src.github.exceptions import GitHubError
from src.github.models import MergeableState, PullRequest, PullRequestState
from tests.fixtures.github import pull_payload


class TestPullRequest:
    """Test PullRequest deserialization."""

    def test_from_api_payload(self) -> None:
        """Test that the API payload maps onto the record."""
        pull = PullRequest.model_validate(pull_payload(number=3, title="Fix typo"))

        assert pull.number == 3
        assert pull.title == "Fix typo"
        assert pull.state == PullRequestState.OPEN
        assert pull.is_open
        assert not pull.is_draft
        assert pull.author == "cheefbird"
        assert pull.mergeable_state == MergeableState.UNKNOWN

    def test_mergeable_state_absent(self) -> None:
        """Test that a missing mergeable_state stays absent."""
        payload = pull_payload()
        del payload["mergeable_state"]

        assert PullRequest.model_validate(payload).mergeable_state is None

    @pytest.mark.parametrize("raw", ["blocked", "behind", "has_hooks"])
    def test_untracked_mergeable_states_become_unknown(self, raw: str) -> None:
        """Test that states outside the tracked set coerce to unknown."""
        pull = PullRequest.model_validate(pull_payload(mergeable_state=raw))

        assert pull.mergeable_state == MergeableState.UNKNOWN

    def test_missing_user(self) -> None:
        """Test that a deleted (ghost) author yields an empty handle."""
        pull = PullRequest.model_validate(pull_payload(user=None))

        assert pull.author == ""

    def test_invalid_state(self) -> None:
        """Test that an unknown lifecycle state is rejected."""
        with pytest.raises(ValidationError):
            PullRequest.model_validate(pull_payload(state="merged"))

    def test_immutable(self) -> None:
        """Test that records cannot be updated in place."""
        pull = PullRequest.model_validate(pull_payload())

        with pytest.raises(ValidationError):
            pull.title = "changed"  # type: ignore[misc]

    @pytest.mark.parametrize(
        "overrides",
        [{"user": "ghost"}, {"user": ["cheefbird"]}, {"mergeable_state": ["clean"]}, {"mergeable_state": 3}],
    )
    def test_wrongly_typed_fields_fail_validation(self, overrides: dict) -> None:
        """Test that wrongly typed nested fields raise ValidationError, not raw errors."""
        with pytest.raises(ValidationError):
            PullRequest.model_validate(pull_payload(**overrides))

    def test_parse_wraps_wrongly_typed_user(self) -> None:
        """Test that parse_pull_request reports a string user as a GitHubError."""
        with pytest.raises(GitHubError, match="Malformed pull request payload"):
            parse_pull_request(pull_payload(user="ghost"))
