"""GitHub authentication handling."""

from dataclasses import dataclass

from .exceptions import GitHubAuthenticationError


def mask_token(token: str | None) -> str:
    """Return a log-safe representation of a token."""
    if not token:
        return "<none>"
    if len(token) <= 8:
        return "****"
    return f"{token[:4]}****{token[-4:]}"


@dataclass(frozen=True)
class AuthToken:
    """Personal access token sent with every request."""

    token: str | None = None
    token_type: str = "token"  # nosec B105

    @property
    def is_present(self) -> bool:
        """Check if a token has been supplied."""
        return bool(self.token)

    def to_header(self) -> dict[str, str]:
        """Convert to authorization header.

        Raises:
            GitHubAuthenticationError: If no token has been supplied
        """
        if not self.token:
            raise GitHubAuthenticationError(
                "GitHub token is not configured", status_code=401
            )
        return {"Authorization": f"{self.token_type} {self.token}"}

    def __repr__(self) -> str:
        return f"AuthToken(token={mask_token(self.token)!r}, token_type={self.token_type!r})"
