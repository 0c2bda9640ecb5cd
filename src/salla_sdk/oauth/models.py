from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OAuthConfig:
    """Client registration with the Salla authorization server."""

    client_id: str
    client_secret: str
    redirect_uri: str
    scopes: tuple[str, ...] = ()


@dataclass(frozen=True)
class Token:
    """OAuth2 bearer credential with an absolute expiry.

    Frozen: a refreshed credential is always a new Token, never a patched one.
    """

    access_token: str
    refresh_token: str = ""
    token_type: str = "Bearer"
    expiry: datetime | None = None

    def valid(self, now: datetime | None = None) -> bool:
        """True while the access token is non-empty and not yet expired."""
        if not self.access_token or self.expiry is None:
            return False
        return (now or utcnow()) < self.expiry

    def expires_within(self, margin: timedelta, now: datetime | None = None) -> bool:
        """True if the token is invalid now or will be within ``margin``."""
        return not self.valid((now or utcnow()) + margin)


class TokenResponse(BaseModel):
    """JSON body returned by the token endpoint."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 0  # seconds
    refresh_token: str = ""
    scope: str = ""

    def to_token(self, now: datetime | None = None) -> Token:
        # Expiry is computed from the client clock; the server clock is not consulted
        issued_at = now or utcnow()
        return Token(
            access_token=self.access_token,
            refresh_token=self.refresh_token,
            token_type=self.token_type,
            expiry=issued_at + timedelta(seconds=self.expires_in),
        )
