import logging
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from salla_sdk.errors import TokenExchangeError, TransportError
from salla_sdk.oauth.models import OAuthConfig, Token, TokenResponse

logger = logging.getLogger(__name__)

AUTHORIZATION_URL = "https://accounts.salla.sa/oauth2/auth"
TOKEN_URL = "https://accounts.salla.sa/oauth2/token"
DEFAULT_SCOPE = "offline_access"


class OAuthClient:
    def __init__(
        self,
        config: OAuthConfig,
        *,
        authorization_url: str = AUTHORIZATION_URL,
        token_url: str = TOKEN_URL,
        http_client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.config = config
        self._authorization_url = authorization_url
        self._token_url = token_url
        self._client = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._client.close()

    @property
    def scope(self) -> str:
        """Space-joined scopes, falling back to ``offline_access``."""
        if self.config.scopes:
            return " ".join(self.config.scopes)
        return DEFAULT_SCOPE

    def build_authorization_url(self, state: str) -> str:
        params = {
            "client_id": self.config.client_id,
            "redirect_uri": self.config.redirect_uri,
            "response_type": "code",
            "state": state,
            "scope": self.scope,
        }
        return f"{self._authorization_url}?{urlencode(params)}"

    def exchange_code(self, code: str) -> Token:
        """Trade an authorization code from the callback for a token."""
        return self._request_token(
            {
                "grant_type": "authorization_code",
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "code": code,
                "redirect_uri": self.config.redirect_uri,
                "scope": self.scope,
            }
        )

    def refresh_token(self, refresh_token: str) -> Token:
        return self._request_token(
            {
                "grant_type": "refresh_token",
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "refresh_token": refresh_token,
            }
        )

    def _request_token(self, data: dict[str, str]) -> Token:
        grant = data["grant_type"]
        try:
            resp = self._client.post(
                self._token_url,
                data=data,
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"Token request ({grant}) failed: {exc}") from exc

        if not resp.is_success:
            logger.warning("Token endpoint returned %d for %s grant", resp.status_code, grant)
            raise TokenExchangeError(resp.status_code, resp.text)

        try:
            payload = TokenResponse.model_validate_json(resp.content)
        except ValidationError as exc:
            raise TokenExchangeError(resp.status_code, f"unparseable token response: {exc}") from exc

        logger.debug("Token endpoint issued a %s token for %ds", payload.token_type, payload.expires_in)
        return payload.to_token()
