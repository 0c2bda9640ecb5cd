"""Authorize CLI: run the OAuth code flow by hand and print the resulting token.

Prints the consent URL, reads the authorization code pasted from the
redirect, exchanges it and reports the token. Persisting the token is left to
the caller.
"""

import logging
import secrets
import sys

from salla_sdk.config import Settings
from salla_sdk.errors import SallaError
from salla_sdk.oauth.client import OAuthClient

logger = logging.getLogger(__name__)


def authorize(settings: Settings) -> int:
    if not settings.client_id or not settings.client_secret:
        logger.error("Set SALLA_CLIENT_ID and SALLA_CLIENT_SECRET first")
        return 1

    client = OAuthClient(
        settings.oauth_config(),
        authorization_url=settings.authorization_url,
        token_url=settings.token_url,
        timeout=settings.http_timeout,
    )
    try:
        state = secrets.token_urlsafe(16)
        print("Visit this URL to authorize the application:")
        print(client.build_authorization_url(state))
        print()

        code = input("Enter the authorization code from the callback: ").strip()
        if not code:
            logger.error("No authorization code given")
            return 1

        try:
            token = client.exchange_code(code)
        except SallaError as exc:
            logger.error("Failed to exchange code for token: %s", exc)
            return 1

        print("Successfully obtained access token")
        print(f"Access token:  {'present' if token.access_token else 'missing'}")
        print(f"Refresh token: {'present' if token.refresh_token else 'missing'}")
        print(f"Token type:    {token.token_type}")
        print(f"Expires at:    {token.expiry.isoformat() if token.expiry else 'unknown'}")
        return 0
    finally:
        client.close()


def main():
    settings = Settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(authorize(settings))


if __name__ == "__main__":
    main()
