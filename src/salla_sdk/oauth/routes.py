"""OAuth authorization-code endpoints for installing the app on a store."""

import logging
import secrets

from fastapi import APIRouter, HTTPException
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from salla_sdk.errors import TokenExchangeError, TransportError
from salla_sdk.oauth.client import OAuthClient
from salla_sdk.oauth.token_store import TokenStore

logger = logging.getLogger(__name__)


def create_oauth_router(oauth_client: OAuthClient, token_store: TokenStore) -> APIRouter:
    router = APIRouter()
    pending_states: set[str] = set()

    @router.get("/oauth")
    async def initiate_oauth() -> RedirectResponse:
        """Redirect the merchant to Salla's consent page."""
        state = secrets.token_urlsafe(16)
        pending_states.add(state)
        return RedirectResponse(oauth_client.build_authorization_url(state))

    @router.get("/oauth/callback")
    async def oauth_callback(code: str, state: str | None = None) -> dict:
        if state is None or state not in pending_states:
            raise HTTPException(status_code=400, detail="Unknown OAuth state")
        pending_states.discard(state)

        try:
            token = await run_in_threadpool(oauth_client.exchange_code, code)
        except TokenExchangeError as exc:
            logger.warning("Code exchange rejected with status %d", exc.status_code)
            raise HTTPException(status_code=400, detail="Authorization code rejected")
        except TransportError as exc:
            logger.error("Code exchange failed: %s", exc)
            raise HTTPException(status_code=502, detail="Token endpoint unreachable")

        token_store.set(token)
        logger.info("OAuth successful, token valid until %s", token.expiry)
        return {
            "message": "OAuth successful",
            "token_type": token.token_type,
            "expires_at": token.expiry.isoformat() if token.expiry else None,
        }

    return router
