"""Webhook endpoint for receiving Salla events."""

import logging

from fastapi import APIRouter, HTTPException, Request
from starlette.concurrency import run_in_threadpool

from salla_sdk.errors import (
    HandlerExecutionError,
    MalformedPayloadError,
    SchemaMismatchError,
    SignatureInvalidError,
)
from salla_sdk.webhook.dispatcher import WebhookDispatcher
from salla_sdk.webhook.verifier import require_valid_signature

logger = logging.getLogger(__name__)


def create_webhook_router(
    dispatcher: WebhookDispatcher,
    secret: str | None,
    path: str = "/webhook",
) -> APIRouter:
    """Create a router serving ``POST {path}``; other methods get 405."""
    router = APIRouter()

    if not secret:
        logger.warning(
            "No webhook secret configured: signature verification is disabled "
            "and every request to %s will be accepted",
            path,
        )

    @router.post(path)
    async def receive_webhook(request: Request) -> dict:
        body = await request.body()

        try:
            require_valid_signature(secret, body, request.headers)
        except SignatureInvalidError:
            logger.warning("Rejected webhook with invalid signature")
            raise HTTPException(status_code=401, detail="Invalid signature")

        try:
            # Handlers are plain callables and may block
            handled = await run_in_threadpool(dispatcher.dispatch, body)
        except (MalformedPayloadError, SchemaMismatchError) as exc:
            logger.warning("Rejected webhook payload: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc))
        except HandlerExecutionError as exc:
            logger.exception("Error handling %s webhook", exc.event_type)
            raise HTTPException(status_code=500, detail=f"Handler error: {exc.cause}")

        return {"status": "ok", "handled": handled}

    return router
