"""FastAPI application entry point for receiving Salla webhooks."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from salla_sdk.api.client import SallaClient
from salla_sdk.config import Settings
from salla_sdk.oauth.client import OAuthClient
from salla_sdk.oauth.routes import create_oauth_router
from salla_sdk.oauth.token_store import TokenStore
from salla_sdk.webhook.dispatcher import DispatcherBuilder, WebhookDispatcher
from salla_sdk.webhook.handler import create_webhook_router
from salla_sdk.webhook.models import (
    EVENT_ORDER_CANCELLED,
    EVENT_PRODUCT_UPDATED,
    OrderWebhookEvent,
    ProductWebhookEvent,
    WebhookEvent,
)

logger = logging.getLogger(__name__)


def _log_product(event: ProductWebhookEvent) -> None:
    logger.info("Product %s: id=%d name=%s", event.event, event.data.id, event.data.name)


def _log_order(event: OrderWebhookEvent) -> None:
    logger.info("Order %s: id=%d status=%s", event.event, event.data.id, event.data.status)


def _log_generic(event: WebhookEvent) -> None:
    logger.info("Event %s from merchant %d", event.event, event.merchant)


def default_dispatcher() -> WebhookDispatcher:
    """Dispatcher that logs the common product, order and customer events."""
    return (
        DispatcherBuilder()
        .on_product_created(_log_product)
        .register_typed(EVENT_PRODUCT_UPDATED, ProductWebhookEvent, _log_product)
        .on_order_created(_log_order)
        .register_typed(EVENT_ORDER_CANCELLED, OrderWebhookEvent, _log_order)
        .on_customer_created(_log_generic)
        .build()
    )


def create_app(
    settings: Settings | None = None,
    dispatcher: WebhookDispatcher | None = None,
    token_store: TokenStore | None = None,
) -> FastAPI:
    settings = settings or Settings()
    dispatcher = dispatcher or default_dispatcher()
    token_store = token_store or TokenStore()
    oauth_client = OAuthClient(
        settings.oauth_config(),
        authorization_url=settings.authorization_url,
        token_url=settings.token_url,
        timeout=settings.http_timeout,
    )
    salla_client = SallaClient(
        oauth_client,
        token_store,
        base_url=settings.api_base_url,
        user_agent=settings.user_agent,
        timeout=settings.http_timeout,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.basicConfig(
            level=getattr(logging, settings.log_level.upper()),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        logger.info("Salla webhook server started, handling %d event types", len(dispatcher.event_types))
        yield

        salla_client.close()
        oauth_client.close()
        logger.info("Salla webhook server stopped")

    app = FastAPI(title="Salla Webhooks", lifespan=lifespan)
    app.state.token_store = token_store
    app.state.salla_client = salla_client
    app.include_router(create_webhook_router(dispatcher, settings.webhook_secret))
    app.include_router(create_oauth_router(oauth_client, token_store))

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "salla_sdk.main:app",
        host=settings.host,
        port=settings.port,
    )
