"""Routing of webhook envelopes to registered handlers.

Handlers are registered on a ``DispatcherBuilder`` during startup. ``build()``
freezes the table into a ``WebhookDispatcher`` that is only read afterwards
and can be shared across request threads.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from salla_sdk.errors import DuplicateHandlerError, HandlerExecutionError
from salla_sdk.webhook.models import (
    EVENT_CUSTOMER_CREATED,
    EVENT_ORDER_CREATED,
    EVENT_PRODUCT_CREATED,
    CustomerWebhookEvent,
    OrderWebhookEvent,
    ProductWebhookEvent,
    WebhookEvent,
    parse_webhook,
    to_typed_event,
)

logger = logging.getLogger(__name__)

Handler = Callable[[WebhookEvent], Any]


@dataclass(frozen=True)
class Route:
    """A registered handler and the decode step applied before calling it.

    ``decode`` is None for generic handlers, which get the raw envelope.
    """

    handler: Callable[[Any], Any]
    decode: Callable[[WebhookEvent], Any] | None = None


class DuplicatePolicy(Enum):
    REPLACE = "replace"  # last registration wins
    REJECT = "reject"  # second registration raises DuplicateHandlerError


class WebhookDispatcher:
    def __init__(self, routes: Mapping[str, Route]) -> None:
        self._routes = MappingProxyType(dict(routes))

    @property
    def event_types(self) -> frozenset[str]:
        return frozenset(self._routes)

    def handles(self, event_type: str) -> bool:
        return event_type in self._routes

    def dispatch(self, body: bytes) -> bool:
        """Parse ``body`` and run the handler for its event type.

        Returns False when no handler is registered for the event (not an
        error), True when a handler ran. Raises MalformedPayloadError for a bad
        envelope and SchemaMismatchError when the data does not fit a typed
        handler's model; in both cases the handler is not called. Anything the
        handler itself raises is wrapped in HandlerExecutionError.
        """
        envelope = parse_webhook(body)

        route = self._routes.get(envelope.event)
        if route is None:
            logger.debug("No handler for event type %s, ignoring", envelope.event)
            return False

        event = route.decode(envelope) if route.decode else envelope

        try:
            route.handler(event)
        except Exception as exc:
            raise HandlerExecutionError(envelope.event, exc) from exc

        logger.debug("Handled %s for merchant %d", envelope.event, envelope.merchant)
        return True


class DispatcherBuilder:
    def __init__(self, duplicate_policy: DuplicatePolicy = DuplicatePolicy.REPLACE) -> None:
        self._policy = duplicate_policy
        self._routes: dict[str, Route] = {}

    def _add(self, event_type: str, route: Route) -> "DispatcherBuilder":
        if event_type in self._routes:
            if self._policy is DuplicatePolicy.REJECT:
                raise DuplicateHandlerError(event_type)
            logger.warning("Replacing existing handler for %s", event_type)
        self._routes[event_type] = route
        return self

    def register_generic(self, event_type: str, handler: Handler) -> "DispatcherBuilder":
        """Register a handler that receives the raw envelope."""
        return self._add(event_type, Route(handler))

    def register_typed(
        self,
        event_type: str,
        event_model: type,
        handler: Callable[[Any], Any],
    ) -> "DispatcherBuilder":
        """Register a handler that receives the envelope decoded into ``event_model``.

        The decode happens at dispatch time; a payload that does not fit raises
        SchemaMismatchError and the handler is not called.
        """

        def decode(envelope: WebhookEvent) -> Any:
            return to_typed_event(envelope, event_model)

        return self._add(event_type, Route(handler, decode))

    def on_product_created(self, handler: Callable[[ProductWebhookEvent], Any]) -> "DispatcherBuilder":
        return self.register_typed(EVENT_PRODUCT_CREATED, ProductWebhookEvent, handler)

    def on_order_created(self, handler: Callable[[OrderWebhookEvent], Any]) -> "DispatcherBuilder":
        return self.register_typed(EVENT_ORDER_CREATED, OrderWebhookEvent, handler)

    def on_customer_created(self, handler: Callable[[CustomerWebhookEvent], Any]) -> "DispatcherBuilder":
        return self.register_typed(EVENT_CUSTOMER_CREATED, CustomerWebhookEvent, handler)

    def build(self) -> WebhookDispatcher:
        return WebhookDispatcher(self._routes)
