"""Pydantic models for Salla webhook payloads."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError, field_validator

from salla_sdk.api.models import Brand, Category, Customer, Order, Product
from salla_sdk.errors import MalformedPayloadError, SchemaMismatchError

# Products
EVENT_PRODUCT_CREATED = "product.created"
EVENT_PRODUCT_UPDATED = "product.updated"
EVENT_PRODUCT_DELETED = "product.deleted"

# Orders
EVENT_ORDER_CREATED = "order.created"
EVENT_ORDER_UPDATED = "order.updated"
EVENT_ORDER_CANCELLED = "order.cancelled"
EVENT_ORDER_SHIPPED = "order.shipped"
EVENT_ORDER_DELIVERED = "order.delivered"

# Customers
EVENT_CUSTOMER_CREATED = "customer.created"
EVENT_CUSTOMER_UPDATED = "customer.updated"
EVENT_CUSTOMER_DELETED = "customer.deleted"

# Categories
EVENT_CATEGORY_CREATED = "category.created"
EVENT_CATEGORY_UPDATED = "category.updated"
EVENT_CATEGORY_DELETED = "category.deleted"

# Brands
EVENT_BRAND_CREATED = "brand.created"
EVENT_BRAND_UPDATED = "brand.updated"
EVENT_BRAND_DELETED = "brand.deleted"

# Carts
EVENT_CART_ABANDONED = "cart.abandoned"
EVENT_CART_RESTORED = "cart.restored"

# Payments
EVENT_PAYMENT_COMPLETED = "payment.completed"
EVENT_PAYMENT_FAILED = "payment.failed"

# Shipments
EVENT_SHIPMENT_CREATED = "shipment.created"
EVENT_SHIPMENT_UPDATED = "shipment.updated"


class WebhookEvent(BaseModel):
    """Generic envelope; ``data`` is left untyped."""

    event: str  # e.g. "product.created"
    merchant: int = 0
    data: dict[str, Any] = {}
    created_at: datetime | None = None

    @field_validator("merchant", mode="before")
    @classmethod
    def null_merchant_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("data", mode="before")
    @classmethod
    def null_data_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


DataT = TypeVar("DataT")


class TypedWebhookEvent(BaseModel, Generic[DataT]):
    """Envelope whose ``data`` has been decoded into a resource model."""

    event: str
    merchant: int = 0
    data: DataT
    created_at: datetime | None = None


ProductWebhookEvent = TypedWebhookEvent[Product]
OrderWebhookEvent = TypedWebhookEvent[Order]
CustomerWebhookEvent = TypedWebhookEvent[Customer]
CategoryWebhookEvent = TypedWebhookEvent[Category]
BrandWebhookEvent = TypedWebhookEvent[Brand]

E = TypeVar("E", bound=BaseModel)


def parse_webhook(body: bytes) -> WebhookEvent:
    try:
        return WebhookEvent.model_validate_json(body)
    except ValidationError as exc:
        raise MalformedPayloadError(f"Failed to parse webhook: {exc}") from exc


def to_typed_event(envelope: WebhookEvent, event_model: type[E]) -> E:
    """Re-encode the envelope and decode it into ``event_model``."""
    try:
        return event_model.model_validate_json(envelope.model_dump_json())
    except ValidationError as exc:
        raise SchemaMismatchError(event_model.__name__, str(exc)) from exc
