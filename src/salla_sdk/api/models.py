"""Pydantic models for Salla admin API resources and response envelopes."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from salla_sdk.api.pagination import Pagination

T = TypeVar("T")


class SallaModel(BaseModel):
    # The platform adds fields over time; keep them instead of failing
    model_config = ConfigDict(extra="allow")


# -- Envelopes --


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    code: int = 200
    data: T


class ListResponse(BaseModel, Generic[T]):
    success: bool = True
    code: int = 200
    data: list[T] = []
    pagination: Pagination | None = None


# -- Products --


class ProductImage(SallaModel):
    id: int = 0
    url: str = ""
    alt: str | None = None
    position: int | None = None


class ProductOption(SallaModel):
    id: int = 0
    name: str = ""
    type: str = ""
    values: list[str] = []
    required: bool = False


class Product(SallaModel):
    id: int
    name: str = ""
    description: str | None = None
    price: float = 0
    sale_price: float | None = None
    sku: str | None = None
    quantity: int = 0
    status: str = ""
    type: str | None = None
    weight: float | None = None
    category_id: int | None = None
    brand_id: int | None = None
    images: list[ProductImage] = []
    options: list[ProductOption] = []
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CreateProductRequest(BaseModel):
    name: str
    price: float
    quantity: int = 0
    description: str | None = None
    sale_price: float | None = None
    sku: str | None = None
    status: str | None = None
    type: str | None = None
    weight: float | None = None
    category_id: int | None = None
    brand_id: int | None = None
    images: list[str] | None = None
    metadata: dict[str, Any] | None = None


class UpdateProductRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    price: float | None = None
    sale_price: float | None = None
    sku: str | None = None
    quantity: int | None = None
    status: str | None = None
    type: str | None = None
    weight: float | None = None
    category_id: int | None = None
    brand_id: int | None = None
    metadata: dict[str, Any] | None = None


# -- Orders --


class OrderAmount(SallaModel):
    total: float = 0
    subtotal: float = 0
    tax: float = 0
    shipping: float = 0
    discount: float = 0
    currency_code: str = ""


class OrderCustomer(SallaModel):
    id: int = 0
    name: str = ""
    email: str = ""
    phone: str | None = None


class Address(SallaModel):
    first_name: str = ""
    last_name: str = ""
    address_1: str = ""
    address_2: str | None = None
    city: str = ""
    state: str | None = None
    postal_code: str | None = None
    country: str = ""
    phone: str | None = None


class OrderItem(SallaModel):
    id: int = 0
    product_id: int = 0
    name: str = ""
    sku: str | None = None
    quantity: int = 0
    price: float = 0
    total: float = 0
    options: dict[str, Any] | None = None


class OrderPayment(SallaModel):
    method: str = ""
    gateway: str | None = None
    transaction: str | None = None
    paid_at: datetime | None = None


class OrderShipping(SallaModel):
    method: str = ""
    tracking_number: str | None = None
    shipped_at: datetime | None = None


class Order(SallaModel):
    id: int
    reference_id: str = ""
    status: str = ""
    payment_status: str = ""
    amount: OrderAmount | None = None
    customer: OrderCustomer | None = None
    shipping_address: Address | None = None
    billing_address: Address | None = None
    items: list[OrderItem] = []
    payment: OrderPayment | None = None
    shipping: OrderShipping | None = None
    notes: str | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderReservation(SallaModel):
    id: int
    order_id: int = 0
    product_id: int = 0
    quantity: int = 0
    expires_at: datetime | None = None
    created_at: datetime | None = None


# -- Customers --


class CustomerAddress(SallaModel):
    id: int = 0
    type: str | None = None
    first_name: str = ""
    last_name: str = ""
    address_1: str = ""
    address_2: str | None = None
    city: str = ""
    state: str | None = None
    postal_code: str | None = None
    country: str = ""
    phone: str | None = None
    is_default: bool = False


class Customer(SallaModel):
    id: int
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str | None = None
    gender: str | None = None
    date_of_birth: str | None = None
    status: str = ""
    avatar: str | None = None
    addresses: list[CustomerAddress] = []
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CreateCustomerRequest(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    password: str | None = None
    gender: str | None = None
    date_of_birth: str | None = None
    status: str | None = None
    metadata: dict[str, Any] | None = None


class UpdateCustomerRequest(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    gender: str | None = None
    date_of_birth: str | None = None
    status: str | None = None
    metadata: dict[str, Any] | None = None


# -- Categories --


class Category(SallaModel):
    id: int
    name: str = ""
    description: str | None = None
    parent_id: int | None = None
    image: str | None = None
    status: str = ""
    sort_order: int | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CreateCategoryRequest(BaseModel):
    name: str
    description: str | None = None
    parent_id: int | None = None
    image: str | None = None
    status: str | None = None
    sort_order: int | None = None
    metadata: dict[str, Any] | None = None


class UpdateCategoryRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    parent_id: int | None = None
    image: str | None = None
    status: str | None = None
    sort_order: int | None = None
    metadata: dict[str, Any] | None = None


# -- Brands --


class Brand(SallaModel):
    id: int
    name: str = ""
    description: str | None = None
    logo: str | None = None
    website: str | None = None
    status: str = ""
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CreateBrandRequest(BaseModel):
    name: str
    description: str | None = None
    logo: str | None = None
    website: str | None = None
    status: str | None = None
    metadata: dict[str, Any] | None = None


class UpdateBrandRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    logo: str | None = None
    website: str | None = None
    status: str | None = None
    metadata: dict[str, Any] | None = None
