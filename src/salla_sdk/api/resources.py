"""Per-resource services for the Salla admin API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from salla_sdk.api.models import (
    Brand,
    Category,
    CreateBrandRequest,
    CreateCategoryRequest,
    CreateCustomerRequest,
    CreateProductRequest,
    Customer,
    DataResponse,
    ListResponse,
    Order,
    OrderReservation,
    Product,
    UpdateBrandRequest,
    UpdateCategoryRequest,
    UpdateCustomerRequest,
    UpdateProductRequest,
)
from salla_sdk.api.pagination import ListOptions, Pagination

if TYPE_CHECKING:
    from salla_sdk.api.client import SallaClient


class _Service:
    def __init__(self, client: SallaClient) -> None:
        self._client = client

    def _list(self, path: str, item_model, opts: ListOptions | None):
        params = opts.to_params() if opts else None
        resp = self._client.request("GET", path, ListResponse[item_model], params=params)
        return resp.data, resp.pagination

    def _get(self, path: str, item_model):
        return self._client.request("GET", path, DataResponse[item_model]).data

    def _send(self, method: str, path: str, item_model, body):
        return self._client.request(method, path, DataResponse[item_model], body=body).data

    def _delete(self, path: str) -> None:
        self._client.request("DELETE", path)


class ProductsService(_Service):
    def list(self, opts: ListOptions | None = None) -> tuple[list[Product], Pagination | None]:
        return self._list("/products", Product, opts)

    def get(self, product_id: int) -> Product:
        return self._get(f"/products/{product_id}", Product)

    def get_by_sku(self, sku: str) -> Product:
        return self._get(f"/products/sku/{sku}", Product)

    def create(self, product: CreateProductRequest) -> Product:
        return self._send("POST", "/products", Product, product)

    def update(self, product_id: int, product: UpdateProductRequest) -> Product:
        return self._send("PUT", f"/products/{product_id}", Product, product)

    def delete(self, product_id: int) -> None:
        self._delete(f"/products/{product_id}")

    def change_status(self, product_id: int, status: str) -> None:
        self._client.request("POST", f"/products/{product_id}/status", body={"status": status})


class OrdersService(_Service):
    def list(self, opts: ListOptions | None = None) -> tuple[list[Order], Pagination | None]:
        return self._list("/orders", Order, opts)

    def get(self, order_id: int) -> Order:
        return self._get(f"/orders/{order_id}", Order)

    def list_reservations(
        self, opts: ListOptions | None = None
    ) -> tuple[list[OrderReservation], Pagination | None]:
        return self._list("/orders/reservations", OrderReservation, opts)


class CustomersService(_Service):
    def list(self, opts: ListOptions | None = None) -> tuple[list[Customer], Pagination | None]:
        return self._list("/customers", Customer, opts)

    def get(self, customer_id: int) -> Customer:
        return self._get(f"/customers/{customer_id}", Customer)

    def create(self, customer: CreateCustomerRequest) -> Customer:
        return self._send("POST", "/customers", Customer, customer)

    def update(self, customer_id: int, customer: UpdateCustomerRequest) -> Customer:
        return self._send("PUT", f"/customers/{customer_id}", Customer, customer)

    def delete(self, customer_id: int) -> None:
        self._delete(f"/customers/{customer_id}")


class CategoriesService(_Service):
    def list(self, opts: ListOptions | None = None) -> tuple[list[Category], Pagination | None]:
        return self._list("/categories", Category, opts)

    def get(self, category_id: int) -> Category:
        return self._get(f"/categories/{category_id}", Category)

    def create(self, category: CreateCategoryRequest) -> Category:
        return self._send("POST", "/categories", Category, category)

    def update(self, category_id: int, category: UpdateCategoryRequest) -> Category:
        return self._send("PUT", f"/categories/{category_id}", Category, category)

    def delete(self, category_id: int) -> None:
        self._delete(f"/categories/{category_id}")


class BrandsService(_Service):
    def list(self, opts: ListOptions | None = None) -> tuple[list[Brand], Pagination | None]:
        return self._list("/brands", Brand, opts)

    def get(self, brand_id: int) -> Brand:
        return self._get(f"/brands/{brand_id}", Brand)

    def create(self, brand: CreateBrandRequest) -> Brand:
        return self._send("POST", "/brands", Brand, brand)

    def update(self, brand_id: int, brand: UpdateBrandRequest) -> Brand:
        return self._send("PUT", f"/brands/{brand_id}", Brand, brand)

    def delete(self, brand_id: int) -> None:
        self._delete(f"/brands/{brand_id}")
