"""Authorized HTTP access to the Salla admin API.

Every outbound request goes through ``prepare_authorized_request``, which makes
sure the cached token is fresh (refreshing it through the OAuth client if
needed) before the bearer header is attached.
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from salla_sdk.api.resources import (
    BrandsService,
    CategoriesService,
    CustomersService,
    OrdersService,
    ProductsService,
)
from salla_sdk.errors import RemoteAPIError, SallaError, SchemaMismatchError, TransportError
from salla_sdk.oauth.client import OAuthClient
from salla_sdk.oauth.models import Token
from salla_sdk.oauth.token_store import TokenStore

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.salla.dev/admin/v2"
DEFAULT_USER_AGENT = "salla-sdk-python/0.1.0"

M = TypeVar("M", bound=BaseModel)


class SallaClient:
    def __init__(
        self,
        oauth: OAuthClient,
        token: Token | TokenStore | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        http_client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._oauth = oauth
        self._tokens = token if isinstance(token, TokenStore) else TokenStore(token)
        self._user_agent = user_agent
        self._client = http_client or httpx.Client(timeout=timeout)
        self._base_url = base_url.rstrip("/")

        self.products = ProductsService(self)
        self.orders = OrdersService(self)
        self.customers = CustomersService(self)
        self.categories = CategoriesService(self)
        self.brands = BrandsService(self)

    def __enter__(self) -> "SallaClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @property
    def token_store(self) -> TokenStore:
        return self._tokens

    @property
    def token(self) -> Token | None:
        """Snapshot of the current credential, for the host application to persist."""
        return self._tokens.get()

    def prepare_authorized_request(
        self,
        method: str,
        path: str,
        body: BaseModel | dict | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Request:
        try:
            self._tokens.ensure_valid(self._oauth.refresh_token)
        except SallaError as exc:
            # Send with whatever is cached; the API's 401 will surface the problem
            logger.warning("Token refresh failed, using cached token: %s", exc)

        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self._user_agent,
        }
        token = self._tokens.get()
        if token is not None and token.access_token:
            headers["Authorization"] = f"Bearer {token.access_token}"

        if isinstance(body, BaseModel):
            body = body.model_dump(mode="json", exclude_none=True)

        return self._client.build_request(
            method,
            f"{self._base_url}{path}",
            json=body,
            params=params,
            headers=headers,
        )

    def execute_and_decode(self, request: httpx.Request, model: type[M] | None = None) -> M | None:
        """Send ``request`` and decode a 2xx body into ``model``.

        Returns None when no model is given. Non-2xx responses raise
        RemoteAPIError.
        """
        try:
            resp = self._client.send(request)
        except httpx.HTTPError as exc:
            raise TransportError(f"{request.method} {request.url.path} failed: {exc}") from exc

        if not resp.is_success:
            if resp.status_code == 429:
                logger.warning("Salla rate limited %s %s", request.method, request.url.path)
            raise RemoteAPIError.from_response(resp)

        if model is None:
            return None
        try:
            return model.model_validate_json(resp.content)
        except ValidationError as exc:
            raise SchemaMismatchError(model.__name__, str(exc)) from exc

    def request(
        self,
        method: str,
        path: str,
        model: type[M] | None = None,
        *,
        body: BaseModel | dict | None = None,
        params: dict[str, Any] | None = None,
    ) -> M | None:
        req = self.prepare_authorized_request(method, path, body, params)
        return self.execute_and_decode(req, model)
