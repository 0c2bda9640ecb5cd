"""Tests for the OAuth authorization URL and token endpoint exchanges."""

import json
from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from salla_sdk.errors import TokenExchangeError, TransportError
from salla_sdk.oauth.client import AUTHORIZATION_URL, TOKEN_URL, OAuthClient
from salla_sdk.oauth.models import OAuthConfig

TOKEN_BODY = {
    "access_token": "new-access",
    "token_type": "bearer",
    "expires_in": 1209600,
    "refresh_token": "new-refresh",
    "scope": "offline_access",
}


def _config(scopes=()) -> OAuthConfig:
    return OAuthConfig(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri="https://example.com/callback",
        scopes=scopes,
    )


def _client(handler, scopes=()) -> OAuthClient:
    return OAuthClient(_config(scopes), http_client=httpx.Client(transport=httpx.MockTransport(handler)))


def _form(request: httpx.Request) -> dict[str, str]:
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


class TestAuthorizationURL:
    def test_query_parameters(self):
        client = _client(lambda r: httpx.Response(200), scopes=("offline_access", "products.read"))
        url = client.build_authorization_url("xyz")
        parsed = urlparse(url)
        query = {k: v[0] for k, v in parse_qs(parsed.query).items()}

        assert url.startswith(AUTHORIZATION_URL + "?")
        assert query == {
            "client_id": "client-id",
            "redirect_uri": "https://example.com/callback",
            "response_type": "code",
            "state": "xyz",
            "scope": "offline_access products.read",
        }

    def test_default_scope(self):
        client = _client(lambda r: httpx.Response(200))
        query = parse_qs(urlparse(client.build_authorization_url("s")).query)
        assert query["scope"] == ["offline_access"]

    def test_deterministic(self):
        client = _client(lambda r: httpx.Response(200))
        assert client.build_authorization_url("s") == client.build_authorization_url("s")


class TestTokenExchange:
    def test_exchange_code(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=TOKEN_BODY)

        before = datetime.now(timezone.utc)
        token = _client(handler).exchange_code("auth-code")

        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == TOKEN_URL
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        form = _form(request)
        assert form["grant_type"] == "authorization_code"
        assert form["code"] == "auth-code"
        assert form["client_id"] == "client-id"
        assert form["client_secret"] == "client-secret"
        assert form["redirect_uri"] == "https://example.com/callback"

        assert token.access_token == "new-access"
        assert token.refresh_token == "new-refresh"
        assert token.token_type == "bearer"
        assert before + timedelta(seconds=1209600) <= token.expiry
        assert token.valid()

    def test_refresh_token(self):
        seen = []

        def handler(request):
            seen.append(_form(request))
            return httpx.Response(200, json=TOKEN_BODY)

        token = _client(handler).refresh_token("old-refresh")
        assert seen[0]["grant_type"] == "refresh_token"
        assert seen[0]["refresh_token"] == "old-refresh"
        assert "redirect_uri" not in seen[0]
        assert token.access_token == "new-access"

    def test_non_2xx_raises_exchange_error(self):
        body = json.dumps({"error": "invalid_grant"})
        client = _client(lambda r: httpx.Response(400, text=body))
        with pytest.raises(TokenExchangeError) as exc_info:
            client.refresh_token("expired")
        assert exc_info.value.status_code == 400
        assert exc_info.value.body == body

    def test_unparseable_body_raises_exchange_error(self):
        client = _client(lambda r: httpx.Response(200, text="not json"))
        with pytest.raises(TokenExchangeError):
            client.exchange_code("code")

    def test_timeout_raises_transport_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(TransportError):
            _client(handler).refresh_token("rt")
