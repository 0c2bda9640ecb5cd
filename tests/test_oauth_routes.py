"""Tests for the OAuth install endpoints and the assembled app."""

from urllib.parse import parse_qs, urlparse

import httpx
from fastapi import FastAPI
from fastapi.testclient import TestClient

from salla_sdk.config import Settings
from salla_sdk.main import create_app
from salla_sdk.oauth.client import OAuthClient
from salla_sdk.oauth.models import OAuthConfig
from salla_sdk.oauth.routes import create_oauth_router
from salla_sdk.oauth.token_store import TokenStore


def _setup(token_status: int = 200):
    def handler(request):
        if token_status != 200:
            return httpx.Response(token_status, text="invalid_grant")
        return httpx.Response(
            200,
            json={"access_token": "acc", "token_type": "bearer", "expires_in": 3600, "refresh_token": "ref"},
        )

    oauth = OAuthClient(
        OAuthConfig("client-id", "secret", "https://example.com/oauth/callback"),
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    store = TokenStore()
    app = FastAPI()
    app.include_router(create_oauth_router(oauth, store))
    return TestClient(app, follow_redirects=False), store


def _state_from_redirect(client: TestClient) -> str:
    resp = client.get("/oauth")
    assert resp.status_code == 307
    return parse_qs(urlparse(resp.headers["location"]).query)["state"][0]


def test_callback_stores_token():
    client, store = _setup()
    state = _state_from_redirect(client)

    resp = client.get("/oauth/callback", params={"code": "abc", "state": state})

    assert resp.status_code == 200
    assert resp.json()["token_type"] == "bearer"
    assert store.get().access_token == "acc"
    assert store.get().refresh_token == "ref"


def test_callback_state_is_single_use():
    client, _ = _setup()
    state = _state_from_redirect(client)
    assert client.get("/oauth/callback", params={"code": "abc", "state": state}).status_code == 200
    assert client.get("/oauth/callback", params={"code": "abc", "state": state}).status_code == 400


def test_callback_unknown_state():
    client, store = _setup()
    resp = client.get("/oauth/callback", params={"code": "abc", "state": "forged"})
    assert resp.status_code == 400
    assert store.get() is None


def test_callback_rejected_code():
    client, store = _setup(token_status=401)
    state = _state_from_redirect(client)
    resp = client.get("/oauth/callback", params={"code": "bad", "state": state})
    assert resp.status_code == 400
    assert store.get() is None


def test_app_health_and_webhook():
    app = create_app(Settings(webhook_secret="s3cret"))
    client = TestClient(app)
    assert client.get("/health").json() == {"status": "ok"}
    assert client.post("/webhook", content=b"{}", headers={"X-Signature": "bad"}).status_code == 401
