"""Tests for the webhook HTTP endpoint status mapping."""

import json

from fastapi import FastAPI
from fastapi.testclient import TestClient

from salla_sdk.errors import SchemaMismatchError
from salla_sdk.webhook.dispatcher import DispatcherBuilder
from salla_sdk.webhook.handler import create_webhook_router
from salla_sdk.webhook.verifier import sign_payload

BODY = json.dumps(
    {
        "event": "product.created",
        "merchant": 12345,
        "data": {"id": 1, "name": "Test"},
        "created_at": "2024-01-01T00:00:00Z",
    }
).encode()


def _client(dispatcher, secret: str = "") -> TestClient:
    app = FastAPI()
    app.include_router(create_webhook_router(dispatcher, secret))
    return TestClient(app, raise_server_exceptions=False)


def test_typed_handler_open_mode():
    received = []
    client = _client(DispatcherBuilder().on_product_created(received.append).build())

    resp = client.post("/webhook", content=BODY)

    assert resp.status_code == 200
    assert received[0].data.id == 1
    assert received[0].data.name == "Test"


def test_bad_signature_rejected():
    received = []
    client = _client(DispatcherBuilder().on_product_created(received.append).build(), secret="s3cret")

    resp = client.post("/webhook", content=BODY, headers={"X-Signature": "definitely-wrong"})

    assert resp.status_code == 401
    assert received == []


def test_missing_signature_rejected():
    client = _client(DispatcherBuilder().build(), secret="s3cret")
    assert client.post("/webhook", content=BODY).status_code == 401


def test_valid_signature_accepted():
    received = []
    client = _client(DispatcherBuilder().on_product_created(received.append).build(), secret="s3cret")

    resp = client.post("/webhook", content=BODY, headers={"X-Signature": sign_payload("s3cret", BODY)})

    assert resp.status_code == 200
    assert len(received) == 1


def test_authorization_header_fallback():
    client = _client(DispatcherBuilder().build(), secret="s3cret")
    resp = client.post("/webhook", content=BODY, headers={"Authorization": sign_payload("s3cret", BODY)})
    assert resp.status_code == 200


def test_unhandled_event_accepted():
    client = _client(DispatcherBuilder().build())
    resp = client.post("/webhook", content=BODY)
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "handled": False}


def test_malformed_body():
    client = _client(DispatcherBuilder().build())
    assert client.post("/webhook", content=b"not json").status_code == 400


def test_schema_mismatch_is_bad_request():
    client = _client(DispatcherBuilder().on_product_created(lambda e: None).build())
    body = json.dumps({"event": "product.created", "merchant": 1, "data": {"id": "x"}}).encode()
    assert client.post("/webhook", content=body).status_code == 400


def test_handler_error():
    def boom(event):
        raise ValueError("nope")

    client = _client(DispatcherBuilder().register_generic("product.created", boom).build())
    assert client.post("/webhook", content=BODY).status_code == 500


def test_wrong_method():
    client = _client(DispatcherBuilder().build())
    assert client.get("/webhook").status_code == 405
    assert client.put("/webhook", content=BODY).status_code == 405


def test_schema_error_inside_handler_is_server_error():
    def fetch_fails(event):
        raise SchemaMismatchError("DataResponse[Product]", "unexpected response shape")

    client = _client(DispatcherBuilder().on_product_created(fetch_fails).build())
    assert client.post("/webhook", content=BODY).status_code == 500


def test_null_data_accepted():
    received = []
    client = _client(DispatcherBuilder().register_generic("cart.restored", received.append).build())
    resp = client.post("/webhook", content=b'{"event":"cart.restored","merchant":1,"data":null}')
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "handled": True}
    assert received[0].data == {}
