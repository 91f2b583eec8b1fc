"""Testes dos endpoints do webhook (probe e entrega)."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest
from starlette.requests import Request

from api.routes.webhook import webhook
from app.protocols.relay import RelayTransportError
from app.use_cases.github import ForwardPackageEventUseCase
from config.settings import RelaySettings
from tests.fakes.github_delivery import (
    CONTAINER_BODY,
    MAVEN_BODY,
    TEST_RELAY_URL,
    TEST_SECRET,
    FakeRelay,
    delivery_headers,
)


def _build_request(
    *,
    method: str,
    body: bytes = b"",
    headers: dict[str, str] | None = None,
    relay: FakeRelay | None = None,
    disconnect_after_body: bool = False,
) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    state = SimpleNamespace(
        settings=RelaySettings(webhook_secret=TEST_SECRET, relay_url=TEST_RELAY_URL),
        forward_use_case=ForwardPackageEventUseCase(relay=relay or FakeRelay()),
    )
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "headers": raw_headers,
        "client": ("192.0.2.10", 51234),
        "app": SimpleNamespace(state=state),
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        if disconnect_after_body:
            await asyncio.sleep(0.01)
            return {"type": "http.disconnect"}
        await asyncio.Event().wait()
        return {"type": "http.disconnect"}

    return Request(scope, _receive)


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "HEAD"])
async def test_probe_returns_ok_without_forward(method: str) -> None:
    relay = FakeRelay()
    request = _build_request(method=method, headers={"User-Agent": "probe"}, relay=relay)

    response = await webhook.probe(request)

    assert response.status_code == 200
    assert response.body == b""
    assert relay.bodies == []


@pytest.mark.asyncio
async def test_container_delivery_is_forwarded() -> None:
    relay = FakeRelay(status_code=200)
    request = _build_request(
        method="POST",
        body=CONTAINER_BODY,
        headers=delivery_headers(CONTAINER_BODY),
        relay=relay,
    )

    response = await webhook.receive_webhook(request)

    assert response.status_code == 200
    assert response.body == b"Forwarded package_type CONTAINER to relay"
    assert relay.bodies == [CONTAINER_BODY]


@pytest.mark.asyncio
async def test_other_package_type_is_filtered_with_message_header() -> None:
    relay = FakeRelay()
    request = _build_request(
        method="POST",
        body=MAVEN_BODY,
        headers=delivery_headers(MAVEN_BODY),
        relay=relay,
    )

    response = await webhook.receive_webhook(request)

    assert response.status_code == 204
    assert response.body == b""
    assert response.headers["message"] == "Filtered out package_type MAVEN! No forward to relay"
    assert relay.bodies == []


@pytest.mark.asyncio
async def test_absent_package_type_is_filtered() -> None:
    body = b'{"zen": "Keep it logically awesome."}'
    relay = FakeRelay()
    request = _build_request(method="POST", body=body, headers=delivery_headers(body), relay=relay)

    response = await webhook.receive_webhook(request)

    assert response.status_code == 204
    assert "message" in response.headers
    assert relay.bodies == []


@pytest.mark.asyncio
async def test_non_ascii_package_type_is_sanitized_in_header() -> None:
    body = '{"package": {"package_type": "CONTAINÉR\\n"}}'.encode()
    request = _build_request(method="POST", body=body, headers=delivery_headers(body))

    response = await webhook.receive_webhook(request)

    assert response.status_code == 204
    assert response.headers["message"] == "Filtered out package_type CONTAIN?R?! No forward to relay"


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["X-GitHub-Delivery", "X-GitHub-Event"])
async def test_missing_delivery_headers_is_bad_request(missing: str) -> None:
    relay = FakeRelay()
    request = _build_request(
        method="POST",
        body=CONTAINER_BODY,
        headers=delivery_headers(CONTAINER_BODY, drop=(missing,)),
        relay=relay,
    )

    response = await webhook.receive_webhook(request)

    assert response.status_code == 400
    assert b"Either missing requestId" in response.body
    assert relay.bodies == []


@pytest.mark.asyncio
async def test_missing_delivery_headers_never_reads_body(monkeypatch: pytest.MonkeyPatch) -> None:
    request = _build_request(
        method="POST",
        body=CONTAINER_BODY,
        headers=delivery_headers(CONTAINER_BODY, drop=("X-GitHub-Event",)),
    )

    async def _fail_read(_request: Request) -> bytes:
        raise AssertionError("body should not be read")

    monkeypatch.setattr(webhook, "_read_body", _fail_read)

    response = await webhook.receive_webhook(request)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_missing_headers_wins_over_bad_signature() -> None:
    request = _build_request(
        method="POST",
        body=CONTAINER_BODY,
        headers={"X-Hub-Signature-256": "sha256=deadbeef"},
    )

    response = await webhook.receive_webhook(request)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_invalid_signature_is_unauthorized() -> None:
    relay = FakeRelay()
    request = _build_request(
        method="POST",
        body=CONTAINER_BODY,
        headers=delivery_headers(CONTAINER_BODY, X_Hub_Signature_256="sha256=deadbeef"),
        relay=relay,
    )

    response = await webhook.receive_webhook(request)

    assert response.status_code == 401
    assert response.body == b"Invalid Signature"
    assert relay.bodies == []


@pytest.mark.asyncio
async def test_absent_signature_is_unauthorized() -> None:
    request = _build_request(
        method="POST",
        body=CONTAINER_BODY,
        headers=delivery_headers(CONTAINER_BODY, drop=("X-Hub-Signature-256",)),
    )

    response = await webhook.receive_webhook(request)

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_invalid_signature_wins_over_malformed_json() -> None:
    request = _build_request(
        method="POST",
        body=b"{invalid}",
        headers=delivery_headers(b"{invalid}", X_Hub_Signature_256="sha256=00"),
    )

    response = await webhook.receive_webhook(request)

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_malformed_json_with_valid_signature_is_bad_request() -> None:
    relay = FakeRelay()
    request = _build_request(
        method="POST",
        body=b"{invalid}",
        headers=delivery_headers(b"{invalid}"),
        relay=relay,
    )

    response = await webhook.receive_webhook(request)

    assert response.status_code == 400
    assert response.body == b"Failed to parse JSON"
    assert relay.bodies == []


@pytest.mark.asyncio
async def test_relay_transport_error_is_bad_gateway() -> None:
    relay = FakeRelay(error=RelayTransportError("relay_transport_error"))
    request = _build_request(
        method="POST",
        body=CONTAINER_BODY,
        headers=delivery_headers(CONTAINER_BODY),
        relay=relay,
    )

    response = await webhook.receive_webhook(request)

    assert response.status_code == 502
    assert response.body == b"Error sending request to relay"


@pytest.mark.asyncio
async def test_relay_non_success_status_is_single_bad_gateway() -> None:
    request = _build_request(
        method="POST",
        body=CONTAINER_BODY,
        headers=delivery_headers(CONTAINER_BODY),
        relay=FakeRelay(status_code=500),
    )

    response = await webhook.receive_webhook(request)

    assert response.status_code == 502
    assert response.body == b"Error - Relay returned status: 500"


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["PUT", "PATCH", "DELETE", "OPTIONS"])
async def test_other_methods_take_the_delivery_path(method: str) -> None:
    request = _build_request(method=method, body=b"{}", headers={})

    response = await webhook.receive_webhook(request)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_client_disconnect_cancels_relay_call() -> None:
    relay = FakeRelay(block=True)
    request = _build_request(
        method="POST",
        body=CONTAINER_BODY,
        headers=delivery_headers(CONTAINER_BODY),
        relay=relay,
        disconnect_after_body=True,
    )

    response = await asyncio.wait_for(webhook.receive_webhook(request), timeout=2.0)

    assert response.status_code == webhook.CLIENT_CLOSED_REQUEST
    assert relay.bodies == [CONTAINER_BODY]
    assert relay.cancelled is True


@pytest.mark.asyncio
async def test_delivery_id_is_reset_after_request() -> None:
    from app.observability import get_delivery_id

    request = _build_request(
        method="POST",
        body=MAVEN_BODY,
        headers=delivery_headers(MAVEN_BODY),
    )

    await webhook.receive_webhook(request)

    assert get_delivery_id() == ""
