"""Tests for the httpx hub client adapter."""

import json

import httpx
import pytest

from hubwatch.adapters.hub.httpx_client import HttpxHubClient
from hubwatch.core.errors import HubError, HubNotFoundError
from hubwatch.core.models import WebhookDescriptor

HUB = "http://hub.example.io"


def make_client(handler) -> tuple[HttpxHubClient, list[httpx.Request]]:
    """Build a client whose requests are answered by handler and recorded."""
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = HttpxHubClient(HUB, transport=httpx.MockTransport(record))
    return client, requests


class TestGetWebhook:
    @pytest.mark.asyncio
    async def test_returns_descriptor(self):
        client, requests = make_client(
            lambda request: httpx.Response(
                200,
                json={
                    "name": "orders_production",
                    "channelUrl": f"{HUB}/channel/orders",
                    "callbackUrl": "http://app/hub-callbacks/orders",
                    "parallelCalls": 2,
                },
            )
        )
        async with client:
            descriptor = await client.get_webhook("orders_production")

        assert requests[0].method == "GET"
        assert str(requests[0].url) == f"{HUB}/webhook/orders_production"
        assert descriptor.channel_name == "orders"
        assert descriptor.callback_url == "http://app/hub-callbacks/orders"

    @pytest.mark.asyncio
    async def test_404_raises_not_found(self):
        client, _ = make_client(lambda request: httpx.Response(404))
        async with client:
            with pytest.raises(HubNotFoundError) as exc_info:
                await client.get_webhook("missing")
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_server_error_raises_hub_error(self):
        client, _ = make_client(lambda request: httpx.Response(503))
        async with client:
            with pytest.raises(HubError) as exc_info:
                await client.get_webhook("orders_production")
        assert not isinstance(exc_info.value, HubNotFoundError)
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_transport_error_raises_hub_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client, _ = make_client(refuse)
        async with client:
            with pytest.raises(HubError) as exc_info:
                await client.get_webhook("orders_production")
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_invalid_json_raises_hub_error(self):
        client, _ = make_client(lambda request: httpx.Response(200, text="<html>"))
        async with client:
            with pytest.raises(HubError, match="invalid webhook JSON"):
                await client.get_webhook("orders_production")


class TestCreateAndDeleteWebhook:
    @pytest.mark.asyncio
    async def test_create_puts_descriptor(self):
        client, requests = make_client(lambda request: httpx.Response(201))
        descriptor = WebhookDescriptor(
            name="orders_alice_development",
            channel_name="orders",
            callback_url="http://10.1.2.3:3001/hub-callbacks/orders",
            parallel_calls=2,
        )
        async with client:
            await client.create_webhook(descriptor)

        request = requests[0]
        assert request.method == "PUT"
        assert request.url.path == "/webhook/orders_alice_development"
        assert json.loads(request.content) == {
            "name": "orders_alice_development",
            "channelUrl": f"{HUB}/channel/orders",
            "callbackUrl": "http://10.1.2.3:3001/hub-callbacks/orders",
            "parallelCalls": 2,
        }

    @pytest.mark.asyncio
    async def test_create_rejected_raises(self):
        client, _ = make_client(lambda request: httpx.Response(400))
        descriptor = WebhookDescriptor(name="n", channel_name="c", callback_url="http://app/x")
        async with client:
            with pytest.raises(HubError) as exc_info:
                await client.create_webhook(descriptor)
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_delete(self):
        client, requests = make_client(lambda request: httpx.Response(202))
        async with client:
            await client.delete_webhook("orders_production")
        assert requests[0].method == "DELETE"
        assert requests[0].url.path == "/webhook/orders_production"


class TestGetItem:
    @pytest.mark.asyncio
    async def test_json_item_is_decoded(self):
        uri = f"{HUB}/channel/orders/2024/01/01/12/00/00/000/abc"
        client, requests = make_client(
            lambda request: httpx.Response(200, json={"order_id": 42})
        )
        async with client:
            item = await client.get_item(uri)

        assert str(requests[0].url) == uri
        assert item.uri == uri
        assert item.content == {"order_id": 42}
        assert item.content_type == "application/json"

    @pytest.mark.asyncio
    async def test_text_item_is_returned_as_text(self):
        client, _ = make_client(
            lambda request: httpx.Response(
                200, text="hello", headers={"Content-Type": "text/plain"}
            )
        )
        async with client:
            item = await client.get_item(f"{HUB}/channel/notes/1")
        assert item.content == "hello"

    @pytest.mark.asyncio
    async def test_relative_uri_uses_hub_host(self):
        client, requests = make_client(lambda request: httpx.Response(200, text="x"))
        async with client:
            await client.get_item("/channel/notes/1")
        assert str(requests[0].url) == f"{HUB}/channel/notes/1"

    @pytest.mark.asyncio
    async def test_missing_item_raises_not_found(self):
        client, _ = make_client(lambda request: httpx.Response(404))
        async with client:
            with pytest.raises(HubNotFoundError):
                await client.get_item(f"{HUB}/channel/orders/missing")


class TestClientOptions:
    @pytest.mark.asyncio
    async def test_from_options_passes_options_through(self):
        client = HttpxHubClient.from_options(
            f"{HUB}/", {"timeout": 5.0, "headers": {"X-Team": "email"}}
        )
        try:
            assert client.api_url == HUB
            assert client.client.timeout.read == 5.0
            assert client.client.headers["X-Team"] == "email"
        finally:
            await client.close()
