"""Tests for the WhatsApp Cloud API channel, using httpx's mock transport."""

import json

import httpx
import pytest

from whatsapp_otp.channels.factory import build_channel
from whatsapp_otp.channels.console import ConsoleChannel
from whatsapp_otp.channels.whatsapp_cloud import WhatsAppCloudChannel
from whatsapp_otp.config import Settings
from whatsapp_otp.errors import DeliveryError


def _channel(handler, token="secret-token", phone_number_id="1098765") -> WhatsAppCloudChannel:
    return WhatsAppCloudChannel(
        api_token=token,
        phone_number_id=phone_number_id,
        base_url="https://graph.example.test/v21.0/",
        transport=httpx.MockTransport(handler),
    )


def test_ready_requires_token_and_sender_id():
    assert _channel(lambda r: httpx.Response(200)).is_channel_ready()
    assert not _channel(lambda r: httpx.Response(200), token="").is_channel_ready()
    assert not _channel(lambda r: httpx.Response(200), phone_number_id="").is_channel_ready()


@pytest.mark.asyncio
async def test_deliver_posts_text_message():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"messages": [{"id": "wamid.1"}]})

    await _channel(handler).deliver("+254 700 000000", "Your code: 123456")

    assert captured["url"] == "https://graph.example.test/v21.0/1098765/messages"
    assert captured["auth"] == "Bearer secret-token"
    assert captured["body"] == {
        "messaging_product": "whatsapp",
        "to": "254700000000",
        "type": "text",
        "text": {"body": "Your code: 123456"},
    }


@pytest.mark.asyncio
async def test_deliver_raises_on_api_error():
    channel = _channel(lambda r: httpx.Response(401, json={"error": {"message": "bad token"}}))
    with pytest.raises(DeliveryError, match="401"):
        await channel.deliver("254700000000", "hi")


@pytest.mark.asyncio
async def test_deliver_raises_on_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DeliveryError) as excinfo:
        await _channel(handler).deliver("254700000000", "hi")
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_factory_selects_channel():
    assert isinstance(build_channel(Settings(delivery_channel="console")), ConsoleChannel)

    cloud = build_channel(
        Settings(
            delivery_channel="cloud",
            whatsapp_api_token="t",
            whatsapp_phone_number_id="1",
        )
    )
    assert isinstance(cloud, WhatsAppCloudChannel)
    assert cloud.is_channel_ready()
