"""
Tests for notification dispatchers.

The Telegram dispatcher is exercised against httpx.MockTransport, so no
request leaves the process.
"""

import json

import httpx
import pytest

from medreminder.config.settings import Settings
from medreminder.domains.shared.application.ports.notification_dispatcher import NotificationPayload
from medreminder.domains.shared.infrastructure.notifications import (
    LoggingNotificationDispatcher,
    TelegramNotificationDispatcher,
    create_notification_dispatcher,
)

PAYLOAD = NotificationPayload(kind="medication_reminder", text="Time to take Amoxicillin 500mg")


def _dispatcher(handler) -> TelegramNotificationDispatcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TelegramNotificationDispatcher(bot_token="123456:ABCDEF", api_base="https://telegram.test/", client=client)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_send_posts_to_send_message():
    # Arrange
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"ok": True, "result": {"message_id": 1}})

    dispatcher = _dispatcher(handler)

    # Act
    delivered = await dispatcher.send("5001", PAYLOAD)

    # Assert
    assert delivered is True
    assert str(requests[0].url) == "https://telegram.test/bot123456:ABCDEF/sendMessage"
    body = json.loads(requests[0].content)
    assert body["chat_id"] == "5001"
    assert body["text"] == PAYLOAD.text


@pytest.mark.unit
@pytest.mark.asyncio
async def test_send_returns_false_on_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"ok": False, "description": "Bad Request: chat not found"})

    assert await _dispatcher(handler).send("5001", PAYLOAD) is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_send_returns_false_on_non_json_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    assert await _dispatcher(handler).send("5001", PAYLOAD) is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_send_returns_false_on_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    assert await _dispatcher(handler).send("5001", PAYLOAD) is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_send_returns_false_on_connect_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert await _dispatcher(handler).send("5001", PAYLOAD) is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_logging_dispatcher_always_succeeds():
    assert await LoggingNotificationDispatcher().send("5001", PAYLOAD) is True


@pytest.mark.unit
def test_factory_picks_dispatcher_from_settings():
    assert isinstance(create_notification_dispatcher(Settings(TELEGRAM_BOT_TOKEN=None)), LoggingNotificationDispatcher)
    assert isinstance(
        create_notification_dispatcher(Settings(TELEGRAM_BOT_TOKEN="123456:ABCDEF")),
        TelegramNotificationDispatcher,
    )
