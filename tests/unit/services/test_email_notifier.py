"""
Unit tests for the email notifiers
"""
import json

import httpx
import pytest

from src.adapter.services.email_notifier import (
    RESEND_API_URL,
    LoggingNotifier,
    ResendNotifier,
    build_reset_url,
)
from src.app.services.notifier import NotificationError


def make_notifier(handler):
    return ResendNotifier(
        api_key="re_test_key",
        sender="noreply@example.com",
        app_url="https://cv.example.com/",
        ttl_minutes=30,
        transport=httpx.MockTransport(handler),
    )


def test_reset_url_embeds_raw_token():
    url = build_reset_url("https://cv.example.com/", "abc123")

    assert url == "https://cv.example.com/reset-password?token=abc123"


@pytest.mark.asyncio
async def test_resend_notifier_posts_reset_link():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "email_1"})

    await make_notifier(handler).send_password_reset_link("user@example.com", "deadbeef")

    assert captured["url"] == RESEND_API_URL
    assert captured["auth"] == "Bearer re_test_key"
    assert captured["body"]["to"] == ["user@example.com"]
    assert captured["body"]["from"] == "noreply@example.com"
    assert "https://cv.example.com/reset-password?token=deadbeef" in captured["body"]["html"]
    assert "30 minutes" in captured["body"]["html"]


@pytest.mark.asyncio
async def test_resend_notifier_raises_on_rejected_request():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"name": "validation_error"})

    with pytest.raises(NotificationError, match="HTTP 422"):
        await make_notifier(handler).send_password_reset_link("user@example.com", "deadbeef")


@pytest.mark.asyncio
async def test_resend_notifier_raises_on_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NotificationError, match="unreachable"):
        await make_notifier(handler).send_password_reset_link("user@example.com", "deadbeef")


@pytest.mark.asyncio
async def test_logging_notifier_does_not_log_token(caplog):
    await LoggingNotifier().send_password_reset_link("user@example.com", "supersecrettoken")

    assert "not sent" in caplog.text
    assert "supersecrettoken" not in caplog.text
