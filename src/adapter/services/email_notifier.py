"""
Email notifiers

ResendNotifier delivers through the Resend HTTP API. LoggingNotifier is used
when no API key is configured: it records that nothing was sent.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from src.app.services.notifier import INotifier, NotificationError

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


def build_reset_url(app_url: str, raw_token: str) -> str:
    return f"{app_url.rstrip('/')}/reset-password?{urlencode({'token': raw_token})}"


def render_reset_email(reset_url: str, ttl_minutes: int) -> str:
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #2563eb;">Reset your password</h2>
  <p>You requested to reset your password. Click the button below to create a new password:</p>
  <a href="{reset_url}"
     style="display: inline-block; background-color: #2563eb; color: white; padding: 12px 24px;
            text-decoration: none; border-radius: 6px; margin: 20px 0;">
    Reset Password
  </a>
  <p style="color: #6b7280; font-size: 14px;">
    This link will expire in {ttl_minutes} minutes. If you didn't request this, you can safely ignore this email.
  </p>
  <p style="color: #6b7280; font-size: 14px;">
    Or copy and paste this URL into your browser:<br/>
    <a href="{reset_url}" style="color: #2563eb;">{reset_url}</a>
  </p>
</div>
"""


class ResendNotifier(INotifier):
    """Sends transactional email through the Resend API"""

    def __init__(
        self,
        api_key: str,
        sender: str,
        app_url: str,
        ttl_minutes: int,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.sender = sender
        self.app_url = app_url
        self.ttl_minutes = ttl_minutes
        self.timeout = timeout
        self.transport = transport

    async def send_password_reset_link(self, email: str, raw_token: str) -> None:
        reset_url = build_reset_url(self.app_url, raw_token)
        payload = {
            "from": self.sender,
            "to": [email],
            "subject": "Reset your password",
            "html": render_reset_email(reset_url, self.ttl_minutes),
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(RESEND_API_URL, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise NotificationError(
                f"Resend API rejected the request (HTTP {exc.response.status_code})"
            ) from exc
        except httpx.HTTPError as exc:
            raise NotificationError(f"Resend API unreachable: {exc.__class__.__name__}") from exc


class LoggingNotifier(INotifier):
    """Stand-in used when email delivery is not configured"""

    async def send_password_reset_link(self, email: str, raw_token: str) -> None:
        logger.warning("Email provider not configured. Password reset email not sent.")
