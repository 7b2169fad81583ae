"""Notification Service for transactional email.

Email goes out through the SendGrid v3 API. Delivery is best effort:
failures are logged and reported as ``False`` and never raised to the
workflow that triggered them.
"""

import html
import logging
from datetime import UTC, datetime
from typing import Any

import httpx

from stayvista.config import Settings
from stayvista.models.booking import Booking

logger = logging.getLogger(__name__)

SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"


class NotificationService:
    """Service for sending notification emails."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        """Initialize notification service."""
        self.settings = settings
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy-load HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=30.0)
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()

    # ==================== EMAIL (SENDGRID) ====================

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
    ) -> bool:
        """Send an email via SendGrid.

        Args:
            to_email: Recipient email
            subject: Email subject
            html_content: HTML body

        Returns:
            bool: True if accepted by SendGrid
        """
        if not self.settings.sendgrid_api_key:
            logger.info(f"SendGrid not configured; skipping email '{subject}' to {to_email}")
            return False

        headers = {
            "Authorization": f"Bearer {self.settings.sendgrid_api_key}",
            "Content-Type": "application/json",
        }
        payload: dict[str, Any] = {
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {
                "email": self.settings.email_from_address,
                "name": self.settings.email_from_name,
            },
            "subject": subject,
            "content": [{"type": "text/html", "value": html_content}],
        }

        response = await self.http_client.post(SENDGRID_SEND_URL, headers=headers, json=payload)
        if response.status_code not in (200, 202):
            logger.warning(
                f"SendGrid rejected email to {to_email}: {response.status_code} {response.text[:200]}"
            )
            return False
        logger.info(f"Email sent: '{subject}' to {to_email}")
        return True

    async def send(self, address: str | None, subject: str, html_body: str) -> bool:
        """Fire-and-forget send; any failure is logged, never raised."""
        if not address:
            logger.warning(f"No recipient for email '{subject}'")
            return False
        try:
            return await self.send_email(
                to_email=address,
                subject=subject,
                html_content=self._generate_email_html(subject, html_body),
            )
        except Exception:
            logger.exception(f"Failed to send email '{subject}' to {address}")
            return False

    def _generate_email_html(self, title: str, body: str) -> str:
        """Wrap an HTML fragment in the branded layout."""
        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="utf-8">
            <meta name="viewport" content="width=device-width, initial-scale=1.0">
        </head>
        <body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
                     max-width: 600px; margin: 0 auto; padding: 20px; color: #333;">
            <div style="background-color: #f9fafb; border-radius: 8px; padding: 24px;">
                <h1 style="color: #111827; font-size: 24px; margin-bottom: 16px;">{html.escape(title)}</h1>
                <p style="color: #4b5563; font-size: 16px; line-height: 1.6;">{body}</p>
            </div>
            <p style="color: #9ca3af; font-size: 12px; margin-top: 24px; text-align: center;">
                &copy; {datetime.now(UTC).year} {html.escape(self.settings.email_from_name)}. All rights reserved.
            </p>
        </body>
        </html>
        """

    # ==================== SPECIFIC NOTIFICATION HELPERS ====================

    async def notify_welcome(self, email: str) -> None:
        """Greet a newly registered user."""
        await self.send(
            email,
            subject="Welcome to Stayvista!",
            html_body="Hope you will find your destination.",
        )

    async def notify_booking_created(self, booking: Booking) -> None:
        """Notify guest and host about a new booking."""
        guest_name = html.escape((booking.guest or {}).get("name") or "your guest")

        # Notify guest
        await self.send(
            booking.guest_email,
            subject="Booking Successful!",
            html_body=(
                "You've successfully booked a room through StayVista. "
                f"Transaction Id: {html.escape(booking.transaction_id)}"
            ),
        )

        # Notify host
        await self.send(
            booking.host_email,
            subject="Your room got booked!",
            html_body=f"Get ready to welcome {guest_name}.",
        )
