# =============================================================================
# core/services/notification_service.py - Email Notifications
# =============================================================================
# Sends the "new quotation" email to the site admin through the SendGrid v3
# HTTP API. Delivery is best-effort: failures are logged and reported as
# False, never raised to the caller.
# =============================================================================

import logging
from html import escape
from typing import Any

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

# Quotation fields shown in the email, in display order
_EMAIL_FIELDS = [
    ("Name", "name"),
    ("Company", "company"),
    ("Email", "email"),
    ("Mobile", "mobile"),
    ("Country", "country"),
    ("Profession", "profession"),
    ("User Type", "user_type"),
    ("Category", "category"),
    ("Product", "product"),
]


def build_quotation_email(quotation: dict[str, Any]) -> tuple[str, str]:
    """
    Build (subject, html) for a quotation notification.

    All user-supplied values are HTML-escaped.
    """
    subject = f"New Quotation Request from {quotation.get('name', '')}"

    rows = "\n".join(
        f"<p><strong>{label}:</strong> {escape(str(quotation.get(key) or 'N/A'))}</p>"
        for label, key in _EMAIL_FIELDS
    )
    message = escape(quotation.get("message") or "No additional message")

    html = (
        "<h2>New Quotation Request</h2>\n"
        f"{rows}\n"
        "<p><strong>Message:</strong></p>\n"
        f"<p>{message}</p>"
    )
    return subject, html


class NotificationService:
    """Service for outbound email notifications."""

    @staticmethod
    def send_email(to: str, subject: str, html: str) -> bool:
        """
        Send one HTML email via SendGrid.

        Returns:
            True if SendGrid accepted the message, False otherwise
        """
        if not settings.SENDGRID_API_KEY:
            logger.warning("SENDGRID_API_KEY not set, skipping email notification")
            return False

        payload = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": settings.FROM_EMAIL},
            "subject": subject,
            "content": [{"type": "text/html", "value": html}],
        }

        try:
            response = httpx.post(
                settings.SENDGRID_API_URL,
                json=payload,
                headers={"Authorization": f"Bearer {settings.SENDGRID_API_KEY}"},
                timeout=settings.EMAIL_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            logger.info(f"Sent email '{subject}' to {to}")
            return True

        except httpx.HTTPError as e:
            logger.error(f"SendGrid email error: {e}")
            return False

    @staticmethod
    def send_quotation_notification(quotation: dict[str, Any]) -> bool:
        """Notify the admin about a newly submitted quotation."""
        subject, html = build_quotation_email(quotation)
        return NotificationService.send_email(settings.ADMIN_EMAIL, subject, html)
