# app/services/notification_service.py
import logging
import smtplib
from html import escape
from urllib.parse import urlencode

from app.core import email_client
from app.core.config import get_settings

settings = get_settings()

logger = logging.getLogger(__name__)

BRAND = "Holistic Therapy Dog Association"


def _deliver(to_email: str, subject: str, text_body: str, html_body: str) -> None:
    """
    Send and log; a failed email never fails the request that queued it.
    """
    try:
        email_client.send_email(
            to_email=to_email,
            subject=subject,
            text_body=text_body,
            html_body=html_body,
        )
        logger.info("Email sent: %s", subject)
    except (RuntimeError, smtplib.SMTPException, OSError):
        logger.exception("Email send failed: %s", subject)


def reset_link(token: str) -> str:
    return f"{settings.SITE_URL}/reset-password.html?{urlencode({'token': token})}"


def verify_link(license_id: str) -> str:
    return f"{settings.SITE_URL}/verify.html?{urlencode({'q': license_id})}"


def send_password_reset_email(to_email: str, first_name: str | None, token: str) -> None:
    link = reset_link(token)
    minutes = settings.RESET_TOKEN_TTL_MINUTES
    name = first_name or "Friend"

    text_body = (
        f"Dear {name},\n\n"
        "We received a request to reset your password. Open the link below "
        f"within {minutes} minutes to choose a new one:\n\n{link}\n\n"
        "If you did not request this, you can ignore this email.\n\n"
        f"{BRAND}"
    )
    html_body = f"""
<p>Dear {escape(name)},</p>
<p>We received a request to reset your password. This link is valid for {minutes} minutes:</p>
<p><a href="{escape(link)}">Reset your password</a></p>
<p>If you did not request this, you can ignore this email.</p>
<p>{BRAND}</p>
"""
    _deliver(to_email, f"[{BRAND}] Reset your password", text_body, html_body)


def send_certification_email(
    to_email: str,
    first_name: str | None,
    dog_name: str,
    license_id: str,
    state: str | None,
    valid_through: str,
    gift_name: str | None = None,
) -> None:
    """
    Order confirmation sent once a certification payment completes.
    """
    name = first_name or "Friend"
    link = verify_link(license_id)

    gift_text = (
        f"Gift order: this certification will be shipped to {gift_name}.\n\n"
        if gift_name
        else ""
    )
    gift_html = (
        f"<p><strong>Gift Order:</strong> This certification will be shipped to {escape(gift_name)}.</p>"
        if gift_name
        else ""
    )

    text_body = (
        f"Dear {name},\n\n"
        f"Thank you for your order. We are honored to certify {dog_name} "
        "as an official Holistic Therapy Dog.\n\n"
        f"{gift_text}"
        f"Dog's name: {dog_name}\n"
        f"License number: {license_id}\n"
        f"State: {state or '-'}\n"
        f"Valid through: {valid_through}\n\n"
        "Your embossed diploma will ship within 3-5 business days. You will "
        "receive tracking information once it is on its way.\n\n"
        f"Verify the certification anytime: {link}\n\n"
        f"{BRAND}"
    )
    html_body = f"""
<h2>Order Confirmed!</h2>
<p>Dear {escape(name)},</p>
<p>Thank you for your order. We are honored to certify <strong>{escape(dog_name)}</strong>
as an official Holistic Therapy Dog.</p>
{gift_html}
<table>
  <tr><td>Dog's Name:</td><td><strong>{escape(dog_name)}</strong></td></tr>
  <tr><td>License Number:</td><td><strong>{escape(license_id)}</strong></td></tr>
  <tr><td>State:</td><td><strong>{escape(state or '-')}</strong></td></tr>
  <tr><td>Valid Through:</td><td><strong>{escape(valid_through)}</strong></td></tr>
</table>
<p>Your official embossed diploma will ship within 3-5 business days.</p>
<p><a href="{escape(link)}">View Certification</a></p>
<p>{BRAND}</p>
"""
    _deliver(to_email, f"{dog_name} is Now Certified!", text_body, html_body)
