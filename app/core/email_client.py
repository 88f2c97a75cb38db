# app/core/email_client.py
"""SMTP delivery for reset links and certificate receipts.

Settings come from SMTP_* environment variables; an unset SMTP_HOST makes
send_email raise, which callers log and swallow.
"""
from __future__ import annotations

import os
import smtplib
from email.message import EmailMessage

_TRUTHY = {"1", "true", "yes", "y"}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


SMTP_HOST: str | None = os.getenv("SMTP_HOST")
SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))

SMTP_USERNAME: str | None = os.getenv("SMTP_USERNAME")
SMTP_PASSWORD: str | None = os.getenv("SMTP_PASSWORD")

SMTP_FROM_EMAIL: str = os.getenv(
    "SMTP_FROM_EMAIL", "noreply@holistictherapydogassociation.com"
)
SMTP_FROM_NAME: str = os.getenv("SMTP_FROM_NAME", "Holistic Therapy Dog Association")
SMTP_REPLY_TO: str | None = os.getenv(
    "SMTP_REPLY_TO", "support@holistictherapydogassociation.com"
)

# SSL wins over STARTTLS when both are set
SMTP_USE_TLS: bool = _env_flag("SMTP_USE_TLS", default=True)
SMTP_USE_SSL: bool = _env_flag("SMTP_USE_SSL", default=False)


def _connect() -> smtplib.SMTP:
    if not SMTP_HOST:
        raise RuntimeError("SMTP_HOST is not configured")

    if SMTP_USE_SSL:
        server: smtplib.SMTP = smtplib.SMTP_SSL(SMTP_HOST, SMTP_PORT, timeout=30)
    else:
        server = smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=30)
        if SMTP_USE_TLS:
            server.starttls()
    return server


def build_message(
    to_email: str,
    subject: str,
    text_body: str,
    html_body: str | None = None,
) -> EmailMessage:
    """Plain-text message with an optional HTML alternative."""
    msg = EmailMessage()
    msg["From"] = f"{SMTP_FROM_NAME} <{SMTP_FROM_EMAIL}>"
    msg["To"] = to_email
    msg["Subject"] = subject
    if SMTP_REPLY_TO:
        msg["Reply-To"] = SMTP_REPLY_TO

    msg.set_content(text_body)
    if html_body:
        msg.add_alternative(html_body, subtype="html")
    return msg


def send_email(
    to_email: str,
    subject: str,
    text_body: str,
    html_body: str | None = None,
) -> None:
    """Deliver one message. Raises RuntimeError when credentials are missing."""
    if not (SMTP_HOST and SMTP_USERNAME and SMTP_PASSWORD):
        raise RuntimeError("SMTP_HOST, SMTP_USERNAME and SMTP_PASSWORD must be set")

    msg = build_message(to_email, subject, text_body, html_body)

    server = _connect()
    try:
        server.login(SMTP_USERNAME, SMTP_PASSWORD)
        server.send_message(msg)
    finally:
        try:
            server.quit()
        except smtplib.SMTPException:
            pass
