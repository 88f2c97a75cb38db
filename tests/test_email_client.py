import pytest

from app.core import email_client
from app.core.email_client import build_message, send_email
from app.database import build_engine_url


def test_message_carries_reply_to_and_html_alternative():
    msg = build_message("owner@mail.com", "Your certificate", "plain", "<p>html</p>")

    assert msg["To"] == "owner@mail.com"
    assert msg["Reply-To"] == email_client.SMTP_REPLY_TO
    assert msg["From"].endswith(f"<{email_client.SMTP_FROM_EMAIL}>")
    assert msg.is_multipart()
    assert [part.get_content_type() for part in msg.iter_parts()] == [
        "text/plain",
        "text/html",
    ]


def test_plain_message_without_reply_to(monkeypatch):
    monkeypatch.setattr(email_client, "SMTP_REPLY_TO", None)

    msg = build_message("owner@mail.com", "Reset", "plain only")

    assert msg["Reply-To"] is None
    assert not msg.is_multipart()


def test_send_without_credentials_raises(monkeypatch):
    monkeypatch.setattr(email_client, "SMTP_HOST", None)

    with pytest.raises(RuntimeError):
        send_email("owner@mail.com", "Reset", "plain")


@pytest.mark.parametrize(
    "url, expected",
    [
        ("sqlite://", "sqlite://"),
        ("postgresql://u:p@db/app", "postgresql://u:p@db/app?sslmode=require"),
        ("postgresql://db/app?x=1", "postgresql://db/app?x=1&sslmode=require"),
        ("postgresql://db/app?sslmode=disable", "postgresql://db/app?sslmode=disable"),
    ],
)
def test_engine_url_requires_ssl_for_postgres(url, expected):
    assert build_engine_url(url) == expected
