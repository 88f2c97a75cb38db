import asyncio
import re
from urllib.parse import parse_qs, urlparse

from sqlmodel import select

from app.models.dog import Dog
from app.services import dog_service


def _dog(session, license_id: str) -> Dog:
    return session.exec(select(Dog).where(Dog.license_id == license_id)).one()


def test_checkout_requires_login(client):
    response = client.post("/api/checkout", json={"dog_name": "Rex", "state": "CA"})
    assert response.status_code == 401


def test_checkout_requires_name_and_state(user_client):
    response = user_client.post("/api/checkout", json={"dog_name": "  ", "state": "CA"})
    assert response.status_code == 400
    assert response.json()["error"] == "Dog name and state required"


def test_checkout_returns_live_payment_link(user_client, session, user):
    response = user_client.post(
        "/api/checkout", json={"dog_name": "Rex", "state": "CA"}
    )

    assert response.status_code == 200
    body = response.json()
    url = urlparse(body["sessionUrl"])
    query = parse_qs(url.query)
    assert f"{url.scheme}://{url.netloc}{url.path}" == "https://pay.example.com/b/live"
    assert query["prefilled_email"] == ["owner@mail.com"]

    license_id = query["client_reference_id"][0]
    assert re.fullmatch(r"[1-9]\d{7}", license_id)
    dog = _dog(session, license_id)
    assert dog.user_id == user.id
    assert dog.payment_status == "pending"
    assert dog.paid_at is None


def test_test_coupon_uses_test_link(user_client, session):
    response = user_client.post(
        "/api/checkout", json={"dog_name": "Rex", "state": "CA", "coupon": "test99"}
    )

    body = response.json()
    assert body["test"] is True
    assert body["sessionUrl"].startswith("https://pay.example.com/b/test?")
    license_id = parse_qs(urlparse(body["sessionUrl"]).query)["client_reference_id"][0]
    assert _dog(session, license_id).payment_status == "pending"


def test_free_coupon_completes_certification(user_client, session):
    response = user_client.post(
        "/api/checkout",
        json={
            "dog_name": "Rex",
            "state": "NV",
            "coupon": "BETA2025",
            "frame_orientation": "portrait",
        },
    )

    body = response.json()
    assert body["success"] is True
    assert body["free"] is True
    assert body["sessionUrl"] is None

    dog = _dog(session, body["licenseId"])
    assert dog.payment_status == "paid"
    assert dog.frame_orientation == "portrait"
    assert dog.expires_at.year - dog.paid_at.year == 2


def test_gift_fields_kept_only_for_gifts(user_client, session):
    gift = {
        "gift_name": "Grandma",
        "gift_address": "3 Paw Ln",
        "gift_city": "Austin",
        "gift_state": "TX",
        "gift_zip": "73301",
    }
    plain = user_client.post(
        "/api/checkout", json={"dog_name": "Rex", "state": "TX", "coupon": "BETA2025", **gift}
    ).json()
    gifted = user_client.post(
        "/api/checkout",
        json={"dog_name": "Rex", "state": "TX", "coupon": "BETA2025", "is_gift": True, **gift},
    ).json()

    assert _dog(session, plain["licenseId"]).gift_name is None
    assert _dog(session, gifted["licenseId"]).gift_name == "Grandma"


def test_checkout_without_payment_link(user_client, settings, monkeypatch):
    monkeypatch.setattr(settings, "PAYMENT_LINK", "")

    response = user_client.post("/api/checkout", json={"dog_name": "Rex", "state": "CA"})
    assert response.status_code == 500
    assert response.json()["success"] is False


# -------- Photo upload --------


def test_upload_photo(user_client, user, uploaded_photos):
    response = user_client.post(
        "/api/dogs/upload-photo",
        files={"photo": ("rex.png", b"\x89PNG fake", "image/png")},
    )

    assert response.status_code == 200
    body = response.json()
    assert re.fullmatch(rf"{user.id}-\d+-[0-9a-f]{{16}}\.png", body["filename"])
    assert body["url"] == f"https://cdn.example.com/{body['filename']}"
    assert uploaded_photos[0][1] == b"\x89PNG fake"


def test_upload_rejects_other_types(user_client, uploaded_photos):
    response = user_client.post(
        "/api/dogs/upload-photo",
        files={"photo": ("rex.gif", b"GIF89a", "image/gif")},
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid file type")
    assert uploaded_photos == []


def test_upload_rejects_large_files(user_client, uploaded_photos):
    too_big = b"\0" * (5 * 1024 * 1024 + 1)
    response = user_client.post(
        "/api/dogs/upload-photo",
        files={"photo": ("rex.jpg", too_big, "image/jpeg")},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "File too large. Maximum size is 5MB"


def test_upload_runs_off_the_event_loop(user_client, monkeypatch):
    calls = []

    def fake_upload(path, file_bytes, content_type):
        try:
            asyncio.get_running_loop()
            calls.append("event loop")
        except RuntimeError:
            calls.append("worker thread")
        return f"https://cdn.example.com/{path}"

    monkeypatch.setattr(dog_service, "upload_to_storage", fake_upload)

    response = user_client.post(
        "/api/dogs/upload-photo",
        files={"photo": ("rex.webp", b"RIFF fake", "image/webp")},
    )

    assert response.status_code == 200
    assert calls == ["worker thread"]
