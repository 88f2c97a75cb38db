import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PAYMENT_LINK", "https://pay.example.com/b/live")
os.environ.setdefault("PAYMENT_TEST_LINK", "https://pay.example.com/b/test")

import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlalchemy.pool import StaticPool

from app.core import email_client
from app.core.config import get_settings
from app.core.passwords import hash_password
from app.database import get_session
from app.main import app
from app.models.dog import Dog
from app.models.user import User
from app.services import dog_service

_license_ids = itertools.count(20_000_000)


@pytest.fixture()
def settings():
    return get_settings()


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    app.dependency_overrides[get_session] = lambda: session
    # https so the Secure session cookie is stored and sent back
    client = TestClient(app, base_url="https://testserver")
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """Capture outbound email instead of talking to SMTP."""
    outbox: list[dict] = []

    def fake_send_email(to_email, subject, text_body, html_body=None):
        outbox.append(
            {"to": to_email, "subject": subject, "text": text_body, "html": html_body}
        )

    monkeypatch.setattr(email_client, "send_email", fake_send_email)
    return outbox


@pytest.fixture()
def uploaded_photos(monkeypatch):
    uploads: list[tuple[str, bytes, str]] = []

    def fake_upload(path, file_bytes, content_type):
        uploads.append((path, file_bytes, content_type))
        return f"https://cdn.example.com/{path}"

    monkeypatch.setattr(dog_service, "upload_to_storage", fake_upload)
    return uploads


@pytest.fixture()
def make_user(session: Session):
    def _make_user(
        email: str = "owner@mail.com",
        password: str = "correct-horse",
        first_name: str = "Olive",
        last_name: str | None = "Owner",
        is_admin: bool = False,
        password_hash: str | None = None,
    ) -> User:
        user = User(
            email=email,
            password_hash=password_hash or hash_password(password),
            first_name=first_name,
            last_name=last_name,
            is_admin=is_admin,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_dog(session: Session):
    def _make_dog(user: User, **fields) -> Dog:
        now = datetime.now(timezone.utc)
        values = {
            "dog_name": "Biscuit",
            "license_id": str(next(_license_ids)),
            "state_of_licensure": "CA",
            "payment_status": "paid",
            "paid_at": now,
            "expires_at": now + timedelta(days=730),
        }
        values.update(fields)
        dog = Dog(user_id=user.id, **values)
        session.add(dog)
        session.commit()
        session.refresh(dog)
        return dog

    return _make_dog


def _login(client: TestClient, email: str, password: str):
    return client.post("/api/login", json={"email": email, "password": password})


@pytest.fixture()
def login():
    return _login


@pytest.fixture()
def user(make_user):
    return make_user()


@pytest.fixture()
def admin(make_user):
    return make_user(email="admin@mail.com", first_name="Ada", is_admin=True)


@pytest.fixture()
def user_client(client: TestClient, user: User):
    """Client logged in as the regular user (session cookie set)."""
    response = _login(client, "owner@mail.com", "correct-horse")
    assert response.status_code == 200
    return client


@pytest.fixture()
def admin_client(client: TestClient, admin: User):
    response = _login(client, "admin@mail.com", "correct-horse")
    assert response.status_code == 200
    return client
