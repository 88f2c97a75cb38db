# app/models/session.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class UserSession(SQLModel, table=True):
    """
    Login session.

    A session is valid iff it is found by exact token AND now < expires_at.
    Rows are deleted on logout / password reset; expired rows are simply
    ignored by lookups.
    """

    __tablename__ = "sessions"

    id: int | None = Field(default=None, primary_key=True)

    token: str = Field(
        unique=True,
        index=True,
        description="Opaque bearer secret (64 hex chars)",
    )

    user_id: int = Field(foreign_key="users.id", index=True)

    expires_at: datetime = Field(index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class PasswordResetToken(SQLModel, table=True):
    """
    Single-use password reset token.

    Usable iff now < expires_at AND used_at is NULL.
    """

    __tablename__ = "password_reset_tokens"

    id: int | None = Field(default=None, primary_key=True)

    token: str = Field(unique=True, index=True)

    user_id: int = Field(foreign_key="users.id", index=True)

    expires_at: datetime

    used_at: datetime | None = Field(default=None)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
