# app/models/user.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Registered customer account.

    Identity:
      - email: unique, always stored lowercase and trimmed

    Credential:
      - password_hash: "pbkdf2$<iterations>$<salt>$<key>", or a legacy
        unsalted SHA-256 hex digest until the next successful login

    Role:
      - is_admin elevates the account to the admin dashboard
    """

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)

    email: str = Field(
        unique=True,
        index=True,
        description="Normalized (lowercase, trimmed) login email",
    )

    password_hash: str = Field(description="Stored password credential")

    first_name: str = Field(max_length=100)
    last_name: str | None = Field(default=None, max_length=100)

    # Shipping address
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None

    # Billing address
    billing_name: str | None = None
    billing_address: str | None = None
    billing_city: str | None = None
    billing_state: str | None = None
    billing_zip: str | None = None

    is_admin: bool = Field(default=False, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
