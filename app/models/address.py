# app/models/address.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class SavedAddress(SQLModel, table=True):
    """
    Address book entry owned by a user (e.g. "Home", "Mom's house").
    """

    __tablename__ = "saved_addresses"

    id: int | None = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", index=True)

    label: str
    name: str
    address: str
    city: str
    state: str
    zip: str

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
