# app/models/dog.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Dog(SQLModel, table=True):
    """
    A dog certification order.

    Lifecycle:
      - created at checkout with payment_status='pending'
        (or 'paid' directly when a free coupon is used)
      - marked 'paid' by the payment webhook, which also sets paid_at
        and the certification expiry
      - shipped by an admin (tracking_number, shipped_at)
    """

    __tablename__ = "dogs"

    id: int | None = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", index=True)

    dog_name: str = Field(max_length=100)

    license_id: str = Field(
        unique=True,
        index=True,
        description="8-digit public license number",
    )

    state_of_licensure: str | None = None

    # pending | paid
    payment_status: str = Field(default="pending", index=True)
    paid_at: datetime | None = Field(default=None, index=True)
    expires_at: datetime | None = None

    photo_url: str | None = None
    # square | portrait | landscape
    frame_orientation: str = Field(default="square")

    # Owner-editable details
    breed: str | None = None
    weight: str | None = None
    height: str | None = None
    eye_color: str | None = None
    birthday: str | None = None

    # Gift shipping
    is_gift: bool = Field(default=False)
    gift_name: str | None = None
    gift_address: str | None = None
    gift_city: str | None = None
    gift_state: str | None = None
    gift_zip: str | None = None

    # Shipment tracking
    delivery_status: str | None = None
    tracking_number: str | None = None
    carrier: str | None = None
    shipped_at: datetime | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
