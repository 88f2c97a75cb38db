# app/schemas/dog.py
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel

FrameOrientation = Literal["square", "portrait", "landscape"]


class CheckoutRequest(SQLModel):
    """
    Payload for POST /checkout.

    Backend derives:
      - user_id from the session
      - license_id (random 8 digits)
      - payment_status ('paid' for free coupons, else 'pending')
    """

    model_config = ConfigDict(extra="forbid")

    dog_name: str | None = None
    state: str | None = None
    photo_url: str | None = None
    frame_orientation: FrameOrientation = "square"
    coupon: str | None = None

    is_gift: bool = False
    gift_name: str | None = None
    gift_address: str | None = None
    gift_city: str | None = None
    gift_state: str | None = None
    gift_zip: str | None = None

    @field_validator("dog_name", "state", "coupon", "photo_url")
    @classmethod
    def strip_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class CheckoutResponse(SQLModel):
    """
    Either a completed free certification (licenseId, free) or a payment
    link to redirect to (sessionUrl, optionally test).
    """

    success: bool = True
    sessionUrl: str | None = None
    licenseId: str | None = None
    free: bool | None = None
    test: bool | None = None
    message: str | None = None


class PhotoUploadResponse(SQLModel):
    success: bool = True
    filename: str
    url: str


class RegistryDogRead(SQLModel):
    """Public registry view of a certified dog."""

    id: int
    dog_name: str
    license_id: str
    state_of_licensure: str | None
    photo_url: str | None
    frame_orientation: str
    paid_at: datetime | None
    expires_at: datetime | None
    first_name: str
    last_name: str | None


class VerifyResponse(SQLModel):
    success: bool = True
    results: list[RegistryDogRead]
    count: int


class GalleryResponse(SQLModel):
    success: bool = True
    dogs: list[RegistryDogRead]
    total: int
    limit: int
    offset: int
