# app/schemas/account.py
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel


class ProfileRead(SQLModel):
    """User profile fields exposed on the account page."""

    id: int
    email: str
    first_name: str
    last_name: str | None
    address: str | None
    city: str | None
    state: str | None
    zip: str | None
    billing_name: str | None
    billing_address: str | None
    billing_city: str | None
    billing_state: str | None
    billing_zip: str | None


class OwnedDogRead(SQLModel):
    id: int
    dog_name: str
    license_id: str
    state_of_licensure: str | None
    photo_url: str | None
    paid_at: datetime | None
    expires_at: datetime | None
    breed: str | None
    weight: str | None
    height: str | None
    eye_color: str | None
    birthday: str | None


class OrderSummaryRead(SQLModel):
    dog_name: str
    license_id: str
    state_of_licensure: str | None
    paid_at: datetime | None
    expires_at: datetime | None


class SavedAddressRead(SQLModel):
    id: int
    label: str
    name: str
    address: str
    city: str
    state: str
    zip: str


class ProfileResponse(SQLModel):
    """GET /account/profile"""

    success: bool = True
    user: ProfileRead
    dogs: list[OwnedDogRead]
    orders: list[OrderSummaryRead]
    saved_addresses: list[SavedAddressRead]


class ProfileUpdate(SQLModel):
    """
    Name + shipping address. Every field is overwritten; omitted or
    empty values clear the column.
    """

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None


class BillingUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    billing_name: str | None = None
    billing_address: str | None = None
    billing_city: str | None = None
    billing_state: str | None = None
    billing_zip: str | None = None


class DogDetailsUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    dog_id: int | None = None
    breed: str | None = None
    weight: str | None = None
    height: str | None = None
    eye_color: str | None = None
    birthday: str | None = None


class SavedAddressPayload(SQLModel):
    """
    Used for create (id omitted), update (id required) and delete (id only).
    """

    model_config = ConfigDict(extra="forbid")

    id: int | None = None
    label: str | None = None
    name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None


class SavedAddressCreated(SQLModel):
    success: bool = True
    message: str
    id: int


class SavedAddressList(SQLModel):
    success: bool = True
    addresses: list[SavedAddressRead]


class ChangePasswordRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    current_password: str | None = None
    new_password: str | None = None
