# app/schemas/stats.py
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel


class AdminDashboardStats(SQLModel):
    """
    Counters for the admin dashboard.
    """
    model_config = ConfigDict(extra="forbid")

    success: bool = True
    total_certifications: int
    active_dogs: int
    pending_shipments: int
    recent_certifications: int


class RecentDog(SQLModel):
    dog_name: str
    license_id: str
    state_of_licensure: str | None
    paid_at: datetime | None


class RecentDogsResponse(SQLModel):
    success: bool = True
    dogs: list[RecentDog]


class Shipment(SQLModel):
    """
    A paid certification awaiting or past shipment.

    ship_to_* is the gift recipient when is_gift, else the owner.
    """

    id: int
    dog_name: str
    license_id: str
    delivery_status: str | None
    tracking_number: str | None
    carrier: str | None
    shipped_at: datetime | None
    paid_at: datetime | None
    is_gift: bool
    email: str

    owner_first_name: str
    owner_last_name: str | None
    owner_address: str | None
    owner_city: str | None
    owner_state: str | None
    owner_zip: str | None

    ship_to_name: str | None
    ship_to_address: str | None
    ship_to_city: str | None
    ship_to_state: str | None
    ship_to_zip: str | None


class ShipmentsResponse(SQLModel):
    success: bool = True
    shipments: list[Shipment]


class TrackingUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    dog_id: int | None = None
    tracking_number: str | None = None
    carrier: str | None = None
