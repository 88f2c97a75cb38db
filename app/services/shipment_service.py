# app/services/shipment_service.py
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.dog import Dog
from app.models.user import User
from app.repositories.dog_repo import DogRepository
from app.schemas.stats import Shipment, ShipmentsResponse, TrackingUpdate


def build_shipment(dog: Dog, owner: User) -> Shipment:
    """
    Flatten a paid dog + owner into a shipment row.

    Gift orders ship to the gift recipient, everything else to the owner.
    """
    if dog.is_gift:
        ship_to = (dog.gift_name, dog.gift_address, dog.gift_city, dog.gift_state, dog.gift_zip)
    else:
        full_name = " ".join(p for p in (owner.first_name, owner.last_name) if p)
        ship_to = (full_name, owner.address, owner.city, owner.state, owner.zip)

    return Shipment(
        id=dog.id,
        dog_name=dog.dog_name,
        license_id=dog.license_id,
        delivery_status=dog.delivery_status,
        tracking_number=dog.tracking_number,
        carrier=dog.carrier,
        shipped_at=dog.shipped_at,
        paid_at=dog.paid_at,
        is_gift=dog.is_gift,
        email=owner.email,
        owner_first_name=owner.first_name,
        owner_last_name=owner.last_name,
        owner_address=owner.address,
        owner_city=owner.city,
        owner_state=owner.state,
        owner_zip=owner.zip,
        ship_to_name=ship_to[0],
        ship_to_address=ship_to[1],
        ship_to_city=ship_to[2],
        ship_to_state=ship_to[3],
        ship_to_zip=ship_to[4],
    )


class ShipmentService:
    """
    Admin shipment dashboard: list paid orders, record tracking numbers.
    """

    def __init__(self, repo: DogRepository):
        self.repo = repo

    def list_shipments(self, session: Session) -> ShipmentsResponse:
        rows = self.repo.list_paid_with_owner(session)
        return ShipmentsResponse(shipments=[build_shipment(d, u) for d, u in rows])

    def update_tracking(self, session: Session, payload: TrackingUpdate) -> Dog:
        """
        Raises:
            HTTPException(400): dog_id or tracking_number missing.
            HTTPException(404): unknown dog.
        """
        tracking_number = (payload.tracking_number or "").strip()
        if payload.dog_id is None or not tracking_number:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing dog_id or tracking_number",
            )

        dog = self.repo.get_by_id(session, payload.dog_id)
        if dog is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Dog not found",
            )

        dog.tracking_number = tracking_number
        dog.carrier = (payload.carrier or "").strip() or None
        dog.shipped_at = datetime.now(timezone.utc)
        dog.delivery_status = "shipped"
        return self.repo.update(session, dog)
