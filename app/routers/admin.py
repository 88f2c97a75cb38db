# app/routers/admin.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.dog_repo import DogRepository
from app.repositories.stats_repo import StatsRepository
from app.schemas.auth import MessageResponse
from app.schemas.stats import (
    AdminDashboardStats,
    RecentDogsResponse,
    ShipmentsResponse,
    TrackingUpdate,
)
from app.services.shipment_service import ShipmentService
from app.services.stats_service import StatsService

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)

dog_repo = DogRepository()
stats_service = StatsService(StatsRepository(), dog_repo)
shipment_service = ShipmentService(dog_repo)


@router.get("/stats", response_model=AdminDashboardStats)
def get_admin_stats(session: Session = Depends(get_session)):
    """
    Dashboard counters (admin only).
    """
    return stats_service.get_admin_dashboard_stats(session)


@router.get("/recent-dogs", response_model=RecentDogsResponse)
def get_recent_dogs(session: Session = Depends(get_session)):
    return stats_service.get_recent_dogs(session)


@router.get("/shipments", response_model=ShipmentsResponse)
def list_shipments(session: Session = Depends(get_session)):
    """
    Paid certifications with their ship-to address.
    """
    return shipment_service.list_shipments(session)


@router.post("/shipments", response_model=MessageResponse)
def update_tracking(
    payload: TrackingUpdate,
    session: Session = Depends(get_session),
):
    """
    Record a tracking number and mark the certificate shipped.
    """
    shipment_service.update_tracking(session, payload)
    return MessageResponse(message="Tracking information updated")
