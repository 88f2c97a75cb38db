# app/routers/registry.py
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.database import get_session
from app.repositories.dog_repo import DogRepository
from app.schemas.dog import GalleryResponse, VerifyResponse
from app.services.registry_service import RegistryService

router = APIRouter(tags=["Registry"])

service = RegistryService(DogRepository())


@router.get("/verify", response_model=VerifyResponse)
def verify_certification(
    q: str | None = None,
    session: Session = Depends(get_session),
):
    """
    Public lookup by license id, dog name or owner name.
    """
    return service.verify(session, q)


@router.get("/gallery", response_model=GalleryResponse)
def gallery(
    limit: int = Query(50),
    offset: int = Query(0),
    session: Session = Depends(get_session),
):
    """
    Certified dogs with photos, newest first.
    """
    return service.gallery(session, limit, offset)
