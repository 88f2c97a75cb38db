# app/routers/dogs.py
from fastapi import APIRouter, Depends, File, UploadFile
from sqlmodel import Session

from app.core.auth import AuthContext, require_auth
from app.database import get_session
from app.repositories.dog_repo import DogRepository
from app.schemas.dog import CheckoutRequest, CheckoutResponse, PhotoUploadResponse
from app.services.dog_service import DogService

router = APIRouter(tags=["Certifications"])

repo = DogRepository()
service = DogService(repo)


@router.post("/dogs/upload-photo", response_model=PhotoUploadResponse)
def upload_dog_photo(
    photo: UploadFile = File(...),
    auth: AuthContext = Depends(require_auth),
):
    """
    Upload a dog photo to Supabase Storage.

    Validation:
      - Allowed types: jpeg, jpg, png, webp
      - Max size: 5MB
    """
    file_bytes = photo.file.read()
    filename, url = service.upload_photo(auth.user, photo.content_type, file_bytes)
    return PhotoUploadResponse(filename=filename, url=url)


@router.post("/checkout", response_model=CheckoutResponse)
def checkout(
    payload: CheckoutRequest,
    session: Session = Depends(get_session),
    auth: AuthContext = Depends(require_auth),
):
    """
    Create a certification order and return where to pay for it.
    """
    return service.checkout(session, auth.user, payload)
