# app/services/registry_service.py
from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.dog import Dog
from app.models.user import User
from app.repositories.dog_repo import DogRepository
from app.schemas.dog import GalleryResponse, RegistryDogRead, VerifyResponse

VERIFY_LIMIT = 20
GALLERY_MAX_LIMIT = 100


def _to_registry_dog(dog: Dog, owner: User) -> RegistryDogRead:
    return RegistryDogRead(
        id=dog.id,
        dog_name=dog.dog_name,
        license_id=dog.license_id,
        state_of_licensure=dog.state_of_licensure,
        photo_url=dog.photo_url,
        frame_orientation=dog.frame_orientation,
        paid_at=dog.paid_at,
        expires_at=dog.expires_at,
        first_name=owner.first_name,
        last_name=owner.last_name,
    )


class RegistryService:
    """
    Public lookups over paid certifications (no auth).
    """

    def __init__(self, repo: DogRepository):
        self.repo = repo

    def verify(self, session: Session, query: str | None) -> VerifyResponse:
        """
        Search by license id, dog name or owner name.

        Raises:
            HTTPException(400): empty query.
        """
        query = (query or "").strip()
        if not query:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Query parameter required",
            )

        rows = self.repo.search_paid(session, query, limit=VERIFY_LIMIT)
        results = [_to_registry_dog(dog, owner) for dog, owner in rows]
        return VerifyResponse(results=results, count=len(results))

    def gallery(self, session: Session, limit: int, offset: int) -> GalleryResponse:
        """Paid dogs with photos, newest first."""
        limit = max(1, min(limit, GALLERY_MAX_LIMIT))
        offset = max(0, offset)

        rows = self.repo.list_gallery(session, limit=limit, offset=offset)
        return GalleryResponse(
            dogs=[_to_registry_dog(dog, owner) for dog, owner in rows],
            total=self.repo.count_gallery(session),
            limit=limit,
            offset=offset,
        )
