# app/services/dog_service.py
import secrets
from datetime import datetime, timezone
from urllib.parse import urlencode

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.config import get_settings
from app.core.storage_utils import generate_photo_filename, upload_to_storage
from app.models.dog import Dog
from app.models.user import User
from app.repositories.dog_repo import DogRepository
from app.schemas.dog import CheckoutRequest, CheckoutResponse

settings = get_settings()

# --- Photo config ---

MAX_PHOTO_BYTES = 5 * 1024 * 1024  # 5MB per photo

ALLOWED_PHOTO_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpeg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}

LICENSE_ID_ATTEMPTS = 5


def add_years(moment: datetime, years: int) -> datetime:
    """Same calendar day `years` later; Feb 29 falls back to Feb 28."""
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        return moment.replace(year=moment.year + years, day=28)


def generate_license_id() -> str:
    """Random 8-digit number, never starting with 0."""
    return str(10_000_000 + secrets.randbelow(90_000_000))


class DogService:
    """
    Business logic for certification orders.

    Responsibilities:
      - photo validation + upload orchestration with Supabase Storage
      - checkout: license id generation, coupon handling, payment link
    """

    def __init__(self, repo: DogRepository):
        self.repo = repo

    # ----- Photos -----

    @staticmethod
    def _validate_and_get_ext(content_type: str | None, file_bytes: bytes) -> str:
        if content_type not in ALLOWED_PHOTO_CONTENT_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid file type. Please upload a JPEG, PNG, or WebP image",
            )

        if len(file_bytes) > MAX_PHOTO_BYTES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="File too large. Maximum size is 5MB",
            )

        return ALLOWED_PHOTO_CONTENT_TYPES[content_type]

    def upload_photo(
        self,
        current_user: User,
        content_type: str | None,
        file_bytes: bytes,
    ) -> tuple[str, str]:
        """
        Store a dog photo and return (filename, public url).
        """
        ext = self._validate_and_get_ext(content_type, file_bytes)
        filename = generate_photo_filename(current_user.id, ext)
        url = upload_to_storage(filename, file_bytes, content_type)
        return filename, url

    # ----- Checkout -----

    def _unique_license_id(self, session: Session) -> str:
        for _ in range(LICENSE_ID_ATTEMPTS):
            license_id = generate_license_id()
            if self.repo.get_by_license_id(session, license_id) is None:
                return license_id
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not allocate a license number",
        )

    @staticmethod
    def payment_url(base_link: str, license_id: str, email: str) -> str:
        """
        Hosted payment link pre-filled with the order reference and email.
        The payment webhook matches client_reference_id back to the dog.
        """
        query = urlencode({"client_reference_id": license_id, "prefilled_email": email})
        separator = "&" if "?" in base_link else "?"
        return f"{base_link}{separator}{query}"

    def checkout(
        self,
        session: Session,
        current_user: User,
        payload: CheckoutRequest,
    ) -> CheckoutResponse:
        """
        Create the certification order.

        Coupons:
          - FREE_COUPON_CODES: order is paid immediately, no payment link
          - TEST_COUPON_CODES: pending order, test payment link
          - none / unknown: pending order, live payment link
        """
        if not payload.dog_name or not payload.state:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Dog name and state required",
            )

        coupon = (payload.coupon or "").upper()
        is_free = coupon in settings.FREE_COUPON_CODES
        is_test = coupon in settings.TEST_COUPON_CODES

        if not is_free and not settings.PAYMENT_LINK:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Payments are not configured",
            )

        now = datetime.now(timezone.utc)
        license_id = self._unique_license_id(session)

        dog = Dog(
            user_id=current_user.id,
            dog_name=payload.dog_name,
            license_id=license_id,
            state_of_licensure=payload.state,
            payment_status="paid" if is_free else "pending",
            paid_at=now if is_free else None,
            expires_at=add_years(now, settings.CERTIFICATION_YEARS),
            photo_url=payload.photo_url,
            frame_orientation=payload.frame_orientation,
            is_gift=payload.is_gift,
            gift_name=payload.gift_name if payload.is_gift else None,
            gift_address=payload.gift_address if payload.is_gift else None,
            gift_city=payload.gift_city if payload.is_gift else None,
            gift_state=payload.gift_state if payload.is_gift else None,
            gift_zip=payload.gift_zip if payload.is_gift else None,
        )
        self.repo.create(session, dog)

        if is_free:
            return CheckoutResponse(
                licenseId=license_id,
                free=True,
                message=f"Certification complete! {coupon} coupon applied.",
            )

        if is_test:
            link = settings.PAYMENT_TEST_LINK or settings.PAYMENT_LINK
            return CheckoutResponse(
                sessionUrl=self.payment_url(link, license_id, current_user.email),
                test=True,
                message=f"{coupon} coupon applied - $1.00 payment",
            )

        return CheckoutResponse(
            sessionUrl=self.payment_url(settings.PAYMENT_LINK, license_id, current_user.email),
        )
