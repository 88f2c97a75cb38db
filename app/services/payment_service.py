# app/services/payment_service.py
import hashlib
import hmac
import logging
import time
from datetime import datetime, timezone

from fastapi import BackgroundTasks
from sqlmodel import Session

from app.core.config import get_settings
from app.repositories.dog_repo import DogRepository
from app.repositories.user_repo import UserRepository
from app.services.dog_service import add_years
from app.services.notification_service import send_certification_email

settings = get_settings()

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
SIGNATURE_TOLERANCE_SECONDS = 300


def verify_signature(
    body: bytes,
    header: str | None,
    secret: str,
    now: float | None = None,
) -> bool:
    """
    Check a payment-provider signature header of the form
    "t=<unix ts>,v1=<hex hmac>[,v1=...]".

    The signed payload is "<t>.<raw body>" with HMAC-SHA256; the
    timestamp must be within SIGNATURE_TOLERANCE_SECONDS.
    """
    if not header:
        return False

    timestamp = None
    signatures: list[str] = []
    for item in header.split(","):
        key, _, value = item.strip().partition("=")
        if key == "t":
            timestamp = value
        elif key == "v1":
            signatures.append(value)

    if not timestamp or not signatures:
        return False
    try:
        ts = int(timestamp)
    except ValueError:
        return False

    now = time.time() if now is None else now
    if abs(now - ts) > SIGNATURE_TOLERANCE_SECONDS:
        return False

    signed = timestamp.encode() + b"." + body
    expected = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return any(hmac.compare_digest(expected, sig) for sig in signatures)


class PaymentService:
    """
    Applies payment-link events to certification orders.
    """

    def __init__(self, dog_repo: DogRepository, user_repo: UserRepository):
        self.dog_repo = dog_repo
        self.user_repo = user_repo

    def handle_event(
        self,
        session: Session,
        event: dict,
        background_tasks: BackgroundTasks,
    ) -> None:
        """
        checkout.session.completed -> mark the dog paid and email the owner.

        Unknown event types and unknown license ids are acknowledged and
        ignored so the provider does not retry them.
        """
        if event.get("type") != CHECKOUT_COMPLETED:
            return

        payment = (event.get("data") or {}).get("object") or {}
        license_id = payment.get("client_reference_id")
        if not license_id:
            logger.error("Payment event without client_reference_id")
            return

        dog = self.dog_repo.get_by_license_id(session, str(license_id))
        if dog is None:
            logger.error("No dog found for license_id %s", license_id)
            return

        if dog.payment_status == "paid":
            logger.info("License %s already paid, ignoring duplicate event", license_id)
            return

        now = datetime.now(timezone.utc)
        expires_at = add_years(now, settings.CERTIFICATION_YEARS)
        dog.payment_status = "paid"
        dog.paid_at = now
        dog.expires_at = expires_at
        dog = self.dog_repo.update(session, dog)
        logger.info("Payment completed for license %s", license_id)

        owner = self.user_repo.get_by_id(session, dog.user_id)
        if owner is None or not owner.email:
            return

        background_tasks.add_task(
            send_certification_email,
            owner.email,
            owner.first_name,
            dog.dog_name,
            dog.license_id,
            dog.state_of_licensure,
            expires_at.strftime("%B %d, %Y"),
            dog.gift_name if dog.is_gift else None,
        )
