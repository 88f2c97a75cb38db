# app/routers/webhooks.py
import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from starlette.concurrency import run_in_threadpool
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.repositories.dog_repo import DogRepository
from app.repositories.user_repo import UserRepository
from app.services.payment_service import PaymentService, verify_signature

settings = get_settings()

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])

service = PaymentService(DogRepository(), UserRepository())


@router.post("/payment")
async def payment_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
):
    """
    Payment-link events.

    The signature is checked against the raw body, so the payload is
    parsed here rather than through a request model. DB work runs in
    the threadpool like any sync endpoint.
    """
    body = await request.body()

    if settings.PAYMENT_WEBHOOK_SECRET and not verify_signature(
        body,
        request.headers.get("stripe-signature"),
        settings.PAYMENT_WEBHOOK_SECRET,
    ):
        logger.warning("Rejected payment webhook with invalid signature")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid signature",
        )

    try:
        event = json.loads(body)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid payload",
        )
    if not isinstance(event, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid payload",
        )

    logger.info("Payment webhook event: %s", event.get("type"))
    await run_in_threadpool(service.handle_event, session, event, background_tasks)
    return {"received": True}
