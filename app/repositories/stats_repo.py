# app/repositories/stats_repo.py
from datetime import datetime

from sqlalchemy import func
from sqlmodel import Session, select

from app.models.dog import Dog


class StatsRepository:
    """
    Read-only aggregated queries for admin dashboard.
    """

    def count_certifications(self, session: Session) -> int:
        stmt = select(func.count()).select_from(Dog).where(Dog.paid_at.is_not(None))
        # SQLModel's Session.exec() -> ScalarResult -> use .one()
        value = session.exec(stmt).one()
        return int(value or 0)

    def count_active(self, session: Session, now: datetime) -> int:
        """
        Paid certifications that have not expired yet.
        """
        stmt = (
            select(func.count())
            .select_from(Dog)
            .where(Dog.paid_at.is_not(None), Dog.expires_at > now)
        )
        value = session.exec(stmt).one()
        return int(value or 0)

    def count_pending_shipments(self, session: Session) -> int:
        stmt = (
            select(func.count())
            .select_from(Dog)
            .where(Dog.paid_at.is_not(None), Dog.shipped_at.is_(None))
        )
        value = session.exec(stmt).one()
        return int(value or 0)

    def count_paid_since(self, session: Session, since: datetime) -> int:
        stmt = select(func.count()).select_from(Dog).where(Dog.paid_at > since)
        value = session.exec(stmt).one()
        return int(value or 0)
