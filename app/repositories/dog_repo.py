# app/repositories/dog_repo.py
from sqlalchemy import func, or_
from sqlmodel import Session, select

from app.models.dog import Dog
from app.models.user import User


class DogRepository:
    """
    Data access layer for dog certifications.
    """

    # ---- Single rows ----

    def get_by_id(self, session: Session, dog_id: int) -> Dog | None:
        return session.get(Dog, dog_id)

    def get_owned(self, session: Session, dog_id: int, user_id: int) -> Dog | None:
        """Return the dog only if it belongs to user_id."""
        stmt = select(Dog).where(Dog.id == dog_id, Dog.user_id == user_id)
        return session.exec(stmt).first()

    def get_by_license_id(self, session: Session, license_id: str) -> Dog | None:
        stmt = select(Dog).where(Dog.license_id == license_id)
        return session.exec(stmt).first()

    def create(self, session: Session, dog: Dog) -> Dog:
        session.add(dog)
        session.commit()
        session.refresh(dog)
        return dog

    def update(self, session: Session, dog: Dog) -> Dog:
        session.add(dog)
        session.commit()
        session.refresh(dog)
        return dog

    # ---- Owner views ----

    def list_paid_for_user(self, session: Session, user_id: int) -> list[Dog]:
        stmt = (
            select(Dog)
            .where(Dog.user_id == user_id, Dog.payment_status == "paid")
            .order_by(Dog.paid_at.desc())
        )
        return list(session.exec(stmt).all())

    # ---- Public registry ----

    def search_paid(
        self,
        session: Session,
        query: str,
        limit: int = 20,
    ) -> list[tuple[Dog, User]]:
        """
        Substring search by license id, dog name or owner name.
        """
        term = f"%{query}%"
        stmt = (
            select(Dog, User)
            .join(User, User.id == Dog.user_id)
            .where(
                Dog.payment_status == "paid",
                or_(
                    Dog.license_id.ilike(term),
                    Dog.dog_name.ilike(term),
                    User.first_name.ilike(term),
                    User.last_name.ilike(term),
                ),
            )
            .order_by(Dog.paid_at.desc())
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def list_gallery(
        self,
        session: Session,
        limit: int = 50,
        offset: int = 0,
    ) -> list[tuple[Dog, User]]:
        stmt = (
            select(Dog, User)
            .join(User, User.id == Dog.user_id)
            .where(Dog.payment_status == "paid", Dog.photo_url.is_not(None))
            .order_by(Dog.paid_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def count_gallery(self, session: Session) -> int:
        stmt = (
            select(func.count())
            .select_from(Dog)
            .where(Dog.payment_status == "paid", Dog.photo_url.is_not(None))
        )
        return int(session.exec(stmt).one() or 0)

    # ---- Admin ----

    def list_paid_with_owner(self, session: Session) -> list[tuple[Dog, User]]:
        stmt = (
            select(Dog, User)
            .join(User, User.id == Dog.user_id)
            .where(Dog.payment_status == "paid")
            .order_by(Dog.paid_at.desc())
        )
        return list(session.exec(stmt).all())

    def list_recent_paid(self, session: Session, limit: int = 10) -> list[Dog]:
        stmt = (
            select(Dog)
            .where(Dog.paid_at.is_not(None))
            .order_by(Dog.paid_at.desc())
            .limit(limit)
        )
        return list(session.exec(stmt).all())
