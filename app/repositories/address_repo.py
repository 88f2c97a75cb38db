# app/repositories/address_repo.py
from sqlmodel import Session, select

from app.models.address import SavedAddress


class AddressRepository:
    """
    Data access layer for saved_addresses.
    """

    def list_for_user(self, session: Session, user_id: int) -> list[SavedAddress]:
        stmt = (
            select(SavedAddress)
            .where(SavedAddress.user_id == user_id)
            .order_by(SavedAddress.created_at.desc(), SavedAddress.id.desc())
        )
        return list(session.exec(stmt).all())

    def get_owned(
        self,
        session: Session,
        address_id: int,
        user_id: int,
    ) -> SavedAddress | None:
        stmt = select(SavedAddress).where(
            SavedAddress.id == address_id,
            SavedAddress.user_id == user_id,
        )
        return session.exec(stmt).first()

    def create(self, session: Session, address: SavedAddress) -> SavedAddress:
        session.add(address)
        session.commit()
        session.refresh(address)
        return address

    def update(self, session: Session, address: SavedAddress) -> SavedAddress:
        session.add(address)
        session.commit()
        session.refresh(address)
        return address

    def delete(self, session: Session, address: SavedAddress) -> None:
        session.delete(address)
        session.commit()
