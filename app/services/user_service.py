# app/services/user_service.py
from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.address import SavedAddress
from app.models.user import User
from app.repositories.address_repo import AddressRepository
from app.repositories.dog_repo import DogRepository
from app.repositories.user_repo import UserRepository
from app.schemas.account import (
    BillingUpdate,
    DogDetailsUpdate,
    OrderSummaryRead,
    OwnedDogRead,
    ProfileRead,
    ProfileResponse,
    ProfileUpdate,
    SavedAddressPayload,
    SavedAddressRead,
)

ADDRESS_FIELDS = ("label", "name", "address", "city", "state", "zip")


def _clean(value: str | None) -> str | None:
    """Empty strings are stored as NULL."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class UserService:
    """
    Business logic for the account page.

    Responsibilities:
      - profile / billing edits for the current user
      - dog detail edits (ownership enforced)
      - saved address book (ownership enforced)
    """

    def __init__(
        self,
        repo: UserRepository,
        dog_repo: DogRepository,
        address_repo: AddressRepository,
    ):
        self.repo = repo
        self.dog_repo = dog_repo
        self.address_repo = address_repo

    # ----- Profile -----

    def get_profile(self, session: Session, current_user: User) -> ProfileResponse:
        """
        Profile, paid certifications, order history and saved addresses.
        """
        dogs = self.dog_repo.list_paid_for_user(session, current_user.id)
        addresses = self.address_repo.list_for_user(session, current_user.id)

        return ProfileResponse(
            user=ProfileRead.model_validate(current_user, from_attributes=True),
            dogs=[OwnedDogRead.model_validate(d, from_attributes=True) for d in dogs],
            orders=[OrderSummaryRead.model_validate(d, from_attributes=True) for d in dogs],
            saved_addresses=[
                SavedAddressRead.model_validate(a, from_attributes=True) for a in addresses
            ],
        )

    def update_profile(
        self,
        session: Session,
        current_user: User,
        payload: ProfileUpdate,
    ) -> User:
        """
        Overwrite name + shipping address.

        first_name is required on the account, so a blank value keeps
        the existing one.
        """
        first_name = _clean(payload.first_name)
        if first_name:
            current_user.first_name = first_name
        current_user.last_name = _clean(payload.last_name)
        current_user.address = _clean(payload.address)
        current_user.city = _clean(payload.city)
        current_user.state = _clean(payload.state)
        current_user.zip = _clean(payload.zip)
        return self.repo.update(session, current_user)

    def update_billing(
        self,
        session: Session,
        current_user: User,
        payload: BillingUpdate,
    ) -> User:
        current_user.billing_name = _clean(payload.billing_name)
        current_user.billing_address = _clean(payload.billing_address)
        current_user.billing_city = _clean(payload.billing_city)
        current_user.billing_state = _clean(payload.billing_state)
        current_user.billing_zip = _clean(payload.billing_zip)
        return self.repo.update(session, current_user)

    # ----- Dogs -----

    def update_dog(
        self,
        session: Session,
        current_user: User,
        payload: DogDetailsUpdate,
    ) -> None:
        """
        Raises:
            HTTPException(400): dog_id missing.
            HTTPException(404): dog not found or owned by someone else.
        """
        if payload.dog_id is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing dog_id",
            )

        dog = self.dog_repo.get_owned(session, payload.dog_id, current_user.id)
        if dog is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Dog not found",
            )

        dog.breed = _clean(payload.breed)
        dog.weight = _clean(payload.weight)
        dog.height = _clean(payload.height)
        dog.eye_color = _clean(payload.eye_color)
        dog.birthday = _clean(payload.birthday)
        self.dog_repo.update(session, dog)

    # ----- Saved addresses -----

    def list_addresses(self, session: Session, current_user: User) -> list[SavedAddress]:
        return self.address_repo.list_for_user(session, current_user.id)

    def add_address(
        self,
        session: Session,
        current_user: User,
        payload: SavedAddressPayload,
    ) -> SavedAddress:
        values = {field: _clean(getattr(payload, field)) for field in ADDRESS_FIELDS}
        if not all(values.values()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing required fields",
            )

        address = SavedAddress(user_id=current_user.id, **values)
        return self.address_repo.create(session, address)

    def _get_owned_address(
        self,
        session: Session,
        current_user: User,
        address_id: int | None,
    ) -> SavedAddress:
        if address_id is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing address id",
            )
        address = self.address_repo.get_owned(session, address_id, current_user.id)
        if address is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Address not found",
            )
        return address

    def update_address(
        self,
        session: Session,
        current_user: User,
        payload: SavedAddressPayload,
    ) -> SavedAddress:
        """
        Partial update: omitted fields keep their current value.
        """
        address = self._get_owned_address(session, current_user, payload.id)
        for field in ADDRESS_FIELDS:
            value = _clean(getattr(payload, field))
            if value is not None:
                setattr(address, field, value)
        return self.address_repo.update(session, address)

    def delete_address(
        self,
        session: Session,
        current_user: User,
        payload: SavedAddressPayload,
    ) -> None:
        address = self._get_owned_address(session, current_user, payload.id)
        self.address_repo.delete(session, address)
